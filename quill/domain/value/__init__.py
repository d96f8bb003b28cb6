"""Domain value objects for Quill."""

from quill.domain.value.identifiers import CommentId, LikeId, PostId, UserId
from quill.domain.value.types import DisplayName, Email

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "LikeId",
    # Types
    "DisplayName",
    "Email",
]

"""Domain model entities for Quill."""

from quill.domain.model.comment import Comment
from quill.domain.model.like import Like
from quill.domain.model.post import Post
from quill.domain.model.user import User

__all__ = [
    "User",
    "Post",
    "Comment",
    "Like",
]

"""Repository interfaces for the Quill domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from quill.domain.repository.comment import CommentRepository
from quill.domain.repository.like import LikeRepository
from quill.domain.repository.post import PostRepository
from quill.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "PostRepository",
    "CommentRepository",
    "LikeRepository",
]

"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .comment_tree import CommentNode, build_comment_tree, flatten_comment_tree
from .jwt_service import JWTService
from .like_service import LikeService
from .password_service import PasswordService
from .post_service import PostService
from .user_service import UserService

__all__ = [
    "CommentNode",
    "CommentService",
    "JWTService",
    "LikeService",
    "PasswordService",
    "PostService",
    "Service",
    "UserService",
    "build_comment_tree",
    "flatten_comment_tree",
]

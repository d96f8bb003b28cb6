"""Domain layer DI providers."""

from dishka import Scope, provide

from quill.config import AuthSettings
from quill.domain.repository import (
    CommentRepository,
    LikeRepository,
    PostRepository,
    UserRepository,
)
from quill.domain.service import (
    CommentService,
    JWTService,
    LikeService,
    PasswordService,
    PostService,
    UserService,
)
from quill.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_password_service(self, auth_settings: AuthSettings) -> PasswordService:
        """Provide password hashing domain service."""
        return PasswordService(auth_settings=auth_settings)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_like_service(
        self, like_repository: LikeRepository, post_service: PostService
    ) -> LikeService:
        """Provide like domain service."""
        return LikeService(like_repository=like_repository, post_service=post_service)

    @provide
    def get_user_service(
        self, user_repository: UserRepository, password_service: PasswordService
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository, password_service=password_service
        )

"""Providers for the application use cases."""

from dishka import Scope, provide

from quill.util.di.base import ProviderBase
from quill.application.usecase.auth import (
    GetCurrentUserUseCase,
    LoginUseCase,
    RegisterUseCase,
)
from quill.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentTreeUseCase,
    GetCommentsUseCase,
    UpdateCommentUseCase,
)
from quill.application.usecase.like import LikePostUseCase, UnlikePostUseCase
from quill.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    UpdatePostUseCase,
)
from quill.domain.service import (
    CommentService,
    JWTService,
    LikeService,
    PostService,
    UserService,
)


class ProdApplicationProvider(ProviderBase):
    """Use cases, one per request. Nothing here is swapped out in tests."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_register_use_case(
        self, user_service: UserService, jwt_service: JWTService
    ) -> RegisterUseCase:
        return RegisterUseCase(user_service=user_service, jwt_service=jwt_service)

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self, user_service: UserService, jwt_service: JWTService
    ) -> LoginUseCase:
        return LoginUseCase(user_service=user_service, jwt_service=jwt_service)

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        return GetCurrentUserUseCase(jwt_service=jwt_service, user_service=user_service)

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> CreatePostUseCase:
        return CreatePostUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self, post_service: PostService, like_service: LikeService
    ) -> GetPostUseCase:
        return GetPostUseCase(post_service=post_service, like_service=like_service)

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self, post_service: PostService, like_service: LikeService
    ) -> ListPostsUseCase:
        return ListPostsUseCase(post_service=post_service, like_service=like_service)

    @provide(scope=Scope.REQUEST)
    def get_update_post_use_case(self, post_service: PostService) -> UpdatePostUseCase:
        return UpdatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        like_service: LikeService,
    ) -> DeletePostUseCase:
        return DeletePostUseCase(
            post_service=post_service,
            comment_service=comment_service,
            like_service=like_service,
        )

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
    ) -> CreateCommentUseCase:
        return CreateCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService, post_service: PostService
    ) -> GetCommentsUseCase:
        return GetCommentsUseCase(
            comment_service=comment_service, post_service=post_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comment_tree_use_case(
        self, comment_service: CommentService, post_service: PostService
    ) -> GetCommentTreeUseCase:
        return GetCommentTreeUseCase(
            comment_service=comment_service, post_service=post_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService, post_service: PostService
    ) -> DeleteCommentUseCase:
        return DeleteCommentUseCase(
            comment_service=comment_service, post_service=post_service
        )

    # Like use cases
    @provide(scope=Scope.REQUEST)
    def get_like_post_use_case(self, like_service: LikeService) -> LikePostUseCase:
        return LikePostUseCase(like_service=like_service)

    @provide(scope=Scope.REQUEST)
    def get_unlike_post_use_case(
        self, like_service: LikeService, post_service: PostService
    ) -> UnlikePostUseCase:
        return UnlikePostUseCase(like_service=like_service, post_service=post_service)

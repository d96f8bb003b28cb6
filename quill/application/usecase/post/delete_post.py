"""Delete post use case."""

from uuid import UUID

from pydantic import BaseModel

from quill.domain.service import CommentService, LikeService, PostService
from quill.domain.service.permission import ensure_can_modify_post
from quill.domain.value import PostId, UserId


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str  # UUID string
    user_id: str | None  # Current user ID (must be author)


class DeletePostResponse(BaseModel):
    """Delete post response."""

    success: bool
    message: str


class DeletePostUseCase:
    """Use case for deleting a post along with its comments and likes."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        like_service: LikeService,
    ) -> None:
        """Initialize delete post use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
            like_service: Like domain service
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.like_service = like_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            NotAuthenticatedError: If there is no authenticated user
            NotFoundError: If the post doesn't exist
            ForbiddenError: If the user isn't the post's author
        """
        post_id = PostId(UUID(request.post_id))
        user_id = UserId(UUID(request.user_id)) if request.user_id else None

        post = await self.post_service.get_required(post_id)
        ensure_can_modify_post(user_id, post, "delete")

        # Dependents first so nothing is left pointing at a missing post
        await self.comment_service.delete_comments_for_post(post_id)
        await self.like_service.delete_likes_for_post(post_id)
        await self.post_service.delete_post(post_id)

        return DeletePostResponse(success=True, message="Post deleted")

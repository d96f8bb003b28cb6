"""Unlike post use case."""

from uuid import UUID

from pydantic import BaseModel

from quill.domain.service import LikeService, PostService
from quill.domain.service.permission import ensure_authenticated
from quill.domain.value import PostId, UserId


class UnlikePostRequest(BaseModel):
    """Unlike post request."""

    post_id: str  # UUID string
    user_id: str | None  # User ID from authenticated user


class UnlikePostResponse(BaseModel):
    """Unlike post response."""

    success: bool  # False if there was no like to remove
    like_count: int


class UnlikePostUseCase:
    """Use case for removing a like from a post."""

    def __init__(self, like_service: LikeService, post_service: PostService) -> None:
        """Initialize unlike post use case.

        Args:
            like_service: Like domain service
            post_service: Post domain service
        """
        self.like_service = like_service
        self.post_service = post_service

    async def execute(self, request: UnlikePostRequest) -> UnlikePostResponse:
        """Execute unlike flow.

        Raises:
            NotAuthenticatedError: If there is no authenticated user
            NotFoundError: If the post doesn't exist
        """
        user_id = ensure_authenticated(
            UserId(UUID(request.user_id)) if request.user_id else None, "unlike posts"
        )
        post_id = PostId(UUID(request.post_id))

        removed = await self.like_service.unlike_post(post_id, user_id)
        post = await self.post_service.get_required(post_id)

        return UnlikePostResponse(success=removed, like_count=post.like_count)

"""Like post use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from quill.domain.service import LikeService
from quill.domain.service.permission import ensure_authenticated
from quill.domain.value import PostId, UserId


class LikePostRequest(BaseModel):
    """Like post request."""

    post_id: str  # UUID string
    user_id: str | None  # User ID from authenticated user


class LikePostResponse(BaseModel):
    """Like post response."""

    like_id: str
    post_id: str
    created_at: datetime


class LikePostUseCase:
    """Use case for liking a post."""

    def __init__(self, like_service: LikeService) -> None:
        """Initialize like post use case.

        Args:
            like_service: Like domain service
        """
        self.like_service = like_service

    async def execute(self, request: LikePostRequest) -> LikePostResponse:
        """Execute like flow.

        Raises:
            NotAuthenticatedError: If there is no authenticated user
            NotFoundError: If the post doesn't exist
            BusinessRuleViolationError: If the post is already liked
        """
        user_id = ensure_authenticated(
            UserId(UUID(request.user_id)) if request.user_id else None, "like posts"
        )
        like = await self.like_service.like_post(PostId(UUID(request.post_id)), user_id)

        return LikePostResponse(
            like_id=str(like.id),
            post_id=str(like.post_id),
            created_at=like.created_at,
        )

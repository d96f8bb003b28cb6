"""List posts use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from quill.domain.service import LikeService, PostService
from quill.domain.value import UserId

from .get_post import PostItem


class ListPostsRequest(BaseModel):
    """List posts request."""

    limit: int = Field(default=30, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    user_id: str | None = None  # Current user ID (if authenticated)


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostItem]
    total: int
    limit: int
    offset: int


class ListPostsUseCase:
    """Use case for listing posts, newest first."""

    def __init__(self, post_service: PostService, like_service: LikeService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            like_service: Like domain service
        """
        self.post_service = post_service
        self.like_service = like_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: List posts request with pagination

        Returns:
            Page of posts with the caller's like state
        """
        with logfire.span(
            "list_posts.execute", limit=request.limit, offset=request.offset
        ):
            posts, total = await self.post_service.list_posts(
                limit=request.limit, offset=request.offset
            )

            liked = set()
            if request.user_id and posts:
                liked = await self.like_service.get_user_likes_for_posts(
                    UserId(UUID(request.user_id)), [post.id for post in posts]
                )

            return ListPostsResponse(
                posts=[PostItem.from_domain(post, post.id in liked) for post in posts],
                total=total,
                limit=request.limit,
                offset=request.offset,
            )

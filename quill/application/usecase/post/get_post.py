"""Get post use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from quill.application.usecase.comment import AuthorInfo
from quill.domain.model import Post
from quill.domain.service import LikeService, PostService
from quill.domain.value import PostId, UserId


class PostItem(BaseModel):
    """Post as returned to clients."""

    id: str
    title: str
    content: str
    author: AuthorInfo
    like_count: int
    has_liked: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, post: Post, has_liked: bool = False) -> "PostItem":
        """Convert a domain post to its wire shape."""
        return cls(
            id=str(post.id),
            title=post.title,
            content=post.content,
            author=AuthorInfo(id=str(post.author_id), name=post.author_name),
            like_count=post.like_count,
            has_liked=has_liked,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string
    user_id: str | None = None  # Current user ID (if authenticated)


class GetPostResponse(PostItem):
    """Get post response."""

    pass


class GetPostUseCase:
    """Use case for getting a single post."""

    def __init__(self, post_service: PostService, like_service: LikeService) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            like_service: Like domain service
        """
        self.post_service = post_service
        self.like_service = like_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post = await self.post_service.get_required(PostId(UUID(request.post_id)))

        has_liked = False
        if request.user_id:
            liked = await self.like_service.get_user_likes_for_posts(
                UserId(UUID(request.user_id)), [post.id]
            )
            has_liked = post.id in liked

        return GetPostResponse(**PostItem.from_domain(post, has_liked).model_dump())

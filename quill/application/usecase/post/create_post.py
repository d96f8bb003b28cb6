"""Create post use case."""

from uuid import UUID

from pydantic import BaseModel

from quill.domain.service import PostService, UserService
from quill.domain.service.permission import ensure_authenticated
from quill.domain.value import UserId

from .get_post import PostItem


class CreatePostRequest(BaseModel):
    """Create post request."""

    title: str
    content: str  # Rich text (HTML)
    author_id: str | None  # User ID from authenticated user


class CreatePostResponse(PostItem):
    """Create post response."""

    pass


class CreatePostUseCase:
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Raises:
            NotAuthenticatedError: If there is no authenticated user
            NotFoundError: If the author doesn't exist
            ValidationError: If title or content is blank
        """
        author_id = ensure_authenticated(
            UserId(UUID(request.author_id)) if request.author_id else None,
            "create posts",
        )
        author = await self.user_service.get_by_id(author_id)

        post = await self.post_service.create_post(
            author=author, title=request.title, content=request.content
        )
        return CreatePostResponse(**PostItem.from_domain(post).model_dump())

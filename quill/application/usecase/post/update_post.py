"""Update post use case."""

from uuid import UUID

from pydantic import BaseModel

from quill.domain.service import PostService
from quill.domain.service.permission import ensure_can_modify_post
from quill.domain.value import PostId, UserId

from .get_post import PostItem


class UpdatePostRequest(BaseModel):
    """Update post request."""

    post_id: str  # UUID string
    user_id: str | None  # Current user ID (must be author)
    title: str | None = None
    content: str | None = None


class UpdatePostResponse(PostItem):
    """Update post response."""

    pass


class UpdatePostUseCase:
    """Use case for editing a post's title and content."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: UpdatePostRequest) -> UpdatePostResponse:
        """Execute update post flow.

        Raises:
            NotAuthenticatedError: If there is no authenticated user
            NotFoundError: If the post doesn't exist
            ForbiddenError: If the user isn't the post's author
            ValidationError: If the update is empty or blank
        """
        post_id = PostId(UUID(request.post_id))
        user_id = UserId(UUID(request.user_id)) if request.user_id else None

        post = await self.post_service.get_required(post_id)
        ensure_can_modify_post(user_id, post, "edit")

        updated = await self.post_service.update_content(
            post_id, title=request.title, content=request.content
        )
        return UpdatePostResponse(**PostItem.from_domain(updated).model_dump())

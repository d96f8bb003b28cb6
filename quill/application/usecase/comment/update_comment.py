"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from quill.domain.service import CommentService
from quill.domain.service.permission import ensure_can_edit_comment
from quill.domain.value import CommentId, UserId

from .get_comments import CommentItem


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    user_id: str | None  # Current user ID (must be author)
    text: str  # New text content (required, cannot be blank)


class UpdateCommentResponse(CommentItem):
    """Update comment response."""

    pass


class UpdateCommentUseCase:
    """Use case for editing a comment's text."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        The permission check happens before any write, so a rejected edit
        leaves the comment untouched.

        Args:
            request: Update comment request

        Returns:
            Updated comment

        Raises:
            NotAuthenticatedError: If there is no authenticated user
            NotFoundError: If the comment doesn't exist
            ForbiddenError: If the user isn't the comment's author
            ValidationError: If the new text is blank
        """
        comment_id = CommentId(UUID(request.comment_id))
        user_id = UserId(UUID(request.user_id)) if request.user_id else None

        comment = await self.comment_service.get_required(comment_id)
        ensure_can_edit_comment(user_id, comment)

        updated = await self.comment_service.update_text(comment_id, request.text)
        return UpdateCommentResponse(**CommentItem.from_domain(updated).model_dump())

"""Delete comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from quill.domain.service import CommentService, PostService
from quill.domain.service.permission import ensure_can_delete_comment
from quill.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str | None  # Current user ID (commenter or post author)


class DeleteCommentResponse(BaseModel):
    """Delete comment response.

    Deliberately carries no count of removed replies.
    """

    success: bool
    message: str


class DeleteCommentUseCase:
    """Use case for deleting a comment and all replies beneath it."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
    ) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service (for the post author)
        """
        self.comment_service = comment_service
        self.post_service = post_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Steps:
        1. Load the comment (NotFound if it was already deleted)
        2. Look up the owning post's author
        3. Require the commenter or the post author
        4. Cascade delete the comment's subtree

        Raises:
            NotAuthenticatedError: If there is no authenticated user
            NotFoundError: If the comment doesn't exist
            ForbiddenError: If the user may not delete the comment
            StoreError: If the store fails during the cascade
        """
        comment_id = CommentId(UUID(request.comment_id))
        user_id = UserId(UUID(request.user_id)) if request.user_id else None

        comment = await self.comment_service.get_required(comment_id)
        post = await self.post_service.get_post_by_id(comment.post_id)
        ensure_can_delete_comment(user_id, comment, post.author_id if post else None)

        removed = await self.comment_service.delete_comment(comment_id)
        logfire.info(
            "Comment thread removed",
            comment_id=request.comment_id,
            removed=removed,
            by_post_author=bool(post and post.author_id == user_id),
        )

        return DeleteCommentResponse(success=True, message="Comment deleted")

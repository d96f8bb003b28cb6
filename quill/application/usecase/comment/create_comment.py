"""Create comment use case."""

from uuid import UUID

from pydantic import BaseModel

from quill.domain.service import CommentService, PostService, UserService
from quill.domain.service.permission import ensure_authenticated
from quill.domain.value import CommentId, PostId, UserId

from .get_comments import CommentItem


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    text: str
    author_id: str | None  # User ID from authenticated user, None if anonymous
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentResponse(CommentItem):
    """Create comment response."""

    pass


class CreateCommentUseCase:
    """Use case for commenting on a post or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            user_service: User domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Require an authenticated author
        2. Verify the post exists
        3. Load the author for their display name
        4. Create the comment (service validates text and parent)

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            NotAuthenticatedError: If there is no authenticated user
            NotFoundError: If the post or author doesn't exist
            ValidationError: If text is blank or the parent is invalid
        """
        author_id = ensure_authenticated(
            UserId(UUID(request.author_id)) if request.author_id else None,
            "create comments",
        )
        post_id = PostId(UUID(request.post_id))

        await self.post_service.get_required(post_id)
        author = await self.user_service.get_by_id(author_id)

        parent_id = CommentId(UUID(request.parent_id)) if request.parent_id else None
        comment = await self.comment_service.create_comment(
            post_id=post_id,
            author_id=author.id,
            author_name=author.name.root,
            text=request.text,
            parent_id=parent_id,
        )

        return CreateCommentResponse(**CommentItem.from_domain(comment).model_dump())

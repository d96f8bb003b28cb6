"""Get comments use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from quill.domain.model import Comment
from quill.domain.service import CommentService, PostService
from quill.domain.value import CommentId, PostId, UserId


class AuthorInfo(BaseModel):
    """Comment author as shown next to the comment."""

    id: str
    name: str


class CommentItem(BaseModel):
    """Flat comment record as returned to clients."""

    id: str
    text: str
    post_id: str
    author: AuthorInfo
    parent_id: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentItem":
        """Convert a domain comment to its wire shape."""
        return cls(
            id=str(comment.id),
            text=comment.text,
            post_id=str(comment.post_id),
            author=AuthorInfo(id=str(comment.author_id), name=comment.author_name),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )

    def to_domain(self) -> Comment:
        """Rebuild the domain comment, e.g. on the client side of the API."""
        return Comment(
            id=CommentId(UUID(self.id)),
            post_id=PostId(UUID(self.post_id)),
            author_id=UserId(UUID(self.author.id)),
            author_name=self.author.name,
            text=self.text,
            parent_id=CommentId(UUID(self.parent_id)) if self.parent_id else None,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: str  # UUID string


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    post_id: str
    comments: list[CommentItem]
    total: int


class GetCommentsUseCase:
    """Use case for listing a post's comments as a flat, oldest-first list.

    This list is what clients feed into the tree builder.
    """

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Get comments request with post ID

        Returns:
            Comments ordered by created_at ascending

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post_id = PostId(UUID(request.post_id))
        await self.post_service.get_required(post_id)

        comments = await self.comment_service.get_comments_for_post(post_id)
        items = [CommentItem.from_domain(comment) for comment in comments]

        return GetCommentsResponse(
            post_id=request.post_id,
            comments=items,
            total=len(items),
        )

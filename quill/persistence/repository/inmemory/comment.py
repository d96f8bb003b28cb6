"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional

from quill.domain.model.comment import Comment
from quill.domain.repository.comment import CommentRepository
from quill.domain.value import CommentId, PostId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Dict order is insertion order, which breaks created_at ties.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments for a post, oldest first."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def find_children(self, parent_id: CommentId) -> list[Comment]:
        """Find direct replies of a comment."""
        children = [c for c in self._comments.values() if c.parent_id == parent_id]
        children.sort(key=lambda c: c.created_at)
        return children

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        self._comments[comment.id] = comment
        return comment

    async def update_text(self, comment_id: CommentId, text: str) -> Optional[Comment]:
        """Update the text content of a comment."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        updated = comment.model_copy(update={"text": text, "updated_at": datetime.now()})
        self._comments[comment_id] = updated
        return updated

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a single comment."""
        return self._comments.pop(comment_id, None) is not None

    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every comment of a post."""
        doomed = [cid for cid, c in self._comments.items() if c.post_id == post_id]
        for comment_id in doomed:
            del self._comments[comment_id]
        return len(doomed)

"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from quill.domain.model.comment import Comment
from quill.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post as a flat list.

        Comments are ordered by ``created_at`` ascending (oldest first).
        Comments with equal timestamps keep insertion order.

        Args:
            post_id: The post ID

        Returns:
            Flat list of the post's comments
        """
        pass

    @abstractmethod
    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies to a comment.

        Args:
            parent_id: The parent comment ID

        Returns:
            List of child comments, oldest first
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_text(self, comment_id: CommentId, text: str) -> Optional[Comment]:
        """Replace the text of a comment and bump ``updated_at``.

        Args:
            comment_id: ID of the comment to update
            text: New text content

        Returns:
            Updated comment, or None if the comment doesn't exist
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a single comment (hard delete, no cascade).

        Args:
            comment_id: The comment ID to delete

        Returns:
            True if a comment was removed
        """
        pass

    @abstractmethod
    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every comment of a post.

        Args:
            post_id: The post ID

        Returns:
            Number of comments removed
        """
        pass

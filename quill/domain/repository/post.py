"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from quill.domain.model.post import Post
from quill.domain.value import PostId


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, limit: int = 30, offset: int = 0) -> List[Post]:
        """Find posts, newest first.

        Args:
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            Page of posts ordered by created_at descending
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all posts."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def update_content(
        self,
        post_id: PostId,
        title: str | None = None,
        content: str | None = None,
    ) -> Optional[Post]:
        """Update the title and/or content of a post.

        Fields passed as None are left unchanged.

        Args:
            post_id: ID of the post to update
            title: New title
            content: New content

        Returns:
            Updated post, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete).

        Args:
            post_id: The post ID to delete

        Returns:
            True if a post was removed
        """
        pass

    @abstractmethod
    async def increment_likes(self, post_id: PostId) -> None:
        """Atomically increment ``like_count`` by 1.

        Args:
            post_id: The post ID
        """
        pass

    @abstractmethod
    async def decrement_likes(self, post_id: PostId) -> None:
        """Atomically decrement ``like_count`` by 1 (minimum 0).

        Args:
            post_id: The post ID
        """
        pass

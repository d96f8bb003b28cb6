"""Like repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from quill.domain.model.like import Like
from quill.domain.value import PostId, UserId


class LikeRepository(ABC):
    """Repository for Like entity.

    Defines the contract for like persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_user_and_post(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[Like]:
        """Find a user's like on a post.

        Args:
            user_id: The user's ID
            post_id: The post's ID

        Returns:
            The like if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> List[Like]:
        """Find a user's likes on several posts in one query.

        Args:
            user_id: The user's ID
            post_ids: Posts to check

        Returns:
            Likes the user has on any of the given posts
        """
        pass

    @abstractmethod
    async def save(self, like: Like) -> Like:
        """Save a new like.

        Args:
            like: The like to save

        Returns:
            The saved like
        """
        pass

    @abstractmethod
    async def delete_by_user_and_post(self, user_id: UserId, post_id: PostId) -> bool:
        """Remove a user's like on a post.

        Args:
            user_id: The user's ID
            post_id: The post's ID

        Returns:
            True if a like was removed
        """
        pass

    @abstractmethod
    async def delete_by_post(self, post_id: PostId) -> int:
        """Remove every like on a post.

        Args:
            post_id: The post's ID

        Returns:
            Number of likes removed
        """
        pass

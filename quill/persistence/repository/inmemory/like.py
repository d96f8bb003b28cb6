"""In-memory like repository for testing."""

from typing import Optional, Sequence

from quill.domain.model.like import Like
from quill.domain.repository.like import LikeRepository
from quill.domain.value import LikeId, PostId, UserId


class InMemoryLikeRepository(LikeRepository):
    """In-memory implementation of LikeRepository for testing."""

    def __init__(self) -> None:
        self._likes: dict[LikeId, Like] = {}

    async def find_by_user_and_post(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[Like]:
        """Find a user's like on a post."""
        for like in self._likes.values():
            if like.user_id == user_id and like.post_id == post_id:
                return like
        return None

    async def find_by_user_and_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> list[Like]:
        """Find a user's likes on several posts."""
        wanted = set(post_ids)
        return [
            like
            for like in self._likes.values()
            if like.user_id == user_id and like.post_id in wanted
        ]

    async def save(self, like: Like) -> Like:
        """Save a new like."""
        self._likes[like.id] = like
        return like

    async def delete_by_user_and_post(self, user_id: UserId, post_id: PostId) -> bool:
        """Delete a user's like on a post."""
        like = await self.find_by_user_and_post(user_id, post_id)
        if like is None:
            return False
        del self._likes[like.id]
        return True

    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every like on a post."""
        doomed = [lid for lid, like in self._likes.items() if like.post_id == post_id]
        for like_id in doomed:
            del self._likes[like_id]
        return len(doomed)

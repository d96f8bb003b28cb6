"""Like domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from quill.domain.error import BusinessRuleViolationError
from quill.domain.model.like import Like
from quill.domain.repository import LikeRepository
from quill.domain.value import LikeId, PostId, UserId

from .base import Service
from .post_service import PostService


class LikeService(Service):
    """Domain service for liking posts."""

    def __init__(
        self,
        like_repository: LikeRepository,
        post_service: PostService,
    ) -> None:
        """Initialize like service.

        Args:
            like_repository: Like repository
            post_service: Post domain service
        """
        self.like_repository = like_repository
        self.post_service = post_service

    async def like_post(self, post_id: PostId, user_id: UserId) -> Like:
        """Like a post.

        Creates the like record and atomically increments the post's count.

        Args:
            post_id: Post ID
            user_id: User ID

        Returns:
            Created like

        Raises:
            NotFoundError: If the post doesn't exist
            BusinessRuleViolationError: If the user already liked the post
        """
        with logfire.span(
            "like_service.like_post", post_id=str(post_id), user_id=str(user_id)
        ):
            await self.post_service.get_required(post_id)

            if await self.like_repository.find_by_user_and_post(user_id, post_id):
                logfire.warn(
                    "Duplicate like attempt", user_id=str(user_id), post_id=str(post_id)
                )
                raise BusinessRuleViolationError("Already liked this post")

            like = Like(
                id=LikeId(uuid4()),
                user_id=user_id,
                post_id=post_id,
                created_at=datetime.now(),
            )
            saved = await self.like_repository.save(like)
            await self.post_service.increment_likes(post_id)

            logfire.info("Post liked", post_id=str(post_id), user_id=str(user_id))
            return saved

    async def unlike_post(self, post_id: PostId, user_id: UserId) -> bool:
        """Remove a user's like from a post.

        Args:
            post_id: Post ID
            user_id: User ID

        Returns:
            True if a like was removed, False if there was none

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span(
            "like_service.unlike_post", post_id=str(post_id), user_id=str(user_id)
        ):
            await self.post_service.get_required(post_id)

            deleted = await self.like_repository.delete_by_user_and_post(
                user_id, post_id
            )
            if deleted:
                await self.post_service.decrement_likes(post_id)
                logfire.info("Like removed", post_id=str(post_id), user_id=str(user_id))
            else:
                logfire.info(
                    "No like to remove", post_id=str(post_id), user_id=str(user_id)
                )
            return deleted

    async def get_user_likes_for_posts(
        self, user_id: UserId, post_ids: list[PostId]
    ) -> set[PostId]:
        """Return which of the given posts the user has liked.

        Args:
            user_id: User ID
            post_ids: Posts to check

        Returns:
            Set of liked post IDs
        """
        if not post_ids:
            return set()

        # Single batch query instead of one lookup per post
        likes = await self.like_repository.find_by_user_and_posts(user_id, post_ids)
        return {like.post_id for like in likes}

    async def delete_likes_for_post(self, post_id: PostId) -> int:
        """Remove every like on a post."""
        with logfire.span("like_service.delete_likes_for_post", post_id=str(post_id)):
            return await self.like_repository.delete_by_post(post_id)

"""PostgreSQL implementation of Like repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.model import Like
from quill.domain.repository import LikeRepository
from quill.domain.value import PostId, UserId
from quill.persistence.error import store_operation
from quill.persistence.mappers import like_to_dict, row_to_like
from quill.persistence.tables import likes_table


class PostgresLikeRepository(LikeRepository):
    """PostgreSQL implementation of LikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @store_operation("like.find_by_user_and_post")
    async def find_by_user_and_post(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[Like]:
        """Find a user's like on a post."""
        stmt = select(likes_table).where(
            and_(
                likes_table.c.user_id == user_id,
                likes_table.c.post_id == post_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_like(row._asdict()) if row else None

    @store_operation("like.find_by_user_and_posts")
    async def find_by_user_and_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> List[Like]:
        """Find a user's likes on several posts in one query."""
        if not post_ids:
            return []

        stmt = select(likes_table).where(
            and_(
                likes_table.c.user_id == user_id,
                likes_table.c.post_id.in_(post_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_like(row._asdict()) for row in result.fetchall()]

    @store_operation("like.save")
    async def save(self, like: Like) -> Like:
        """Save a new like."""
        stmt = likes_table.insert().values(**like_to_dict(like))
        await self.session.execute(stmt)
        await self.session.flush()
        return like

    @store_operation("like.delete_by_user_and_post")
    async def delete_by_user_and_post(self, user_id: UserId, post_id: PostId) -> bool:
        """Delete a user's like on a post."""
        stmt = likes_table.delete().where(
            and_(
                likes_table.c.user_id == user_id,
                likes_table.c.post_id == post_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    @store_operation("like.delete_by_post")
    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every like on a post."""
        stmt = likes_table.delete().where(likes_table.c.post_id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

"""PostgreSQL implementation of Post repository."""

from datetime import datetime
from typing import Any, Dict, List, Optional

import logfire
from sqlalchemy import desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.model import Post
from quill.domain.repository.post import PostRepository
from quill.domain.value import PostId
from quill.persistence.error import store_operation
from quill.persistence.mappers import post_to_dict, row_to_post
from quill.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @store_operation("post.find_by_id")
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    @store_operation("post.find_all")
    async def find_all(self, limit: int = 30, offset: int = 0) -> List[Post]:
        """Find posts, newest first."""
        with logfire.span("post_repository.find_all", limit=limit, offset=offset):
            stmt = (
                select(posts_table)
                .order_by(desc(posts_table.c.created_at))
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_post(row._asdict()) for row in result.fetchall()]

    @store_operation("post.count")
    async def count(self) -> int:
        """Count all posts."""
        stmt = select(func.count()).select_from(posts_table)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    @store_operation("post.save")
    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        post_dict = post_to_dict(post)
        existing = await self.find_by_id(post.id)

        if existing:
            stmt = (
                posts_table.update()
                .where(posts_table.c.id == post.id)
                .values(**post_dict)
            )
        else:
            stmt = posts_table.insert().values(**post_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return post

    @store_operation("post.update_content")
    async def update_content(
        self,
        post_id: PostId,
        title: str | None = None,
        content: str | None = None,
    ) -> Optional[Post]:
        """Update the title and/or content of a post."""
        values: Dict[str, Any] = {"updated_at": datetime.now()}
        if title is not None:
            values["title"] = title
        if content is not None:
            values["content"] = content

        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(**values)
            .returning(posts_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        await self.session.flush()
        return row_to_post(row._asdict())

    @store_operation("post.delete")
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post row."""
        stmt = posts_table.delete().where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    @store_operation("post.increment_likes")
    async def increment_likes(self, post_id: PostId) -> None:
        """Atomically increment like_count by 1."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(like_count=posts_table.c.like_count + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    @store_operation("post.decrement_likes")
    async def decrement_likes(self, post_id: PostId) -> None:
        """Atomically decrement like_count by 1 (minimum 0)."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .where(posts_table.c.like_count > 0)  # Don't go below 0
            .values(like_count=posts_table.c.like_count - 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

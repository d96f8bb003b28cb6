"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.model import Comment
from quill.domain.repository import CommentRepository
from quill.domain.value import CommentId, PostId
from quill.persistence.error import store_operation
from quill.persistence.mappers import comment_to_dict, row_to_comment
from quill.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @store_operation("comment.find_by_id")
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    @store_operation("comment.find_by_post")
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .order_by(comments_table.c.created_at, comments_table.c.seq)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    @store_operation("comment.find_children")
    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies of a comment."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id == parent_id)
            .order_by(comments_table.c.created_at, comments_table.c.seq)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    @store_operation("comment.save")
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        comment_dict = comment_to_dict(comment)
        existing = await self.find_by_id(comment.id)

        if existing:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    @store_operation("comment.update_text")
    async def update_text(self, comment_id: CommentId, text: str) -> Optional[Comment]:
        """Update the text content of a comment."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(text=text, updated_at=datetime.now())
            .returning(comments_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    @store_operation("comment.delete")
    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a single comment row."""
        stmt = comments_table.delete().where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    @store_operation("comment.delete_by_post")
    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every comment of a post."""
        stmt = comments_table.delete().where(comments_table.c.post_id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

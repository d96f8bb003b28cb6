"""Storage providers: PostgreSQL in production, swappable for tests."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from quill.config import Settings
from quill.domain.repository import (
    CommentRepository,
    LikeRepository,
    PostRepository,
    UserRepository,
)
from quill.persistence.database import create_engine, create_session_factory
from quill.persistence.repository import (
    PostgresCommentRepository,
    PostgresLikeRepository,
    PostgresPostRepository,
    PostgresUserRepository,
)
from quill.util.di.base import ProviderBase
from quill.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Where users, posts, comments and likes are stored."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Repositories backed by PostgreSQL, one session per request."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Open the connection pool; it is disposed with the container."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """One transaction per request.

        Commits when the request finishes and rolls back when anything
        raises, so a cascading comment delete either completes or leaves
        the thread untouched.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as exc:
                logfire.warn("Rolling back request transaction", error=str(exc))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        return PostgresPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_like_repository(self, session: AsyncSession) -> LikeRepository:
        return PostgresLikeRepository(session)

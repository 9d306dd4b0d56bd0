"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from arbor.config import CommentSettings, Settings
from arbor.domain.repository import CommentRepository
from arbor.persistence.database import create_engine, create_session_factory
from arbor.persistence.repository import PostgresCommentRepository
from arbor.persistence.repository.inmemory import InMemoryCommentRepository
from arbor.util.di.base import ProviderBase
from arbor.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(
        self, session: AsyncSession, settings: CommentSettings
    ) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session, settings)


class InMemoryPersistenceProvider(PersistenceProvider):
    """Persistence provider backed by a process-local repository.

    The repository is APP-scoped so every request sees the same data.
    A fresh container starts from an empty store.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_comment_repository(self, settings: CommentSettings) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository(settings)

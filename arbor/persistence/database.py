"""Database engine and session factory for PostgreSQL.

Sessions are opened per request by the persistence provider, which commits
on success and rolls back on error.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from arbor.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the comment store.

    Args:
        settings: Application settings with database URL and pool limits

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        # asyncpg cancels statements running longer than this
        connect_args={"command_timeout": settings.database.command_timeout},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory used for request sessions."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Mapped rows are read after commit
        autoflush=False,
    )

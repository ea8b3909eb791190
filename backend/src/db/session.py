"""
Async SQLAlchemy engine and session factory.

The engine is created lazily, once per process, and shared by every request
handler in that process. The FastAPI lifespan disposes it on shutdown.
"""
from collections.abc import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import get_settings


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it on first use."""
    global _engine  # noqa: PLW0603
    if _engine is None:
        settings = get_settings()
        options: dict = {"echo": False, "pool_pre_ping": True}
        # SQLite (tests, local experiments) uses a single-connection pool
        if make_url(settings.database_url).get_backend_name() != "sqlite":
            options["pool_size"] = settings.db_pool_size
            options["max_overflow"] = settings.db_max_overflow
        _engine = create_async_engine(settings.database_url, **options)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory bound to the process-wide engine."""
    global _session_factory  # noqa: PLW0603
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _session_factory


async def dispose_engine() -> None:
    """Close all pooled connections and forget the engine."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """
    Yield an async database session.

    Uses unit-of-work pattern: services use flush() for refreshing objects,
    commit happens once here at request end. This ensures atomic transactions
    per request - if anything fails, all changes are rolled back.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

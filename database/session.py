"""
Async engine and sessions for the inventory store.

One engine per process. `init_engine()` creates it (from settings, or from an
explicit URL in tests and scripts) and `close_engine()` disposes of it.
Components that need their own sessions take a SessionFactory, which is
`get_session` unless a caller swaps it out.
"""
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from loguru import logger
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config import settings
from .models import Base


SessionFactory = Callable[[], AsyncContextManager[AsyncSession]]

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None


def _sqlite_url() -> str:
    return f"sqlite+aiosqlite:///{settings.DATABASE_PATH}"


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def init_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Create the process engine if it does not exist yet.

    Args:
        database_url: SQLAlchemy URL; defaults to the SQLite file at settings.DATABASE_PATH

    Returns:
        The process engine. An existing engine is returned unchanged, so
        call close_engine() before pointing at another database.
    """
    global _engine, _sessionmaker

    if _engine is not None:
        return _engine

    url = database_url or _sqlite_url()
    _engine = create_async_engine(
        url,
        echo=settings.LOG_LEVEL == "DEBUG",
        connect_args={"check_same_thread": False} if url.startswith("sqlite") else {},
    )
    event.listen(_engine.sync_engine, "connect", _enable_foreign_keys)

    _sessionmaker = async_sessionmaker(_engine, expire_on_commit=False, autoflush=False)
    logger.info(f"Database engine ready: {url}")
    return _engine


async def close_engine() -> None:
    global _engine, _sessionmaker

    if _engine is None:
        return
    await _engine.dispose()
    _engine = None
    _sessionmaker = None
    logger.info("Database engine closed")


async def create_tables() -> None:
    """Create any missing tables for the ORM models."""
    engine = await init_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Tables ready: {', '.join(Base.metadata.tables)}")


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """
    One unit of work.

        async with get_session() as session:
            await ProductRepository(session).bulk_set_criterion(...)

    Commits when the block exits normally and rolls back if it raises.
    """
    if _sessionmaker is None:
        await init_engine()

    async with _sessionmaker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session_dependency() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: `session: AsyncSession = Depends(get_session_dependency)`."""
    async with get_session() as session:
        yield session

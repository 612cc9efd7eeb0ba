"""Async SQLAlchemy database engine and session management.

Provides the async database layer with:
- Connection pooling for server databases (pool_size/max_overflow)
- FastAPI dependency injection via get_session()
- Automatic session lifecycle (commit on success, rollback on error)
- PostgreSQL (asyncpg) in production, SQLite (aiosqlite) for dev and tests
"""

import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import DatabaseConfig, settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Engine & session factory
# ---------------------------------------------------------------------------

def build_engine(config: DatabaseConfig) -> AsyncEngine:
    """Create an async engine; SQLite gets the driver's default pool."""
    kwargs: dict = {"echo": config.echo}
    if not config.is_sqlite:
        kwargs.update(
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_pre_ping=True,
        )
    return create_async_engine(config.url, **kwargs)


engine = build_engine(settings.database)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session with automatic commit/rollback.

    Usage in FastAPI routes::

        @router.get("/tasks")
        async def list_tasks(session: AsyncSession = Depends(get_session)):
            result = await session.execute(select(Task))
            return result.scalars().all()
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------

async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create tables from the registered models."""
    from core.models.base import Base
    import auth.models  # noqa: F401
    import tasks.models.db_models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")


async def close_db() -> None:
    """Dispose of the connection pool on shutdown."""
    await engine.dispose()

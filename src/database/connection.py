"""
Database Connection Management

Process-wide async engine and session factory (SQLAlchemy 2.0) for the
database record loader and the seeding job. PostgreSQL via asyncpg in
deployment, SQLite via aiosqlite in tests.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import structlog
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from src.config import get_settings
from src.database.models import Base

logger = structlog.get_logger(__name__)
settings = get_settings()

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def _engine_options(url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.database.echo}
    if make_url(url).get_backend_name() == "postgresql":
        options.update(
            pool_size=settings.database.pool_size,
            max_overflow=settings.database.max_overflow,
            pool_pre_ping=True,
        )
    else:
        # Connections are opened per session; nothing to keep warm
        options["poolclass"] = NullPool
    return options


async def init_database(url: Optional[str] = None, create_tables: bool = False) -> AsyncEngine:
    """
    Create the engine and session factory, then verify connectivity.

    Args:
        url: Async database URL, defaults to the configured one
        create_tables: Create the sales table if it does not exist

    Returns:
        AsyncEngine: The initialized engine
    """
    global _engine, _session_factory

    if _engine is not None:
        logger.warning("Database already initialized")
        return _engine

    target = url or settings.database.async_url
    engine = create_async_engine(target, **_engine_options(target))

    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if create_tables:
                await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        logger.error("Failed to connect to database", error=str(e))
        await engine.dispose()
        raise

    _engine = engine
    _session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    logger.info(
        "Database connection established",
        url=engine.url.render_as_string(hide_password=True),
        tables_created=create_tables,
    )
    return engine


async def close_database() -> None:
    """Dispose of the engine; a later init_database() starts fresh."""
    global _engine, _session_factory

    if _engine is None:
        return
    await _engine.dispose()
    _engine = None
    _session_factory = None
    logger.info("Database connection closed")


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Raises:
        RuntimeError: If init_database() has not been called
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    return _session_factory


@asynccontextmanager
async def session_scope(
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> AsyncGenerator[AsyncSession, None]:
    """
    One unit of work: commit on success, roll back and re-raise on error.

    Example:
        async with session_scope() as db:
            result = await db.execute(select(SaleRow))
    """
    async with (session_factory or get_session_factory())() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error("Database session error, rolling back", error=str(e), error_type=type(e).__name__)
            await session.rollback()
            raise


async def check_database_health() -> Dict[str, Any]:
    """Round-trip a trivial query and report latency."""
    started = time.perf_counter()
    try:
        async with session_scope() as db:
            await db.execute(text("SELECT 1"))
    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}

    return {
        "status": "healthy",
        "latency_ms": round((time.perf_counter() - started) * 1000, 2),
    }

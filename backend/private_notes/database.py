"""
Private Notes Backend — Database Engine Management
===================================================

What:  Async SQLAlchemy engine, session factory and declarative base.
How:   Creates an async engine at import time from `settings.database_url`.
       The record store opens one short-lived session per operation from
       `async_session_factory`; there is no per-request session.
Who:   Used by SqlNoteStore, the health check, Alembic and the app lifespan.

Connection Pooling:
    PostgreSQL URLs get a bounded pool (pool_size + max_overflow) with
    pre-ping and hourly recycling. SQLite URLs use the dialect's default pool;
    its pools reject the sizing arguments.
"""

import logging
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from private_notes.config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


engine: AsyncEngine = create_async_engine(settings.database_url, **_engine_options())

# expire_on_commit=False: rows returned by the store stay readable after
# their session closes.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, `create_tables()` and
    Alembic's autogenerate.
    """
    pass


async def create_tables() -> None:
    """
    What:  Creates every table registered on Base.metadata if missing.
    When:  At startup when DB_AUTO_CREATE is set (local development).
    """
    # Register the models on Base.metadata before create_all runs
    from private_notes.models import note  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def check_database() -> bool:
    """Runs SELECT 1; returns False instead of raising when the database is unreachable."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database check failed: %s", str(e))
        return False


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()

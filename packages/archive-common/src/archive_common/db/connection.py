"""
Async connection handling for the managed session store.

The web service builds one engine at startup, hands out short-lived
read sessions from the factory, and probes the store for ``/health``.
"""

from __future__ import annotations

import structlog
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from archive_common.config import get_settings

logger = structlog.get_logger(__name__)


def build_engine(dsn: str | None = None, pool_size: int | None = None) -> AsyncEngine:
    """Create the async engine for the store.

    Args:
        dsn: Connection string.  Falls back to ``Settings.db_uri``.
        pool_size: Pool size.  Falls back to ``Settings.db_pool_size``.

    Returns:
        An ``AsyncEngine`` whose pooled connections are pinged before reuse.
    """
    settings = get_settings()
    return create_async_engine(
        dsn or settings.db_uri,
        pool_size=pool_size or settings.db_pool_size,
        pool_pre_ping=True,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Read-only usage; nothing is committed.
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def check_database_health(engine: AsyncEngine) -> bool:
    """Return ``True`` when the store answers ``SELECT 1``."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("store_health_check_failed", error=str(exc))
        return False
    return True

"""Database connection pool management."""

import json
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import asyncpg

from ..core.config import settings
from ..core.logging import get_logger
from .executor import AsyncpgExecutor

logger = get_logger(__name__)

# Global pool instance
_pool: asyncpg.Pool | None = None


async def _init_connection(conn: asyncpg.Connection) -> None:
    """Decode json/jsonb columns to Python objects."""
    for typename in ("json", "jsonb"):
        await conn.set_type_codec(
            typename,
            encoder=json.dumps,
            decoder=json.loads,
            schema="pg_catalog",
        )


async def init_db() -> asyncpg.Pool:
    """Initialize the database connection pool.

    Returns:
        The connection pool instance.
    """
    global _pool

    if _pool is not None:
        return _pool

    logger.info("initializing_database_pool", dsn=str(settings.database_url).split("@")[-1])

    _pool = await asyncpg.create_pool(
        str(settings.database_url),
        min_size=settings.db_pool_min,
        max_size=settings.db_pool_max,
        command_timeout=settings.db_command_timeout,
        init=_init_connection,
    )

    logger.info("database_pool_initialized")
    return _pool


async def close_db() -> None:
    """Close the database connection pool."""
    global _pool

    if _pool is not None:
        logger.info("closing_database_pool")
        await _pool.close()
        _pool = None


def get_pool() -> asyncpg.Pool:
    """Get the database connection pool.

    Returns:
        The connection pool instance.

    Raises:
        RuntimeError: If pool is not initialized.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_db() first.")
    return _pool


def get_executor() -> AsyncpgExecutor:
    """Get a pool-backed executor shared by all repositories."""
    return AsyncpgExecutor(get_pool())


@asynccontextmanager
async def transaction() -> AsyncGenerator[AsyncpgExecutor, None]:
    """Run a sequence of statements on one connection inside a transaction.

    Yields:
        An executor bound to the transaction's connection.
    """
    pool = get_pool()
    async with pool.acquire() as conn:
        async with conn.transaction():
            yield AsyncpgExecutor(conn)


async def check_health() -> bool:
    """Check database connectivity."""
    try:
        pool = get_pool()
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
        return True
    except (RuntimeError, OSError, asyncpg.PostgresError) as e:
        logger.error("database_health_check_failed", error=str(e))
        return False

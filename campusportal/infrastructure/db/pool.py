"""
Name: PostgreSQL Connection Pool

Responsibilities:
  - Open and close the async connection pool
  - Configure each connection (statement_timeout)
  - Liveness ping for /healthz

Collaborators:
  - psycopg_pool: AsyncConnectionPool
  - container.py: owns the pool instance and hands it to repositories

Constraints:
  - No module-level pool; the caller owns the instance
  - Must open before use, close on shutdown
"""

from psycopg_pool import AsyncConnectionPool

from ...crosscutting.logger import logger


def _make_configure(statement_timeout_ms: int):
    async def _configure_connection(conn) -> None:
        """R: Set statement_timeout on every new connection."""
        if statement_timeout_ms > 0:
            await conn.execute(f"SET statement_timeout = {int(statement_timeout_ms)}")
            await conn.commit()

    return _configure_connection


async def open_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    statement_timeout_ms: int = 0,
) -> AsyncConnectionPool:
    """
    R: Create and open the connection pool.

    Args:
        database_url: PostgreSQL connection string
        min_size: Minimum connections to maintain
        max_size: Maximum connections allowed
        statement_timeout_ms: Per-statement timeout (0 disables)
    """
    logger.info(
        "Initializing connection pool",
        extra={"min_size": min_size, "max_size": max_size},
    )
    pool = AsyncConnectionPool(
        conninfo=database_url,
        min_size=min_size,
        max_size=max_size,
        configure=_make_configure(statement_timeout_ms),
        open=False,
    )
    await pool.open()
    logger.info("Connection pool initialized")
    return pool


async def close_pool(pool: AsyncConnectionPool | None) -> None:
    """R: Close the pool. Safe to call with None."""
    if pool is None:
        return
    logger.info("Closing connection pool")
    await pool.close()


async def ping(pool: AsyncConnectionPool) -> bool:
    """R: True when a trivial query round-trips."""
    try:
        async with pool.connection() as conn:
            cur = await conn.execute("SELECT 1")
            row = await cur.fetchone()
        return bool(row and row[0] == 1)
    except Exception as exc:
        logger.warning("Database ping failed", extra={"error": str(exc)})
        return False

"""Oracle connection pool lifecycle.

The pool is an explicit handle: ``open_pool`` builds it, the application
keeps it on ``app.state.db_pool`` and ``close_pool`` tears it down on
shutdown. Nothing in this module holds a reference to it.
"""

from __future__ import annotations

import logging
import re

import oracledb

from boxoffice.core.config import Settings
from boxoffice.core.errors import StoreConnectionError

logger = logging.getLogger(__name__)

_DSN_CREDENTIALS = re.compile(r"^([^/@]+)/[^@]*@")


def mask_dsn(dsn: str) -> str:
    """Hide the password part of a ``user/password@host`` connect string."""
    return _DSN_CREDENTIALS.sub(r"\1/***@", dsn)


def ping_pool(pool: oracledb.ConnectionPool) -> None:
    """Check out one connection and round-trip to the server."""
    conn = pool.acquire()
    try:
        conn.ping()
    finally:
        conn.close()


def open_pool(settings: Settings) -> oracledb.ConnectionPool:
    """Create the Oracle connection pool and verify the store answers.

    Raises:
        StoreConnectionError: the pool could not be created or the store
            did not respond within ``db_pool_timeout``.
    """
    logger.info("Creating Oracle connection pool: %s", mask_dsn(settings.database_url))
    try:
        pool = oracledb.create_pool(
            dsn=settings.database_url,
            min=settings.db_pool_min,
            max=settings.db_pool_max,
            increment=settings.db_pool_increment,
            getmode=oracledb.POOL_GETMODE_TIMEDWAIT,
            wait_timeout=settings.db_pool_timeout * 1000,
        )
    except oracledb.Error as exc:
        logger.error("Could not create Oracle connection pool: %s", exc)
        raise StoreConnectionError("Database unavailable") from exc

    try:
        ping_pool(pool)
    except oracledb.Error as exc:
        logger.error("Oracle did not answer at startup: %s", exc)
        pool.close(force=True)
        raise StoreConnectionError("Database unavailable") from exc

    logger.info(
        "Oracle connection pool created (min=%d, max=%d)",
        settings.db_pool_min,
        settings.db_pool_max,
    )
    return pool


def close_pool(pool: oracledb.ConnectionPool | None) -> None:
    """Close the Oracle connection pool, dropping busy connections."""
    if pool is None:
        return
    pool.close(force=True)
    logger.info("Oracle connection pool closed")

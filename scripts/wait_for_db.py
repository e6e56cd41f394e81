"""Wait for Oracle to become available, then run migrations.

Usage:
    python -m scripts.wait_for_db
"""

from __future__ import annotations

import logging
import os
import sys
import time

import oracledb

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from boxoffice.core.config import Settings  # noqa: E402
from boxoffice.core.database import mask_dsn  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def wait_for_db(
    dsn: str,
    timeout: int = 300,
    interval: int = 5,
) -> oracledb.Connection:
    """Block until Oracle accepts connections, then return a connection."""
    deadline = time.time() + timeout
    attempt = 0
    while time.time() < deadline:
        attempt += 1
        try:
            conn = oracledb.connect(dsn=dsn)
            logger.info("Connected to Oracle on attempt %d", attempt)
            return conn
        except oracledb.Error as exc:
            logger.info(
                "Attempt %d failed (%s), retrying in %ds...", attempt, exc, interval
            )
            time.sleep(interval)

    msg = f"Could not connect to Oracle at {mask_dsn(dsn)} within {timeout}s"
    raise TimeoutError(msg)


def main() -> None:
    """Wait for DB, then run migrations."""
    settings = Settings()
    timeout = int(os.getenv("DB_WAIT_TIMEOUT", "300"))

    conn = wait_for_db(settings.database_url, timeout)

    from scripts.migrations import run_migrations

    actions = run_migrations(conn)
    if actions:
        logger.info("Migrations applied: %s", actions)
    else:
        logger.info("No pending migrations")

    conn.close()
    logger.info("Database ready!")


if __name__ == "__main__":
    main()

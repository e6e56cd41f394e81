"""CLI runner for the Box Office API.

Usage:
    python -m boxoffice.run [--host HOST] [--port PORT] [--reload]

Exits with status 1 when the database cannot be reached.
"""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from boxoffice.core.config import Settings
from boxoffice.core.database import close_pool, mask_dsn, open_pool
from boxoffice.core.errors import StoreConnectionError
from boxoffice.core.logging import setup_logging

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="boxoffice", description="Box Office API server")
    parser.add_argument("--host", default=settings.app_host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.app_port, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    return parser


def check_database(settings: Settings) -> bool:
    """Return True if a pool can be opened and pinged."""
    try:
        pool = open_pool(settings)
    except StoreConnectionError:
        logger.critical("Cannot reach the database at %s", mask_dsn(settings.database_url))
        return False
    close_pool(pool)
    return True


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    args = build_parser(settings).parse_args(argv)
    setup_logging(level=settings.log_level, log_format=settings.log_format)

    if not check_database(settings):
        return 1

    logger.info("Serving on http://%s:%d", args.host, args.port)
    uvicorn.run(
        "boxoffice.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Dependency injection for FastAPI routes."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends, Request

from boxoffice.core.errors import StoreConnectionError
from boxoffice.repositories.entry_repository import EntryRepository
from boxoffice.services.entries import EntryService

logger = logging.getLogger(__name__)


def get_db_pool(request: Request) -> Any:
    """Provide the connection pool opened by the application lifespan."""
    pool = getattr(request.app.state, "db_pool", None)
    if pool is None:
        logger.error("No connection pool for %s %s", request.method, request.url.path)
        raise StoreConnectionError("Database unavailable")
    return pool


def get_entry_service(pool: Any = Depends(get_db_pool)) -> EntryService:
    return EntryService(entry_repo=EntryRepository(pool=pool))

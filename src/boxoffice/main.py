"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from boxoffice.api.middleware import setup_exception_handlers, setup_middleware
from boxoffice.core.config import Settings
from boxoffice.core.database import close_pool, open_pool
from boxoffice.core.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Outside of ``testing`` the lifespan opens the connection pool and
    stores it on ``app.state.db_pool``. A store that cannot be reached
    at startup is fatal: the error propagates and the server exits.
    """
    if settings is None:
        settings = Settings()

    if not settings.is_testing:
        setup_logging(level=settings.log_level, log_format=settings.log_format)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting Box Office API (env=%s)", settings.app_env)
        if not settings.is_testing:
            try:
                app.state.db_pool = open_pool(settings)
            except Exception:
                logger.critical("Database unreachable at startup, refusing to serve")
                raise
            logger.info("Database pool ready")
        yield
        logger.info("Shutting down Box Office API")
        if not settings.is_testing:
            close_pool(app.state.db_pool)
            app.state.db_pool = None

    application = FastAPI(
        title="Box Office API",
        description="Ticket entry CRUD service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.state.settings = settings
    application.state.db_pool = None

    setup_middleware(application)
    setup_exception_handlers(application)
    _register_routes(application)

    return application


def _register_routes(app: FastAPI) -> None:
    """Register all API route modules."""
    from boxoffice.api.routes.entries import router as entries_router
    from boxoffice.api.routes.health import router as health_router

    app.include_router(health_router, tags=["health"])
    app.include_router(entries_router)


# Module-level app instance for uvicorn (uvicorn boxoffice.main:app)
app = create_app()

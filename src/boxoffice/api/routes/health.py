"""Health check routes — liveness, readiness, and general health."""

from __future__ import annotations

import logging
import time
from typing import Any

import oracledb
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from boxoffice.api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request) -> dict[str, Any]:
    """Application health check endpoint."""
    settings = getattr(request.app.state, "settings", None)
    env = settings.app_env if settings else "unknown"

    db_pool = getattr(request.app.state, "db_pool", None)
    db_status = "connected" if db_pool is not None else "disconnected"

    return {
        "status": "ok",
        "environment": env,
        "database": db_status,
    }


@router.get("/health/live")
def liveness_probe() -> dict[str, Any]:
    """Liveness probe: the process is up and answering requests."""
    return {"status": "alive"}


@router.get("/health/ready")
def readiness_probe(request: Request) -> Any:
    """Readiness probe: a pooled connection can run a trivial query."""
    checks: dict[str, Any] = {}
    overall_ready = True

    db_pool = getattr(request.app.state, "db_pool", None)
    if db_pool is not None:
        try:
            start = time.perf_counter()
            conn = db_pool.acquire()
            try:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1 FROM DUAL")
                    cur.fetchone()
                elapsed_ms = (time.perf_counter() - start) * 1000
                checks["database"] = {
                    "status": "ok",
                    "response_time_ms": round(elapsed_ms, 1),
                }
            finally:
                conn.close()
        except oracledb.Error as exc:
            logger.warning("Readiness check failed: %s", exc)
            checks["database"] = {"status": "error"}
            overall_ready = False
    else:
        checks["database"] = {"status": "not_configured"}
        settings = getattr(request.app.state, "settings", None)
        if settings and settings.is_production:
            overall_ready = False

    body = {
        "status": "ready" if overall_ready else "not_ready",
        "checks": checks,
    }
    if not overall_ready:
        return JSONResponse(content=body, status_code=503)
    return body

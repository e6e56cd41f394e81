"""Schemas shared across routes."""

from __future__ import annotations

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Confirmation for a write, naming the entry it touched."""

    message: str
    id: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    environment: str
    database: str | None = None

"""Per-request context carried through contextvars."""

from __future__ import annotations

from contextvars import ContextVar

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def set_correlation_id(value: str) -> None:
    """Bind the correlation ID to the current request context."""
    _correlation_id.set(value)


def get_correlation_id() -> str | None:
    return _correlation_id.get()

"""Error taxonomy for entry operations.

Every error carries a client-safe ``detail`` message and an HTTP status hint.
The API layer turns them into JSON string responses; driver messages never
reach ``detail``.
"""

from __future__ import annotations


class EntryError(Exception):
    """Entry operation error with HTTP status hint."""

    status_code: int = 500

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(detail)


class StoreError(EntryError):
    """The backing store failed to serve a statement."""


class StoreConnectionError(StoreError):
    """Pool exhausted or store unreachable."""

    status_code = 503


class QueryError(StoreError):
    """Malformed statement or transient store failure."""

    status_code = 500


class ConflictError(EntryError):
    """Uniqueness violation on the customer id."""

    status_code = 409


class NotFoundError(EntryError):
    """No entry exists for the given id."""

    status_code = 404


class InvalidRequestError(EntryError):
    """Request payload is missing or malformed."""

    status_code = 400

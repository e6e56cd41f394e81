"""Shared pytest fixtures and test configuration."""

from __future__ import annotations

import os
import sys
from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

# Ensure src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

# boxoffice.main builds a module-level app on import; keep it quiet.
os.environ.setdefault("APP_ENV", "testing")


class MockVar:
    """Stand-in for a cursor bind variable used by RETURNING ... INTO."""

    def __init__(self, cursor: MockCursor) -> None:
        self._cursor = cursor

    def getvalue(self) -> list[Any]:
        return [self._cursor.returning_id]


class MockCursor:
    """Mock Oracle cursor supporting context manager and common operations."""

    def __init__(self) -> None:
        self.description: list[tuple[str, ...]] | None = None
        self._rows: list[tuple[Any, ...]] = []
        self._execute_log: list[tuple[str, dict[str, Any] | None]] = []
        self.rowcount: int = 0
        self.returning_id: Any = None
        self.raise_on_execute: Exception | None = None

    def execute(self, sql: str, params: dict[str, Any] | None = None) -> None:
        self._execute_log.append((sql, params))
        if self.raise_on_execute is not None:
            raise self.raise_on_execute

    def fetchall(self) -> list[tuple[Any, ...]]:
        return self._rows

    def fetchone(self) -> tuple[Any, ...] | None:
        return self._rows[0] if self._rows else None

    def var(self, type_: Any) -> MockVar:
        return MockVar(self)

    def __enter__(self) -> MockCursor:
        return self

    def __exit__(self, *args: Any) -> None:
        pass


class MockConnection:
    """Mock Oracle connection supporting context manager."""

    def __init__(self) -> None:
        self._cursor = MockCursor()
        self._committed = False
        self._closed = False

    def cursor(self) -> MockCursor:
        return self._cursor

    def commit(self) -> None:
        self._committed = True

    def close(self) -> None:
        self._closed = True

    def ping(self) -> None:
        pass

    def __enter__(self) -> MockConnection:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class MockPool:
    """Mock Oracle connection pool that counts checkouts."""

    def __init__(self) -> None:
        self._connection = MockConnection()
        self.acquire_count = 0
        self.raise_on_acquire: Exception | None = None

    def acquire(self) -> MockConnection:
        if self.raise_on_acquire is not None:
            raise self.raise_on_acquire
        self.acquire_count += 1
        return self._connection

    def close(self, force: bool = False) -> None:
        pass


@pytest.fixture
def mock_pool() -> MockPool:
    """Provide a mock Oracle connection pool."""
    return MockPool()


@pytest.fixture
def mock_connection(mock_pool: MockPool) -> MockConnection:
    return mock_pool._connection


@pytest.fixture
def mock_cursor(mock_connection: MockConnection) -> MockCursor:
    return mock_connection._cursor


@pytest.fixture
def app(mock_pool: MockPool):  # type: ignore[no-untyped-def]
    """Create a FastAPI test app wired to the mock pool."""
    from boxoffice.core.config import Settings
    from boxoffice.main import create_app

    application = create_app(settings=Settings(app_env="testing"))
    application.state.db_pool = mock_pool
    return application


@pytest.fixture
def client(app):  # type: ignore[no-untyped-def]
    """Create a test client."""
    return TestClient(app)


# ── Helpers ──────────────────────────────────────────────────────────

ENTRY_COLUMNS = ["id", "customer_id", "customer_name", "show_name", "ticket_count", "showtime"]


def set_mock_query_result(
    cursor: MockCursor,
    columns: list[str],
    rows: list[tuple[Any, ...]],
) -> None:
    """Configure mock cursor to return specific query results."""
    cursor.description = [(col.upper(),) for col in columns]
    cursor._rows = rows
    cursor.rowcount = len(rows)


def oracle_error(exc_type: type[Exception], code: int, full_code: str | None = None) -> Exception:
    """Build a driver exception carrying a structured error object."""
    error_obj = MagicMock()
    error_obj.code = code
    error_obj.full_code = full_code or f"ORA-{code:05d}"
    error_obj.message = f"{error_obj.full_code}: simulated"
    return exc_type(error_obj)


class InMemoryEntryRepository:
    """Dict-backed stand-in for ``EntryRepository`` with the same contract."""

    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self._next_id = 1
        self.calls: list[str] = []

    def _check_unique(self, customer_id: str, exclude_id: int | None = None) -> None:
        from boxoffice.core.errors import ConflictError

        for row_id, row in self.rows.items():
            if row_id != exclude_id and row["customer_id"] == customer_id:
                raise ConflictError("Customer id already exists for another entry")

    def list_all(self) -> list[dict[str, Any]]:
        self.calls.append("list_all")
        return [dict(row) for row in self.rows.values()]

    def get_by_id(self, entry_id: int) -> dict[str, Any] | None:
        self.calls.append("get_by_id")
        row = self.rows.get(entry_id)
        return dict(row) if row else None

    def create(self, data: dict[str, Any]) -> int:
        self.calls.append("create")
        self._check_unique(data["customer_id"])
        new_id = self._next_id
        self._next_id += 1
        self.rows[new_id] = {"id": new_id, **data}
        return new_id

    def update(self, entry_id: int, data: dict[str, Any]) -> int:
        self.calls.append("update")
        if entry_id not in self.rows:
            return 0
        if "customer_id" in data:
            self._check_unique(data["customer_id"], exclude_id=entry_id)
        self.rows[entry_id].update(data)
        return 1

    def delete(self, entry_id: int) -> int:
        self.calls.append("delete")
        return 1 if self.rows.pop(entry_id, None) is not None else 0

"""Base repository: single-statement CRUD over a python-oracledb pool."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import oracledb

from boxoffice.core.errors import (
    ConflictError,
    EntryError,
    InvalidRequestError,
    QueryError,
    StoreConnectionError,
)

logger = logging.getLogger(__name__)

SLOW_QUERY_THRESHOLD_MS = 100  # Log queries slower than this

# ORA-00001: unique constraint violated
ORA_UNIQUE_VIOLATION = 1


class BaseRepository:
    """Generic repository over one table with an integer identity key.

    Subclasses configure ``table_name``, ``id_column`` and the whitelist of
    writable ``columns``. Column names in generated SQL only ever come from
    that whitelist; client values are always bound.
    """

    def __init__(
        self,
        pool: Any,
        table_name: str,
        id_column: str,
        columns: tuple[str, ...],
    ) -> None:
        self.pool = pool
        self.table_name = table_name
        self.id_column = id_column
        self.columns = columns

    # ── helpers ──────────────────────────────────────────────────────

    @property
    def _select_list(self) -> str:
        return ", ".join((self.id_column, *self.columns))

    @staticmethod
    def _log_query(sql: str, elapsed_ms: float) -> None:
        """Log query timing; warn if above slow-query threshold."""
        if elapsed_ms > SLOW_QUERY_THRESHOLD_MS:
            logger.warning("SLOW QUERY (%.1fms): %s", elapsed_ms, sql[:200])
        else:
            logger.debug("Query (%.1fms): %s", elapsed_ms, sql[:200])

    @staticmethod
    def _convert_row(row: dict[str, Any]) -> dict[str, Any]:
        """Read LOB columns so rows are JSON-serializable."""
        return {k: v.read() if isinstance(v, oracledb.LOB) else v for k, v in row.items()}

    def _translate_error(self, exc: oracledb.Error, operation: str) -> EntryError:
        """Map a driver error onto the entry error taxonomy.

        Conflicts are recognised by the structured ORA code, never by
        matching message text.
        """
        error_obj = exc.args[0] if exc.args else None
        code = getattr(error_obj, "code", None)
        full_code = getattr(error_obj, "full_code", type(exc).__name__)

        if isinstance(exc, oracledb.IntegrityError) and code == ORA_UNIQUE_VIOLATION:
            logger.warning("%s on %s rejected: %s", operation, self.table_name, full_code)
            return ConflictError("Customer id already exists for another entry")

        logger.error("%s on %s failed (%s): %s", operation, self.table_name, full_code, exc)
        if isinstance(exc, (oracledb.OperationalError, oracledb.InterfaceError)):
            return StoreConnectionError("Database unavailable")
        return QueryError(f"Could not {operation} entry")

    def _acquire(self) -> Any:
        """Check out a connection from the pool."""
        try:
            return self.pool.acquire()
        except oracledb.Error as exc:
            logger.error("Could not acquire connection for %s: %s", self.table_name, exc)
            raise StoreConnectionError("Database unavailable") from exc

    @contextmanager
    def _cursor(self, operation: str) -> Iterator[tuple[Any, Any]]:
        """Yield ``(conn, cursor)`` for exactly one statement.

        The connection goes back to the pool on exit; driver errors raised
        inside the block come out as ``EntryError`` subclasses.
        """
        conn = self._acquire()
        try:
            with conn.cursor() as cur:
                yield conn, cur
        except oracledb.Error as exc:
            raise self._translate_error(exc, operation) from exc
        finally:
            conn.close()

    def build_set_clause(self, data: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Build ``col = :s_col, ...`` and its bind params from *data*.

        Columns are emitted in whitelist order. The id column is never
        settable.

        Raises:
            InvalidRequestError: *data* is empty or names an unknown column.
        """
        if not data:
            raise InvalidRequestError("No fields provided for update")
        unknown = sorted(set(data) - set(self.columns))
        if unknown:
            raise InvalidRequestError(f"Unknown fields: {', '.join(unknown)}")

        clauses: list[str] = []
        params: dict[str, Any] = {}
        for col in self.columns:
            if col in data:
                clauses.append(f"{col} = :s_{col}")
                params[f"s_{col}"] = data[col]
        return ", ".join(clauses), params

    # ── read ─────────────────────────────────────────────────────────

    def find_by_id(self, entity_id: int) -> dict[str, Any] | None:
        """Return a single row by primary key, or ``None``."""
        sql = f"SELECT {self._select_list} FROM {self.table_name} WHERE {self.id_column} = :id"
        with self._cursor("read") as (_conn, cur):
            start = time.perf_counter()
            cur.execute(sql, {"id": entity_id})
            columns = [col[0].lower() for col in (cur.description or [])]
            row = cur.fetchone()
            self._log_query(sql, (time.perf_counter() - start) * 1000)
        if row is None:
            return None
        return self._convert_row(dict(zip(columns, row, strict=True)))

    def find_all(self) -> list[dict[str, Any]]:
        """Return every row in the store's natural order."""
        sql = f"SELECT {self._select_list} FROM {self.table_name}"
        with self._cursor("list") as (_conn, cur):
            start = time.perf_counter()
            cur.execute(sql)
            columns = [col[0].lower() for col in (cur.description or [])]
            rows = [
                self._convert_row(dict(zip(columns, row, strict=True)))
                for row in cur.fetchall()
            ]
            self._log_query(sql, (time.perf_counter() - start) * 1000)
        return rows

    # ── write ────────────────────────────────────────────────────────

    def create(self, data: dict[str, Any]) -> int:
        """Insert a new row and return the identity the store assigned."""
        unknown = sorted(set(data) - set(self.columns))
        if unknown:
            raise InvalidRequestError(f"Unknown fields: {', '.join(unknown)}")

        cols = [c for c in self.columns if c in data]
        sql = (
            f"INSERT INTO {self.table_name} ({', '.join(cols)}) "
            f"VALUES ({', '.join(f':{c}' for c in cols)}) "
            f"RETURNING {self.id_column} INTO :out_id"
        )
        with self._cursor("create") as (conn, cur):
            out_id = cur.var(oracledb.NUMBER)
            bind_params: dict[str, Any] = {c: data[c] for c in cols}
            bind_params["out_id"] = out_id
            start = time.perf_counter()
            cur.execute(sql, bind_params)
            conn.commit()
            self._log_query(sql, (time.perf_counter() - start) * 1000)
            value = out_id.getvalue()
        if isinstance(value, list):
            value = value[0] if value else None
        if value is None:
            raise QueryError("Could not create entry")
        return int(value)

    def update(self, entity_id: int, data: dict[str, Any]) -> int:
        """Update a row by primary key. Returns rows affected."""
        set_clause, params = self.build_set_clause(data)
        params["id"] = entity_id
        sql = f"UPDATE {self.table_name} SET {set_clause} WHERE {self.id_column} = :id"

        with self._cursor("update") as (conn, cur):
            start = time.perf_counter()
            cur.execute(sql, params)
            conn.commit()
            self._log_query(sql, (time.perf_counter() - start) * 1000)
            return int(cur.rowcount)

    def delete(self, entity_id: int) -> int:
        """Delete a row by primary key. Returns rows affected."""
        sql = f"DELETE FROM {self.table_name} WHERE {self.id_column} = :id"

        with self._cursor("delete") as (conn, cur):
            start = time.perf_counter()
            cur.execute(sql, {"id": entity_id})
            conn.commit()
            self._log_query(sql, (time.perf_counter() - start) * 1000)
            return int(cur.rowcount)

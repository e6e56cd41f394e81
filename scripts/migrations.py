"""Database migration scripts for the Box Office service.

Run all migrations in order to set up the schema.
"""

from __future__ import annotations

import logging

import oracledb

logger = logging.getLogger(__name__)


MIGRATION_001_ENTRIES = """
CREATE TABLE entries (
    id                  NUMBER(10) GENERATED BY DEFAULT ON NULL AS IDENTITY PRIMARY KEY,
    customer_id         VARCHAR2(255) NOT NULL,
    customer_name       VARCHAR2(255) NOT NULL,
    show_name           VARCHAR2(255) NOT NULL,
    ticket_count        NUMBER(10) NOT NULL,
    showtime            VARCHAR2(255) NOT NULL,
    CONSTRAINT uk_entries_customer UNIQUE (customer_id),
    CONSTRAINT chk_entries_ticket_count CHECK (ticket_count >= 0)
)
"""

MIGRATION_002_INDEXES = [
    "CREATE INDEX idx_entries_show ON entries (show_name, showtime)",
]

ALL_TABLE_DDLS = [
    ("entries", MIGRATION_001_ENTRIES),
]

DROP_ORDER = [
    "entries",
]

# ORA-00955: name already used; ORA-01408: column list already indexed
_INDEX_EXISTS_CODES = (955, 1408)


def table_exists(conn: oracledb.Connection, table_name: str) -> bool:
    """Check if a table exists in the current schema."""
    with conn.cursor() as cur:
        cur.execute(
            "SELECT COUNT(*) FROM user_tables WHERE table_name = :name",
            {"name": table_name.upper()},
        )
        row = cur.fetchone()
        return bool(row and row[0] > 0)


def run_migrations(conn: oracledb.Connection) -> list[str]:
    """Run all pending migrations. Returns list of actions taken."""
    actions: list[str] = []

    for table_name, ddl in ALL_TABLE_DDLS:
        if not table_exists(conn, table_name):
            with conn.cursor() as cur:
                cur.execute(ddl)
            actions.append(f"Created table: {table_name}")
            logger.info("Created table: %s", table_name)

    for idx_sql in MIGRATION_002_INDEXES:
        try:
            with conn.cursor() as cur:
                cur.execute(idx_sql)
            idx_name = idx_sql.split("INDEX ")[1].split(" ON")[0]
            actions.append(f"Created index: {idx_name}")
        except oracledb.DatabaseError as e:
            error_obj = e.args[0]
            if getattr(error_obj, "code", None) not in _INDEX_EXISTS_CODES:
                raise

    conn.commit()
    return actions


def drop_all_tables(conn: oracledb.Connection) -> list[str]:
    """Drop all tables (for reset). Returns list of actions taken."""
    actions: list[str] = []
    for table_name in DROP_ORDER:
        if table_exists(conn, table_name):
            with conn.cursor() as cur:
                cur.execute(f"DROP TABLE {table_name} CASCADE CONSTRAINTS PURGE")
            actions.append(f"Dropped table: {table_name}")
            logger.info("Dropped table: %s", table_name)
    conn.commit()
    return actions

"""Entry repository — data access for the ``entries`` table."""

from __future__ import annotations

from typing import Any

from boxoffice.repositories.base import BaseRepository

ENTRY_COLUMNS: tuple[str, ...] = (
    "customer_id",
    "customer_name",
    "show_name",
    "ticket_count",
    "showtime",
)


class EntryRepository(BaseRepository):
    """CRUD for ticket entries."""

    def __init__(self, pool: Any) -> None:
        super().__init__(
            pool=pool,
            table_name="entries",
            id_column="id",
            columns=ENTRY_COLUMNS,
        )

    def list_all(self) -> list[dict[str, Any]]:
        return self.find_all()

    def get_by_id(self, entry_id: int) -> dict[str, Any] | None:
        return self.find_by_id(entry_id)

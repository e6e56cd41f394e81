"""Entry service — the five ticket-entry operations behind the HTTP routes."""

from __future__ import annotations

import logging
from typing import Any

from boxoffice.core.errors import InvalidRequestError, NotFoundError

logger = logging.getLogger(__name__)


class EntryService:
    """Validates request shape, delegates to the repository, maps outcomes.

    Every method performs at most one statement. Store failures surface as
    ``StoreError`` subclasses raised by the repository.
    """

    def __init__(self, entry_repo: Any) -> None:
        self.entry_repo = entry_repo

    def list_entries(self) -> list[dict[str, Any]]:
        return self.entry_repo.list_all()

    def get_entry(self, entry_id: int) -> dict[str, Any]:
        entry = self.entry_repo.get_by_id(entry_id)
        if entry is None:
            raise NotFoundError("Entry not found")
        return entry

    def create_entry(self, **data: Any) -> int:
        """Insert a new entry and return its id."""
        entry_id = self.entry_repo.create(data=data)
        logger.info("Created entry %d", entry_id)
        return entry_id

    def update_entry(self, entry_id: int, **data: Any) -> None:
        """Apply a partial update.

        Fields set to ``None`` count as absent. An update with nothing left
        to apply is rejected before the repository is touched.
        """
        filtered = {k: v for k, v in data.items() if v is not None}
        if not filtered:
            raise InvalidRequestError("No fields provided for update")

        affected = self.entry_repo.update(entry_id, data=filtered)
        if affected == 0:
            raise NotFoundError("Entry not found or unchanged")
        logger.info("Updated entry %d (%s)", entry_id, ", ".join(sorted(filtered)))

    def delete_entry(self, entry_id: int) -> None:
        affected = self.entry_repo.delete(entry_id)
        if affected == 0:
            raise NotFoundError("Entry not found")
        logger.info("Deleted entry %d", entry_id)

"""Tests for the entry service."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from boxoffice.core.errors import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    QueryError,
)
from boxoffice.services.entries import EntryService
from tests.conftest import InMemoryEntryRepository
from tests.factories.data_factories import build_entry


@pytest.fixture
def repo() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(repo: MagicMock) -> EntryService:
    return EntryService(entry_repo=repo)


class TestGetEntry:
    def test_returns_row(self, service: EntryService, repo: MagicMock) -> None:
        repo.get_by_id.return_value = {"id": 1, **build_entry()}
        assert service.get_entry(1)["id"] == 1
        repo.get_by_id.assert_called_once_with(1)

    def test_missing_is_not_found(self, service: EntryService, repo: MagicMock) -> None:
        repo.get_by_id.return_value = None
        with pytest.raises(NotFoundError) as exc_info:
            service.get_entry(1)
        assert exc_info.value.status_code == 404


class TestListEntries:
    def test_passes_rows_through(self, service: EntryService, repo: MagicMock) -> None:
        repo.list_all.return_value = []
        assert service.list_entries() == []

    def test_store_error_propagates(self, service: EntryService, repo: MagicMock) -> None:
        repo.list_all.side_effect = QueryError("Could not list entry")
        with pytest.raises(QueryError):
            service.list_entries()


class TestCreateEntry:
    def test_returns_new_id(self, service: EntryService, repo: MagicMock) -> None:
        repo.create.return_value = 9
        payload = build_entry()
        assert service.create_entry(**payload) == 9
        repo.create.assert_called_once_with(data=payload)

    def test_conflict_propagates(self, service: EntryService, repo: MagicMock) -> None:
        repo.create.side_effect = ConflictError("Customer id already exists for another entry")
        with pytest.raises(ConflictError):
            service.create_entry(**build_entry())


class TestUpdateEntry:
    def test_empty_update_rejected_without_store_call(
        self, service: EntryService, repo: MagicMock,
    ) -> None:
        with pytest.raises(InvalidRequestError):
            service.update_entry(1)
        repo.update.assert_not_called()

    def test_all_none_counts_as_empty(self, service: EntryService, repo: MagicMock) -> None:
        with pytest.raises(InvalidRequestError):
            service.update_entry(1, ticket_count=None, showtime=None)
        repo.update.assert_not_called()

    def test_none_fields_are_dropped(self, service: EntryService, repo: MagicMock) -> None:
        repo.update.return_value = 1
        service.update_entry(1, ticket_count=3, showtime=None)
        repo.update.assert_called_once_with(1, data={"ticket_count": 3})

    def test_zero_ticket_count_is_a_real_value(
        self, service: EntryService, repo: MagicMock,
    ) -> None:
        repo.update.return_value = 1
        service.update_entry(1, ticket_count=0)
        repo.update.assert_called_once_with(1, data={"ticket_count": 0})

    def test_nothing_affected_is_not_found(self, service: EntryService, repo: MagicMock) -> None:
        repo.update.return_value = 0
        with pytest.raises(NotFoundError):
            service.update_entry(404, ticket_count=3)


class TestDeleteEntry:
    def test_deletes(self, service: EntryService, repo: MagicMock) -> None:
        repo.delete.return_value = 1
        service.delete_entry(1)
        repo.delete.assert_called_once_with(1)

    def test_nothing_affected_is_not_found(self, service: EntryService, repo: MagicMock) -> None:
        repo.delete.return_value = 0
        with pytest.raises(NotFoundError):
            service.delete_entry(1)


class TestContractWithInMemoryStore:
    """Properties that hold against a stateful store."""

    def test_create_then_get_round_trips(self) -> None:
        service = EntryService(entry_repo=InMemoryEntryRepository())
        for payload in [build_entry() for _ in range(20)]:
            new_id = service.create_entry(**payload)
            assert service.get_entry(new_id) == {"id": new_id, **payload}

    def test_duplicate_customer_leaves_no_row(self) -> None:
        repo = InMemoryEntryRepository()
        service = EntryService(entry_repo=repo)
        payload = build_entry(customer_id="001")
        service.create_entry(**payload)

        with pytest.raises(ConflictError):
            service.create_entry(**build_entry(customer_id="001"))
        assert len(service.list_entries()) == 1

    def test_second_delete_is_not_found(self) -> None:
        service = EntryService(entry_repo=InMemoryEntryRepository())
        new_id = service.create_entry(**build_entry())
        service.delete_entry(new_id)
        with pytest.raises(NotFoundError):
            service.delete_entry(new_id)

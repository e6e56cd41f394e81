"""Ticket entry CRUD routes — /entries."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Path

from boxoffice.api.deps import get_entry_service
from boxoffice.api.schemas.common import MessageResponse
from boxoffice.api.schemas.entries import EntryCreate, EntryResponse, EntryUpdate
from boxoffice.services.entries import EntryService

router = APIRouter(prefix="/entries", tags=["entries"])


@router.get("", response_model=list[EntryResponse])
def list_entries(
    service: EntryService = Depends(get_entry_service),
) -> list[dict[str, Any]]:
    """List every entry."""
    return service.list_entries()


@router.get("/{entry_id}", response_model=EntryResponse)
def get_entry(
    entry_id: int = Path(gt=0),
    service: EntryService = Depends(get_entry_service),
) -> dict[str, Any]:
    """Get an entry by ID."""
    return service.get_entry(entry_id)


@router.post("", status_code=201, response_model=MessageResponse)
def create_entry(
    body: EntryCreate,
    service: EntryService = Depends(get_entry_service),
) -> dict[str, Any]:
    """Create a new entry."""
    new_id = service.create_entry(**body.model_dump())
    return {"message": "Entry created", "id": new_id}


@router.put("/{entry_id}", response_model=MessageResponse)
def update_entry(
    body: EntryUpdate,
    entry_id: int = Path(gt=0),
    service: EntryService = Depends(get_entry_service),
) -> dict[str, Any]:
    """Update any subset of an entry's fields."""
    service.update_entry(entry_id, **body.model_dump(exclude_none=True))
    return {"message": "Entry updated", "id": entry_id}


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_entry(
    entry_id: int = Path(gt=0),
    service: EntryService = Depends(get_entry_service),
) -> dict[str, Any]:
    """Delete an entry."""
    service.delete_entry(entry_id)
    return {"message": "Entry deleted", "id": entry_id}

"""Ticket entry schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictInt

MAX_TICKET_COUNT = 2_147_483_647


class EntryCreate(BaseModel):
    """Schema for creating an entry. All fields are required.

    String fields must be non-empty: Oracle stores ``''`` as NULL, which the
    NOT NULL columns would reject. Unknown keys, ``id`` included, are ignored.
    """

    customer_id: str = Field(min_length=1, max_length=255)
    customer_name: str = Field(min_length=1, max_length=255)
    show_name: str = Field(min_length=1, max_length=255)
    ticket_count: StrictInt = Field(ge=0, le=MAX_TICKET_COUNT)
    showtime: str = Field(min_length=1, max_length=255)


class EntryUpdate(BaseModel):
    """Schema for a partial update. ``id`` is ignored if sent."""

    customer_id: str | None = Field(default=None, min_length=1, max_length=255)
    customer_name: str | None = Field(default=None, min_length=1, max_length=255)
    show_name: str | None = Field(default=None, min_length=1, max_length=255)
    ticket_count: StrictInt | None = Field(default=None, ge=0, le=MAX_TICKET_COUNT)
    showtime: str | None = Field(default=None, min_length=1, max_length=255)


class EntryResponse(BaseModel):
    """Schema for an entry in API responses."""

    id: int
    customer_id: str
    customer_name: str
    show_name: str
    ticket_count: int
    showtime: str

"""Pydantic schemas for address-book imports."""
from __future__ import annotations

from pydantic import BaseModel, Field

from keepintouch.schemas.person import Person


class AddressBookEntry(BaseModel):
    """A raw record from an external address book."""

    id: str
    name: str | None = None
    phones: list[str] = Field(default_factory=list)
    emails: list[str] = Field(default_factory=list)


class ImportCandidate(BaseModel):
    id: str
    name: str
    phone: str | None = None
    email: str | None = None
    is_duplicate: bool = False
    selected: bool = False


class ImportPreview(BaseModel):
    candidates: list[ImportCandidate]
    duplicates: int


class ImportReport(BaseModel):
    imported: list[Person]
    skipped_duplicates: int = 0
    skipped_unselected: int = 0

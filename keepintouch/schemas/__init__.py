"""Pydantic schemas for the relationship tracking service."""

from .bulk import BulkItemResult, BulkResult
from .imports import AddressBookEntry, ImportCandidate, ImportPreview, ImportReport
from .person import (Person, PersonInput, PersonUpdate, PersonWithStatus, UndoEntry,
                     UndoKind)
from .stats import QuickStats, Section

__all__ = [
    "AddressBookEntry",
    "BulkItemResult",
    "BulkResult",
    "ImportCandidate",
    "ImportPreview",
    "ImportReport",
    "Person",
    "PersonInput",
    "PersonUpdate",
    "PersonWithStatus",
    "QuickStats",
    "Section",
    "UndoEntry",
    "UndoKind",
]

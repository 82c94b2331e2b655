"""Domain errors raised by the relationship engine."""
from __future__ import annotations


class KeepInTouchError(Exception):
    """Base class for errors surfaced to callers of the engine."""

    code = "KEEPINTOUCH_ERROR"


class NotFound(KeepInTouchError):
    """Raised when an operation targets a person id that is not stored."""

    code = "PERSON_NOT_FOUND"

    def __init__(self, person_id: str) -> None:
        super().__init__(f"Person with id {person_id} not found")
        self.person_id = person_id


class NoActionToUndo(KeepInTouchError):
    """Raised by undo when the undo slot is empty."""

    code = "NO_ACTION_TO_UNDO"

    def __init__(self) -> None:
        super().__init__("No action to undo")


class EmptyCategory(KeepInTouchError):
    """Raised by a category bulk operation that matches nobody."""

    code = "EMPTY_CATEGORY"

    def __init__(self, category: str) -> None:
        super().__init__(f"No people found in category: {category}")
        self.category = category


class StorageFailure(KeepInTouchError):
    """Raised when the durable document store cannot be read or written."""

    code = "STORAGE_FAILURE"

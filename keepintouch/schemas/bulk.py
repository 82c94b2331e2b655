"""Pydantic schemas for bulk mark-contacted outcomes."""
from __future__ import annotations

from pydantic import BaseModel, computed_field

from keepintouch.schemas.person import Person


class BulkItemResult(BaseModel):
    person_id: str
    ok: bool
    person: Person | None = None
    error_code: str | None = None
    error: str | None = None


class BulkResult(BaseModel):
    results: list[BulkItemResult]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def succeeded(self) -> int:
        return sum(1 for item in self.results if item.ok)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def failed(self) -> int:
        return sum(1 for item in self.results if not item.ok)

    @property
    def complete(self) -> bool:
        """True when every targeted person was marked."""
        return self.failed == 0

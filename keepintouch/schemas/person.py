"""Pydantic schemas for tracked people."""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

Name = Annotated[str, Field(min_length=1, max_length=120)]
Frequency = Annotated[int, Field(ge=1)]


def _truncate_to_day(value: Any) -> Any:
    # ISO timestamps are cut to their calendar date
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonBase(_CamelModel):
    notes: str = ""
    phone: str | None = None
    email: str | None = None
    category: str | None = None

    @field_validator("phone", "email", "category")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None


class PersonInput(PersonBase):
    name: Name
    contact_frequency_days: Frequency

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            msg = "Name must not be empty"
            raise ValueError(msg)
        return cleaned


class PersonUpdate(_CamelModel):
    """Shallow patch applied by ``PersonStore.update``; id and createdAt are fixed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    name: Name | None = None
    notes: str | None = None
    phone: str | None = None
    email: str | None = None
    category: str | None = None
    contact_frequency_days: Frequency | None = None
    last_contact_date: date | None = None
    interaction_count: Annotated[int, Field(ge=0)] | None = None
    contact_history: list[date] | None = None
    streak: Annotated[int, Field(ge=0)] | None = None

    @field_validator(
        "name",
        "notes",
        "contact_frequency_days",
        "last_contact_date",
        "interaction_count",
        "contact_history",
        "streak",
        mode="before",
    )
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # Only phone, email and category may be cleared
        if value is None:
            msg = "Field cannot be null"
            raise ValueError(msg)
        return value

    @field_validator("last_contact_date", mode="before")
    @classmethod
    def truncate_date(cls, value: Any) -> Any:
        return _truncate_to_day(value)

    @field_validator("contact_history", mode="before")
    @classmethod
    def truncate_history(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_truncate_to_day(item) for item in value]
        return value


class Person(PersonBase):
    id: str
    name: Name
    contact_frequency_days: Frequency
    last_contact_date: date
    created_at: date
    interaction_count: Annotated[int, Field(ge=0)] = 0
    contact_history: list[date] = Field(default_factory=list)
    streak: Annotated[int, Field(ge=0)] = 0

    @model_validator(mode="before")
    @classmethod
    def fill_legacy_fields(cls, data: Any) -> Any:
        """Documents written before history tracking carry only lastContactDate."""
        if not isinstance(data, dict):
            return data
        history = data.get("contactHistory", data.get("contact_history"))
        last_contact = data.get("lastContactDate", data.get("last_contact_date"))
        if not history and last_contact is not None:
            data = {**data, "contactHistory": [last_contact]}
            data.pop("contact_history", None)
        for key in ("interactionCount", "interaction_count", "streak"):
            if key in data and data[key] is None:
                data = {**data, key: 0}
        return data

    @field_validator("last_contact_date", "created_at", mode="before")
    @classmethod
    def truncate_date(cls, value: Any) -> Any:
        return _truncate_to_day(value)

    @field_validator("contact_history", mode="before")
    @classmethod
    def truncate_history(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_truncate_to_day(item) for item in value]
        return value

    @field_validator("contact_history")
    @classmethod
    def drop_duplicate_days(cls, value: list[date]) -> list[date]:
        unique_days: list[date] = []
        for day in value:
            if day not in unique_days:
                unique_days.append(day)
        return unique_days


class PersonWithStatus(Person):
    """A person plus the status facts derived for a given day. Never persisted."""

    days_since_last_contact: int
    is_overdue: bool
    days_overdue: int
    interaction_level: int
    card_color: str
    card_emoji: str


class UndoKind(str, Enum):
    """Actions that can be reverted from the undo slot."""

    UPDATE = "update"
    DELETE = "delete"


class UndoEntry(_CamelModel):
    kind: UndoKind
    snapshot: Person

"""Persistence for the tracked-person collection.

The whole collection lives in one JSON document under a single key and is
read, modified and written back on every mutation. Concurrent mutations that
are not awaited one after another race on that cycle and the later write wins.
"""
from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from keepintouch.core.clock import Clock, SystemClock
from keepintouch.core.errors import NoActionToUndo, NotFound, StorageFailure
from keepintouch.schemas.person import (Person, PersonInput, PersonUpdate, UndoEntry,
                                        UndoKind)
from keepintouch.services.document_store import DocumentStore
from keepintouch.services.streaks import calculate_streak

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "@human_directory_people"

_people_adapter = TypeAdapter(list[Person])


def _new_id() -> str:
    return uuid.uuid4().hex


class PersonStore:
    """CRUD over the person collection plus a single-entry undo slot."""

    def __init__(
        self,
        documents: DocumentStore,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Clock | None = None,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._documents = documents
        self._key = key
        self.clock = clock or SystemClock()
        self._id_factory = id_factory
        self._undo: UndoEntry | None = None

    @property
    def undo_slot(self) -> UndoEntry | None:
        return self._undo

    async def load_all(self) -> list[Person]:
        """Return every stored person; missing or unreadable data reads as empty."""
        try:
            raw = await self._documents.get(self._key)
        except StorageFailure:
            logger.warning("Unable to read people, treating as empty", exc_info=True)
            return []
        if not raw:
            return []
        try:
            return _people_adapter.validate_json(raw)
        except ValidationError:
            logger.warning("Stored people document is malformed, treating as empty", exc_info=True)
            return []

    async def save_all(self, people: list[Person]) -> None:
        text = _people_adapter.dump_json(people, by_alias=True).decode("utf-8")
        await self._documents.set(self._key, text)

    async def get(self, person_id: str) -> Person:
        for person in await self.load_all():
            if person.id == person_id:
                return person
        raise NotFound(person_id)

    async def add(self, payload: PersonInput) -> Person:
        today = self.clock.today()
        person = Person(
            **payload.model_dump(),
            id=self._id_factory(),
            last_contact_date=today,
            created_at=today,
            interaction_count=0,
            contact_history=[today],
            streak=0,
        )
        people = await self.load_all()
        people.append(person)
        await self.save_all(people)
        logger.info("Person added", extra={"person_id": person.id})
        return person

    async def update(self, person_id: str, patch: PersonUpdate | Mapping[str, Any]) -> Person:
        if not isinstance(patch, PersonUpdate):
            patch = PersonUpdate.model_validate(patch)

        people = await self.load_all()
        index = _index_of(people, person_id)
        if index is None:
            raise NotFound(person_id)

        changes = patch.model_dump(exclude_unset=True)
        updated = Person.model_validate({**people[index].model_dump(), **changes})
        people[index] = updated
        await self.save_all(people)
        logger.info(
            "Person updated", extra={"person_id": person_id, "fields": sorted(changes)}
        )
        return updated

    async def delete(self, person_id: str, *, record_undo: bool = True) -> None:
        """Remove a person; unknown ids are ignored."""
        people = await self.load_all()
        index = _index_of(people, person_id)
        if index is None:
            return
        removed = people.pop(index)
        await self.save_all(people)
        if record_undo:
            self.record_undo_snapshot(UndoKind.DELETE, removed)
        logger.info("Person deleted", extra={"person_id": person_id})

    async def mark_contacted(self, person_id: str, *, record_undo: bool = True) -> Person:
        """Record a contact today and recompute the streak.

        Repeat calls on the same day bump ``interaction_count`` each time but add
        the date to ``contact_history`` only once.
        """
        today = self.clock.today()
        person = await self.get(person_id)

        history = list(person.contact_history)
        if today not in history:
            history.append(today)

        updated = await self.update(
            person_id,
            PersonUpdate(
                last_contact_date=max(history),
                interaction_count=person.interaction_count + 1,
                contact_history=history,
                streak=calculate_streak(history, person.contact_frequency_days, today),
            ),
        )
        if record_undo:
            self.record_undo_snapshot(UndoKind.UPDATE, person)
        return updated

    def record_undo_snapshot(self, kind: UndoKind | str, person: Person) -> None:
        self._undo = UndoEntry(kind=UndoKind(kind), snapshot=person.model_copy(deep=True))

    def clear_undo(self) -> None:
        self._undo = None

    async def undo(self) -> Person:
        """Revert the action held in the undo slot and return the restored person."""
        entry = self._undo
        if entry is None:
            raise NoActionToUndo()

        snapshot = entry.snapshot
        people = await self.load_all()
        index = _index_of(people, snapshot.id)
        if entry.kind is UndoKind.UPDATE:
            if index is None:
                raise NotFound(snapshot.id)
            people[index] = snapshot
        elif index is None:
            people.append(snapshot)
        else:
            people[index] = snapshot

        await self.save_all(people)
        self.clear_undo()
        logger.info(
            "Action undone", extra={"person_id": snapshot.id, "kind": entry.kind.value}
        )
        return snapshot

    async def seed(self, people: list[Person]) -> bool:
        """Write ``people`` only when nothing is stored yet."""
        if await self.load_all():
            return False
        await self.save_all(people)
        logger.info("Seeded sample people", extra={"count": len(people)})
        return True


def _index_of(people: list[Person], person_id: str) -> int | None:
    for index, person in enumerate(people):
        if person.id == person_id:
            return index
    return None

"""Mark-contacted over many people at once."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from keepintouch.core.errors import EmptyCategory, NotFound
from keepintouch.schemas.bulk import BulkItemResult, BulkResult
from keepintouch.schemas.person import Person, UndoKind
from keepintouch.services.person_store import PersonStore

logger = logging.getLogger(__name__)


async def _mark_each(store: PersonStore, people: Sequence[Person]) -> BulkResult:
    # Only the first person's prior state is recoverable through undo.
    store.record_undo_snapshot(UndoKind.UPDATE, people[0])

    results: list[BulkItemResult] = []
    # One mark at a time; each rewrites the whole document.
    for person in people:
        try:
            updated = await store.mark_contacted(person.id, record_undo=False)
        except NotFound as exc:
            logger.warning("Bulk mark skipped missing person", extra={"person_id": person.id})
            results.append(
                BulkItemResult(
                    person_id=person.id, ok=False, error_code=exc.code, error=str(exc)
                )
            )
            continue
        results.append(BulkItemResult(person_id=person.id, ok=True, person=updated))

    outcome = BulkResult(results=results)
    logger.info(
        "Bulk mark contacted finished",
        extra={"succeeded": outcome.succeeded, "failed": outcome.failed},
    )
    return outcome


async def mark_all_contacted(
    store: PersonStore, people: Sequence[Person] | None = None
) -> BulkResult:
    """Mark every person in ``people`` (default: the whole collection) as contacted."""
    if people is None:
        people = await store.load_all()
    if not people:
        return BulkResult(results=[])
    return await _mark_each(store, people)


async def mark_category_contacted(
    store: PersonStore, category: str, people: Sequence[Person] | None = None
) -> BulkResult:
    if people is None:
        people = await store.load_all()
    matching = [person for person in people if person.category == category]
    if not matching:
        raise EmptyCategory(category)
    return await _mark_each(store, matching)

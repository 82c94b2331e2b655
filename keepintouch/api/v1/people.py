"""People API routes."""
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from keepintouch.api.v1.common import data_response, get_person_store, get_today
from keepintouch.schemas import (BulkResult, Person, PersonInput, PersonUpdate,
                                 PersonWithStatus, QuickStats, Section)
from keepintouch.services.bulk import mark_all_contacted, mark_category_contacted
from keepintouch.services.person_store import PersonStore
from keepintouch.services.status import enrich_with_status
from keepintouch.services.streaks import all_categories, contact_history_desc, quick_stats
from keepintouch.services.views import FilterType, build_view, split_sections

router = APIRouter(prefix="/people", tags=["people"])


@router.get("")
async def list_people(
    filter_type: FilterType = Query(FilterType.ALL, alias="filter"),
    q: str | None = None,
    store: PersonStore = Depends(get_person_store),
    today: date = Depends(get_today),
) -> dict[str, list[PersonWithStatus]]:
    """List people, most urgent first, with optional filter and search."""

    people = await store.load_all()
    return data_response(build_view(people, today, criterion=filter_type, query=q))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_person(
    payload: PersonInput, store: PersonStore = Depends(get_person_store)
) -> dict[str, Person]:
    """Start tracking a new person."""

    return data_response(await store.add(payload))


@router.get("/sections")
async def list_sections(
    store: PersonStore = Depends(get_person_store),
    today: date = Depends(get_today),
) -> dict[str, list[Section]]:
    """Return the overdue and current sections of the home list."""

    return data_response(split_sections(await store.load_all(), today))


@router.get("/categories")
async def list_categories(
    store: PersonStore = Depends(get_person_store),
) -> dict[str, list[str]]:
    return data_response(all_categories(await store.load_all()))


@router.get("/stats")
async def get_stats(
    store: PersonStore = Depends(get_person_store),
    today: date = Depends(get_today),
) -> dict[str, QuickStats]:
    return data_response(quick_stats(await store.load_all(), today))


@router.post("/undo")
async def undo_last_action(
    store: PersonStore = Depends(get_person_store),
) -> dict[str, Person]:
    """Revert the most recent delete or mark-contacted action."""

    return data_response(await store.undo())


@router.post("/contacted")
async def mark_everyone_contacted(
    store: PersonStore = Depends(get_person_store),
) -> dict[str, BulkResult]:
    return data_response(await mark_all_contacted(store))


@router.post("/categories/{category}/contacted")
async def mark_category(
    category: str, store: PersonStore = Depends(get_person_store)
) -> dict[str, BulkResult]:
    return data_response(await mark_category_contacted(store, category))


@router.get("/{person_id}")
async def retrieve_person(
    person_id: str,
    store: PersonStore = Depends(get_person_store),
    today: date = Depends(get_today),
) -> dict[str, PersonWithStatus]:
    person = await store.get(person_id)
    return data_response(enrich_with_status(person, today))


@router.patch("/{person_id}")
async def update_person(
    person_id: str,
    payload: PersonUpdate,
    store: PersonStore = Depends(get_person_store),
) -> dict[str, Person]:
    return data_response(await store.update(person_id, payload))


@router.delete("/{person_id}")
async def delete_person(
    person_id: str, store: PersonStore = Depends(get_person_store)
) -> dict[str, dict[str, bool]]:
    """Stop tracking a person. Deleting an unknown id is not an error."""

    await store.delete(person_id)
    return data_response({"deleted": True})


@router.post("/{person_id}/contacted")
async def mark_contacted(
    person_id: str, store: PersonStore = Depends(get_person_store)
) -> dict[str, Person]:
    return data_response(await store.mark_contacted(person_id))


@router.get("/{person_id}/history")
async def contact_history(
    person_id: str, store: PersonStore = Depends(get_person_store)
) -> dict[str, list[date]]:
    """Return every recorded contact date, newest first."""

    person = await store.get(person_id)
    return data_response(contact_history_desc(person))

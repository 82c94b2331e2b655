"""Import endpoints for address-book CSV data."""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile

from keepintouch.api.v1.common import data_response, get_person_store
from keepintouch.core.config import Settings, get_settings
from keepintouch.schemas import ImportPreview, ImportReport
from keepintouch.services.contact_importer import (build_import_candidates, import_candidates,
                                                   parse_address_book_csv)
from keepintouch.services.person_store import PersonStore

router = APIRouter(prefix="/import", tags=["import"])


@router.post("/contacts/preview")
async def preview_import(
    file: UploadFile = File(...),
    store: PersonStore = Depends(get_person_store),
) -> dict[str, ImportPreview]:
    """Flag which address-book entries are already tracked, without importing."""

    entries = parse_address_book_csv(await file.read())
    return data_response(build_import_candidates(entries, await store.load_all()))


@router.post("/contacts")
async def import_contacts(
    file: UploadFile = File(...),
    selected: str | None = Form(None),
    frequency_days: int | None = Form(None, ge=1),
    store: PersonStore = Depends(get_person_store),
    settings: Settings = Depends(get_settings),
) -> dict[str, ImportReport]:
    """Import address-book entries.

    ``selected`` is a comma separated list of entry ids; when omitted every
    entry that is not a duplicate is imported.
    """

    entries = parse_address_book_csv(await file.read())
    preview = build_import_candidates(entries, await store.load_all())
    report = await import_candidates(
        store,
        preview.candidates,
        selected_ids=_parse_ids(selected),
        frequency_days=frequency_days or settings.default_import_frequency_days,
    )
    return data_response(report)


def _parse_ids(value: str | None) -> set[str] | None:
    if value is None:
        return None
    return {item.strip() for item in value.split(",") if item.strip()}

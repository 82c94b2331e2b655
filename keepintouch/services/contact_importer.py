"""Address-book import: parsing, duplicate detection and creation."""
from __future__ import annotations

import csv
import io
import logging
import re
from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from fastapi import HTTPException, status

from keepintouch.schemas.imports import (AddressBookEntry, ImportCandidate, ImportPreview,
                                         ImportReport)
from keepintouch.schemas.person import Person, PersonInput
from keepintouch.services.person_store import PersonStore

logger = logging.getLogger(__name__)

DEFAULT_IMPORT_FREQUENCY = 30
MULTI_VALUE_SEPARATOR = ";"
_PHONE_NOISE = re.compile(r"[^0-9a-z]", re.IGNORECASE)


class Identity(Protocol):
    name: str
    phone: str | None
    email: str | None


@dataclass(frozen=True)
class _Normalized:
    name: str
    phone: str
    email: str


def normalize_name(value: str | None) -> str:
    return (value or "").strip().lower()


def normalize_phone(value: str | None) -> str:
    return _PHONE_NOISE.sub("", value or "").lower()


def normalize_email(value: str | None) -> str:
    return (value or "").strip().lower()


def _normalize(record: Any) -> _Normalized:
    return _Normalized(
        name=normalize_name(getattr(record, "name", None)),
        phone=normalize_phone(getattr(record, "phone", None)),
        email=normalize_email(getattr(record, "email", None)),
    )


def _matches(candidate: _Normalized, existing: _Normalized) -> bool:
    if candidate.name != existing.name:
        return False
    if candidate.phone and existing.phone and candidate.phone == existing.phone:
        return True
    if candidate.email and existing.email and candidate.email == existing.email:
        return True
    return not (candidate.phone or candidate.email or existing.phone or existing.email)


def is_duplicate(candidate: Identity, existing_people: Iterable[Identity]) -> bool:
    """Whether ``candidate`` already appears among ``existing_people``.

    Names must match after trimming and lower-casing. A shared phone (compared
    on its letters and digits only) or a shared email then confirms the match.
    With no phone or email on either side the name alone is enough.
    """
    target = _normalize(candidate)
    return any(_matches(target, _normalize(person)) for person in existing_people)


def _first(values: Sequence[str]) -> str | None:
    for value in values:
        cleaned = value.strip()
        if cleaned:
            return cleaned
    return None


def build_import_candidates(
    entries: Iterable[AddressBookEntry], existing_people: Sequence[Person]
) -> ImportPreview:
    """Turn raw address-book entries into candidates, pre-selecting new people."""
    candidates: list[ImportCandidate] = []
    for entry in entries:
        name = (entry.name or "").strip()
        if not name:
            continue
        candidate = ImportCandidate(
            id=entry.id,
            name=name,
            phone=_first(entry.phones),
            email=_first(entry.emails),
        )
        candidate.is_duplicate = is_duplicate(candidate, existing_people)
        candidate.selected = not candidate.is_duplicate
        candidates.append(candidate)

    duplicates = sum(1 for candidate in candidates if candidate.is_duplicate)
    return ImportPreview(candidates=candidates, duplicates=duplicates)


async def import_candidates(
    store: PersonStore,
    candidates: Sequence[ImportCandidate],
    *,
    selected_ids: Collection[str] | None = None,
    frequency_days: int = DEFAULT_IMPORT_FREQUENCY,
) -> ImportReport:
    """Add the selected candidates as new people.

    Without ``selected_ids`` the candidates' own ``selected`` flags apply, which
    leaves duplicates out. An explicitly selected duplicate is imported anyway.
    """
    report = ImportReport(imported=[])
    for candidate in candidates:
        chosen = candidate.selected if selected_ids is None else candidate.id in selected_ids
        if not chosen:
            if candidate.is_duplicate:
                report.skipped_duplicates += 1
            else:
                report.skipped_unselected += 1
            continue

        person = await store.add(
            PersonInput(
                name=candidate.name,
                notes="",
                contact_frequency_days=frequency_days,
                phone=candidate.phone,
                email=candidate.email,
            )
        )
        report.imported.append(person)

    logger.info(
        "Address book import finished",
        extra={
            "imported": len(report.imported),
            "skipped_duplicates": report.skipped_duplicates,
            "skipped_unselected": report.skipped_unselected,
        },
    )
    return report


def parse_address_book_csv(file_bytes: bytes) -> list[AddressBookEntry]:
    """Read address-book entries from CSV with ``name``, ``phone`` and ``email`` columns.

    ``phone`` and ``email`` cells may hold several values separated by ``;``.
    An ``id`` column is optional; rows are numbered from 1 otherwise.
    """
    try:
        text = file_bytes.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        msg = "Uploaded file must be UTF-8 encoded"
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=msg) from exc

    reader = csv.DictReader(io.StringIO(text))
    if reader.fieldnames is None:
        msg = "CSV file must include a header row"
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=msg)
    if "name" not in reader.fieldnames:
        msg = "Missing required columns: name"
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=msg)

    entries: list[AddressBookEntry] = []
    for row_number, row in enumerate(reader, start=1):
        entries.append(
            AddressBookEntry(
                id=(row.get("id") or "").strip() or str(row_number),
                name=row.get("name"),
                phones=_split_values(row.get("phone")),
                emails=_split_values(row.get("email")),
            )
        )
    return entries


def _split_values(value: str | None) -> list[str]:
    if value is None:
        return []
    return [item.strip() for item in value.split(MULTI_VALUE_SEPARATOR) if item.strip()]

"""Filtering, searching and urgency ordering of people for list views.

Callers compose these in order: ``filter_people`` and ``search_people`` narrow
the candidates, ``sort_by_urgency`` orders what is left.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from enum import Enum

from keepintouch.schemas.person import Person, PersonWithStatus
from keepintouch.schemas.stats import Section
from keepintouch.services.status import enrich_with_status
from keepintouch.services.streaks import MONTH_DAYS, WEEK_DAYS


class FilterType(str, Enum):
    """Supported list filters."""

    ALL = "all"
    OVERDUE = "overdue"
    WEEK = "week"
    MONTH = "month"


def _with_status(people: Iterable[Person], today: date) -> list[PersonWithStatus]:
    # Status is always recomputed for ``today``, even on PersonWithStatus input
    return [enrich_with_status(person, today) for person in people]


def sort_by_urgency(people: Iterable[Person], today: date) -> list[PersonWithStatus]:
    """Overdue people first, most overdue leading; then the longest idle.

    ``sorted`` is stable, so ties keep their incoming order.
    """
    enriched = _with_status(people, today)
    return sorted(
        enriched,
        key=lambda item: (
            not item.is_overdue,
            -(item.days_overdue if item.is_overdue else item.days_since_last_contact),
        ),
    )


def filter_people(
    people: Iterable[Person], criterion: FilterType | str, today: date
) -> list[PersonWithStatus]:
    criterion = FilterType(criterion)
    enriched = _with_status(people, today)
    if criterion is FilterType.OVERDUE:
        return [person for person in enriched if person.is_overdue]
    if criterion is FilterType.WEEK:
        return [person for person in enriched if person.days_since_last_contact <= WEEK_DAYS]
    if criterion is FilterType.MONTH:
        return [person for person in enriched if person.days_since_last_contact <= MONTH_DAYS]
    return enriched


def search_people(people: Sequence[Person], query: str | None) -> list[Person]:
    if query is None or not query.strip():
        return list(people)

    needle = query.strip().lower()
    return [
        person
        for person in people
        if needle in person.name.lower()
        or needle in (person.notes or "").lower()
        or needle in (person.category or "").lower()
    ]


def build_view(
    people: Sequence[Person],
    today: date,
    *,
    criterion: FilterType | str = FilterType.ALL,
    query: str | None = None,
) -> list[PersonWithStatus]:
    """Filter, search, then sort in the order list screens expect."""
    filtered = filter_people(people, criterion, today)
    return sort_by_urgency(search_people(filtered, query), today)


def split_sections(people: Iterable[Person], today: date) -> list[Section]:
    """Partition an urgency-sorted view into overdue and current sections."""
    ordered = sort_by_urgency(people, today)
    sections = [
        Section(title="overdue", people=[person for person in ordered if person.is_overdue]),
        Section(title="current", people=[person for person in ordered if not person.is_overdue]),
    ]
    return [section for section in sections if section.people]

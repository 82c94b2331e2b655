"""Streak calculation and roll-up helpers over contact history."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date

from keepintouch.schemas.person import Person
from keepintouch.schemas.stats import QuickStats
from keepintouch.services.status import classify, days_since

# Allowed deviation, in days, between consecutive contacts and the cadence.
STREAK_TOLERANCE_DAYS = 2

WEEK_DAYS = 7
MONTH_DAYS = 30


def calculate_streak(
    contact_history: Iterable[date] | None, frequency_days: int, today: date
) -> int:
    """Count the unbroken run of on-time contacts ending at the most recent one.

    The newest contact must be no more than ``frequency_days`` before ``today``.
    Each older contact then extends the run while its gap to the next newer one
    stays within ``STREAK_TOLERANCE_DAYS`` of the cadence (bounds inclusive). The
    first gap outside that window ends the walk.
    """
    ordered = sorted(set(contact_history or ()), reverse=True)
    if not ordered:
        return 0

    if days_since(ordered[0], today) > frequency_days:
        return 0

    low = frequency_days - STREAK_TOLERANCE_DAYS
    high = frequency_days + STREAK_TOLERANCE_DAYS
    streak = 1
    for newer, older in zip(ordered, ordered[1:]):
        gap = (newer - older).days
        if not low <= gap <= high:
            break
        streak += 1
    return streak


def contact_history_desc(person: Person) -> list[date]:
    """History newest first; a person without history shows their last contact."""
    history = person.contact_history or [person.last_contact_date]
    return sorted(history, reverse=True)


def all_categories(people: Iterable[Person]) -> list[str]:
    return sorted({person.category for person in people if person.category})


def quick_stats(people: Sequence[Person], today: date) -> QuickStats:
    overdue = 0
    contacted_this_week = 0
    for person in people:
        status = classify(person.last_contact_date, person.contact_frequency_days, today)
        if status.is_overdue:
            overdue += 1
        if status.days_since_last_contact <= WEEK_DAYS:
            contacted_this_week += 1

    return QuickStats(
        total_people=len(people),
        overdue=overdue,
        contacted_this_week=contacted_this_week,
        on_time=len(people) - overdue,
    )

"""Contact status classification.

Everything here is a pure function of its arguments. ``today`` is always passed
in explicitly so callers decide which calendar day the view is computed for.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from keepintouch.schemas.person import Person, PersonWithStatus

# (minimum interaction count, level), highest threshold first
LEVEL_THRESHOLDS: tuple[tuple[int, int], ...] = ((20, 5), (12, 4), (6, 3), (2, 2))

CARD_COLORS: dict[int, str] = {
    1: "#f3b399",  # apricot
    2: "#c8dfaf",  # sage
    3: "#9cd1c8",  # seafoam
    4: "#e9b872",  # sand
    5: "#f2c14e",  # saffron
}

LEVEL_EMOJIS: dict[int, str] = {
    1: "\U0001F331",
    2: "\U0001F33F",
    3: "\U0001F338",
    4: "\U0001F33A",
    5: "\U0001F4AB",
}


@dataclass(frozen=True)
class ContactStatus:
    days_since_last_contact: int
    is_overdue: bool
    days_overdue: int


def _as_day(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def days_since(last_contact_date: date | datetime, today: date | datetime) -> int:
    """Whole days elapsed from ``last_contact_date`` to ``today``, never negative."""
    elapsed = (_as_day(today) - _as_day(last_contact_date)).days
    return max(0, elapsed)


def days_since_within(
    last_contact_date: date | datetime, window: int, today: date | datetime
) -> int | None:
    """Days since last contact if it falls inside ``window`` days, else ``None``."""
    elapsed = days_since(last_contact_date, today)
    return elapsed if elapsed <= window else None


def classify(
    last_contact_date: date | datetime, frequency_days: int, today: date | datetime
) -> ContactStatus:
    elapsed = days_since(last_contact_date, today)
    is_overdue = elapsed >= frequency_days
    return ContactStatus(
        days_since_last_contact=elapsed,
        is_overdue=is_overdue,
        days_overdue=elapsed - frequency_days if is_overdue else 0,
    )


def interaction_level(count: int) -> int:
    """Map a cumulative contact count onto the 1-5 relationship tier."""
    for minimum, level in LEVEL_THRESHOLDS:
        if count >= minimum:
            return level
    return 1


def card_color(level: int) -> str:
    return CARD_COLORS.get(level, CARD_COLORS[1])


def card_emoji(level: int) -> str:
    return LEVEL_EMOJIS.get(level, LEVEL_EMOJIS[1])


def enrich_with_status(person: Person, today: date) -> PersonWithStatus:
    status = classify(person.last_contact_date, person.contact_frequency_days, today)
    level = interaction_level(person.interaction_count)
    return PersonWithStatus(
        **person.model_dump(include=set(Person.model_fields)),
        days_since_last_contact=status.days_since_last_contact,
        is_overdue=status.is_overdue,
        days_overdue=status.days_overdue,
        interaction_level=level,
        card_color=card_color(level),
        card_emoji=card_emoji(level),
    )

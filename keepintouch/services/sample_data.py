"""Starter people for a fresh install."""
from __future__ import annotations

from datetime import date, timedelta

from keepintouch.schemas.person import Person

# (id, name, notes, days since last contact, cadence, days since created)
_SAMPLES: tuple[tuple[str, str, str, int, int, int], ...] = (
    ("1", "Alice Johnson", "College roommate, loves hiking and coffee", 45, 30, 120),
    ("2", "Bob Smith", "Co-worker from previous job, catch up occasionally", 8, 14, 200),
    ("3", "Carol Davis", "Mentor and friend, very important connection", 60, 21, 300),
    ("4", "David Wilson", "Childhood friend, lives far but we stay connected", 3, 7, 400),
    ("5", "Emma Martinez", "Book club organizer, see her monthly", 35, 30, 150),
    ("6", "Frank Chen", "Tennis buddy, play every other week", 25, 14, 180),
    ("7", "Grace Lee", "Sister, check in every week", 12, 7, 500),
    ("8", "Henry Taylor", "Fantasy football league friend", 90, 60, 250),
)


def sample_people(today: date) -> list[Person]:
    """Build the sample collection with dates relative to ``today``."""
    people = []
    for person_id, name, notes, idle_days, frequency, age_days in _SAMPLES:
        last_contact = today - timedelta(days=idle_days)
        people.append(
            Person(
                id=person_id,
                name=name,
                notes=notes,
                contact_frequency_days=frequency,
                last_contact_date=last_contact,
                created_at=today - timedelta(days=age_days),
                contact_history=[last_contact],
            )
        )
    return people

"""Sources of "today" for date-only calculations."""
from __future__ import annotations

from datetime import date, timedelta
from typing import Protocol


class Clock(Protocol):
    def today(self) -> date: ...


class SystemClock:
    """Clock backed by the local calendar date."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to a given day; ``advance`` moves it forward."""

    def __init__(self, day: date) -> None:
        self._day = day

    def today(self) -> date:
        return self._day

    def set(self, day: date) -> None:
        self._day = day

    def advance(self, days: int = 1) -> date:
        self._day = self._day + timedelta(days=days)
        return self._day

"""Pydantic schemas for summary views."""
from __future__ import annotations

from pydantic import BaseModel

from keepintouch.schemas.person import PersonWithStatus


class QuickStats(BaseModel):
    total_people: int
    overdue: int
    contacted_this_week: int
    on_time: int


class Section(BaseModel):
    title: str
    people: list[PersonWithStatus]

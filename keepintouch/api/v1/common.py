"""Common helpers for API routes."""
from __future__ import annotations

from datetime import date
from typing import TypeVar

from fastapi import Depends, Request

from keepintouch.services.person_store import PersonStore

T = TypeVar("T")


def data_response(payload: T) -> dict[str, T]:
    """Wrap a payload in the standard data envelope."""

    return {"data": payload}


def get_person_store(request: Request) -> PersonStore:
    """Return the application's single person store."""

    return request.app.state.person_store


def get_today(store: PersonStore = Depends(get_person_store)) -> date:
    return store.clock.today()

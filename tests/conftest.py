from __future__ import annotations

import itertools
import os
import sys
from collections.abc import AsyncIterator
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from keepintouch.core.clock import FixedClock  # noqa: E402
from keepintouch.core.config import get_settings  # noqa: E402

TEST_DB_PATH = ROOT / "test.db"
if TEST_DB_PATH.exists():
    TEST_DB_PATH.unlink()
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
get_settings.cache_clear()

TODAY = date(2024, 6, 15)


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture()
def id_factory():
    counter = itertools.count(1)
    return lambda: f"p{next(counter)}"


@pytest.fixture()
def documents():
    from keepintouch.services.document_store import MemoryDocumentStore

    return MemoryDocumentStore()


@pytest.fixture()
def store(documents, clock, id_factory):
    from keepintouch.services.person_store import PersonStore

    return PersonStore(documents, clock=clock, id_factory=id_factory)


@pytest.fixture()
async def reset_database() -> AsyncIterator[None]:
    from keepintouch.core.db import engine
    from keepintouch.models import Base

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    yield


@pytest.fixture()
async def client(reset_database, clock) -> AsyncIterator[AsyncClient]:
    from keepintouch.main import create_app

    app = create_app(clock=clock)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

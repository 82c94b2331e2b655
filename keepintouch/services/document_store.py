"""Durable key-value document stores backing the person collection."""
from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from keepintouch.core.errors import StorageFailure
from keepintouch.models import Document

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Text documents addressed by key."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, text: str) -> None: ...


class SqlDocumentStore:
    """Store documents as rows of the ``documents`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> str | None:
        try:
            async with self._session_factory() as session:
                document = await session.get(Document, key)
                return document.value if document is not None else None
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Unable to read document '{key}'") from exc

    async def set(self, key: str, text: str) -> None:
        try:
            async with self._session_factory() as session:
                document = await session.get(Document, key)
                if document is None:
                    session.add(Document(key=key, value=text))
                else:
                    document.value = text
                await session.commit()
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Unable to write document '{key}'") from exc
        logger.debug("Document written", extra={"key": key, "size": len(text)})


class MemoryDocumentStore:
    """Process-local store, for embedding and tests."""

    def __init__(self, documents: dict[str, str] | None = None) -> None:
        self.documents: dict[str, str] = dict(documents or {})

    async def get(self, key: str) -> str | None:
        return self.documents.get(key)

    async def set(self, key: str, text: str) -> None:
        self.documents[key] = text

"""Shared document-store access for the menu viewer and the feedback form."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable

from customer_menu.config import (
    CATEGORIES_COLLECTION,
    CUSTOM_TAGS_COLLECTION,
    DB_PATH,
    DB_PATH_ENV,
    FIRESTORE_PROJECT_ENV,
    MENU_ITEMS_COLLECTION,
    RESTAURANT_ID,
    STORE_BACKEND,
    STORE_BACKEND_ENV,
)

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the document store fails to read, listen or write."""


class _ServerTimestamp:
    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


# Placeholder replaced by the store's own clock when a record is written.
SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True)
class Document:
    """A stored document: its id and its field mapping."""

    doc_id: str
    data: dict[str, Any]


@dataclass(frozen=True)
class Snapshot:
    """Complete point-in-time contents of one collection."""

    path: str
    documents: tuple[Document, ...]


@dataclass(frozen=True)
class MenuPaths:
    """Collection paths for one restaurant's menu."""

    items: str
    categories: str
    tags: str


def menu_paths(restaurant_id: str = RESTAURANT_ID) -> MenuPaths:
    base = f"restaurants/{restaurant_id}"
    return MenuPaths(
        items=f"{base}/{MENU_ITEMS_COLLECTION}",
        categories=f"{base}/{CATEGORIES_COLLECTION}",
        tags=f"{base}/{CUSTOM_TAGS_COLLECTION}",
    )


SnapshotCallback = Callable[[Snapshot], None]
ErrorCallback = Callable[[Exception], None]
Unsubscribe = Callable[[], None]


class DocumentStore:
    """Backend interface: live collection listeners plus append-only writes."""

    def listen(self, path: str, on_snapshot: SnapshotCallback, on_error: ErrorCallback) -> Unsubscribe:
        """Deliver a full snapshot now and after every change to ``path``.

        Callbacks may be invoked from any thread.
        """
        raise NotImplementedError

    async def add(self, path: str, record: dict[str, Any]) -> str:
        """Append ``record`` to ``path`` and return the new document id."""
        raise NotImplementedError

    async def subscribe(self, path: str) -> AsyncIterator[Snapshot]:
        """Yield every snapshot of ``path`` until the consumer stops iterating.

        A listener failure ends the stream with :class:`StoreError`.
        """
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[Snapshot | Exception] = asyncio.Queue()

        def push(event: Snapshot | Exception) -> None:
            loop.call_soon_threadsafe(queue.put_nowait, event)

        unsubscribe = self.listen(path, push, push)
        logger.info("subscribed path=%s", path)
        try:
            while True:
                event = await queue.get()
                if isinstance(event, Exception):
                    raise StoreError(f"Subscription to {path} failed: {event}") from event
                logger.debug("snapshot path=%s documents=%d", path, len(event.documents))
                yield event
        finally:
            unsubscribe()
            logger.info("unsubscribed path=%s", path)


def resolve_store_backend() -> str:
    """Backend name from ``CUSTOMER_MENU_STORE``, falling back to the default."""
    return os.environ.get(STORE_BACKEND_ENV, STORE_BACKEND).strip().lower() or STORE_BACKEND


def open_store(backend: str | None = None) -> DocumentStore:
    """Bootstrap the configured store client."""
    backend = backend or resolve_store_backend()
    if backend == "sqlite":
        from customer_menu.persistence import SqliteDocumentStore

        return SqliteDocumentStore(os.environ.get(DB_PATH_ENV, DB_PATH))
    if backend == "firestore":
        from customer_menu.remote import FirestoreDocumentStore

        return FirestoreDocumentStore(project=os.environ.get(FIRESTORE_PROJECT_ENV))
    raise StoreError(f"Unknown store backend: {backend!r}")

"""SQLite-backed document store with in-process change notification."""

from __future__ import annotations

import asyncio
import json
import logging
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from uuid import uuid4

from customer_menu.config import DB_PATH
from customer_menu.constant import SAMPLE_CATEGORIES, SAMPLE_CUSTOM_TAGS, SAMPLE_MENU_ITEMS
from customer_menu.store import (
    SERVER_TIMESTAMP,
    Document,
    DocumentStore,
    ErrorCallback,
    Snapshot,
    SnapshotCallback,
    StoreError,
    Unsubscribe,
    menu_paths,
)

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _resolve_server_values(value: Any, now: str) -> Any:
    if value is SERVER_TIMESTAMP:
        return now
    if isinstance(value, dict):
        return {key: _resolve_server_values(inner, now) for key, inner in value.items()}
    if isinstance(value, list):
        return [_resolve_server_values(inner, now) for inner in value]
    return value


class SqliteDocumentStore(DocumentStore):
    """Documents kept as JSON rows keyed by collection path and id."""

    def __init__(self, db_path: str | Path = DB_PATH) -> None:
        self.db_path = Path(db_path)
        self._listeners: dict[str, list[tuple[SnapshotCallback, ErrorCallback]]] = {}
        self._lock = threading.Lock()
        self.bootstrap_schema()

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(self.db_path)

    def bootstrap_schema(self) -> None:
        """Create the documents table if it does not already exist."""
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    collection TEXT NOT NULL,
                    doc_id TEXT NOT NULL,
                    data TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    UNIQUE(collection, doc_id)
                );

                CREATE INDEX IF NOT EXISTS idx_documents_collection_seq
                    ON documents(collection, seq);
                """
            )

    def snapshot(self, path: str) -> Snapshot:
        """Read the full current contents of ``path`` in insertion order."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT doc_id, data FROM documents WHERE collection = ? ORDER BY seq",
                (path,),
            ).fetchall()
        return Snapshot(
            path=path,
            documents=tuple(Document(doc_id=doc_id, data=json.loads(data)) for doc_id, data in rows),
        )

    def listen(self, path: str, on_snapshot: SnapshotCallback, on_error: ErrorCallback) -> Unsubscribe:
        entry = (on_snapshot, on_error)
        with self._lock:
            self._listeners.setdefault(path, []).append(entry)

        try:
            on_snapshot(self.snapshot(path))
        except sqlite3.Error as exc:
            logger.error("initial snapshot failed path=%s error=%r", path, exc)
            on_error(exc)

        def unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(path, [])
                if entry in listeners:
                    listeners.remove(entry)

        return unsubscribe

    def _notify(self, path: str) -> None:
        with self._lock:
            listeners = list(self._listeners.get(path, []))
        if not listeners:
            return

        try:
            snapshot = self.snapshot(path)
        except sqlite3.Error as exc:
            logger.error("snapshot refresh failed path=%s error=%r", path, exc)
            for _, on_error in listeners:
                on_error(exc)
            return

        for on_snapshot, _ in listeners:
            on_snapshot(snapshot)

    def _write(self, path: str, doc_id: str, data: dict[str, Any], *, replace: bool) -> None:
        now = _utc_now_iso()
        payload = json.dumps(_resolve_server_values(data, now))
        statement = "INSERT INTO documents (collection, doc_id, data, created_at) VALUES (?, ?, ?, ?)"
        if replace:
            # Upsert keeps the first seq so snapshot order stays stable.
            statement += " ON CONFLICT(collection, doc_id) DO UPDATE SET data = excluded.data"
        with self._connect() as conn:
            with conn:
                conn.execute(statement, (path, doc_id, payload, now))

    async def add(self, path: str, record: dict[str, Any]) -> str:
        doc_id = uuid4().hex
        try:
            await asyncio.to_thread(self._write, path, doc_id, record, replace=False)
        except (sqlite3.Error, TypeError, ValueError) as exc:
            raise StoreError(f"Could not write to {path}: {exc}") from exc
        logger.info("document added path=%s doc_id=%s", path, doc_id)
        self._notify(path)
        return doc_id

    def put(self, path: str, doc_id: str, data: dict[str, Any]) -> None:
        """Create or replace a document; used by seeding."""
        try:
            self._write(path, doc_id, data, replace=True)
        except (sqlite3.Error, TypeError, ValueError) as exc:
            raise StoreError(f"Could not write {path}/{doc_id}: {exc}") from exc
        self._notify(path)


def seed_sample_menu(store: SqliteDocumentStore, restaurant_id: str | None = None) -> int:
    """Load the bundled sample menu, categories and tags; return item count."""
    paths = menu_paths(restaurant_id) if restaurant_id else menu_paths()
    for tag_id, data in SAMPLE_CUSTOM_TAGS.items():
        store.put(paths.tags, tag_id, dict(data))
    for category_id, data in SAMPLE_CATEGORIES.items():
        store.put(paths.categories, category_id, dict(data))
    for item_id, data in SAMPLE_MENU_ITEMS.items():
        store.put(paths.items, item_id, dict(data))
    logger.info("sample menu seeded items=%d path=%s", len(SAMPLE_MENU_ITEMS), paths.items)
    return len(SAMPLE_MENU_ITEMS)

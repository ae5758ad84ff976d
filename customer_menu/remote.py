"""Hosted document store backed by Google Cloud Firestore."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import firestore

from customer_menu.store import (
    SERVER_TIMESTAMP,
    Document,
    DocumentStore,
    ErrorCallback,
    Snapshot,
    SnapshotCallback,
    StoreError,
    Unsubscribe,
)

logger = logging.getLogger(__name__)


def _to_firestore(value: Any) -> Any:
    if value is SERVER_TIMESTAMP:
        return firestore.SERVER_TIMESTAMP
    if isinstance(value, dict):
        return {key: _to_firestore(inner) for key, inner in value.items()}
    if isinstance(value, list):
        return [_to_firestore(inner) for inner in value]
    return value


class FirestoreDocumentStore(DocumentStore):
    """Collection listeners and appends over a Firestore client."""

    def __init__(self, project: str | None = None, client: firestore.Client | None = None) -> None:
        self._client = client if client is not None else firestore.Client(project=project)

    def listen(self, path: str, on_snapshot: SnapshotCallback, on_error: ErrorCallback) -> Unsubscribe:
        def handle(docs, changes, read_time) -> None:  # noqa: ANN001
            # Runs on the Firestore watch thread.
            try:
                snapshot = Snapshot(
                    path=path,
                    documents=tuple(Document(doc_id=doc.id, data=doc.to_dict() or {}) for doc in docs),
                )
            except Exception as exc:
                logger.error("snapshot decode failed path=%s error=%r", path, exc)
                on_error(exc)
                return
            on_snapshot(snapshot)

        try:
            watch = self._client.collection(path).on_snapshot(handle)
        except (GoogleAPIError, GoogleAuthError) as exc:
            raise StoreError(f"Could not listen to {path}: {exc}") from exc
        return watch.unsubscribe

    async def add(self, path: str, record: dict[str, Any]) -> str:
        collection = self._client.collection(path)
        try:
            _, ref = await asyncio.to_thread(collection.add, _to_firestore(record))
        except (GoogleAPIError, GoogleAuthError) as exc:
            raise StoreError(f"Could not write to {path}: {exc}") from exc
        logger.info("document added path=%s doc_id=%s", path, ref.id)
        return ref.id

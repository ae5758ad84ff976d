"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from customer_menu.persistence import SqliteDocumentStore
from customer_menu.store import Document, DocumentStore, Snapshot, StoreError, menu_paths


class RecordingStore(DocumentStore):
    """Store double that records writes and can be told to fail them."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.writes: list[tuple[str, dict[str, Any]]] = []

    def listen(self, path, on_snapshot, on_error):  # noqa: ANN001
        on_snapshot(Snapshot(path=path, documents=()))
        return lambda: None

    async def add(self, path: str, record: dict[str, Any]) -> str:
        if self.fail:
            raise StoreError("write refused")
        self.writes.append((path, record))
        return f"doc-{len(self.writes)}"


def make_snapshot(path: str, docs: dict[str, dict[str, Any]]) -> Snapshot:
    return Snapshot(path=path, documents=tuple(Document(doc_id=doc_id, data=data) for doc_id, data in docs.items()))


@pytest.fixture
def paths():
    return menu_paths("test_restaurant")


@pytest.fixture
def sqlite_store(tmp_path):
    return SqliteDocumentStore(tmp_path / "store.db")


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def failing_store():
    return RecordingStore(fail=True)


@pytest.fixture
def sample_item_docs():
    return {
        "p1": {
            "name": "Paneer Tikka",
            "description": "Smoky cottage cheese",
            "category": "starters",
            "vegetarian": True,
            "isSpicy": True,
            "recommended": True,
            "plateSizes": {"half": {"price": 160, "available": True}, "full": {"price": 280, "available": True}},
        },
        "c1": {
            "name": "Chicken 65",
            "description": "Fried chicken with curry leaves",
            "category": "starters",
            "vegetarian": False,
            "bestSeller": True,
            "price": 240,
        },
        "d1": {
            "name": "Dal Makhani",
            "description": "Black lentils",
            "category": "mains (veg)",
            "isVegetarian": True,
            "tags": ["festive"],
        },
        "g1": {
            "name": "Gulab Jamun",
            "category": "desserts",
            "vegetarian": True,
            "isSweet": True,
            "customTags": ["chef_pick"],
            "price": 90,
        },
        "x1": {
            "name": "Mystery Soup",
            "available": False,
            "category": "starters",
        },
        "u1": {
            "name": "House Pickle",
            "description": "Seasonal",
        },
    }

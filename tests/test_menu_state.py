"""Tests for the menu session reducers and lookups."""

from __future__ import annotations

from conftest import make_snapshot

from customer_menu import menu_state
from customer_menu.menu_state import LOAD_ERROR_MESSAGE, MenuSession, group_available_items
from customer_menu.store import Document, Snapshot


class TestGroupAvailableItems:

    def test_unavailable_items_are_dropped(self):
        snapshot = make_snapshot(
            "items",
            {"1": {"category": "mains", "available": True}, "2": {"category": "mains", "available": False}},
        )
        grouped = group_available_items(snapshot)
        assert list(grouped) == ["mains"]
        assert [item.item_id for item in grouped["mains"]] == ["1"]

    def test_missing_category_goes_to_uncategorized(self, sample_item_docs):
        grouped = group_available_items(make_snapshot("items", sample_item_docs))
        assert [item.item_id for item in grouped["uncategorized"]] == ["u1"]
        assert [item.item_id for item in grouped["starters"]] == ["p1", "c1"]

    def test_unreadable_document_is_skipped(self, monkeypatch):
        real = menu_state.menu_item_from_document

        def reader(document):
            if document.doc_id == "bad":
                raise ValueError("unreadable")
            return real(document)

        monkeypatch.setattr(menu_state, "menu_item_from_document", reader)
        snapshot = make_snapshot("items", {"bad": {"category": "a"}, "ok": {"category": "a"}})

        grouped = group_available_items(snapshot)

        assert [item.item_id for item in grouped["a"]] == ["ok"]

    def test_duplicate_ids_keep_first(self):
        snapshot = Snapshot(
            path="items",
            documents=(
                Document("dup", {"name": "First", "category": "a"}),
                Document("dup", {"name": "Second", "category": "b"}),
            ),
        )
        grouped = group_available_items(snapshot)
        assert list(grouped) == ["a"]
        assert grouped["a"][0].name == "First"


class TestMenuSession:

    def test_items_snapshot_replaces_cache(self, sample_item_docs):
        session = MenuSession()
        session.apply_items_snapshot(make_snapshot("items", sample_item_docs))
        assert session.loaded
        assert session.find_item("p1") is not None

        session.apply_items_snapshot(make_snapshot("items", {"new": {"name": "Only One", "category": "mains"}}))
        assert list(session.menu_items) == ["mains"]
        assert session.find_item("p1") is None

    def test_all_filter_returns_every_cached_item(self, sample_item_docs):
        session = MenuSession()
        session.apply_items_snapshot(make_snapshot("items", sample_item_docs))
        ids = {item.item_id for items in session.filtered_categories().values() for item in items}
        assert ids == {"p1", "c1", "d1", "g1", "u1"}

    def test_veg_filter_uses_every_alias(self, sample_item_docs):
        session = MenuSession()
        session.apply_items_snapshot(make_snapshot("items", sample_item_docs))
        session.set_filter("veg")
        ids = {item.item_id for items in session.filtered_categories().values() for item in items}
        assert ids == {"p1", "d1", "g1"}

    def test_search_is_lowercased(self, sample_item_docs):
        session = MenuSession()
        session.apply_items_snapshot(make_snapshot("items", sample_item_docs))
        session.set_search("PANEER")
        assert session.search_term == "paneer"
        assert list(session.filtered_categories()) == ["starters"]

    def test_tags_snapshot_adds_filter_chips(self):
        session = MenuSession()
        session.apply_tags_snapshot(make_snapshot("tags", {"chef_pick": {"name": "Chef's Pick"}}))
        chips = session.filter_chips()
        assert chips[0] == ("all", "All", False)
        assert chips[-1] == ("chef_pick", "Chef's Pick", True)
        assert session.tags_by_id["chef_pick"].name == "Chef's Pick"

    def test_custom_categories_appear_even_when_empty(self, sample_item_docs):
        session = MenuSession()
        session.apply_items_snapshot(make_snapshot("items", sample_item_docs))
        session.apply_categories_snapshot(make_snapshot("categories", {"c": {"name": "combos"}, "x": {}}))
        assert session.custom_categories == ["combos"]
        assert session.category_chips() == ["starters", "mains (veg)", "desserts", "uncategorized", "combos"]

    def test_items_error_sets_empty_state_message(self):
        session = MenuSession()
        session.record_items_error(RuntimeError("boom"))
        assert session.loaded
        assert session.load_error == LOAD_ERROR_MESSAGE
        assert session.filtered_categories() == {}

    def test_recommendations_ignore_search(self, sample_item_docs):
        session = MenuSession()
        session.apply_items_snapshot(make_snapshot("items", sample_item_docs))
        session.set_search("zzz")
        assert [item.item_id for item in session.recommendations()] == ["p1", "c1", "d1", "g1"]

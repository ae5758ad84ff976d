"""Tests for document ingestion and alias resolution."""

from __future__ import annotations

import pytest

from customer_menu.data import category_name_from_document, custom_tag_from_document, menu_item_from_document
from customer_menu.models import PlateSize
from customer_menu.store import Document


def _item(data, doc_id="i1"):
    return menu_item_from_document(Document(doc_id=doc_id, data=data))


class TestMenuItemFromDocument:
    """Canonical fields resolved once from raw documents."""

    def test_defaults_for_sparse_document(self):
        item = _item({"name": "Plain Rice"})
        assert item.item_id == "i1"
        assert item.category == "uncategorized"
        assert item.available is True
        assert item.vegetarian is None
        assert item.tags == ()
        assert item.custom_tags == ()
        assert item.plate_sizes == {}

    def test_only_explicit_false_marks_unavailable(self):
        assert _item({"available": False}).available is False
        assert _item({"available": None}).available is True
        assert _item({"available": 0}).available is True

    @pytest.mark.parametrize(
        "data,expected",
        [
            ({"vegetarian": True}, True),
            ({"isVegetarian": True}, True),
            ({"vegetarian": False}, False),
            ({"isNonVegetarian": True}, False),
            ({}, None),
        ],
    )
    def test_vegetarian_aliases(self, data, expected):
        assert _item(data).vegetarian is expected

    @pytest.mark.parametrize(
        "key,flag",
        [
            ("isSpicy", "spicy"),
            ("spicy", "spicy"),
            ("mildSpicy", "mild_spicy"),
            ("isRefreshing", "refreshing"),
            ("bestSeller", "bestseller"),
            ("bestseller", "bestseller"),
            ("isBestseller", "bestseller"),
            ("newItem", "new"),
            ("isNew", "new"),
            ("isRecommended", "recommended"),
        ],
    )
    def test_flag_aliases(self, key, flag):
        assert getattr(_item({key: True}), flag) is True

    def test_plate_sizes_from_structured_price(self):
        item = _item({"price": {"half": {"price": 100, "available": True}, "full": {"price": 180}}})
        assert item.price is None
        assert item.plate_sizes == {
            "half": PlateSize(price=100, available=True),
            "full": PlateSize(price=180, available=False),
        }

    def test_plate_sizes_field_wins_over_price_map(self):
        item = _item(
            {
                "plateSizes": {"full": {"price": 200, "available": True}},
                "price": {"half": {"price": 90, "available": True}},
            }
        )
        assert list(item.plate_sizes) == ["full"]

    def test_flat_price_and_numeric_strings(self):
        assert _item({"price": 120}).price == 120
        assert _item({"price": "99.5"}).price == 99.5
        assert _item({"priceHalf": "80"}).price_half == 80
        assert _item({"price": "free"}).price is None

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf", float("nan"), float("inf")])
    def test_non_finite_numbers_are_ignored(self, value):
        item = _item({"price": value, "priceFull": value, "priority": value})
        assert item.price is None
        assert item.price_full is None
        assert item.priority == 0

    def test_priority_keeps_fraction(self):
        assert _item({"priority": 7.5}).priority == 7.5
        assert _item({"priority": "9"}).priority == 9
        assert _item({"priority": "high"}).priority == 0

    def test_non_veg_flag_is_independent_of_veg_aliases(self):
        item = _item({"vegetarian": False, "isVegetarian": True})
        assert item.vegetarian is True
        assert item.non_vegetarian is True
        assert _item({"isNonVegetarian": True}).non_vegetarian is True
        assert _item({"vegetarian": True}).non_vegetarian is False

    def test_tag_arrays_ignore_non_lists(self):
        item = _item({"tags": "spicy", "customTags": ["t1", "t2"]})
        assert item.tags == ()
        assert item.custom_tags == ("t1", "t2")


def test_custom_tag_falls_back_to_id():
    assert custom_tag_from_document(Document("t1", {"name": "Chef's Pick"})).name == "Chef's Pick"
    assert custom_tag_from_document(Document("t2", {})).name == "t2"


def test_category_name():
    assert category_name_from_document(Document("c1", {"name": "combos"})) == "combos"
    assert category_name_from_document(Document("c2", {})) is None

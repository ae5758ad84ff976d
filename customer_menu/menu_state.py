"""Menu view-model: snapshot reducers plus the user's filter and search."""

from __future__ import annotations

import logging

from customer_menu.constant import FILTER_CHIPS
from customer_menu.data import category_name_from_document, custom_tag_from_document, menu_item_from_document
from customer_menu.filtering import (
    ALL_FILTER,
    MenuCache,
    filter_categories,
    iter_items,
    ordered_categories,
    recommendations,
    search_suggestions,
)
from customer_menu.models import CustomTag, MenuItem
from customer_menu.store import Snapshot

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Error loading menu items. Please try again later."


def group_available_items(snapshot: Snapshot) -> MenuCache:
    """Build a fresh category -> items cache from a full items snapshot.

    Items explicitly marked unavailable are skipped, as are documents that
    cannot be read. A repeated id keeps the first document seen and drops
    the rest.
    """
    grouped: MenuCache = {}
    seen_ids: set[str] = set()
    for document in snapshot.documents:
        if document.doc_id in seen_ids:
            logger.warning("duplicate menu item id=%s path=%s dropped", document.doc_id, snapshot.path)
            continue
        seen_ids.add(document.doc_id)

        try:
            item = menu_item_from_document(document)
        except (AttributeError, TypeError, ValueError, OverflowError) as exc:
            logger.warning("malformed menu item id=%s path=%s skipped error=%r", document.doc_id, snapshot.path, exc)
            continue
        if not item.available:
            continue
        grouped.setdefault(item.category, []).append(item)
    return grouped


class MenuSession:
    """Per-screen menu state, rebuilt wholesale from each snapshot."""

    def __init__(self) -> None:
        self.menu_items: MenuCache = {}
        self.custom_categories: list[str] = []
        self.custom_tags: list[CustomTag] = []
        self.active_filter = ALL_FILTER
        self.search_term = ""
        self.loaded = False
        self.load_error: str | None = None

    def apply_items_snapshot(self, snapshot: Snapshot) -> None:
        grouped = group_available_items(snapshot)
        self.menu_items = grouped
        self.loaded = True
        self.load_error = None
        logger.info(
            "menu cache replaced categories=%d items=%d",
            len(grouped),
            sum(len(items) for items in grouped.values()),
        )

    def apply_categories_snapshot(self, snapshot: Snapshot) -> None:
        names = [category_name_from_document(document) for document in snapshot.documents]
        self.custom_categories = [name for name in names if name]
        logger.info("custom categories replaced count=%d", len(self.custom_categories))

    def apply_tags_snapshot(self, snapshot: Snapshot) -> None:
        self.custom_tags = [custom_tag_from_document(document) for document in snapshot.documents]
        logger.info("custom tags replaced count=%d", len(self.custom_tags))

    def record_items_error(self, exc: Exception) -> None:
        self.loaded = True
        self.load_error = LOAD_ERROR_MESSAGE
        logger.error("menu subscription failed error=%r", exc)

    def set_filter(self, active_filter: str) -> None:
        self.active_filter = active_filter

    def set_search(self, term: str) -> None:
        self.search_term = term.lower()

    @property
    def tags_by_id(self) -> dict[str, CustomTag]:
        return {tag.tag_id: tag for tag in self.custom_tags}

    def filtered_categories(self) -> MenuCache:
        return filter_categories(self.menu_items, self.active_filter, self.search_term)

    def recommendations(self) -> list[MenuItem]:
        return recommendations(self.menu_items, self.active_filter)

    def suggestions(self) -> list[MenuItem]:
        return search_suggestions(self.menu_items, self.active_filter, self.search_term)

    def category_chips(self) -> list[str]:
        return ordered_categories(self.menu_items, self.custom_categories)

    def filter_chips(self) -> list[tuple[str, str, bool]]:
        """(filter id, label, is custom tag) for every selectable filter."""
        chips = [(filter_id, label, False) for filter_id, label in FILTER_CHIPS]
        chips.extend((tag.tag_id, tag.name, True) for tag in self.custom_tags)
        return chips

    def find_item(self, item_id: str) -> MenuItem | None:
        for item in iter_items(self.menu_items):
            if item.item_id == item_id:
                return item
        return None

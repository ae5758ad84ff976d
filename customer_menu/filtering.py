"""Filter, search and recommendation derivations over a menu snapshot."""

from __future__ import annotations

from typing import Callable, Iterable

from customer_menu.config import RECOMMENDATION_LIMIT, SUGGESTION_LIMIT, SUGGESTION_MIN_CHARS
from customer_menu.constant import DEFAULT_CATEGORIES
from customer_menu.models import MenuItem

ALL_FILTER = "all"

NAMED_FILTERS: dict[str, Callable[[MenuItem], bool]] = {
    "veg": lambda item: item.vegetarian is True,
    "non-veg": lambda item: item.vegetarian is False or item.non_vegetarian,
    "spicy": lambda item: item.spicy,
    "mildSpicy": lambda item: item.mild_spicy,
    "sweet": lambda item: item.sweet,
    "refreshing": lambda item: item.refreshing,
    "cold": lambda item: item.cold,
    "hot": lambda item: item.hot,
    "recommended": lambda item: item.recommended,
    "bestseller": lambda item: item.bestseller,
    "new": lambda item: item.new,
}

MenuCache = dict[str, list[MenuItem]]


def matches_filter(item: MenuItem, active_filter: str) -> bool:
    """Named predicates first, then free-form tags, then custom tag ids."""
    if active_filter == ALL_FILTER:
        return True
    predicate = NAMED_FILTERS.get(active_filter)
    if predicate is not None:
        return predicate(item)
    if active_filter in item.tags:
        return True
    return active_filter in item.custom_tags


def matches_search(item: MenuItem, search_term: str) -> bool:
    if not search_term:
        return True
    term = search_term.lower()
    return term in item.name.lower() or term in item.description.lower()


def iter_items(menu_items: MenuCache) -> Iterable[MenuItem]:
    """All cached items in category order, then item order."""
    for items in menu_items.values():
        yield from items


def filter_categories(menu_items: MenuCache, active_filter: str, search_term: str) -> MenuCache:
    """Map each category to its surviving items, dropping empty categories."""
    filtered: MenuCache = {}
    for category, items in menu_items.items():
        kept = [item for item in items if matches_search(item, search_term) and matches_filter(item, active_filter)]
        if kept:
            filtered[category] = kept
    return filtered


def is_recommendation(item: MenuItem) -> bool:
    return item.recommended or item.bestseller or item.new or bool(item.custom_tags) or bool(item.tags)


def recommendations(menu_items: MenuCache, active_filter: str, limit: int = RECOMMENDATION_LIMIT) -> list[MenuItem]:
    """First flagged items in cache order; ignores the search term."""
    picked: list[MenuItem] = []
    for item in iter_items(menu_items):
        if len(picked) >= limit:
            break
        if matches_filter(item, active_filter) and is_recommendation(item):
            picked.append(item)
    return picked


def search_suggestions(
    menu_items: MenuCache,
    active_filter: str,
    search_term: str,
    limit: int = SUGGESTION_LIMIT,
    min_chars: int = SUGGESTION_MIN_CHARS,
) -> list[MenuItem]:
    if len(search_term) < min_chars:
        return []
    picked: list[MenuItem] = []
    for item in iter_items(menu_items):
        if len(picked) >= limit:
            break
        if matches_filter(item, active_filter) and matches_search(item, search_term):
            picked.append(item)
    return picked


def ordered_categories(
    menu_items: MenuCache,
    custom_categories: Iterable[str],
    defaults: list[str] = DEFAULT_CATEGORIES,
) -> list[str]:
    """Known default categories first, then the rest in first-seen order."""
    available: list[str] = []
    for category in [*menu_items.keys(), *custom_categories]:
        if category not in available:
            available.append(category)
    leading = [category for category in defaults if category in available]
    return leading + [category for category in available if category not in defaults]

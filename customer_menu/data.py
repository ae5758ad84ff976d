"""Ingestion of raw store documents into canonical menu models."""

from __future__ import annotations

import math
from typing import Any

from customer_menu.constant import ITEM_FLAG_ALIASES, UNCATEGORIZED
from customer_menu.models import CustomTag, MenuItem, PlateSize, Price
from customer_menu.store import Document


def _price(value: Any) -> Price | None:
    """Finite number from a number or numeric string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            return int(value)
    return value


def _text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _string_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(entry) for entry in value)


def _any_flag(data: dict[str, Any], keys: tuple[str, ...]) -> bool:
    return any(bool(data.get(key)) for key in keys)


def _plate_sizes(raw: Any) -> dict[str, PlateSize]:
    if not isinstance(raw, dict):
        return {}
    sizes: dict[str, PlateSize] = {}
    for size, option in raw.items():
        if not isinstance(option, dict):
            continue
        sizes[str(size)] = PlateSize(price=_price(option.get("price")), available=bool(option.get("available")))
    return sizes


def _vegetarian(data: dict[str, Any]) -> bool | None:
    if data.get("vegetarian") is True or data.get("isVegetarian"):
        return True
    if _non_vegetarian(data):
        return False
    return None


def _non_vegetarian(data: dict[str, Any]) -> bool:
    # Checked independently of the veg aliases; an item can carry both.
    return data.get("vegetarian") is False or bool(data.get("isNonVegetarian"))


def _priority(value: Any) -> Price:
    priority = _price(value)
    return priority if priority is not None else 0


def menu_item_from_document(document: Document) -> MenuItem:
    """Resolve every legacy property alias into one canonical item."""
    data = document.data
    raw_price = data.get("price")
    plate_sizes = _plate_sizes(data.get("plateSizes")) or _plate_sizes(raw_price)
    flags = {flag: _any_flag(data, keys) for flag, keys in ITEM_FLAG_ALIASES.items()}

    return MenuItem(
        item_id=document.doc_id,
        name=str(data.get("name") or ""),
        description=str(data.get("description") or ""),
        category=str(data.get("category") or UNCATEGORIZED),
        available=data.get("available") is not False,
        price=_price(raw_price),
        price_half=_price(data.get("priceHalf")),
        price_full=_price(data.get("priceFull")),
        plate_sizes=plate_sizes,
        image_url=_text(data.get("imageUrl")),
        serves=_text(data.get("serves")),
        nutritional_info=_text(data.get("nutritionalInfo")),
        priority=_priority(data.get("priority")),
        vegetarian=_vegetarian(data),
        non_vegetarian=_non_vegetarian(data),
        tags=_string_tuple(data.get("tags")),
        custom_tags=_string_tuple(data.get("customTags")),
        **flags,
    )


def custom_tag_from_document(document: Document) -> CustomTag:
    """Build a tag, falling back to its id when no display name is stored."""
    return CustomTag(tag_id=document.doc_id, name=str(document.data.get("name") or document.doc_id))


def category_name_from_document(document: Document) -> str | None:
    """Get the stored category name, or None for nameless records."""
    return _text(document.data.get("name"))

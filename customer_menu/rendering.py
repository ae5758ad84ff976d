"""Rendering helpers for menu rows, badges, prices and star ratings."""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text

from customer_menu.constant import (
    CURRENCY_SYMBOL,
    DEFAULT_DESCRIPTION,
    DEFAULT_NUTRITIONAL_INFO,
    DEFAULT_SERVES,
    MAX_STARS,
    PLATE_SIZE_LABELS,
)
from customer_menu.models import CustomTag, MenuItem, Price

NOT_AVAILABLE = "N/A"


def badge_style(kind: str) -> str:
    """Return a consistent badge style for a badge kind."""
    if kind in {"spicy", "non-veg"}:
        return "bold #ffffff on #b23a48"
    if kind == "veg":
        return "bold #0b1f0f on #5fbf72"
    if kind in {"recommended", "bestseller", "new"}:
        return "bold #1b1300 on #f39c12"
    if kind == "custom-tag":
        return "bold #ffffff on #8e44ad"
    return "bold #ffffff on #2f6db5"


def category_title(category: str) -> str:
    return category[:1].upper() + category[1:]


def format_amount(value: Price) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{CURRENCY_SYMBOL}{value}"


def item_badges(item: MenuItem, tags_by_id: dict[str, CustomTag]) -> list[tuple[str, str]]:
    """(kind, label) pairs; custom tag ids with no known tag are skipped."""
    badges: list[tuple[str, str]] = []
    if item.recommended:
        badges.append(("recommended", "Recommended"))
    if item.bestseller:
        badges.append(("bestseller", "Bestseller"))
    if item.new:
        badges.append(("new", "✨ New"))
    if item.spicy:
        badges.append(("spicy", "Spicy"))
    if item.vegetarian is True:
        badges.append(("veg", "Veg"))
    elif item.vegetarian is False:
        badges.append(("non-veg", "Non-Veg"))
    badges.extend(("tag", category_title(tag)) for tag in item.tags)
    for tag_id in item.custom_tags:
        tag = tags_by_id.get(tag_id)
        if tag is not None:
            badges.append(("custom-tag", tag.name))
    return badges


def format_badges(item: MenuItem, tags_by_id: dict[str, CustomTag]) -> Text:
    text = Text()
    for idx, (kind, label) in enumerate(item_badges(item, tags_by_id)):
        if idx > 0:
            text.append(" ")
        text.append(f" {label} ", style=badge_style(kind))
    return text


def veg_marker(item: MenuItem) -> str:
    if item.vegetarian is True:
        return "🟢"
    if item.vegetarian is False:
        return "🔴"
    return ""


def display_price(item: MenuItem) -> str:
    """Single headline price for compact views."""
    for value in (item.price, item.price_full):
        if value:
            return format_amount(value)
    for size in ("full", "half"):
        option = item.plate_sizes.get(size)
        if option is not None and option.price:
            return format_amount(option.price)
    return NOT_AVAILABLE


def price_options(item: MenuItem) -> list[str]:
    """Lines describing every orderable size, or a reason there are none."""
    if item.plate_sizes:
        lines = [
            f"{label}: {format_amount(item.plate_sizes[size].price)}"
            for size, label in PLATE_SIZE_LABELS.items()
            if size in item.plate_sizes
            and item.plate_sizes[size].available
            and item.plate_sizes[size].price is not None
        ]
        return lines or ["No sizes available"]
    if item.price is not None:
        return [format_amount(item.price)]
    return ["Price not available"]


def half_price_text(item: MenuItem) -> str:
    if item.price_half:
        return format_amount(item.price_half)
    half = item.plate_sizes.get("half")
    if half is not None and half.price:
        return format_amount(half.price)
    return NOT_AVAILABLE


def full_price_text(item: MenuItem) -> str:
    for value in (item.price_full, item.price):
        if value:
            return format_amount(value)
    full = item.plate_sizes.get("full")
    if full is not None and full.price:
        return format_amount(full.price)
    return NOT_AVAILABLE


def format_menu_row(item: MenuItem, tags_by_id: dict[str, CustomTag]) -> Text:
    """Render a listing entry: name line, description, price options."""
    text = Text()
    text.append(item.name, style="bold")
    marker = veg_marker(item)
    if marker:
        text.append(f" {marker}")
    badges = format_badges(item, tags_by_id)
    if badges:
        text.append("  ")
        text.append_text(badges)
    text.append(f"\n{item.description or DEFAULT_DESCRIPTION}", style="dim")
    for line in price_options(item):
        text.append(f"\n{line}")
    return text


def format_compact_row(item: MenuItem, tags_by_id: dict[str, CustomTag]) -> Text:
    """Render a one-line entry for recommendations and suggestions."""
    text = Text()
    text.append(item.name, style="bold")
    badges = format_badges(item, tags_by_id)
    if badges:
        text.append(" ")
        text.append_text(badges)
    text.append(f"  {display_price(item)}")
    return text


def format_stars(score: int, previewing: bool = False) -> Text:
    """Render filled and empty stars; preview uses a brighter fill."""
    fill_style = "bold #ffd166" if previewing else "#f39c12"
    text = Text()
    for position in range(1, MAX_STARS + 1):
        if position <= score:
            text.append("★ ", style=fill_style)
        else:
            text.append("☆ ", style="#888888")
    return text


@dataclass(frozen=True)
class ItemDetail:
    """Display-ready fields for the item detail overlay."""

    name: str
    description: str
    badges: Text
    serves: str
    nutritional_info: str
    image_url: str | None
    price_half: str
    price_full: str


def build_item_detail(item: MenuItem, tags_by_id: dict[str, CustomTag]) -> ItemDetail:
    return ItemDetail(
        name=item.name,
        description=item.description or DEFAULT_DESCRIPTION,
        badges=format_badges(item, tags_by_id),
        serves=item.serves or DEFAULT_SERVES,
        nutritional_info=item.nutritional_info or DEFAULT_NUTRITIONAL_INFO,
        image_url=item.image_url,
        price_half=half_price_text(item),
        price_full=full_price_text(item),
    )

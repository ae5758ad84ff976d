"""Domain models for the customer menu and feedback form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from customer_menu.constant import UNCATEGORIZED

Price = int | float


@dataclass(frozen=True)
class PlateSize:
    """One serving-size variant of a menu item."""

    price: Price | None
    available: bool = False


@dataclass(frozen=True)
class MenuItem:
    """A menu item with one canonical field per attribute."""

    item_id: str
    name: str
    description: str = ""
    category: str = UNCATEGORIZED
    available: bool = True
    price: Price | None = None
    price_half: Price | None = None
    price_full: Price | None = None
    plate_sizes: dict[str, PlateSize] = field(default_factory=dict)
    image_url: str | None = None
    serves: str | None = None
    nutritional_info: str | None = None
    priority: Price = 0
    # Display state: True veg, False non-veg, None unknown.
    vegetarian: bool | None = None
    # Non-veg filter membership; may hold alongside a veg display state.
    non_vegetarian: bool = False
    spicy: bool = False
    mild_spicy: bool = False
    sweet: bool = False
    refreshing: bool = False
    cold: bool = False
    hot: bool = False
    recommended: bool = False
    bestseller: bool = False
    new: bool = False
    tags: tuple[str, ...] = ()
    custom_tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class CustomTag:
    """A restaurant-defined label referenced by id from items."""

    tag_id: str
    name: str


@dataclass(frozen=True)
class FeedbackRecord:
    """A single submitted feedback entry; never updated after creation."""

    timestamp: Any
    date: str
    time: str
    ratings: dict[str, dict[str, int]]
    customer_name: str
    customer_phone: str
    averages: dict[str, float]
    user_agent: str
    client_timestamp_ms: int

    def to_document(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "date": self.date,
            "time": self.time,
            "ratings": {cluster: dict(scores) for cluster, scores in self.ratings.items()},
            "customerInfo": {
                "name": self.customer_name,
                "phone": self.customer_phone,
            },
            "overallScores": dict(self.averages),
            "deviceInfo": {
                "userAgent": self.user_agent,
                "timestamp": self.client_timestamp_ms,
            },
        }

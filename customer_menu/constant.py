"""Editable static rating, filter and sample menu configuration."""

from __future__ import annotations

RATING_LABELS: dict[str, str] = {
    "menu_ease": "Ease of use",
    "menu_clarity": "Clarity",
    "menu_speed": "Speed",
    "food_quality": "Food quality",
    "ambience": "Ambience",
    "pricing": "Pricing",
    "service": "Service",
}

MAX_STARS = 5

# Stored record layout: cluster -> {stored field: rating dimension}.
RATING_CLUSTERS: dict[str, dict[str, str]] = {
    "menuExperience": {
        "ease": "menu_ease",
        "clarity": "menu_clarity",
        "speed": "menu_speed",
    },
    "restaurantExperience": {
        "foodQuality": "food_quality",
        "ambience": "ambience",
        "pricing": "pricing",
        "service": "service",
    },
}

CLUSTER_TITLES: dict[str, str] = {
    "menuExperience": "Menu experience",
    "restaurantExperience": "Restaurant experience",
}

CLUSTER_AVERAGE_KEYS: dict[str, str] = {
    "menuExperience": "menuAverage",
    "restaurantExperience": "restaurantAverage",
}

ANONYMOUS_NAME = "Anonymous"
PHONE_NOT_PROVIDED = "Not provided"

# Canonical item flag -> document keys that have been used for it.
ITEM_FLAG_ALIASES: dict[str, tuple[str, ...]] = {
    "spicy": ("isSpicy", "spicy"),
    "mild_spicy": ("isMildSpicy", "mildSpicy"),
    "sweet": ("isSweet", "sweet"),
    "refreshing": ("isRefreshing", "refreshing"),
    "cold": ("isCold", "cold"),
    "hot": ("isHot", "hot"),
    "recommended": ("recommended", "isRecommended"),
    "bestseller": ("bestSeller", "bestseller", "isBestseller"),
    "new": ("newItem", "isNew"),
}

FILTER_CHIPS: list[tuple[str, str]] = [
    ("all", "All"),
    ("veg", "Veg"),
    ("non-veg", "Non-Veg"),
    ("spicy", "Spicy"),
    ("mildSpicy", "Mild Spicy"),
    ("sweet", "Sweet"),
    ("refreshing", "Refreshing"),
    ("cold", "Cold"),
    ("hot", "Hot"),
    ("recommended", "Recommended"),
    ("bestseller", "Bestseller"),
    ("new", "New"),
]

DEFAULT_CATEGORIES: list[str] = ["starters", "mains (veg)", "desserts", "beverages"]
UNCATEGORIZED = "uncategorized"

PLATE_SIZE_LABELS: dict[str, str] = {
    "half": "Half Plate",
    "full": "Full Plate",
}

DEFAULT_DESCRIPTION = "Delicious dish prepared with care"
DEFAULT_SERVES = "1"
DEFAULT_NUTRITIONAL_INFO = "Images shown are for illustration only; actual dish may vary."
CURRENCY_SYMBOL = "₹"

SAMPLE_CUSTOM_TAGS: dict[str, dict[str, object]] = {
    "chef_pick": {"name": "Chef's Pick"},
    "monsoon": {"name": "Monsoon Special"},
}

SAMPLE_CATEGORIES: dict[str, dict[str, object]] = {
    "combos": {"name": "combos"},
}

SAMPLE_MENU_ITEMS: dict[str, dict[str, object]] = {
    "paneer_tikka": {
        "name": "Paneer Tikka",
        "description": "Chargrilled cottage cheese with peppers and onion",
        "category": "starters",
        "vegetarian": True,
        "isSpicy": True,
        "recommended": True,
        "plateSizes": {"half": {"price": 160, "available": True}, "full": {"price": 280, "available": True}},
        "serves": "2",
    },
    "chicken_65": {
        "name": "Chicken 65",
        "description": "Crisp fried chicken tossed with curry leaves",
        "category": "starters",
        "vegetarian": False,
        "spicy": True,
        "bestSeller": True,
        "price": 240,
        "priority": 9,
    },
    "veg_biryani": {
        "name": "Veg Biryani",
        "description": "Basmati rice layered with vegetables and whole spices",
        "category": "mains (veg)",
        "isVegetarian": True,
        "tags": ["festive"],
        "customTags": ["chef_pick"],
        "plateSizes": {"half": {"price": 150, "available": False}, "full": {"price": 260, "available": True}},
    },
    "dal_makhani": {
        "name": "Dal Makhani",
        "description": "Black lentils slow cooked with butter and cream",
        "category": "mains (veg)",
        "vegetarian": True,
        "priceHalf": 120,
        "priceFull": 210,
    },
    "gulab_jamun": {
        "name": "Gulab Jamun",
        "description": "Milk dumplings soaked in cardamom syrup",
        "category": "desserts",
        "vegetarian": True,
        "isSweet": True,
        "isNew": True,
        "price": 90,
    },
    "masala_chai": {
        "name": "Masala Chai",
        "category": "beverages",
        "vegetarian": True,
        "isHot": True,
        "customTags": ["monsoon"],
        "price": 40,
    },
    "sweet_lassi": {
        "name": "Sweet Lassi",
        "description": "Chilled yoghurt drink",
        "category": "beverages",
        "vegetarian": True,
        "cold": True,
        "refreshing": True,
        "sweet": True,
        "price": 80,
    },
    "mutton_rogan_josh": {
        "name": "Mutton Rogan Josh",
        "description": "Kashmiri braised mutton",
        "category": "mains (non-veg)",
        "isNonVegetarian": True,
        "available": False,
        "price": 380,
    },
}

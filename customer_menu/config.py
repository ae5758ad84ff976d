"""Runtime configuration defaults for the store, logging and UI timings."""

from __future__ import annotations

RESTAURANT_ID = "restaurant_1"

FEEDBACK_COLLECTION = "restaurant_feedback"
MENU_ITEMS_COLLECTION = "menu_items"
CATEGORIES_COLLECTION = "categories"
CUSTOM_TAGS_COLLECTION = "custom_tags"

# Backend selection; "sqlite" is local, "firestore" is the hosted store.
STORE_BACKEND = "sqlite"
STORE_BACKEND_ENV = "CUSTOMER_MENU_STORE"
DB_PATH = "data/customer_menu.db"
DB_PATH_ENV = "CUSTOMER_MENU_DB_PATH"
FIRESTORE_PROJECT_ENV = "CUSTOMER_MENU_FIRESTORE_PROJECT"

LOG_PATH = "/tmp/customer-menu-debug.log"

NOTIFY_TIMEOUT_SECONDS = 5
RESTART_PROMPT_DELAY_SECONDS = 5
CONFETTI_SECONDS = 3

RECOMMENDATION_LIMIT = 5
SUGGESTION_LIMIT = 5
SUGGESTION_MIN_CHARS = 2
HIGH_PRIORITY_THRESHOLD = 7

"""Entry points for the customer menu and feedback Textual apps."""

from __future__ import annotations

import logging
from pathlib import Path

from customer_menu.config import LOG_PATH


def configure_logging(path: str | Path = LOG_PATH, level: int = logging.INFO) -> None:
    """Send application logs to a debug file; the terminal belongs to the UI."""
    log_path = Path(path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))

    root = logging.getLogger("customer_menu")
    root.setLevel(level)
    root.addHandler(handler)


def run_menu() -> None:
    """Run the live menu viewer."""
    from customer_menu.menu_app import MenuApp

    configure_logging()
    MenuApp().run()


def run_feedback() -> None:
    """Run the feedback collector."""
    from customer_menu.feedback_app import FeedbackApp

    configure_logging()
    FeedbackApp().run()


def seed() -> None:
    """Load the sample menu into the local SQLite store."""
    from customer_menu.persistence import seed_sample_menu
    from customer_menu.store import open_store

    configure_logging()
    store = open_store("sqlite")
    count = seed_sample_menu(store)
    print(f"Seeded {count} menu items into {store.db_path}")


if __name__ == "__main__":
    run_menu()

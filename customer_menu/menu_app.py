"""Live menu viewer Textual app."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import HorizontalScroll, Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.message import Message
from textual.widgets import Button, Footer, Header, Input, LoadingIndicator, OptionList, Static
from textual.widgets.option_list import Option

from customer_menu.config import HIGH_PRIORITY_THRESHOLD
from customer_menu.item_modal import ItemDetailModal
from customer_menu.menu_state import MenuSession
from customer_menu.models import MenuItem
from customer_menu.rendering import build_item_detail, category_title, format_compact_row, format_menu_row
from customer_menu.store import DocumentStore, MenuPaths, Snapshot, StoreError, menu_paths, open_store

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "No menu items found matching your criteria."


class FilterChip(Button):
    """Filter selector; custom tag chips carry the tag id as their filter."""

    def __init__(self, filter_id: str, label: str, custom: bool = False) -> None:
        super().__init__(Text(label), classes="filter-btn custom-tag" if custom else "filter-btn")
        self.filter_id = filter_id
        self.chip_label = label
        self.custom = custom


class CategoryChip(Button):
    """Jump-to-section button for one category."""

    def __init__(self, category: str) -> None:
        super().__init__(Text(category_title(category)), classes="category-btn")
        self.category = category


class MenuItemRow(Static, can_focus=True):
    """A selectable menu entry that opens the detail overlay."""

    BINDINGS = [("enter", "select", "Details")]

    class Selected(Message):
        def __init__(self, item_id: str) -> None:
            super().__init__()
            self.item_id = item_id

    def __init__(self, item: MenuItem, content: Text, classes: str = "") -> None:
        if item.priority > HIGH_PRIORITY_THRESHOLD:
            classes = f"{classes} high-priority".strip()
        super().__init__(content, classes=classes)
        self.item_id = item.item_id

    def on_click(self) -> None:
        self.post_message(self.Selected(self.item_id))

    def action_select(self) -> None:
        self.post_message(self.Selected(self.item_id))


class MenuApp(App):
    """A Textual app browsing one restaurant's live menu."""

    TITLE = "Menu"
    SUB_TITLE = "Browse, filter and search"

    CSS = """
    Screen {
        layout: vertical;
    }

    #menu-search {
        margin: 0 1;
    }

    #search-suggestions {
        height: auto;
        max-height: 7;
        margin: 0 1;
        border: round $secondary;
    }

    #filter-scroll, #category-scroll {
        height: 3;
        margin: 0 1;
    }

    .filter-btn, .category-btn {
        min-width: 8;
        margin-right: 1;
    }

    .filter-btn.-selected {
        background: $accent;
        text-style: bold;
    }

    .custom-tag {
        border: tall $warning;
    }

    #menu-scroll {
        height: 1fr;
        border: round $primary;
        padding: 0 1;
    }

    .pane-title, .section-title {
        text-style: bold;
        margin: 1 0;
    }

    .recommended-item {
        padding: 0 1;
    }

    .menu-item {
        border: tall $surface;
        padding: 0 1;
        margin-bottom: 1;
    }

    .menu-item:focus {
        border: tall $secondary;
    }

    .high-priority {
        border: tall $warning;
    }

    #loading-state {
        height: 3;
    }

    #no-results {
        padding: 1;
        color: $text-muted;
    }

    .hidden {
        display: none;
    }
    """

    BINDINGS = [
        Binding("ctrl+f", "focus_search", "Search", priority=True),
        ("escape", "clear_search", "Clear search"),
        ("ctrl+t", "toggle_theme", "Theme"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, store: DocumentStore | None = None, paths: MenuPaths | None = None) -> None:
        super().__init__()
        self.store = store if store is not None else open_store()
        self.paths = paths or menu_paths()
        self.session = MenuSession()
        self._sections: dict[str, Static] = {}
        self._render_lock = asyncio.Lock()

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(placeholder="Search dishes...", id="menu-search")
        yield OptionList(id="search-suggestions", classes="hidden")
        with HorizontalScroll(id="filter-scroll"):
            for filter_id, label, custom in self.session.filter_chips():
                yield FilterChip(filter_id, label, custom)
        yield HorizontalScroll(id="category-scroll")
        yield LoadingIndicator(id="loading-state")
        with VerticalScroll(id="menu-scroll"):
            yield Static("Recommended for you", classes="pane-title")
            yield Vertical(id="recommended-items")
            yield Static(id="no-results", classes="hidden")
            yield Vertical(id="menu-content")
        yield Footer()

    def on_mount(self) -> None:
        self._mark_active_filter()
        self.run_worker(
            self._follow(self.paths.categories, self.session.apply_categories_snapshot),
            group="subscriptions",
        )
        self.run_worker(
            self._follow(self.paths.tags, self.session.apply_tags_snapshot),
            group="subscriptions",
        )
        self.run_worker(
            self._follow(self.paths.items, self.session.apply_items_snapshot, self.session.record_items_error),
            group="subscriptions",
        )

    async def _follow(
        self,
        path: str,
        reducer: Callable[[Snapshot], None],
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        """Apply every snapshot of ``path`` and re-derive all views."""
        try:
            async for snapshot in self.store.subscribe(path):
                reducer(snapshot)
                await self.refresh_views()
        except StoreError as exc:
            logger.error("subscription ended path=%s error=%r", path, exc)
            if on_error is not None:
                on_error(exc)
            await self.refresh_views()

    async def refresh_views(self, suggestions: bool = False) -> None:
        """Recompute every derived view from the current session state.

        Suggestions only follow the search box, so they are refreshed on
        request rather than on every snapshot.
        """
        async with self._render_lock:
            await self._refresh_filter_chips()
            await self._refresh_category_chips()
            await self._refresh_recommendations()
            await self._refresh_listing()
            if suggestions:
                self._refresh_suggestions()
            self._refresh_loading()

    def schedule_refresh(self, suggestions: bool = False) -> None:
        self.run_worker(self.refresh_views(suggestions), group="render")

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "menu-search":
            return
        self.session.set_search(event.value)
        self.schedule_refresh(suggestions=True)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if isinstance(event.button, FilterChip):
            self.session.set_filter(event.button.filter_id)
            logger.info("filter selected=%s", event.button.filter_id)
            self._mark_active_filter()
            self.schedule_refresh()
            return

        if isinstance(event.button, CategoryChip):
            self._scroll_to_category(event.button.category)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        item = self.session.find_item(event.option.id or "")
        if item is None:
            return
        search = self.query_one("#menu-search", Input)
        with search.prevent(Input.Changed):
            search.value = item.name
        self.session.set_search(item.name)
        self.query_one("#search-suggestions", OptionList).add_class("hidden")
        self.schedule_refresh()

    def on_menu_item_row_selected(self, message: MenuItemRow.Selected) -> None:
        self.show_item_detail(message.item_id)

    def show_item_detail(self, item_id: str) -> None:
        item = self.session.find_item(item_id)
        if item is None:
            logger.error("item not found id=%s", item_id)
            return
        self.push_screen(ItemDetailModal(build_item_detail(item, self.session.tags_by_id)))

    def action_focus_search(self) -> None:
        self.query_one("#menu-search", Input).focus()

    def action_clear_search(self) -> None:
        try:
            self.query_one("#menu-search", Input).value = ""
        except NoMatches:
            return

    def action_toggle_theme(self) -> None:
        self.theme = "textual-light" if self.theme == "textual-dark" else "textual-dark"

    def _mark_active_filter(self) -> None:
        for chip in self.query(FilterChip):
            chip.set_class(chip.filter_id == self.session.active_filter, "-selected")

    def _scroll_to_category(self, category: str) -> None:
        section = self._sections.get(category)
        for chip in self.query(CategoryChip):
            chip.set_class(chip.category == category, "-selected")
        if section is None:
            return
        self.query_one("#menu-scroll", VerticalScroll).scroll_to_widget(section, top=True)

    async def _refresh_filter_chips(self) -> None:
        try:
            scroll = self.query_one("#filter-scroll", HorizontalScroll)
        except NoMatches:
            return
        wanted = [(filter_id, label) for filter_id, label, custom in self.session.filter_chips() if custom]
        current = [(chip.filter_id, chip.chip_label) for chip in scroll.query(FilterChip) if chip.custom]
        if wanted != current:
            await scroll.query(".custom-tag").remove()
            await scroll.mount_all(FilterChip(filter_id, label, custom=True) for filter_id, label in wanted)
        self._mark_active_filter()

    async def _refresh_category_chips(self) -> None:
        try:
            scroll = self.query_one("#category-scroll", HorizontalScroll)
        except NoMatches:
            return
        wanted = self.session.category_chips()
        current = [chip.category for chip in scroll.query(CategoryChip)]
        if wanted == current:
            return
        await scroll.remove_children()
        await scroll.mount_all(CategoryChip(category) for category in wanted)

    async def _refresh_recommendations(self) -> None:
        try:
            container = self.query_one("#recommended-items", Vertical)
        except NoMatches:
            return
        tags = self.session.tags_by_id
        await container.remove_children()
        await container.mount_all(
            MenuItemRow(item, format_compact_row(item, tags), classes="recommended-item")
            for item in self.session.recommendations()
        )

    async def _refresh_listing(self) -> None:
        try:
            content = self.query_one("#menu-content", Vertical)
            no_results = self.query_one("#no-results", Static)
        except NoMatches:
            return

        await content.remove_children()
        self._sections = {}

        if self.session.load_error:
            no_results.update(self.session.load_error)
            no_results.remove_class("hidden")
            return

        filtered = self.session.filtered_categories()
        if not filtered:
            no_results.update(NO_RESULTS_MESSAGE if self.session.loaded else "")
            no_results.set_class(not self.session.loaded, "hidden")
            return
        no_results.add_class("hidden")

        tags = self.session.tags_by_id
        widgets: list[Static] = []
        for category, items in filtered.items():
            title = Static(Text(category_title(category)), classes="section-title")
            self._sections[category] = title
            widgets.append(title)
            widgets.extend(MenuItemRow(item, format_menu_row(item, tags), classes="menu-item") for item in items)
        await content.mount_all(widgets)

    def _refresh_suggestions(self) -> None:
        try:
            suggestions = self.query_one("#search-suggestions", OptionList)
        except NoMatches:
            return
        tags = self.session.tags_by_id
        items = self.session.suggestions()
        suggestions.clear_options()
        if not items:
            suggestions.add_class("hidden")
            return
        suggestions.add_options(Option(format_compact_row(item, tags), id=item.item_id) for item in items)
        suggestions.remove_class("hidden")

    def _refresh_loading(self) -> None:
        try:
            self.query_one("#loading-state", LoadingIndicator).set_class(self.session.loaded, "hidden")
        except NoMatches:
            return

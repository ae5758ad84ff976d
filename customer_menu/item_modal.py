"""Menu item detail modal screen."""

from __future__ import annotations

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from customer_menu.rendering import ItemDetail


class ItemDetailModal(ModalScreen[None]):
    """Centered overlay with the full details of one menu item."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
    ]

    CSS = """
    ItemDetailModal {
        align: center middle;
        background: $background 60%;
    }

    #item-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #modal-name {
        text-style: bold;
        margin-bottom: 1;
    }

    #modal-description, #modal-badges, #modal-image {
        margin-bottom: 1;
    }

    #modal-nutritional {
        margin-top: 1;
        color: $text-muted;
    }

    #modal-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, detail: ItemDetail) -> None:
        super().__init__()
        self.detail = detail

    def compose(self) -> ComposeResult:
        with Container(id="item-dialog"):
            yield Static(id="modal-name")
            yield Static(id="modal-description")
            yield Static(id="modal-badges")
            yield Static(id="modal-image")
            yield Static(id="modal-serves")
            yield Static(id="modal-price-half")
            yield Static(id="modal-price-full")
            yield Static(id="modal-nutritional")
            yield Static("Esc / q to close", id="modal-help")

    def on_mount(self) -> None:
        detail = self.detail
        self.query_one("#modal-name", Static).update(Text(detail.name))
        self.query_one("#modal-description", Static).update(Text(detail.description))
        self.query_one("#modal-badges", Static).update(detail.badges)

        image = self.query_one("#modal-image", Static)
        if detail.image_url:
            image.update(Text(f"Image: {detail.image_url}", style="underline"))
        else:
            image.display = False

        self.query_one("#modal-serves", Static).update(f"Serves: {detail.serves}")
        self.query_one("#modal-price-half", Static).update(f"Half Plate: {detail.price_half}")
        self.query_one("#modal-price-full", Static).update(f"Full Plate: {detail.price_full}")
        self.query_one("#modal-nutritional", Static).update(Text(detail.nutritional_info))

    def on_click(self, event: events.Click) -> None:
        # Clicking the dimmed backdrop closes the overlay.
        if event.widget is self:
            self.dismiss()

    def action_close(self) -> None:
        self.dismiss()

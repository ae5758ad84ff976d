"""Prompt shown after a successful submission."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class RestartModal(ModalScreen[bool]):
    """Ask whether to start another feedback; dismisses with True or False."""

    CSS = """
    RestartModal {
        align: center middle;
        background: $background 60%;
    }

    #restart-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #restart-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #restart-buttons {
        height: auto;
        align: center middle;
    }

    #restart-buttons Button {
        margin: 0 1;
    }

    #restart-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def compose(self) -> ComposeResult:
        with Container(id="restart-dialog"):
            yield Static("Would you like to submit another feedback?", id="restart-title")
            with Horizontal(id="restart-buttons"):
                yield Button("Yes", id="restart-yes", variant="primary")
                yield Button("No", id="restart-no")
            yield Static("Y / Enter start over. N / Esc stay here.", id="restart-help")

    def on_key(self, event: Key) -> None:
        if event.key in {"y", "enter"}:
            self.dismiss(True)
            event.stop()
            return

        if event.key in {"n", "escape", "q"}:
            self.dismiss(False)
            event.stop()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "restart-yes")

"""Star rating row widget."""

from __future__ import annotations

from rich.text import Text
from textual import events
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget

from customer_menu.constant import MAX_STARS
from customer_menu.rendering import format_stars


class StarRating(Widget, can_focus=True):
    """A row of selectable stars for one rating dimension.

    Click commits a score, hover previews one, leaving the row reverts to the
    committed score. Left/right and digit keys adjust the score when focused.
    """

    DEFAULT_CSS = """
    StarRating {
        width: auto;
        height: 1;
    }

    StarRating:focus {
        background: $boost;
    }
    """

    BINDINGS = [
        ("left", "step(-1)", "Fewer stars"),
        ("right", "step(1)", "More stars"),
        ("0", "rate(0)", "Clear"),
        ("1", "rate(1)", "1 star"),
        ("2", "rate(2)", "2 stars"),
        ("3", "rate(3)", "3 stars"),
        ("4", "rate(4)", "4 stars"),
        ("5", "rate(5)", "5 stars"),
    ]

    STAR_WIDTH = 2

    score = reactive(0)
    preview: reactive[int | None] = reactive(None)

    class Changed(Message):
        """Posted when a score is committed."""

        def __init__(self, rating: StarRating, dimension: str, score: int) -> None:
            super().__init__()
            self.rating = rating
            self.dimension = dimension
            self.score = score

    def __init__(self, dimension: str, score: int = 0, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self.dimension = dimension
        self.set_reactive(StarRating.score, score)

    def render(self) -> Text:
        if self.preview is not None:
            return format_stars(self.preview, previewing=True)
        return format_stars(self.score)

    def get_content_width(self, container, viewport) -> int:  # noqa: ANN001
        return MAX_STARS * self.STAR_WIDTH

    def star_at(self, x: int) -> int | None:
        """1-based star under column ``x``, if any."""
        position = x // self.STAR_WIDTH + 1
        if 1 <= position <= MAX_STARS:
            return position
        return None

    def commit(self, value: int) -> None:
        self.score = value
        self.preview = None
        self.app.bell()
        self.post_message(self.Changed(self, self.dimension, value))

    def on_mouse_move(self, event: events.MouseMove) -> None:
        self.preview = self.star_at(event.x)

    def on_leave(self, event: events.Leave) -> None:
        self.preview = None

    def on_click(self, event: events.Click) -> None:
        position = self.star_at(event.x)
        if position is None:
            return
        self.commit(position)
        event.stop()

    def action_step(self, delta: int) -> None:
        self.commit(max(0, min(MAX_STARS, self.score + delta)))

    def action_rate(self, value: int) -> None:
        self.commit(value)

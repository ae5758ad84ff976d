"""Feedback collection Textual app."""

from __future__ import annotations

import logging
import random

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.timer import Timer
from textual.widgets import Button, Footer, Header, Input, LoadingIndicator, Static

from customer_menu.config import CONFETTI_SECONDS, NOTIFY_TIMEOUT_SECONDS, RESTART_PROMPT_DELAY_SECONDS
from customer_menu.constant import CLUSTER_TITLES, RATING_CLUSTERS, RATING_LABELS
from customer_menu.feedback import FeedbackSession, FeedbackValidationError, SubmissionState
from customer_menu.rating_widget import StarRating
from customer_menu.restart_modal import RestartModal
from customer_menu.store import DocumentStore, StoreError, open_store

logger = logging.getLogger(__name__)

SUBMIT_LABEL = "Submit Feedback"
SUBMITTING_LABEL = "Submitting..."
SUBMIT_ERROR_MESSAGE = "There was an error submitting your feedback. Please try again."

_CONFETTI_COLORS = ("#f39c12", "#e74c3c", "#3498db", "#2ecc71", "#9b59b6")
_CONFETTI_WIDTH = 48
_CONFETTI_ROWS = 3


class FeedbackApp(App):
    """A Textual app collecting star ratings and optional contact details."""

    TITLE = "Customer Feedback"
    SUB_TITLE = "Tell us how we did"

    CSS = """
    Screen {
        layout: vertical;
    }

    #feedback-form {
        height: 1fr;
        border: round $primary;
        padding: 1 2;
    }

    .section-title {
        text-style: bold;
        margin: 1 0;
    }

    .rating-row {
        height: 1;
        margin-bottom: 1;
    }

    .rating-label {
        width: 20;
    }

    #customer-name, #customer-phone {
        margin-top: 1;
        width: 48;
    }

    #submit-row {
        height: 3;
        margin-top: 1;
    }

    #loading-spinner {
        width: 10;
        height: 3;
    }

    #thank-you {
        height: 1fr;
        border: round $success;
        padding: 1 2;
        align: center middle;
    }

    #thank-you-title {
        text-style: bold;
        margin-bottom: 1;
    }

    .hidden {
        display: none;
    }
    """

    BINDINGS = [
        Binding("ctrl+s", "submit", "Submit", priority=True),
        ("ctrl+t", "toggle_theme", "Theme"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, store: DocumentStore | None = None) -> None:
        super().__init__()
        self.store = store if store is not None else open_store()
        self.session = FeedbackSession(on_state_change=self._on_state_change)
        self._confetti_timer: Timer | None = None
        self._restart_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="feedback-form"):
            for cluster, fields in RATING_CLUSTERS.items():
                yield Static(CLUSTER_TITLES[cluster], classes="section-title")
                for dimension in fields.values():
                    with Horizontal(classes="rating-row"):
                        yield Static(RATING_LABELS[dimension], classes="rating-label")
                        yield StarRating(dimension, id=f"rating-{dimension}")
            yield Input(placeholder="Your name (optional)", id="customer-name")
            yield Input(placeholder="Mobile number (optional)", id="customer-phone")
            with Horizontal(id="submit-row"):
                yield Button(SUBMIT_LABEL, id="submit-btn", variant="primary")
                yield LoadingIndicator(id="loading-spinner", classes="hidden")
        with Vertical(id="thank-you", classes="hidden"):
            yield Static("Thank you for your feedback!", id="thank-you-title")
            yield Static("Your ratings help us serve you better.", id="thank-you-body")
            yield Static(id="confetti")
        yield Footer()

    def on_star_rating_changed(self, event: StarRating.Changed) -> None:
        self.session.ratings.set(event.dimension, event.score)
        logger.debug("rating %s=%d", event.dimension, event.score)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit-btn":
            self.action_submit()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.action_submit()

    def action_submit(self) -> None:
        if self.session.state is not SubmissionState.IDLE:
            return
        name = self._input_value("#customer-name")
        phone = self._input_value("#customer-phone")
        self.run_worker(self._submit(name, phone), group="submit")

    def action_toggle_theme(self) -> None:
        self.theme = "textual-light" if self.theme == "textual-dark" else "textual-dark"

    async def _submit(self, name: str, phone: str) -> None:
        if self.session.state is not SubmissionState.IDLE:
            return
        try:
            record = await self.session.submit(self.store, name, phone)
        except FeedbackValidationError as exc:
            logger.info("feedback rejected reason=%s", exc)
            self.notify(str(exc), severity=exc.severity, timeout=NOTIFY_TIMEOUT_SECONDS)
            self.session.recover()
            return
        except StoreError as exc:
            logger.error("feedback write failed error=%r", exc)
            self.notify(SUBMIT_ERROR_MESSAGE, severity="error", timeout=NOTIFY_TIMEOUT_SECONDS)
            self.session.recover()
            return
        except Exception:
            logger.exception("feedback submit failed unexpectedly")
            self.notify(SUBMIT_ERROR_MESSAGE, severity="error", timeout=NOTIFY_TIMEOUT_SECONDS)
            self.session.recover()
            return

        logger.info("feedback submitted overall=%s", record.averages)
        self._show_thank_you()

    def _input_value(self, selector: str) -> str:
        try:
            return self.query_one(selector, Input).value
        except NoMatches:
            return ""

    def _on_state_change(self, state: SubmissionState) -> None:
        try:
            button = self.query_one("#submit-btn", Button)
            spinner = self.query_one("#loading-spinner", LoadingIndicator)
        except NoMatches:
            return
        button.disabled = state in {SubmissionState.VALIDATING, SubmissionState.SUBMITTING}
        button.label = SUBMITTING_LABEL if state is SubmissionState.SUBMITTING else SUBMIT_LABEL
        spinner.set_class(state is not SubmissionState.SUBMITTING, "hidden")

    def _show_thank_you(self) -> None:
        try:
            self.query_one("#feedback-form").add_class("hidden")
            self.query_one("#thank-you").remove_class("hidden")
        except NoMatches:
            return
        self._start_confetti()
        self._restart_timer = self.set_timer(RESTART_PROMPT_DELAY_SECONDS, self._prompt_restart)

    def _start_confetti(self) -> None:
        self._confetti_timer = self.set_interval(0.1, self._confetti_tick)
        self.set_timer(CONFETTI_SECONDS, self._stop_confetti)

    def _confetti_tick(self) -> None:
        try:
            confetti = self.query_one("#confetti", Static)
        except NoMatches:
            return
        text = Text()
        for row in range(_CONFETTI_ROWS):
            if row > 0:
                text.append("\n")
            for _ in range(_CONFETTI_WIDTH):
                if random.random() < 0.15:
                    text.append("•", style=random.choice(_CONFETTI_COLORS))
                else:
                    text.append(" ")
        confetti.update(text)

    def _stop_confetti(self) -> None:
        if self._confetti_timer is not None:
            self._confetti_timer.stop()
            self._confetti_timer = None
        try:
            self.query_one("#confetti", Static).update("")
        except NoMatches:
            return

    def _prompt_restart(self) -> None:
        self._restart_timer = None
        if self.session.state is not SubmissionState.SUCCESS:
            return
        self.push_screen(RestartModal(), self._on_restart_answer)

    def _on_restart_answer(self, restart: bool | None) -> None:
        if restart:
            self.reset_form()

    def reset_form(self) -> None:
        """Clear ratings, contact fields and views back to a fresh form."""
        if self._restart_timer is not None:
            self._restart_timer.stop()
            self._restart_timer = None
        self._stop_confetti()
        self.session.reset()
        for rating in self.query(StarRating):
            rating.score = 0
            rating.preview = None
        for selector in ("#customer-name", "#customer-phone"):
            try:
                self.query_one(selector, Input).value = ""
            except NoMatches:
                continue
        try:
            self.query_one("#thank-you").add_class("hidden")
            self.query_one("#feedback-form").remove_class("hidden")
        except NoMatches:
            return
        logger.info("feedback form reset")

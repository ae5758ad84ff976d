"""Feedback ratings, validation, record assembly and the submission flow."""

from __future__ import annotations

import logging
import platform
import re
import time
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Callable, Iterable

from customer_menu.config import FEEDBACK_COLLECTION
from customer_menu.constant import (
    ANONYMOUS_NAME,
    CLUSTER_AVERAGE_KEYS,
    MAX_STARS,
    PHONE_NOT_PROVIDED,
    RATING_CLUSTERS,
    RATING_LABELS,
)
from customer_menu.models import FeedbackRecord
from customer_menu.store import SERVER_TIMESTAMP, DocumentStore

logger = logging.getLogger(__name__)

_MOBILE_PATTERN = re.compile(r"^[6-9]\d{9}$")
_NON_DIGITS = re.compile(r"\D")


class FeedbackValidationError(ValueError):
    """Raised when a submission is rejected before anything is written."""

    def __init__(self, message: str, severity: str = "error") -> None:
        super().__init__(message)
        self.severity = severity


class RatingSet:
    """Scores 0-5 for each rating dimension; 0 means unrated."""

    def __init__(self) -> None:
        self._scores: dict[str, int] = {dimension: 0 for dimension in RATING_LABELS}

    def __getitem__(self, dimension: str) -> int:
        return self._scores[dimension]

    def set(self, dimension: str, score: int) -> None:
        if dimension not in self._scores:
            raise ValueError(f"Unknown rating dimension: {dimension}")
        if not (0 <= score <= MAX_STARS):
            raise ValueError(f"Score must be between 0 and {MAX_STARS}")
        self._scores[dimension] = score

    def reset(self) -> None:
        for dimension in self._scores:
            self._scores[dimension] = 0

    def has_ratings(self) -> bool:
        return any(score > 0 for score in self._scores.values())

    def as_dict(self) -> dict[str, int]:
        return dict(self._scores)

    def cluster(self, name: str) -> dict[str, int]:
        """Scores of one cluster keyed by their stored field names."""
        return {field: self._scores[dimension] for field, dimension in RATING_CLUSTERS[name].items()}


def is_valid_phone(phone: str) -> bool:
    """Ten-digit mobile number starting 6-9, ignoring any non-digits."""
    return bool(_MOBILE_PATTERN.match(_NON_DIGITS.sub("", phone)))


def calculate_average(scores: Iterable[int]) -> float:
    """Mean of the nonzero scores to one decimal place, or 0 when none."""
    rated = [score for score in scores if score > 0]
    if not rated:
        return 0.0
    mean = Decimal(sum(rated)) / Decimal(len(rated))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def client_user_agent() -> str:
    return f"customer-feedback ({platform.system()} {platform.release()}; Python {platform.python_version()})"


def build_feedback_record(
    ratings: RatingSet,
    name: str = "",
    phone: str = "",
    now: datetime | None = None,
    user_agent: str | None = None,
) -> FeedbackRecord:
    """Assemble the record to store; the timestamp is assigned by the store."""
    now = now or datetime.now()
    clusters = {cluster: ratings.cluster(cluster) for cluster in RATING_CLUSTERS}
    return FeedbackRecord(
        timestamp=SERVER_TIMESTAMP,
        date=now.strftime("%d/%m/%Y"),
        time=now.strftime("%I:%M %p").lower(),
        ratings=clusters,
        customer_name=name.strip() or ANONYMOUS_NAME,
        customer_phone=phone.strip() or PHONE_NOT_PROVIDED,
        averages={
            CLUSTER_AVERAGE_KEYS[cluster]: calculate_average(scores.values()) for cluster, scores in clusters.items()
        },
        user_agent=user_agent or client_user_agent(),
        client_timestamp_ms=int(time.time() * 1000),
    )


class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class FeedbackSession:
    """Ratings plus the submit state machine for one feedback form.

    ``on_state_change`` is called on every transition so the view can toggle
    the submit control and busy indicator.
    """

    def __init__(self, on_state_change: Callable[[SubmissionState], None] | None = None) -> None:
        self.ratings = RatingSet()
        self.state = SubmissionState.IDLE
        self.on_state_change = on_state_change
        self.last_record: FeedbackRecord | None = None

    def _transition(self, state: SubmissionState) -> None:
        logger.info("feedback state %s -> %s", self.state.value, state.value)
        self.state = state
        if self.on_state_change is not None:
            self.on_state_change(state)

    async def submit(
        self,
        store: DocumentStore,
        name: str = "",
        phone: str = "",
        now: datetime | None = None,
    ) -> FeedbackRecord:
        """Validate, write one record and end in SUCCESS or FAILED.

        Raises FeedbackValidationError when rejected locally, or StoreError
        when the write fails. Ratings are never modified here.
        """
        if self.state is not SubmissionState.IDLE:
            raise RuntimeError(f"Cannot submit while {self.state.value}")

        self._transition(SubmissionState.VALIDATING)
        if not self.ratings.has_ratings():
            self._transition(SubmissionState.IDLE)
            raise FeedbackValidationError("Please provide at least one rating before submitting.", "warning")

        self._transition(SubmissionState.SUBMITTING)
        try:
            phone = phone.strip()
            if phone and not is_valid_phone(phone):
                raise FeedbackValidationError("Please enter a valid mobile number")
            record = build_feedback_record(self.ratings, name, phone, now=now)
            await store.add(FEEDBACK_COLLECTION, record.to_document())
        except Exception:
            self._transition(SubmissionState.FAILED)
            raise

        self.last_record = record
        self._transition(SubmissionState.SUCCESS)
        return record

    def recover(self) -> None:
        """Return a failed submission to IDLE so the user can resubmit."""
        if self.state is SubmissionState.FAILED:
            self._transition(SubmissionState.IDLE)

    def reset(self) -> None:
        """Start over with no ratings, as on a fresh form."""
        self.ratings.reset()
        self.last_record = None
        self._transition(SubmissionState.IDLE)

"""Tests for ratings, validation, record assembly and the submit flow."""

from __future__ import annotations

from datetime import datetime

import pytest

from customer_menu.feedback import (
    FeedbackSession,
    FeedbackValidationError,
    RatingSet,
    SubmissionState,
    build_feedback_record,
    calculate_average,
    is_valid_phone,
)
from customer_menu.store import SERVER_TIMESTAMP, StoreError


class TestPhoneValidation:

    @pytest.mark.parametrize("phone", ["9876543210", "987-654-3210", "6000000000", "98765 43210"])
    def test_accepted(self, phone):
        assert is_valid_phone(phone)

    @pytest.mark.parametrize("phone", ["1234567890", "98765432100", "987654321", "5876543210", "abc"])
    def test_rejected(self, phone):
        assert not is_valid_phone(phone)


class TestCalculateAverage:

    def test_ignores_zero_scores(self):
        assert calculate_average([4, 0, 5]) == 4.5

    def test_all_zero_is_zero(self):
        assert calculate_average([0, 0, 0]) == 0

    def test_rounds_to_one_decimal_half_up(self):
        assert calculate_average([4, 5, 4, 4]) == 4.3
        assert calculate_average([1, 2, 2]) == 1.7
        assert calculate_average([5, 4, 4]) == 4.3


class TestRatingSet:

    def test_starts_unrated(self):
        ratings = RatingSet()
        assert not ratings.has_ratings()
        assert set(ratings.as_dict()) == {
            "menu_ease",
            "menu_clarity",
            "menu_speed",
            "food_quality",
            "ambience",
            "pricing",
            "service",
        }

    def test_rejects_out_of_range_and_unknown(self):
        ratings = RatingSet()
        with pytest.raises(ValueError):
            ratings.set("ambience", 6)
        with pytest.raises(ValueError):
            ratings.set("parking", 3)

    def test_cluster_uses_stored_field_names(self):
        ratings = RatingSet()
        ratings.set("food_quality", 4)
        assert ratings.cluster("restaurantExperience") == {
            "foodQuality": 4,
            "ambience": 0,
            "pricing": 0,
            "service": 0,
        }


class TestBuildFeedbackRecord:

    def test_document_layout(self):
        ratings = RatingSet()
        ratings.set("menu_ease", 5)
        ratings.set("menu_speed", 4)
        ratings.set("service", 3)
        now = datetime(2026, 3, 7, 14, 5)

        doc = build_feedback_record(ratings, "  Asha ", " ", now=now, user_agent="ua").to_document()

        assert doc["timestamp"] is SERVER_TIMESTAMP
        assert doc["date"] == "07/03/2026"
        assert doc["time"] == "02:05 pm"
        assert doc["ratings"]["menuExperience"] == {"ease": 5, "clarity": 0, "speed": 4}
        assert doc["customerInfo"] == {"name": "Asha", "phone": "Not provided"}
        assert doc["overallScores"] == {"menuAverage": 4.5, "restaurantAverage": 3.0}
        assert doc["deviceInfo"]["userAgent"] == "ua"
        assert isinstance(doc["deviceInfo"]["timestamp"], int)

    def test_blank_name_is_anonymous(self):
        ratings = RatingSet()
        ratings.set("pricing", 2)
        record = build_feedback_record(ratings)
        assert record.customer_name == "Anonymous"
        assert record.averages["menuAverage"] == 0


class TestFeedbackSession:

    @pytest.mark.asyncio
    async def test_all_zero_ratings_never_write(self, recording_store):
        seen = []
        session = FeedbackSession(on_state_change=seen.append)

        with pytest.raises(FeedbackValidationError) as excinfo:
            await session.submit(recording_store)

        assert excinfo.value.severity == "warning"
        assert recording_store.writes == []
        assert session.state is SubmissionState.IDLE
        assert seen == [SubmissionState.VALIDATING, SubmissionState.IDLE]

    @pytest.mark.asyncio
    async def test_success_writes_one_record(self, recording_store):
        seen = []
        session = FeedbackSession(on_state_change=seen.append)
        session.ratings.set("ambience", 4)
        session.ratings.set("service", 5)

        record = await session.submit(recording_store, "Ravi", "987-654-3210")

        assert session.state is SubmissionState.SUCCESS
        assert seen == [SubmissionState.VALIDATING, SubmissionState.SUBMITTING, SubmissionState.SUCCESS]
        [(path, doc)] = recording_store.writes
        assert path == "restaurant_feedback"
        assert doc["overallScores"]["restaurantAverage"] == 4.5
        assert doc["customerInfo"]["phone"] == "987-654-3210"
        assert record.averages["restaurantAverage"] == 4.5

    @pytest.mark.asyncio
    async def test_bad_phone_fails_without_write(self, recording_store):
        session = FeedbackSession()
        session.ratings.set("menu_ease", 3)

        with pytest.raises(FeedbackValidationError, match="valid mobile number"):
            await session.submit(recording_store, phone="1234567890")

        assert recording_store.writes == []
        assert session.state is SubmissionState.FAILED
        session.recover()
        assert session.state is SubmissionState.IDLE

    @pytest.mark.asyncio
    async def test_store_failure_keeps_ratings_and_recovers(self, failing_store):
        session = FeedbackSession()
        session.ratings.set("food_quality", 5)

        with pytest.raises(StoreError):
            await session.submit(failing_store)

        assert session.state is SubmissionState.FAILED
        assert session.ratings["food_quality"] == 5
        session.recover()
        assert session.state is SubmissionState.IDLE

        failing_store.fail = False
        await session.submit(failing_store)
        assert len(failing_store.writes) == 1

    @pytest.mark.asyncio
    async def test_reset_clears_ratings(self, recording_store):
        session = FeedbackSession()
        session.ratings.set("pricing", 2)
        await session.submit(recording_store)

        session.reset()

        assert session.state is SubmissionState.IDLE
        assert not session.ratings.has_ratings()
        assert session.last_record is None

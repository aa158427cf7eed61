#!/usr/bin/env python3
"""Tests for Suggestion, confidence and messages."""
import pytest

from vehicle_health import (
    Category,
    Confidence,
    ConsumableState,
    DEFAULT_CONFIG,
    Status,
    Suggestion,
)
from vehicle_health.suggestion import build_message, determine_confidence, urgency_score


class TestDetermineConfidence:
    """Tests for determine_confidence."""

    def test_levels(self):
        assert determine_confidence(True, True) == Confidence.HIGH
        assert determine_confidence(True, False) == Confidence.MEDIUM
        assert determine_confidence(False, True) == Confidence.LOW
        assert determine_confidence(False, False) == Confidence.LOW


class TestBuildMessage:
    """Tests for build_message."""

    def test_overdue_by_distance(self):
        state = ConsumableState(Category.OIL, Status.CRITICAL, remaining_km=-1200, remaining_days=40)
        assert build_message(state) == "Overdue by 1,200 km"

    def test_overdue_by_days(self):
        state = ConsumableState(Category.BATTERY, Status.CRITICAL, remaining_days=-1)
        assert build_message(state) == "Overdue by 1 day"

    def test_distance_and_days(self):
        state = ConsumableState(Category.OIL, Status.WARNING, remaining_km=600, remaining_days=60)
        assert build_message(state) == "About 600 km / 60 days left"

    def test_distance_only(self):
        state = ConsumableState(Category.BRAKE_TIRE, Status.WARNING, remaining_km=4000)
        assert build_message(state) == "About 4,000 km left"

    def test_days_only(self):
        state = ConsumableState(Category.BATTERY, Status.WARNING, remaining_days=45)
        assert build_message(state) == "About 45 days left"

    def test_unknown(self):
        assert build_message(ConsumableState(Category.OIL, Status.UNKNOWN)) == "No record yet"

    def test_medium_confidence_note(self):
        state = ConsumableState(Category.BATTERY, Status.WARNING, remaining_days=45)
        assert build_message(state, Confidence.MEDIUM) == "About 45 days left (estimated: odometer not set)"

    def test_low_confidence_note(self):
        state = ConsumableState(Category.OIL, Status.WARNING, remaining_km=600)
        assert build_message(state, Confidence.LOW) == "About 600 km left (estimated: no history)"

    def test_high_confidence_has_no_note(self):
        state = ConsumableState(Category.OIL, Status.WARNING, remaining_km=600)
        assert build_message(state, Confidence.HIGH) == "About 600 km left"

    def test_unknown_has_no_note(self):
        state = ConsumableState(Category.OIL, Status.UNKNOWN)
        assert build_message(state, Confidence.LOW) == "No record yet"


class TestUrgencyScore:
    """Tests for urgency_score."""

    def test_oil_uses_larger_share(self):
        """600 of 5,000 km left (88%) outweighs 60 of 180 days left (67%)."""
        state = ConsumableState(
            Category.OIL,
            Status.WARNING,
            recommended_interval_km=5000,
            recommended_interval_months=6,
            remaining_km=600,
            remaining_days=60,
        )
        assert urgency_score(state) == 88

    def test_oil_calendar_share_wins(self):
        state = ConsumableState(
            Category.OIL,
            Status.WARNING,
            recommended_interval_km=5000,
            recommended_interval_months=6,
            remaining_km=4000,
            remaining_days=18,
        )
        assert urgency_score(state) == 90

    def test_battery_calendar_only(self):
        state = ConsumableState(
            Category.BATTERY,
            Status.WARNING,
            recommended_interval_months=36,
            remaining_days=180,
        )
        assert urgency_score(state) == 83

    def test_overdue_adds_25(self):
        state = ConsumableState(
            Category.BATTERY,
            Status.CRITICAL,
            recommended_interval_months=36,
            remaining_days=-10,
        )
        assert urgency_score(state) == 125

    def test_no_numbers_is_zero(self):
        assert urgency_score(ConsumableState(Category.OIL, Status.UNKNOWN)) == 0


class TestSuggestion:
    """Tests for Suggestion."""

    @pytest.fixture
    def state(self):
        return ConsumableState(
            Category.OIL,
            Status.CRITICAL,
            recommended_interval_km=5000,
            recommended_interval_months=6,
            last_service_mileage=40000,
            remaining_km=-500,
            remaining_days=10,
        )

    def test_from_state(self, state):
        suggestion = Suggestion.from_state(
            "prius", state, DEFAULT_CONFIG.rule_for(Category.OIL), Confidence.HIGH
        )
        assert suggestion.id == "prius:oil"
        assert suggestion.category == Category.OIL
        assert suggestion.title == "Engine oil change"
        assert suggestion.status == Status.CRITICAL
        assert suggestion.remaining_km == -500
        assert suggestion.remaining_days == 10
        assert suggestion.estimated_cost == 5000
        assert suggestion.confidence == Confidence.HIGH
        assert suggestion.message == "Overdue by 500 km"
        assert suggestion.score == 125

    def test_frozen(self, state):
        suggestion = Suggestion.from_state(
            "prius", state, DEFAULT_CONFIG.rule_for(Category.OIL), Confidence.HIGH
        )
        with pytest.raises(AttributeError):
            suggestion.status = Status.GOOD

    def test_to_dict(self, state):
        data = Suggestion.from_state(
            "prius", state, DEFAULT_CONFIG.rule_for(Category.OIL), Confidence.MEDIUM
        ).to_dict()
        assert data == {
            "id": "prius:oil",
            "category": "oil",
            "title": "Engine oil change",
            "status": "critical",
            "remainingKm": -500,
            "remainingDays": 10,
            "estimatedCost": 5000,
            "confidence": "medium",
            "message": "Overdue by 500 km (estimated: odometer not set)",
            "score": 125,
        }

#!/usr/bin/env python3
"""Tests for ConsumableState dataclass."""
from vehicle_health import Category, ConsumableState, Status


class TestConsumableState:
    """Tests for ConsumableState dataclass."""

    def test_is_due_critical(self):
        state = ConsumableState(category=Category.OIL, status=Status.CRITICAL)
        assert state.is_due is True

    def test_is_due_warning(self):
        state = ConsumableState(category=Category.OIL, status=Status.WARNING)
        assert state.is_due is True

    def test_is_due_good(self):
        state = ConsumableState(category=Category.OIL, status=Status.GOOD)
        assert state.is_due is False

    def test_is_due_unknown(self):
        state = ConsumableState(category=Category.OIL, status=Status.UNKNOWN)
        assert state.is_due is False

    def test_has_baseline(self):
        assert not ConsumableState(Category.OIL, Status.UNKNOWN).has_baseline
        assert ConsumableState(
            Category.OIL, Status.GOOD, last_service_mileage=0
        ).has_baseline

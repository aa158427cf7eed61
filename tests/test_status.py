#!/usr/bin/env python3
"""Tests for Status enum."""

from vehicle_health import Status


class TestStatus:
    """Tests for Status enum ordering."""

    def test_urgency_ordering(self):
        """Lower value = more urgent."""
        assert Status.CRITICAL.value < Status.WARNING.value
        assert Status.WARNING.value < Status.GOOD.value
        assert Status.GOOD.value < Status.UNKNOWN.value

    def test_labels(self):
        """Labels are the lowercase band names."""
        assert Status.CRITICAL.label == "critical"
        assert Status.WARNING.label == "warning"
        assert Status.GOOD.label == "good"
        assert Status.UNKNOWN.label == "unknown"

    def test_only_critical_and_warning_are_actionable(self):
        assert Status.CRITICAL.is_actionable
        assert Status.WARNING.is_actionable
        assert not Status.GOOD.is_actionable
        assert not Status.UNKNOWN.is_actionable

#!/usr/bin/env python3
"""Tests for the category classifier."""
import pytest

from vehicle_health import Category, classify
from vehicle_health.category import mentions_tire


class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Oil change", {Category.OIL}),
            ("OIL CHANGE", {Category.OIL}),
            ("エンジンオイル交換", {Category.OIL}),
            ("Brake pads", {Category.BRAKE_TIRE}),
            ("New tires", {Category.BRAKE_TIRE}),
            ("Winter tyre swap", {Category.BRAKE_TIRE}),
            ("タイヤ交換", {Category.BRAKE_TIRE}),
            ("Battery replacement", {Category.BATTERY}),
            ("バッテリー交換", {Category.BATTERY}),
        ],
    )
    def test_single_category(self, title, expected):
        assert classify(title) == expected

    def test_multiple_categories(self):
        """A title can match more than one category."""
        assert classify("Oil change and tire rotation") == {
            Category.OIL,
            Category.BRAKE_TIRE,
        }

    def test_unmatched_title_is_empty(self):
        assert classify("Car wash") == frozenset()

    def test_empty_or_missing_title_is_empty(self):
        assert classify("") == frozenset()
        assert classify(None) == frozenset()

    def test_non_string_title_is_unmatched(self):
        assert classify(12345) == frozenset()
        assert classify(["oil"]) == frozenset()

    def test_missed_synonym_is_not_guessed(self):
        """Crude matching: 'lube' is not recognised as oil."""
        assert classify("Lube service") == frozenset()


class TestMentionsTire:
    """Tests for mentions_tire."""

    def test_tire_titles(self):
        assert mentions_tire("Tire replacement")
        assert mentions_tire("tyres")
        assert mentions_tire("タイヤ交換")

    def test_brake_title(self):
        assert not mentions_tire("Brake pads")
        assert not mentions_tire(None)

    def test_non_string_title(self):
        assert not mentions_tire(40000)

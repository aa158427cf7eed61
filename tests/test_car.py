#!/usr/bin/env python3
"""Tests for Car class."""
from datetime import date

from vehicle_health import Car


class TestCar:
    """Tests for Car class."""

    def test_attributes(self):
        """All attributes are stored correctly."""
        car = Car("prius", 45000, 900, date(2027, 3, 15), "2018 Toyota Prius")
        assert car.id == "prius"
        assert car.odo_km == 45000
        assert car.avg_km_per_month == 900
        assert car.inspection_expiry == date(2027, 3, 15)
        assert car.name == "2018 Toyota Prius"

    def test_optional_attributes_default_to_none(self):
        car = Car("fit")
        assert car.odo_km is None
        assert car.avg_km_per_month is None
        assert car.inspection_expiry is None

    def test_name_falls_back_to_id(self):
        """Name is the id when no display name is given."""
        assert Car("fit").name == "fit"
        assert Car("fit", name="").name == "fit"

#!/usr/bin/env python3
"""Tests for ConsumableRule and EngineConfig."""
import pytest

from vehicle_health import Category, ConsumableRule, EngineConfig, DEFAULT_CONFIG


class TestConsumableRule:
    """Tests for ConsumableRule."""

    def test_interval_km_without_tire_interval(self):
        rule = ConsumableRule(Category.OIL, "Oil", 5000, interval_km=5000)
        assert rule.interval_km_for("Tire and oil") == 5000

    def test_tire_interval_selected_by_title(self):
        """Brake/tire rule switches to the tire interval on tire titles."""
        rule = DEFAULT_CONFIG.rule_for(Category.BRAKE_TIRE)
        assert rule.interval_km_for("Brake pads") == 30000
        assert rule.interval_km_for("New tires") == 40000
        assert rule.interval_km_for(None) == 30000

    def test_frozen(self):
        rule = DEFAULT_CONFIG.rule_for(Category.OIL)
        with pytest.raises(AttributeError):
            rule.interval_km = 1


class TestDefaultConfig:
    """Tests for the built-in heuristics."""

    def test_oil_defaults(self):
        rule = DEFAULT_CONFIG.rule_for(Category.OIL)
        assert rule.interval_km == 5000
        assert rule.interval_months == 6
        assert rule.estimated_cost == 5000
        assert rule.warning_km == 1000
        assert rule.warning_days == 30

    def test_brake_tire_defaults(self):
        rule = DEFAULT_CONFIG.rule_for(Category.BRAKE_TIRE)
        assert rule.interval_km == 30000
        assert rule.tire_interval_km == 40000
        assert rule.interval_months is None
        assert rule.warning_km == 5000

    def test_battery_defaults(self):
        rule = DEFAULT_CONFIG.rule_for(Category.BATTERY)
        assert rule.interval_km is None
        assert rule.interval_months == 36
        assert rule.warning_elapsed_months == 24

    def test_fallback_rate(self):
        assert DEFAULT_CONFIG.fallback_daily_rate_km == 30.0

    def test_every_category_has_a_rule(self):
        for category in Category:
            assert DEFAULT_CONFIG.rule_for(category).category is category


class TestWithOverrides:
    """Tests for EngineConfig.with_overrides."""

    def test_overrides_single_field(self):
        config = DEFAULT_CONFIG.with_overrides({Category.OIL: {"interval_km": 10000}})
        assert config.rule_for(Category.OIL).interval_km == 10000
        # Untouched fields and categories keep their defaults
        assert config.rule_for(Category.OIL).interval_months == 6
        assert config.rule_for(Category.BATTERY) == DEFAULT_CONFIG.rule_for(Category.BATTERY)

    def test_does_not_mutate_original(self):
        DEFAULT_CONFIG.with_overrides({Category.OIL: {"estimated_cost": 9999}})
        assert DEFAULT_CONFIG.rule_for(Category.OIL).estimated_cost == 5000

    def test_overrides_fallback_rate(self):
        config = DEFAULT_CONFIG.with_overrides(fallback_daily_rate_km=45)
        assert config.fallback_daily_rate_km == 45

    def test_partial_rules_fall_back_to_defaults(self):
        config = EngineConfig(rules={})
        assert config.rule_for(Category.OIL) == DEFAULT_CONFIG.rule_for(Category.OIL)

"""ConsumableRule and EngineConfig: the heuristic constants behind every estimate."""

from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Optional

from .category import Category, mentions_tire

DEFAULT_FALLBACK_DAILY_RATE_KM = 30.0


@dataclass(frozen=True)
class ConsumableRule:
    """Service interval, warning thresholds and cost heuristic for one consumable."""

    category: Category
    title: str
    estimated_cost: float
    interval_km: Optional[float] = None
    interval_months: Optional[float] = None
    # Brake/tire only: interval used when the last record mentions tires
    tire_interval_km: Optional[float] = None
    warning_km: Optional[float] = None
    warning_days: Optional[float] = None
    warning_elapsed_months: Optional[float] = None

    def interval_km_for(self, title: Optional[str] = None) -> Optional[float]:
        """Distance interval, switching to the tire interval when the title mentions tires."""
        if self.tire_interval_km is not None and mentions_tire(title):
            return self.tire_interval_km
        return self.interval_km


DEFAULT_RULES: Dict[Category, ConsumableRule] = {
    Category.OIL: ConsumableRule(
        category=Category.OIL,
        title="Engine oil change",
        estimated_cost=5000,
        interval_km=5000,
        interval_months=6,
        warning_km=1000,
        warning_days=30,
    ),
    Category.BRAKE_TIRE: ConsumableRule(
        category=Category.BRAKE_TIRE,
        title="Brake & tire service",
        estimated_cost=30000,
        interval_km=30000,
        tire_interval_km=40000,
        warning_km=5000,
    ),
    Category.BATTERY: ConsumableRule(
        category=Category.BATTERY,
        title="Battery replacement",
        estimated_cost=15000,
        interval_months=36,
        warning_elapsed_months=24,
    ),
}


@dataclass(frozen=True)
class EngineConfig:
    """Per-category rules plus the usage-rate fallback, injected into the estimators."""

    rules: Mapping[Category, ConsumableRule] = field(
        default_factory=lambda: dict(DEFAULT_RULES)
    )
    fallback_daily_rate_km: float = DEFAULT_FALLBACK_DAILY_RATE_KM

    def rule_for(self, category: Category) -> ConsumableRule:
        """Rule for a category, falling back to the built-in default."""
        return self.rules.get(category) or DEFAULT_RULES[category]

    def with_overrides(
        self,
        rules: Optional[Mapping[Category, Mapping[str, object]]] = None,
        fallback_daily_rate_km: Optional[float] = None,
    ) -> "EngineConfig":
        """
        Return a new config with selected rule fields replaced.

        Args:
            rules: category -> {field name: value}, e.g.
                {Category.OIL: {"interval_km": 10000}}
            fallback_daily_rate_km: replacement usage-rate fallback
        """
        merged = {category: self.rule_for(category) for category in Category}
        for category, changes in (rules or {}).items():
            merged[category] = replace(merged[category], **changes)
        return EngineConfig(
            rules=merged,
            fallback_daily_rate_km=(
                fallback_daily_rate_km
                if fallback_daily_rate_km is not None
                else self.fallback_daily_rate_km
            ),
        )


DEFAULT_CONFIG = EngineConfig()

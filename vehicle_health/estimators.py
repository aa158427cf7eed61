"""
Consumable estimators.

Each estimator turns a car, the latest matching record and a rule into a
ConsumableState. Each consumable is measured on its own axis:

- Oil: distance, capped by a calendar interval converted to distance
  through the usage rate (whichever runs out first)
- Brake/tire: distance only, with a longer interval for tire work
- Battery: calendar only
"""

import logging
from dataclasses import replace
from datetime import date
from typing import Callable, Dict, Optional

from .calculations import (
    DAYS_PER_MONTH,
    classify_status,
    daily_rate_km,
    days_between,
    finite_or_none,
    to_date,
)
from .car import Car
from .category import Category
from .consumable_rule import DEFAULT_FALLBACK_DAILY_RATE_KM, ConsumableRule
from .consumable_state import ConsumableState
from .maintenance_record import MaintenanceRecord
from .status import Status

logger = logging.getLogger(__name__)


def _unknown(rule: ConsumableRule, interval_km: Optional[float]) -> ConsumableState:
    return ConsumableState(
        category=rule.category,
        status=Status.UNKNOWN,
        recommended_interval_km=interval_km,
        recommended_interval_months=rule.interval_months,
    )


def _with_status(state: ConsumableState, rule: ConsumableRule) -> ConsumableState:
    return replace(state, status=classify_status(state, rule))


def _all_finite(*values: Optional[float]) -> bool:
    """True when every computed figure is finite (None counts as absent, not invalid)."""
    return all(v is None or finite_or_none(v) is not None for v in values)


def estimate_oil(
    car: Car,
    record: Optional[MaintenanceRecord],
    rule: ConsumableRule,
    as_of: date,
    fallback_daily_rate_km: float = DEFAULT_FALLBACK_DAILY_RATE_KM,
) -> ConsumableState:
    """
    Estimate oil life on both axes and keep the smaller remaining distance.

    The calendar cap (interval_months * 30 - elapsed days) is converted to
    distance with the car's daily usage rate before comparison.
    """
    interval_km = rule.interval_km_for(record.title if record else None)
    last_mileage = finite_or_none(record.mileage) if record else None
    odo_km = finite_or_none(car.odo_km)
    if last_mileage is None or odo_km is None or interval_km is None:
        return _unknown(rule, interval_km)

    elapsed_km = odo_km - last_mileage
    elapsed_days = days_between(record.date, as_of)
    distance_remaining = interval_km - elapsed_km

    remaining_km = distance_remaining
    remaining_days = None
    if rule.interval_months is not None:
        remaining_days = int(rule.interval_months * DAYS_PER_MONTH) - elapsed_days
        km_from_days = remaining_days * daily_rate_km(car, fallback_daily_rate_km)
        remaining_km = min(distance_remaining, km_from_days)

    if not _all_finite(elapsed_km, distance_remaining, remaining_km):
        logger.debug("%s: estimate overflowed, reporting unknown", rule.category.value)
        return _unknown(rule, interval_km)

    state = ConsumableState(
        category=rule.category,
        status=Status.UNKNOWN,
        recommended_interval_km=interval_km,
        recommended_interval_months=rule.interval_months,
        last_service_date=to_date(record.date) or as_of,
        last_service_mileage=last_mileage,
        elapsed_km=elapsed_km,
        elapsed_days=elapsed_days,
        remaining_km=remaining_km,
        remaining_days=remaining_days,
        distance_remaining_km=distance_remaining,
    )
    return _with_status(state, rule)


def estimate_brake_tire(
    car: Car,
    record: Optional[MaintenanceRecord],
    rule: ConsumableRule,
    as_of: date,
    fallback_daily_rate_km: float = DEFAULT_FALLBACK_DAILY_RATE_KM,
) -> ConsumableState:
    """Estimate brake/tire wear on distance alone."""
    interval_km = rule.interval_km_for(record.title if record else None)
    last_mileage = finite_or_none(record.mileage) if record else None
    odo_km = finite_or_none(car.odo_km)
    if last_mileage is None or odo_km is None or interval_km is None:
        return _unknown(rule, interval_km)

    elapsed_km = odo_km - last_mileage
    remaining_km = interval_km - elapsed_km
    if not _all_finite(elapsed_km, remaining_km):
        logger.debug("%s: estimate overflowed, reporting unknown", rule.category.value)
        return _unknown(rule, interval_km)

    state = ConsumableState(
        category=rule.category,
        status=Status.UNKNOWN,
        recommended_interval_km=interval_km,
        last_service_date=to_date(record.date) or as_of,
        last_service_mileage=last_mileage,
        elapsed_km=elapsed_km,
        elapsed_days=days_between(record.date, as_of),
        remaining_km=remaining_km,
        distance_remaining_km=remaining_km,
    )
    return _with_status(state, rule)


def estimate_battery(
    car: Car,
    record: Optional[MaintenanceRecord],
    rule: ConsumableRule,
    as_of: date,
    fallback_daily_rate_km: float = DEFAULT_FALLBACK_DAILY_RATE_KM,
) -> ConsumableState:
    """
    Estimate battery age on the calendar alone.

    The record mileage is still required as the baseline; the odometer is
    only used for the elapsed distance shown alongside.
    """
    last_mileage = finite_or_none(record.mileage) if record else None
    if last_mileage is None or rule.interval_months is None:
        return _unknown(rule, None)

    odo_km = finite_or_none(car.odo_km)
    elapsed_days = days_between(record.date, as_of)
    state = ConsumableState(
        category=rule.category,
        status=Status.UNKNOWN,
        recommended_interval_months=rule.interval_months,
        last_service_date=to_date(record.date) or as_of,
        last_service_mileage=last_mileage,
        elapsed_km=finite_or_none(odo_km - last_mileage) if odo_km is not None else None,
        elapsed_days=elapsed_days,
        remaining_days=int(rule.interval_months * DAYS_PER_MONTH) - elapsed_days,
    )
    return _with_status(state, rule)


Estimator = Callable[..., ConsumableState]

ESTIMATORS: Dict[Category, Estimator] = {
    Category.OIL: estimate_oil,
    Category.BRAKE_TIRE: estimate_brake_tire,
    Category.BATTERY: estimate_battery,
}


def estimate(
    car: Car,
    record: Optional[MaintenanceRecord],
    rule: ConsumableRule,
    as_of: Optional[date] = None,
    fallback_daily_rate_km: float = DEFAULT_FALLBACK_DAILY_RATE_KM,
) -> ConsumableState:
    """Run the estimator registered for the rule's category."""
    as_of = as_of or date.today()
    state = ESTIMATORS[rule.category](car, record, rule, as_of, fallback_daily_rate_km)
    logger.debug(
        "%s: status=%s remaining_km=%s remaining_days=%s",
        rule.category.value,
        state.status.label,
        state.remaining_km,
        state.remaining_days,
    )
    return state

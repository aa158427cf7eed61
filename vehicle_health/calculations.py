"""Helper functions for consumable estimates: dates, usage rate and status bands."""

import logging
import math
from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from dateutil.parser import isoparse

from .category import Category
from .consumable_rule import DEFAULT_FALLBACK_DAILY_RATE_KM, ConsumableRule
from .status import Status

if TYPE_CHECKING:
    from .car import Car
    from .consumable_state import ConsumableState
    from .maintenance_record import DateLike

logger = logging.getLogger(__name__)

DAYS_PER_MONTH = 30


def finite_or_none(value) -> Optional[float]:
    """Return value as a float, or None when missing, non-numeric or not finite."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def to_date(value: "DateLike") -> Optional[date]:
    """
    Coerce a record date to a date.

    Accepts date, datetime or an ISO-8601 string. Returns None for anything
    missing or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return isoparse(value.strip()).date()
        except (ValueError, OverflowError):
            logger.debug("Unparseable date %r", value)
            return None
    return None


def days_between(start: "DateLike", end: date) -> int:
    """
    Whole days from start to end.

    A missing or invalid start falls back to end ("now"), giving 0.
    """
    start_date = to_date(start) or end
    return (end - start_date).days


def daily_rate_km(
    car: "Car", fallback: float = DEFAULT_FALLBACK_DAILY_RATE_KM
) -> float:
    """
    Distance driven per day.

    - Declared usage: avg_km_per_month / 30
    - Missing, zero, negative or non-finite usage: the fallback rate

    Never returns 0, a negative number, NaN or infinity.
    """
    fallback_rate = finite_or_none(fallback)
    if fallback_rate is None or fallback_rate <= 0:
        fallback_rate = DEFAULT_FALLBACK_DAILY_RATE_KM
    monthly = finite_or_none(getattr(car, "avg_km_per_month", None))
    if monthly is None or monthly <= 0:
        return fallback_rate
    rate = monthly / DAYS_PER_MONTH
    # Denormal monthly figures can underflow to zero
    return rate if rate > 0 else fallback_rate


def classify_status(state: "ConsumableState", rule: ConsumableRule) -> Status:
    """
    Determine the status band for an estimated consumable.

    First match wins:
    1. No baseline record -> UNKNOWN
    2. Effective remaining below zero -> CRITICAL
    3. Inside the category's near threshold -> WARNING
    4. Otherwise GOOD
    """
    if state.last_service_mileage is None:
        return Status.UNKNOWN

    if rule.category is Category.BATTERY:
        remaining = state.remaining_days
    else:
        remaining = state.remaining_km
    if remaining is None:
        return Status.UNKNOWN
    if remaining < 0:
        return Status.CRITICAL

    if rule.warning_km is not None and state.remaining_km is not None:
        if state.remaining_km < rule.warning_km:
            return Status.WARNING
    if rule.warning_days is not None and state.remaining_days is not None:
        if state.remaining_days < rule.warning_days:
            return Status.WARNING
    if rule.warning_elapsed_months is not None and state.elapsed_days is not None:
        if state.elapsed_days // DAYS_PER_MONTH >= rule.warning_elapsed_months:
            return Status.WARNING
    return Status.GOOD

"""ConsumableState dataclass for estimated consumable health."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .category import Category
from .status import Status


@dataclass(frozen=True)
class ConsumableState:
    """Estimated wear for one consumable as of a snapshot."""

    category: Category
    status: Status
    recommended_interval_km: Optional[float] = None
    recommended_interval_months: Optional[float] = None
    last_service_date: Optional[date] = None
    last_service_mileage: Optional[float] = None
    elapsed_km: Optional[float] = None
    elapsed_days: Optional[int] = None
    # Effective (most conservative) remaining distance
    remaining_km: Optional[float] = None
    remaining_days: Optional[int] = None
    # Distance axis alone, before the calendar cap
    distance_remaining_km: Optional[float] = None

    @property
    def has_baseline(self) -> bool:
        return self.last_service_mileage is not None

    @property
    def is_due(self) -> bool:
        return self.status.is_actionable

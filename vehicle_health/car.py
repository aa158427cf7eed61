"""Car class: the read-only vehicle view the engine estimates against."""

from datetime import date
from typing import Optional


class Car:
    """Vehicle odometer and usage information."""

    def __init__(
        self,
        id: str,
        odo_km: Optional[float] = None,
        avg_km_per_month: Optional[float] = None,
        inspection_expiry: Optional[date] = None,
        name: Optional[str] = None,
    ):
        self.id = id
        self.odo_km = odo_km
        self.avg_km_per_month = avg_km_per_month
        self.inspection_expiry = inspection_expiry
        self._name = name

    @property
    def name(self) -> str:
        """Human-readable vehicle name, falling back to the id."""
        return self._name or self.id

"""MaintenanceRecord class for logged service entries."""
from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[str, date, datetime, None]


class MaintenanceRecord:
    """A record of maintenance performed. Category is inferred from the title."""

    def __init__(
            self,
            id: str,
            car_id: str,
            title: str,
            date: DateLike = None,
            mileage: Optional[float] = None,
            cost: Optional[float] = None,
    ):
        self.id = id
        self.car_id = car_id
        self.title = title
        self.date = date
        self.mileage = mileage
        self.cost = cost

"""Status enum for consumable health bands."""

from enum import Enum


class Status(Enum):
    """Consumable status bands. Lower value = more urgent."""

    CRITICAL = 1
    WARNING = 2
    GOOD = 3
    UNKNOWN = 4  # No baseline record to estimate from

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def is_actionable(self) -> bool:
        return self in (Status.CRITICAL, Status.WARNING)

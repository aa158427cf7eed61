"""Suggestion dataclass: one ranked, actionable maintenance item."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .calculations import DAYS_PER_MONTH
from .category import Category
from .consumable_rule import ConsumableRule
from .consumable_state import ConsumableState
from .status import Status


class Confidence(Enum):
    """How much real data backs an estimate."""

    HIGH = "high"  # history and odometer
    MEDIUM = "medium"  # history only
    LOW = "low"  # no history


def determine_confidence(has_history: bool, has_odometer: bool) -> Confidence:
    if has_history and has_odometer:
        return Confidence.HIGH
    if has_history:
        return Confidence.MEDIUM
    return Confidence.LOW


def _km(value: float) -> str:
    return f"{abs(value):,.0f} km"


def _days(value: int) -> str:
    return f"{abs(value)} day" if abs(value) == 1 else f"{abs(value)} days"


CONFIDENCE_NOTES = {
    Confidence.MEDIUM: " (estimated: odometer not set)",
    Confidence.LOW: " (estimated: no history)",
}


def build_message(state: ConsumableState, confidence: Confidence = Confidence.HIGH) -> str:
    """
    Short human-readable summary of what is left (or how far past due).

    Medium and low confidence estimates carry a note saying what is missing.
    """
    if state.status is Status.UNKNOWN:
        return "No record yet"
    return _remaining_text(state) + CONFIDENCE_NOTES.get(confidence, "")


def _remaining_text(state: ConsumableState) -> str:
    km = state.remaining_km
    days = state.remaining_days
    if km is not None and km < 0:
        return f"Overdue by {_km(km)}"
    if km is None and days is not None and days < 0:
        return f"Overdue by {_days(days)}"
    if km is not None and days is not None:
        return f"About {_km(km)} / {_days(days)} left"
    if km is not None:
        return f"About {_km(km)} left"
    if days is not None:
        return f"About {_days(days)} left"
    return ""


def _used_fraction(remaining: float, interval: float) -> float:
    return min(max(1 - remaining / interval, 0.0), 1.0)


def urgency_score(state: ConsumableState) -> int:
    """
    Urgency from 0 to 125.

    The larger share of the interval used up on either axis, as a
    percentage, plus 25 once overdue.
    """
    km_ratio = 0.0
    if state.recommended_interval_km and state.remaining_km is not None:
        km_ratio = _used_fraction(state.remaining_km, state.recommended_interval_km)
    time_ratio = 0.0
    if state.recommended_interval_months and state.remaining_days is not None:
        total_days = state.recommended_interval_months * DAYS_PER_MONTH
        time_ratio = _used_fraction(state.remaining_days, total_days)
    overdue = 0.25 if state.status is Status.CRITICAL else 0.0
    return int(round((max(km_ratio, time_ratio) + overdue) * 100))


@dataclass(frozen=True)
class Suggestion:
    """A maintenance suggestion. Built fresh on every call, never mutated."""

    id: str
    category: Category
    title: str
    status: Status
    remaining_km: Optional[float] = None
    remaining_days: Optional[int] = None
    estimated_cost: Optional[float] = None
    confidence: Confidence = Confidence.LOW
    message: str = ""
    score: int = 0

    @classmethod
    def from_state(
        cls,
        car_id: str,
        state: ConsumableState,
        rule: ConsumableRule,
        confidence: Confidence,
    ) -> "Suggestion":
        return cls(
            id=f"{car_id}:{state.category.value}",
            category=state.category,
            title=rule.title,
            status=state.status,
            remaining_km=state.remaining_km,
            remaining_days=state.remaining_days,
            estimated_cost=rule.estimated_cost,
            confidence=confidence,
            message=build_message(state, confidence),
            score=urgency_score(state),
        )

    def to_dict(self) -> dict:
        """Plain dict for JSON output (camelCase keys, like the snapshot files)."""
        return {
            "id": self.id,
            "category": self.category.value,
            "title": self.title,
            "status": self.status.label,
            "remainingKm": self.remaining_km,
            "remainingDays": self.remaining_days,
            "estimatedCost": self.estimated_cost,
            "confidence": self.confidence.value,
            "message": self.message,
            "score": self.score,
        }

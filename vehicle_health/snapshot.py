"""Snapshot class - a car plus its maintenance log, and the suggestion aggregator."""

import logging
from datetime import date
from typing import Iterable, List, Optional

from .calculations import finite_or_none, to_date
from .car import Car
from .category import Category
from .consumable_rule import DEFAULT_CONFIG, EngineConfig
from .consumable_state import ConsumableState
from .estimators import estimate
from .history import HistoryIndex
from .maintenance_record import MaintenanceRecord
from .suggestion import Confidence, Suggestion, determine_confidence

logger = logging.getLogger(__name__)


class Snapshot:
    """
    One immutable view of a car and its maintenance records.

    The engine is re-run in full for every snapshot; nothing is carried over
    between snapshots. Records belonging to another car are ignored.
    """

    def __init__(
        self,
        car: Car,
        records: Optional[Iterable[MaintenanceRecord]] = None,
        config: Optional[EngineConfig] = None,
        as_of: Optional[date] = None,
    ):
        self.car = car
        self.records = [
            r for r in (records or []) if r.car_id is None or r.car_id == car.id
        ]
        self.config = config or DEFAULT_CONFIG
        self.as_of = as_of or date.today()
        self.history = HistoryIndex(self.records, self.as_of)

    @property
    def has_odometer(self) -> bool:
        odo_km = finite_or_none(self.car.odo_km)
        return odo_km is not None and odo_km > 0

    @property
    def last_record(self) -> Optional[MaintenanceRecord]:
        """The most recent record overall."""
        if not self.records:
            return None
        return max(
            self.records,
            key=lambda r: (to_date(r.date) or self.as_of, r.mileage or 0),
        )

    def latest_record_for(self, category: Category) -> Optional[MaintenanceRecord]:
        return self.history.latest(category)

    def get_records_sorted(
        self, sort_by: str = "date", reverse: bool = True
    ) -> List[MaintenanceRecord]:
        """
        Get records sorted by specified field.

        Args:
            sort_by: "date", "mileage", or "title"
            reverse: If True, newest/highest first (default)
        """
        if sort_by == "date":
            return sorted(
                self.records, key=lambda r: to_date(r.date) or self.as_of, reverse=reverse
            )
        elif sort_by == "mileage":
            return sorted(self.records, key=lambda r: r.mileage or 0, reverse=reverse)
        elif sort_by == "title":
            return sorted(
                self.records, key=lambda r: (str(r.title or "").lower(), to_date(r.date) or self.as_of),
                reverse=reverse,
            )
        return list(self.records)

    def consumable_state(self, category: Category) -> ConsumableState:
        """Estimate a single consumable."""
        return estimate(
            self.car,
            self.latest_record_for(category),
            self.config.rule_for(category),
            self.as_of,
            self.config.fallback_daily_rate_km,
        )

    def consumable_states(self) -> List[ConsumableState]:
        """
        Estimate every consumable, including UNKNOWN and GOOD ones.

        This is the path for health indicators and empty states; the ranked
        suggestion list is built from it by suggestions().
        """
        return [self.consumable_state(category) for category in Category]

    def confidence_for(self, category: Category) -> Confidence:
        return determine_confidence(
            self.latest_record_for(category) is not None, self.has_odometer
        )

    def suggestions(self) -> List[Suggestion]:
        """
        Ranked next-maintenance list.

        Logic:
        - Keep only CRITICAL and WARNING consumables
        - Attach the category's estimated cost
        - Order CRITICAL before WARNING; within a band, higher urgency score
          first, then category order (oil, brake/tire, battery)
        """
        suggestions = [
            Suggestion.from_state(
                self.car.id,
                state,
                self.config.rule_for(state.category),
                self.confidence_for(state.category),
            )
            for state in self.consumable_states()
            if state.status.is_actionable
        ]
        # Equal status and score keep category order (sorted() is stable)
        ranked = sorted(suggestions, key=lambda s: (s.status.value, -s.score))
        logger.debug(
            "Car %s: %d suggestion(s) from %d record(s)",
            self.car.id,
            len(ranked),
            len(self.records),
        )
        return ranked


def build_suggestions(
    car: Car,
    records: Iterable[MaintenanceRecord],
    config: Optional[EngineConfig] = None,
    as_of: Optional[date] = None,
) -> List[Suggestion]:
    """Ranked suggestions for a car and its maintenance records."""
    return Snapshot(car, records, config, as_of).suggestions()

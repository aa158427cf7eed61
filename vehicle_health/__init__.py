"""
Vehicle health engine.

Estimates how much life each consumable has left from a car's odometer and
its maintenance log:
- Category: Consumables tracked (oil, brake/tire, battery) and the title classifier
- Car / MaintenanceRecord: Read-only inputs
- ConsumableRule / EngineConfig: Intervals, thresholds and cost heuristics
- ConsumableState: Estimated wear for one consumable
- Status: Status bands (CRITICAL, WARNING, GOOD, UNKNOWN)
- Suggestion: Ranked, actionable output
- Snapshot: Aggregate of a car and its records
"""

from .status import Status
from .category import Category, classify
from .car import Car
from .maintenance_record import MaintenanceRecord
from .consumable_rule import ConsumableRule, EngineConfig, DEFAULT_CONFIG
from .consumable_state import ConsumableState
from .calculations import daily_rate_km, days_between, classify_status
from .history import HistoryIndex, latest_record_for
from .estimators import estimate
from .suggestion import Confidence, Suggestion
from .snapshot import Snapshot, build_suggestions
from .loader import load_snapshot, load_config, save_record, save_odometer

__all__ = [
    "Status",
    "Category",
    "classify",
    "Car",
    "MaintenanceRecord",
    "ConsumableRule",
    "EngineConfig",
    "DEFAULT_CONFIG",
    "ConsumableState",
    "daily_rate_km",
    "days_between",
    "classify_status",
    "HistoryIndex",
    "latest_record_for",
    "estimate",
    "Confidence",
    "Suggestion",
    "Snapshot",
    "build_suggestions",
    "load_snapshot",
    "load_config",
    "save_record",
    "save_odometer",
]

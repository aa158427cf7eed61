"""YAML loading and saving utilities for snapshot files and engine config."""

import json
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .calculations import to_date
from .car import Car
from .category import Category
from .consumable_rule import DEFAULT_CONFIG, EngineConfig
from .maintenance_record import MaintenanceRecord
from .snapshot import Snapshot

# camelCase file keys -> ConsumableRule fields
RULE_FIELDS = {
    "title": "title",
    "estimatedCost": "estimated_cost",
    "intervalKm": "interval_km",
    "intervalMonths": "interval_months",
    "tireIntervalKm": "tire_interval_km",
    "warningKm": "warning_km",
    "warningDays": "warning_days",
    "warningElapsedMonths": "warning_elapsed_months",
}


def _parse_car(dct: Dict[str, Any]) -> Car:
    return Car(
        str(dct["id"]),
        dct.get("odoKm"),
        dct.get("avgKmPerMonth"),
        to_date(dct.get("inspectionExpiry")),
        dct.get("name"),
    )


def _parse_object(dct: Dict[str, Any]) -> Union[MaintenanceRecord, dict]:
    """Parse dictionary into appropriate object type."""
    # Maintenance record
    if "title" in dct and "carId" in dct:
        return MaintenanceRecord(
            str(dct["id"]),
            str(dct["carId"]),
            str(dct["title"]) if dct["title"] is not None else None,
            dct.get("date"),
            dct.get("mileage"),
            dct.get("cost"),
        )
    # Top-level snapshot: car is left as a dict by the hook above
    elif "car" in dct and isinstance(dct["car"], dict):
        return {**dct, "car": _parse_car(dct["car"])}
    else:
        # Return dict as-is for unknown structures (like 'state')
        return dct


def _load_yaml(filename: Union[str, Path]) -> Any:
    with open(filename, "r") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader)


def _dump_yaml(filename: Union[str, Path], data: Any) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def load_snapshot(
    filename: Union[str, Path],
    config: Optional[EngineConfig] = None,
    as_of: Optional[date] = None,
) -> Snapshot:
    """
    Load a snapshot from a YAML file.

    An explicit as_of wins over the file's state.asOfDate, which wins over today.
    """
    with open(filename, "rb") as fp:
        # Unquoted YAML dates become date objects; serialize them as ISO strings
        json_data = json.dumps(
            yaml.load(fp, Loader=yaml.SafeLoader), indent=4, default=str
        )
    data = json.loads(json_data, object_hook=_parse_object)
    state = data.get("state") or {}
    return Snapshot(
        data["car"],
        data.get("maintenanceRecords") or [],
        config,
        as_of or to_date(state.get("asOfDate")),
    )


def load_config(
    filename: Union[str, Path], base: Optional[EngineConfig] = None
) -> EngineConfig:
    """
    Load engine config overrides from a YAML file.

    Format:
        fallbackDailyRateKm: 40
        rules:
          oil:
            intervalKm: 10000
            estimatedCost: 8000

    Unknown categories or keys raise ValueError.
    """
    data = _load_yaml(filename) or {}
    overrides: Dict[Category, Dict[str, Any]] = {}
    for name, fields in (data.get("rules") or {}).items():
        try:
            category = Category(name)
        except ValueError:
            raise ValueError(f"Unknown category '{name}' in {filename}") from None
        changes = {}
        for key, value in (fields or {}).items():
            if key not in RULE_FIELDS:
                raise ValueError(f"Unknown rule key '{key}' for '{name}' in {filename}")
            changes[RULE_FIELDS[key]] = value
        overrides[category] = changes
    return (base or DEFAULT_CONFIG).with_overrides(
        overrides, data.get("fallbackDailyRateKm")
    )


def save_record(filename: Union[str, Path], record: MaintenanceRecord) -> None:
    """
    Append a maintenance record to a snapshot YAML file.

    Loads the raw YAML, appends the record to maintenanceRecords,
    and writes back to the file.
    """
    data = _load_yaml(filename)

    if data.get("maintenanceRecords") is None:
        data["maintenanceRecords"] = []

    # Build the record dict, omitting None values for cleaner YAML
    record_dict: Dict[str, Any] = {
        "id": record.id,
        "carId": record.car_id,
        "title": record.title,
    }
    if record.date is not None:
        record_dict["date"] = str(record.date)
    if record.mileage is not None:
        record_dict["mileage"] = record.mileage
    if record.cost is not None:
        record_dict["cost"] = record.cost

    data["maintenanceRecords"].append(record_dict)
    _dump_yaml(filename, data)


def save_odometer(filename: Union[str, Path], odo_km: float) -> None:
    """Update car.odoKm in a snapshot YAML file."""
    data = _load_yaml(filename)
    data["car"]["odoKm"] = odo_km
    _dump_yaml(filename, data)

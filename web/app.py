"""Flask web application serving vehicle health estimates as JSON."""

import logging
import os
import uuid
from datetime import date
from pathlib import Path

from flask import Flask, jsonify, request

from vehicle_health import (
    ConsumableState,
    MaintenanceRecord,
    Status,
    classify,
    load_snapshot,
    save_odometer,
    save_record,
)
from vehicle_health.calculations import to_date

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# Path to snapshots directory (relative to project root unless overridden)
app.config["SNAPSHOTS_DIR"] = Path(
    os.environ.get("SNAPSHOTS_DIR", Path(__file__).parent.parent / "snapshots")
)


def get_snapshot_files():
    """Get all snapshot YAML files."""
    return sorted(Path(app.config["SNAPSHOTS_DIR"]).glob("*.yaml"))


def get_snapshot_path(car_id: str) -> Path:
    """Get full path for a car ID."""
    return Path(app.config["SNAPSHOTS_DIR"]) / f"{car_id}.yaml"


def as_of_arg():
    """Optional ?as_of=YYYY-MM-DD query parameter."""
    return to_date(request.args.get("as_of"))


def state_to_dict(state: ConsumableState) -> dict:
    """Serialize a ConsumableState for the health indicator."""
    return {
        "category": state.category.value,
        "status": state.status.label,
        "lastServiceDate": (
            state.last_service_date.isoformat() if state.last_service_date else None
        ),
        "lastServiceMileage": state.last_service_mileage,
        "elapsedKm": state.elapsed_km,
        "elapsedDays": state.elapsed_days,
        "recommendedIntervalKm": state.recommended_interval_km,
        "recommendedIntervalMonths": state.recommended_interval_months,
        "remainingKm": state.remaining_km,
        "remainingDays": state.remaining_days,
    }


def not_found(car_id: str):
    return jsonify({"error": f"Car '{car_id}' not found"}), 404


def request_payload():
    """JSON object body, or the submitted form. None for any other JSON value."""
    payload = request.get_json(silent=True)
    if payload is None:
        return request.form
    return payload if isinstance(payload, dict) else None


def bad_request(message: str):
    return jsonify({"error": message}), 400


@app.route("/")
def index():
    """Summary of every car: counts per status band."""
    cars = []
    for path in get_snapshot_files():
        snapshot = load_snapshot(path, as_of=as_of_arg())
        states = snapshot.consumable_states()
        cars.append({
            "id": path.stem,
            "name": snapshot.car.name,
            "odoKm": snapshot.car.odo_km,
            "critical": sum(1 for s in states if s.status == Status.CRITICAL),
            "warning": sum(1 for s in states if s.status == Status.WARNING),
            "good": sum(1 for s in states if s.status == Status.GOOD),
            "unknown": sum(1 for s in states if s.status == Status.UNKNOWN),
        })
    return jsonify({"cars": cars})


@app.route("/car/<car_id>/health")
def car_health(car_id: str):
    """Every consumable, including ones with no record yet."""
    path = get_snapshot_path(car_id)
    if not path.exists():
        return not_found(car_id)

    snapshot = load_snapshot(path, as_of=as_of_arg())
    return jsonify({
        "car": car_id,
        "asOf": snapshot.as_of.isoformat(),
        "consumables": [state_to_dict(s) for s in snapshot.consumable_states()],
    })


@app.route("/car/<car_id>/suggestions")
def car_suggestions(car_id: str):
    """Ranked next-maintenance list."""
    path = get_snapshot_path(car_id)
    if not path.exists():
        return not_found(car_id)

    snapshot = load_snapshot(path, as_of=as_of_arg())
    return jsonify({
        "car": car_id,
        "asOf": snapshot.as_of.isoformat(),
        "suggestions": [s.to_dict() for s in snapshot.suggestions()],
    })


@app.route("/car/<car_id>/records", methods=["POST"])
def add_record(car_id: str):
    """Append a maintenance record, then return the refreshed suggestions."""
    path = get_snapshot_path(car_id)
    if not path.exists():
        return not_found(car_id)

    payload = request_payload()
    if payload is None:
        return bad_request("request body must be an object")
    title = payload.get("title")
    if not isinstance(title, str) or not title.strip():
        return bad_request("title is required")
    title = title.strip()

    try:
        mileage = float(payload["mileage"]) if payload.get("mileage") not in (None, "") else None
        cost = float(payload["cost"]) if payload.get("cost") not in (None, "") else None
    except (TypeError, ValueError):
        return bad_request("mileage and cost must be numbers")

    snapshot = load_snapshot(path)
    record = MaintenanceRecord(
        id=uuid.uuid4().hex[:12],
        car_id=snapshot.car.id,
        title=title,
        date=payload.get("date") or date.today().isoformat(),
        mileage=mileage,
        cost=cost,
    )
    save_record(path, record)
    logger.info("Logged record %s for %s", record.id, car_id)

    refreshed = load_snapshot(path, as_of=as_of_arg())
    return jsonify({
        "record": record.id,
        "categories": sorted(c.value for c in classify(title)),
        "suggestions": [s.to_dict() for s in refreshed.suggestions()],
    }), 201


@app.route("/car/<car_id>/odometer", methods=["POST"])
def update_odometer(car_id: str):
    """Update the odometer reading."""
    path = get_snapshot_path(car_id)
    if not path.exists():
        return not_found(car_id)

    payload = request_payload()
    if payload is None:
        return bad_request("request body must be an object")
    try:
        odo_km = float(payload.get("odoKm"))
    except (TypeError, ValueError):
        return bad_request("Invalid odometer value")

    save_odometer(path, odo_km)
    refreshed = load_snapshot(path, as_of=as_of_arg())
    return jsonify({
        "odoKm": odo_km,
        "suggestions": [s.to_dict() for s in refreshed.suggestions()],
    })


if __name__ == "__main__":
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)

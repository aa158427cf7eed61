#!/usr/bin/env python3
"""
Unified CLI for vehicle health estimates.

Commands:
  health     - Show the estimated state of every consumable
  suggest    - Show the ranked next-maintenance list
  history    - View maintenance records
  log        - Add a maintenance record
  update-odo - Update the current odometer reading
  rules      - List the intervals, thresholds and costs in use
"""

import argparse
import logging
import sys
import uuid
from datetime import date
from pathlib import Path
from typing import List, Optional

from tabulate import tabulate

from vehicle_health import (
    Category,
    ConsumableState,
    EngineConfig,
    MaintenanceRecord,
    Snapshot,
    Status,
    Suggestion,
    classify,
    load_config,
    load_snapshot,
    save_odometer,
    save_record,
)
from vehicle_health.calculations import to_date

logger = logging.getLogger(__name__)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format a distance for display."""
    return f"{km:,.0f}" if km is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"¥{cost:,.0f}" if cost is not None else "-"


def format_days(days: Optional[int]) -> str:
    """Format remaining days for display (e.g., '3mo 15d' or '-2mo 5d')."""
    if days is None:
        return "-"

    sign = "-" if days < 0 else ""
    days = abs(days)
    months = days // 30
    remaining_days = days % 30
    if months > 0:
        return f"{sign}{months}mo {remaining_days}d"
    return f"{sign}{days}d"


def format_categories(title: str) -> str:
    """Comma-separated categories a record title classifies to."""
    categories = [c.value for c in Category if c in classify(title)]
    return ", ".join(categories) if categories else "-"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def print_header(snapshot: Snapshot) -> None:
    car = snapshot.car
    print(f"Vehicle: {car.name}")
    print(f"Odometer: {format_km(car.odo_km)} km (as of {snapshot.as_of.isoformat()})")
    if car.inspection_expiry:
        left = (car.inspection_expiry - snapshot.as_of).days
        print(f"Inspection expires: {car.inspection_expiry.isoformat()} ({format_days(left)})")


# =============================================================================
# Health command
# =============================================================================


def make_health_table(
    states: List[ConsumableState], snapshot: Snapshot
) -> List[List[str]]:
    """Convert consumable states to table rows."""
    rows = []
    for state in states:
        last_done = "-"
        if state.has_baseline:
            last_done = f"{state.last_service_date.isoformat()} @ {format_km(state.last_service_mileage)}"
        rows.append(
            [
                snapshot.config.rule_for(state.category).title,
                state.status.label.upper(),
                last_done,
                format_km(state.elapsed_km),
                format_km(state.remaining_km),
                format_days(state.remaining_days),
            ]
        )
    return rows


def cmd_health(args, snapshot: Snapshot):
    """Show the estimated state of every consumable."""
    print_header(snapshot)
    print(f"Records: {len(snapshot.records)}")
    print()

    headers = [
        "Consumable",
        "Status",
        "Last Done",
        "Elapsed (km)",
        "Remaining (km)",
        "Remaining (time)",
    ]
    print(
        tabulate(
            make_health_table(snapshot.consumable_states(), snapshot),
            headers=headers,
            tablefmt="simple",
        )
    )
    return 0


# =============================================================================
# Suggest command
# =============================================================================


def make_suggestion_table(suggestions: List[Suggestion]) -> List[List[str]]:
    """Convert suggestions to table rows."""
    return [
        [
            s.status.label.upper(),
            s.title,
            s.message,
            format_cost(s.estimated_cost),
            s.confidence.value,
        ]
        for s in suggestions
    ]


def cmd_suggest(args, snapshot: Snapshot):
    """Show the ranked next-maintenance list."""
    print_header(snapshot)
    print()

    suggestions = snapshot.suggestions()
    if not suggestions:
        print("Nothing due.")
        unknown = [s for s in snapshot.consumable_states() if s.status == Status.UNKNOWN]
        if unknown:
            print("\nNo record yet:")
            for state in unknown:
                print(f"  {snapshot.config.rule_for(state.category).title}")
        return 0

    headers = ["Status", "Suggestion", "Remaining", "Est. Cost", "Confidence"]
    print(tabulate(make_suggestion_table(suggestions), headers=headers, tablefmt="simple"))
    total = sum(s.estimated_cost or 0 for s in suggestions)
    print()
    print(f"Estimated total: {format_cost(total)}")
    return 0


# =============================================================================
# History command
# =============================================================================


def make_history_table(records: List[MaintenanceRecord]) -> List[List[str]]:
    """Convert maintenance records to table rows."""
    rows = []
    for record in records:
        record_date = to_date(record.date)
        rows.append(
            [
                record_date.isoformat() if record_date else "-",
                format_km(record.mileage),
                truncate(record.title),
                format_categories(record.title),
                format_cost(record.cost),
            ]
        )
    return rows


def cmd_history(args, snapshot: Snapshot):
    """View maintenance records."""
    records = snapshot.get_records_sorted(sort_by=args.sort, reverse=not args.asc)

    # Apply filters
    if args.category:
        category = Category(args.category)
        records = [r for r in records if category in classify(r.title)]

    if args.since:
        since = to_date(args.since)
        if since is None:
            print(f"Error: Invalid date: {args.since}")
            return 1
        records = [r for r in records if (to_date(r.date) or snapshot.as_of) >= since]

    total_cost = sum(r.cost for r in records if r.cost is not None)
    last = snapshot.last_record

    print_header(snapshot)
    if last:
        last_info = f"{last.title}"
        if last.mileage:
            last_info += f" @ {last.mileage:,.0f} km"
        print(f"Last record: {last_info}")
    print(f"Total records: {len(snapshot.records)}")
    if args.category or args.since:
        print(f"Showing: {len(records)} (filtered)")
    if total_cost > 0:
        print(f"Total cost: {format_cost(total_cost)}")
    print()

    if not records:
        print("No maintenance records found.")
        return 0

    headers = ["Date", "Mileage", "Title", "Category", "Cost"]
    print(tabulate(make_history_table(records), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Log command
# =============================================================================


def cmd_log(args, snapshot: Snapshot):
    """Add a maintenance record."""
    record = MaintenanceRecord(
        id=uuid.uuid4().hex[:12],
        car_id=snapshot.car.id,
        title=args.title,
        date=args.date or date.today().isoformat(),
        mileage=args.mileage,
        cost=args.cost,
    )

    print(f"Adding maintenance record to {args.snapshot_file}:")
    print(f"  Title:    {record.title}")
    print(f"  Category: {format_categories(record.title)}")
    print(f"  Date:     {record.date}")
    if record.mileage is not None:
        print(f"  Mileage:  {record.mileage:,.0f}")
    if record.cost is not None:
        print(f"  Cost:     {format_cost(record.cost)}")
    print()

    if not classify(record.title):
        print("Warning: title matches no tracked consumable; it won't affect estimates.")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_record(args.snapshot_file, record)
    print("Record saved.")
    return 0


# =============================================================================
# Update odometer command
# =============================================================================


def cmd_update_odo(args, snapshot: Snapshot):
    """Update the current odometer reading."""
    print(f"Vehicle: {snapshot.car.name}")
    print(f"Current odometer: {format_km(snapshot.car.odo_km)}")
    print(f"New odometer:     {format_km(args.odo_km)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_odometer(args.snapshot_file, args.odo_km)
    print("Odometer updated.")
    return 0


# =============================================================================
# Rules command
# =============================================================================


def make_rules_table(config: EngineConfig) -> List[List[str]]:
    """Convert the engine config to table rows."""
    rows = []
    for category in Category:
        rule = config.rule_for(category)
        interval = []
        if rule.interval_km:
            interval.append(f"{rule.interval_km:,.0f} km")
        if rule.tire_interval_km:
            interval.append(f"{rule.tire_interval_km:,.0f} km (tire)")
        if rule.interval_months:
            interval.append(f"{rule.interval_months:g} mo")

        warning = []
        if rule.warning_km is not None:
            warning.append(f"< {rule.warning_km:,.0f} km")
        if rule.warning_days is not None:
            warning.append(f"< {rule.warning_days:g} d")
        if rule.warning_elapsed_months is not None:
            warning.append(f">= {rule.warning_elapsed_months:g} mo elapsed")

        rows.append(
            [
                rule.title,
                " / ".join(interval) or "-",
                " or ".join(warning) or "-",
                format_cost(rule.estimated_cost),
            ]
        )
    return rows


def cmd_rules(args, snapshot: Snapshot):
    """List the intervals, thresholds and costs in use."""
    print(f"Fallback usage rate: {snapshot.config.fallback_daily_rate_km:g} km/day")
    print()
    headers = ["Consumable", "Interval", "Warning", "Est. Cost"]
    print(tabulate(make_rules_table(snapshot.config), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle health estimator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s snapshots/prius.yaml health
  %(prog)s snapshots/prius.yaml suggest --as-of 2026-10-01
  %(prog)s snapshots/prius.yaml --config heuristics.yaml suggest
  %(prog)s snapshots/prius.yaml history --category oil
  %(prog)s snapshots/prius.yaml log "Oil change" --mileage 52000 --cost 5500
  %(prog)s snapshots/prius.yaml update-odo 52000
""",
    )
    parser.add_argument(
        "snapshot_file",
        type=Path,
        help="Path to snapshot YAML file",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file overriding intervals, thresholds or costs",
    )
    parser.add_argument(
        "--as-of",
        type=str,
        help="Evaluate as of date YYYY-MM-DD (default: file state or today)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log estimator details",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("health", help="Show the estimated state of every consumable")
    subparsers.add_parser("suggest", help="Show the ranked next-maintenance list")

    history_parser = subparsers.add_parser("history", help="View maintenance records")
    history_parser.add_argument(
        "--category",
        choices=[c.value for c in Category],
        help="Only records classified under a consumable",
    )
    history_parser.add_argument(
        "--since",
        type=str,
        help="Show only records since date (YYYY-MM-DD)",
    )
    history_parser.add_argument(
        "--sort",
        choices=["date", "mileage", "title"],
        default="date",
        help="Sort order (default: date)",
    )
    history_parser.add_argument(
        "--asc",
        action="store_true",
        help="Sort ascending instead of descending",
    )

    log_parser = subparsers.add_parser("log", help="Add a maintenance record")
    log_parser.add_argument("title", type=str, help="Record title (e.g., 'Oil change')")
    log_parser.add_argument(
        "--date",
        type=str,
        help="Service date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument("--mileage", type=float, help="Odometer at time of service")
    log_parser.add_argument("--cost", type=float, help="Cost of service")
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    odo_parser = subparsers.add_parser("update-odo", help="Update the current odometer")
    odo_parser.add_argument("odo_km", type=float, help="Current odometer (km)")
    odo_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    subparsers.add_parser("rules", help="List intervals, thresholds and costs")
    return parser


COMMANDS = {
    "health": cmd_health,
    "suggest": cmd_suggest,
    "history": cmd_history,
    "log": cmd_log,
    "update-odo": cmd_update_odo,
    "rules": cmd_rules,
}


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Validate files exist
    if not args.snapshot_file.exists():
        print(f"Error: File not found: {args.snapshot_file}")
        return 1
    if args.config and not args.config.exists():
        print(f"Error: File not found: {args.config}")
        return 1

    as_of = None
    if args.as_of:
        as_of = to_date(args.as_of)
        if as_of is None:
            print(f"Error: Invalid date: {args.as_of}")
            return 1

    try:
        config = load_config(args.config) if args.config else None
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    snapshot = load_snapshot(args.snapshot_file, config=config, as_of=as_of)
    logger.debug("Loaded %d record(s) for %s", len(snapshot.records), snapshot.car.id)
    return COMMANDS[args.command](args, snapshot)


if __name__ == "__main__":
    sys.exit(main() or 0)

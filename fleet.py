#!/usr/bin/env python3
"""
CLI for fleet health.

Commands:
  status   - Show every active vehicle's health verdict, most urgent first
  vehicle  - Show the issues found for one vehicle
  summary  - Show fleet-wide verdict counts
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from fleet_health import (
    ConfigError,
    FleetHealthResult,
    FleetSummary,
    HealthStatus,
    Issue,
    SnapshotError,
    VehicleHealth,
    load_config,
    load_snapshot,
)
from fleet_health.loader import parse_timestamp

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# =============================================================================
# Formatting helpers
# =============================================================================


def format_days(days: Optional[int]) -> str:
    """Format a day count for display."""
    return f"{days}d" if days is not None else "-"


def format_status(status: HealthStatus) -> str:
    """Format a verdict for display (e.g. 'NO DATA')."""
    return status.name.replace("_", " ")


def truncate(text: Optional[str], max_len: int = 60) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def vehicle_name(health: VehicleHealth) -> str:
    """Brand and model, or '-'."""
    parts = [p for p in (health.vehicle_brand, health.vehicle_model) if p]
    return " ".join(parts) if parts else "-"


# =============================================================================
# Tables
# =============================================================================


def make_fleet_table(verdicts: List[VehicleHealth]) -> List[List[str]]:
    """Convert vehicle verdicts to table rows."""
    rows = []
    for health in verdicts:
        top_issue = health.issues[0].text if health.issues else None
        rows.append(
            [
                health.vehicle_code,
                vehicle_name(health),
                format_status(health.status),
                str(len(health.issues)),
                format_days(health.days_since_inspection),
                format_days(health.days_since_maintenance),
                truncate(top_issue, 50),
            ]
        )
    return rows


def make_issue_table(issues: List[Issue]) -> List[List[str]]:
    """Convert issues to table rows."""
    return [[issue.severity.name, truncate(issue.text, 80)] for issue in issues]


def make_summary_table(summary: FleetSummary) -> List[List[str]]:
    """Convert the fleet summary to table rows."""
    return [
        ["Critical", summary.critical],
        ["Warning", summary.warning],
        ["OK", summary.ok],
        ["No data", summary.no_data],
        ["Total active", summary.total_active],
    ]


# =============================================================================
# Commands
# =============================================================================


def cmd_status(args, result: FleetHealthResult):
    """Show every active vehicle's verdict, most urgent first."""
    verdicts = result.vehicles
    if args.status:
        wanted = HealthStatus[args.status.upper().replace("-", "_")]
        verdicts = [v for v in verdicts if v.status == wanted]

    if args.json:
        print(json.dumps([v.to_dict() for v in verdicts], indent=2))
        return 0

    summary = result.summary
    print(
        f"Fleet: {summary.total_active} active vehicles "
        f"({summary.critical} critical, {summary.warning} warning, "
        f"{summary.ok} ok, {summary.no_data} no data)"
    )
    print()

    if not verdicts:
        print("No vehicles found.")
        return 0

    headers = [
        "Code",
        "Vehicle",
        "Status",
        "Issues",
        "Since inspection",
        "Since service",
        "Top issue",
    ]
    print(tabulate(make_fleet_table(verdicts), headers=headers, tablefmt="simple"))
    return 0


def cmd_vehicle(args, result: FleetHealthResult, snapshot):
    """Show the issues found for one vehicle."""
    vehicle = snapshot.get_vehicle(args.code)
    if vehicle is None:
        print(f"Error: Unknown vehicle '{args.code}'")
        return 1

    health = result.get(vehicle.id)
    if health is None:
        print(f"Error: Vehicle '{vehicle.code}' is not active")
        return 1

    if args.json:
        print(json.dumps(health.to_dict(), indent=2))
        return 0

    print(f"Vehicle: {vehicle.name}")
    print(f"Status: {format_status(health.status)}")
    print(f"Last inspection: {health.last_inspection_date or '-'} "
          f"({format_days(health.days_since_inspection)})")
    print(f"Last service: {health.last_maintenance_date or '-'} "
          f"({format_days(health.days_since_maintenance)})")
    print()

    if health.status == HealthStatus.NO_DATA:
        print("No inspection or maintenance history.")
    elif not health.issues:
        print("No issues found.")
    else:
        headers = ["Severity", "Issue"]
        print(tabulate(make_issue_table(health.issues), headers=headers, tablefmt="simple"))
    return 0


def cmd_summary(args, result: FleetHealthResult):
    """Show fleet-wide verdict counts."""
    if args.json:
        print(json.dumps(result.summary.to_dict(), indent=2))
        return 0
    print(tabulate(make_summary_table(result.summary), tablefmt="simple"))
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet health report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s snapshots/fleet.yaml status
  %(prog)s snapshots/fleet.yaml status --status critical
  %(prog)s snapshots/fleet.yaml vehicle HR38AF-4440
  %(prog)s snapshots/fleet.yaml summary --json
  %(prog)s snapshots/fleet.yaml --config health.yaml --as-of 2025-10-18 status
""",
    )
    parser.add_argument(
        "snapshot_file",
        type=Path,
        help="Path to fleet snapshot YAML file",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to health config YAML file (default: built-in thresholds)",
    )
    parser.add_argument(
        "--as-of",
        type=str,
        help="Evaluation time, ISO-8601 (default: snapshot asOf, else now)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of tables",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log evaluation details to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    status_parser = subparsers.add_parser(
        "status", help="Show every active vehicle's health verdict"
    )
    status_parser.add_argument(
        "--status",
        choices=["critical", "warning", "ok", "no-data"],
        help="Only show vehicles with this verdict",
    )

    vehicle_parser = subparsers.add_parser(
        "vehicle", help="Show the issues found for one vehicle"
    )
    vehicle_parser.add_argument(
        "code",
        type=str,
        help="Vehicle code or id (e.g., 'HR38AF-4440')",
    )

    subparsers.add_parser("summary", help="Show fleet-wide verdict counts")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)

    # Validate snapshot file exists
    if not args.snapshot_file.exists():
        print(f"Error: File not found: {args.snapshot_file}")
        return 1

    try:
        config = load_config(args.config)
        snapshot = load_snapshot(args.snapshot_file)
        now = parse_timestamp(args.as_of) if args.as_of else None
    except (ConfigError, SnapshotError) as e:
        print(f"Error: {e}")
        return 1
    except ValueError as e:
        print(f"Error: Invalid --as-of value: {e}")
        return 1

    result = snapshot.evaluate(config, now)

    # Dispatch to command handler
    if args.command == "status":
        return cmd_status(args, result)
    elif args.command == "vehicle":
        return cmd_vehicle(args, result, snapshot)
    elif args.command == "summary":
        return cmd_summary(args, result)

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)

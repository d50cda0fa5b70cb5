#!/usr/bin/env python3
"""
Unified CLI for fleet maintenance alerts.

Commands:
  alerts         - Show maintenance alerts for every truck
  driver-alerts  - Show alerts for the trucks on a driver's open trips
  rules          - List maintenance rules
  add-rule       - Add a maintenance rule
  log            - Add a maintenance log entry
  update-km      - Update a truck's odometer reading
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from fleet import (
    Alert,
    AlertFeed,
    MaintenanceLogEntry,
    MaintenanceRule,
    MaintenanceType,
    StoreError,
    add_rule,
    admin_alerts,
    driver_alerts,
    load_fleet,
    order_by_severity,
    save_current_km,
    save_maintenance_log,
)

MAINTENANCE_TYPES = [t.value for t in MaintenanceType]

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format a distance for display."""
    return f"{km:,.0f}" if km is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_interval(rule: MaintenanceRule) -> str:
    """Format a rule's intervals (e.g., '10,000 km / 6 mo')."""
    parts = []
    if rule.every_km:
        parts.append(f"{rule.every_km:,.0f} km")
    if rule.every_months:
        parts.append(f"{rule.every_months:g} mo")
    return " / ".join(parts) if parts else "-"


def format_due(alert: Alert) -> str:
    """Format remaining/overdue amount (negative when overdue)."""
    if alert.overdue_km is not None:
        return f"-{alert.overdue_km:,.0f} km"
    if alert.remaining_km is not None:
        return f"{alert.remaining_km:,.0f} km"
    if alert.overdue_months is not None:
        return f"-{alert.overdue_months:g} mo"
    if alert.remaining_months is not None:
        return f"{alert.remaining_months:g} mo"
    return "-"


# =============================================================================
# Alerts commands
# =============================================================================


def make_alert_table(alerts: List[Alert]) -> List[List[str]]:
    """Convert alerts to table rows."""
    rows = []
    for alert in alerts:
        rows.append(
            [
                alert.truck.registration_number,
                format_km(alert.truck.current_km),
                alert.maintenance_type.value,
                alert.severity.value if alert.severity else "-",
                format_due(alert),
                alert.message,
            ]
        )
    return rows


def print_feed(feed: AlertFeed) -> None:
    print(f"Total alerts: {feed.total_alerts}")
    print()
    if not feed.alerts:
        print("No maintenance alerts.")
        return
    headers = ["Truck", "Current (km)", "Type", "Severity", "Due", "Message"]
    print(tabulate(make_alert_table(feed.alerts), headers=headers, tablefmt="simple"))


def cmd_alerts(args):
    """Show maintenance alerts for every truck."""
    fleet = load_fleet(args.fleet_file)

    print(f"Trucks: {len(fleet.trucks)}")
    print(f"Rules: {len(fleet.rules)}")
    if args.independent:
        print("Mode: INDEPENDENT (distance and time checks both reported)")

    feed = admin_alerts(fleet, distance_priority=not args.independent)
    if args.by_severity:
        feed.alerts = order_by_severity(feed.alerts)
    print_feed(feed)
    return 0


def cmd_driver_alerts(args):
    """Show alerts for the trucks on a driver's open trips."""
    fleet = load_fleet(args.fleet_file)
    feed = driver_alerts(fleet, args.driver_id)

    print(f"Driver: {args.driver_id}")
    if not feed.has_assigned_trip:
        print("No assigned trips found.")
        return 0
    print_feed(feed)
    return 0


# =============================================================================
# Rules commands
# =============================================================================


def cmd_rules(args):
    """List maintenance rules."""
    fleet = load_fleet(args.fleet_file)

    print(f"Rules: {len(fleet.rules)}")
    print()

    rows = [[rule.display_name, format_interval(rule)] for rule in fleet.rules]
    print(tabulate(rows, headers=["Type", "Interval"], tablefmt="simple"))
    return 0


def cmd_add_rule(args):
    """Add a maintenance rule."""
    rule = MaintenanceRule(args.type, args.every_km, args.every_months)
    if not rule.has_interval:
        print("Error: at least one of --every-km or --every-months is required")
        return 1

    print(f"Adding rule to {args.fleet_file}:")
    print(f"  Type:     {rule.display_name}")
    print(f"  Interval: {format_interval(rule)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    add_rule(args.fleet_file, rule)
    print("Rule saved.")
    return 0


# =============================================================================
# Log command
# =============================================================================


def cmd_log(args):
    """Add a maintenance log entry."""
    fleet = load_fleet(args.fleet_file)

    truck = fleet.get_truck(args.truck_id)
    if truck is None:
        print(f"Error: Unknown truck '{args.truck_id}'")
        print("\nAvailable trucks:")
        for t in fleet.trucks:
            print(f"  {t.id}: {t.name}")
        return 1

    entry = MaintenanceLogEntry(
        truck_id=truck.id,
        type=args.type,
        date=args.date or date.today().isoformat(),
        km=args.km,
        trip_id=args.trip,
        description=args.description,
        cost=args.cost,
    )

    print(f"Adding maintenance entry to {args.fleet_file}:")
    print(f"  Truck:       {truck.name}")
    print(f"  Type:        {entry.type.value}")
    print(f"  Date:        {entry.date}")
    if entry.km is not None:
        print(f"  Km:          {entry.km:,.0f}")
    if entry.trip_id:
        print(f"  Trip:        {entry.trip_id}")
    if entry.description:
        print(f"  Description: {entry.description}")
    if entry.cost is not None:
        print(f"  Cost:        {format_cost(entry.cost)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_maintenance_log(args.fleet_file, entry)
    print("Entry saved.")
    return 0


# =============================================================================
# Update km command
# =============================================================================


def cmd_update_km(args):
    """Update a truck's odometer reading."""
    fleet = load_fleet(args.fleet_file)

    truck = fleet.get_truck(args.truck_id)
    if truck is None:
        print(f"Error: Unknown truck '{args.truck_id}'")
        return 1

    print(f"Truck: {truck.name}")
    print(f"Current km: {format_km(truck.current_km)}")
    print(f"New km:     {format_km(args.km)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_current_km(args.fleet_file, truck.id, args.km)
    print("Odometer updated.")
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet maintenance alerts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s fleets/demo.yaml alerts
  %(prog)s fleets/demo.yaml alerts --by-severity
  %(prog)s fleets/demo.yaml driver-alerts d1
  %(prog)s fleets/demo.yaml rules
  %(prog)s fleets/demo.yaml add-rule engine --every-km 60000 --every-months 24
  %(prog)s fleets/demo.yaml log t1 oil --km 152400 --cost 320
  %(prog)s fleets/demo.yaml update-km t1 153000
""",
    )
    parser.add_argument(
        "fleet_file",
        type=Path,
        help="Path to fleet YAML file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Alerts subcommand
    alerts_parser = subparsers.add_parser(
        "alerts", help="Show maintenance alerts for every truck"
    )
    alerts_parser.add_argument(
        "--by-severity",
        action="store_true",
        help="Order critical alerts first instead of by truck",
    )
    alerts_parser.add_argument(
        "--independent",
        action="store_true",
        help="Report time alerts even when a distance alert fired for the rule",
    )

    # Driver alerts subcommand
    driver_parser = subparsers.add_parser(
        "driver-alerts", help="Show alerts for a driver's assigned trucks"
    )
    driver_parser.add_argument("driver_id", type=str, help="Driver id")

    # Rules subcommands
    subparsers.add_parser("rules", help="List maintenance rules")

    add_rule_parser = subparsers.add_parser("add-rule", help="Add a maintenance rule")
    add_rule_parser.add_argument("type", choices=MAINTENANCE_TYPES)
    add_rule_parser.add_argument(
        "--every-km", type=float, help="Distance interval in km"
    )
    add_rule_parser.add_argument(
        "--every-months", type=float, help="Time interval in months"
    )
    add_rule_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Log subcommand
    log_parser = subparsers.add_parser("log", help="Add a maintenance log entry")
    log_parser.add_argument("truck_id", type=str, help="Truck id")
    log_parser.add_argument("type", choices=MAINTENANCE_TYPES)
    log_parser.add_argument(
        "--date",
        type=str,
        help="Service date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument("--km", type=float, help="Odometer at time of service")
    log_parser.add_argument("--trip", type=str, help="Related trip id")
    log_parser.add_argument("--description", type=str, help="What was done")
    log_parser.add_argument("--cost", type=float, help="Cost of service")
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Update km subcommand
    update_km_parser = subparsers.add_parser(
        "update-km", help="Update a truck's odometer reading"
    )
    update_km_parser.add_argument("truck_id", type=str, help="Truck id")
    update_km_parser.add_argument("km", type=float, help="Current odometer (km)")
    update_km_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    return parser


COMMANDS = {
    "alerts": cmd_alerts,
    "driver-alerts": cmd_driver_alerts,
    "rules": cmd_rules,
    "add-rule": cmd_add_rule,
    "log": cmd_log,
    "update-km": cmd_update_km,
}


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    # Validate fleet file exists
    if not args.fleet_file.exists():
        print(f"Error: File not found: {args.fleet_file}")
        return 1

    try:
        return COMMANDS[args.command](args)
    except (StoreError, ValueError, KeyError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)

"""
Fleet maintenance alert models.

This package provides data models and the alert engine for truck fleets:
- Severity: Alert urgency levels (CRITICAL, HIGH, MEDIUM)
- MaintenanceRule: Fleet-wide maintenance interval definitions
- Truck: Vehicle identification and odometer state
- MaintenanceLogEntry: Performed maintenance records
- Trip: Driver/truck assignments
- Alert, AlertFeed: Calculated maintenance alerts
- Fleet: Main aggregate combining all data
"""

from .severity import Severity, SEVERITY_PRIORITY, severity_rank
from .rule import MaintenanceRule, MaintenanceType
from .truck import Truck
from .maintenance_log import MaintenanceLogEntry
from .trip import Trip, ACTIVE_TRIP_STATUSES
from .alert import Alert, AlertFeed, AlertType
from .fleet import Fleet
from .calculations import (
    calc_remaining_km,
    calc_remaining_months,
    distance_severity,
    months_elapsed,
    parse_timestamp,
)
from .loader import (
    StoreError,
    load_fleet,
    add_rule,
    update_rule,
    delete_rule,
    save_maintenance_log,
    save_current_km,
)
from .alerts import (
    check_distance,
    check_time,
    evaluate,
    collect_alerts,
    order_by_severity,
    admin_alerts,
    driver_alerts,
)

__all__ = [
    "Severity",
    "SEVERITY_PRIORITY",
    "severity_rank",
    "MaintenanceRule",
    "MaintenanceType",
    "Truck",
    "MaintenanceLogEntry",
    "Trip",
    "ACTIVE_TRIP_STATUSES",
    "Alert",
    "AlertFeed",
    "AlertType",
    "Fleet",
    "calc_remaining_km",
    "calc_remaining_months",
    "distance_severity",
    "months_elapsed",
    "parse_timestamp",
    "StoreError",
    "load_fleet",
    "add_rule",
    "update_rule",
    "delete_rule",
    "save_maintenance_log",
    "save_current_km",
    "check_distance",
    "check_time",
    "evaluate",
    "collect_alerts",
    "order_by_severity",
    "admin_alerts",
    "driver_alerts",
]

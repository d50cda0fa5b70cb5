"""
Maintenance alert engine.

Evaluates every truck against every maintenance rule and builds the
admin (whole fleet) and driver (trucks behind the driver's open trips)
alert feeds.

The `source` argument is anything that provides the fleet read interface:
list_rules(), list_trucks(), get_truck(id), last_maintenance(id, type)
and driver_trips(id, statuses). driver_trips() owns trip ordering and must
return trips by planned date, earliest first. `Fleet` is the YAML-backed
implementation.

`now` may be a date (midnight UTC) or a datetime (naive means UTC) and
defaults to the current UTC time.
"""

import logging
from datetime import date, datetime
from typing import List, Optional, Sequence, Union

from dateutil import tz

from .alert import Alert, AlertFeed, AlertType
from .calculations import (
    calc_remaining_km,
    calc_remaining_months,
    distance_severity,
    format_amount,
    parse_timestamp,
)
from .loader import StoreError
from .maintenance_log import MaintenanceLogEntry
from .rule import MaintenanceRule
from .severity import Severity, severity_rank
from .trip import ACTIVE_TRIP_STATUSES
from .truck import Truck

logger = logging.getLogger(__name__)


def check_distance(
    truck: Truck,
    rule: MaintenanceRule,
    last_entry: Optional[MaintenanceLogEntry],
    due_soon_km: float = 1000,
    high_km: float = 500,
) -> Optional[Alert]:
    """
    Distance-based check for one truck and rule.

    Logic:
    - No history: distance is measured from 0 km
    - History without a recorded km: can't measure, no alert
    - remaining <= 0: overdue (critical)
    - remaining <= due_soon_km: due soon (high within high_km, else medium)
    """
    if not rule.every_km:
        return None
    if last_entry is not None and last_entry.km is None:
        return None

    last_km = last_entry.km if last_entry else None
    remaining = calc_remaining_km(truck.current_km, last_km, rule.every_km)
    type_name = rule.type.value

    if remaining <= 0:
        overdue_km = format_amount(abs(remaining))
        return Alert(
            truck=truck,
            maintenance_type=rule.type,
            alert_type=AlertType.DISTANCE,
            severity=Severity.CRITICAL,
            overdue=True,
            overdue_km=overdue_km,
            message=f"{type_name} maintenance is overdue by {overdue_km} km!",
        )
    if remaining <= due_soon_km:
        remaining_km = format_amount(remaining)
        return Alert(
            truck=truck,
            maintenance_type=rule.type,
            alert_type=AlertType.DISTANCE,
            severity=distance_severity(remaining, high_km),
            remaining_km=remaining_km,
            message=f"{type_name} maintenance needed in {remaining_km} km",
        )
    return None


def check_time(
    truck: Truck,
    rule: MaintenanceRule,
    last_entry: Optional[MaintenanceLogEntry],
    now: Union[date, datetime],
    due_soon_months: float = 1,
) -> Optional[Alert]:
    """
    Time-based check for one truck and rule.

    Months are whole calendar months since the last service of this
    type, or since the truck was added to the fleet if never serviced.
    A month only counts once the time of day has also been reached.
    """
    if not rule.every_months:
        return None

    since = parse_timestamp(last_entry.date if last_entry else truck.created_at)
    remaining = calc_remaining_months(since, rule.every_months, now)
    type_name = rule.type.value

    if remaining <= 0:
        overdue_months = format_amount(abs(remaining))
        return Alert(
            truck=truck,
            maintenance_type=rule.type,
            alert_type=AlertType.TIME,
            severity=Severity.CRITICAL,
            overdue=True,
            overdue_months=overdue_months,
            message=f"{type_name} maintenance is overdue by {overdue_months} month(s)!",
        )
    if remaining <= due_soon_months:
        remaining_months = format_amount(remaining)
        return Alert(
            truck=truck,
            maintenance_type=rule.type,
            alert_type=AlertType.TIME,
            severity=Severity.MEDIUM,
            remaining_months=remaining_months,
            message=f"{type_name} maintenance needed in {remaining_months} month(s)",
        )
    return None


def evaluate(
    truck: Truck,
    rule: MaintenanceRule,
    last_entry: Optional[MaintenanceLogEntry],
    now: Union[date, datetime],
    distance_priority: bool = True,
) -> List[Alert]:
    """
    Alerts for one truck and rule.

    Args:
        distance_priority: If True (default), a distance alert skips the
            time check so each rule yields at most one alert. If False,
            both checks run independently and may both fire.
    """
    distance_alert = check_distance(truck, rule, last_entry)
    if distance_alert is not None and distance_priority:
        return [distance_alert]

    alerts = [distance_alert] if distance_alert is not None else []
    time_alert = check_time(truck, rule, last_entry, now)
    if time_alert is not None:
        alerts.append(time_alert)
    return alerts


def collect_alerts(
    source,
    trucks: Sequence[Truck],
    now: Union[date, datetime],
    distance_priority: bool = True,
) -> List[Alert]:
    """Evaluate every truck against every rule, truck-major then rule-major."""
    if not trucks:
        return []
    rules = source.list_rules()

    alerts: List[Alert] = []
    for truck in trucks:
        for rule in rules:
            last_entry = source.last_maintenance(truck.id, rule.type)
            alerts.extend(
                evaluate(truck, rule, last_entry, now, distance_priority)
            )
    return alerts


def order_by_severity(alerts: Sequence[Alert]) -> List[Alert]:
    """Stable sort: critical, then high, then medium, then unrated."""
    return sorted(alerts, key=lambda a: severity_rank(a.severity))


def admin_alerts(
    source,
    now: Optional[Union[date, datetime]] = None,
    distance_priority: bool = True,
) -> AlertFeed:
    """Alerts for every truck in the fleet, in evaluation order."""
    now = now or datetime.now(tz.UTC)
    trucks = source.list_trucks()
    alerts = collect_alerts(source, trucks, now, distance_priority)
    logger.debug("Admin feed: %d alerts across %d trucks", len(alerts), len(trucks))
    return AlertFeed(alerts)


def driver_alerts(
    source, driver_id: str, now: Optional[Union[date, datetime]] = None
) -> AlertFeed:
    """
    Alerts for the trucks behind a driver's pending and active trips.

    Trucks are taken in planned-date order and deduplicated, so a truck
    used on several trips is evaluated once. A driver with no open trips
    gets an empty feed flagged has_assigned_trip=False.
    """
    trips = source.driver_trips(driver_id, ACTIVE_TRIP_STATUSES)
    if not trips:
        logger.debug("Driver %s has no assigned trips", driver_id)
        return AlertFeed([], has_assigned_trip=False)

    now = now or datetime.now(tz.UTC)

    trucks: List[Truck] = []
    seen = set()
    for trip in trips:
        if trip.truck_id in seen:
            continue
        truck = source.get_truck(trip.truck_id)
        if truck is None:
            raise StoreError(f"Trip {trip.id} references unknown truck {trip.truck_id}")
        seen.add(trip.truck_id)
        trucks.append(truck)

    alerts = order_by_severity(collect_alerts(source, trucks, now))
    logger.debug(
        "Driver %s feed: %d alerts across %d trucks", driver_id, len(alerts), len(trucks)
    )
    return AlertFeed(alerts, has_assigned_trip=True)

"""Fleet class - the aggregate of trucks, rules, maintenance logs and trips."""

from typing import Iterable, List, Optional

from .maintenance_log import MaintenanceLogEntry
from .rule import MaintenanceRule, MaintenanceType
from .trip import Trip
from .truck import Truck
from .calculations import parse_timestamp


class Fleet:
    """Complete fleet record; the read interface consumed by the alert engine."""

    def __init__(
        self,
        trucks: Optional[List[Truck]] = None,
        rules: Optional[List[MaintenanceRule]] = None,
        maintenance_logs: Optional[List[MaintenanceLogEntry]] = None,
        trips: Optional[List[Trip]] = None,
    ):
        self.trucks = trucks or []
        self.rules = rules or []
        self.maintenance_logs = maintenance_logs or []
        self.trips = trips or []

    def list_rules(self) -> List[MaintenanceRule]:
        """All maintenance rules, in file order."""
        return list(self.rules)

    def get_rule(self, type: MaintenanceType) -> Optional[MaintenanceRule]:
        """Find the rule for a maintenance type."""
        for rule in self.rules:
            if rule.type == type:
                return rule
        return None

    def list_trucks(self) -> List[Truck]:
        """All trucks, unfiltered."""
        return list(self.trucks)

    def get_truck(self, truck_id: str) -> Optional[Truck]:
        """Find a truck by its id."""
        for truck in self.trucks:
            if truck.id == truck_id:
                return truck
        return None

    def get_logs_for_truck(
        self, truck_id: str, type: Optional[MaintenanceType] = None
    ) -> List[MaintenanceLogEntry]:
        """Get all maintenance log entries for a truck, optionally by type."""
        return [
            entry
            for entry in self.maintenance_logs
            if entry.truck_id == truck_id and (type is None or entry.type == type)
        ]

    def last_maintenance(
        self, truck_id: str, type: MaintenanceType
    ) -> Optional[MaintenanceLogEntry]:
        """Get the most recent maintenance of a type for a truck (by date and time)."""
        entries = self.get_logs_for_truck(truck_id, type)
        if not entries:
            return None
        return max(entries, key=lambda e: parse_timestamp(e.date))

    def driver_trips(
        self, driver_id: str, statuses: Optional[Iterable[str]] = None
    ) -> List[Trip]:
        """
        Get a driver's trips ordered by planned date (earliest first).

        Args:
            statuses: If given, only trips in one of these statuses
        """
        wanted = set(statuses) if statuses is not None else None
        trips = [
            t
            for t in self.trips
            if t.driver_id == driver_id and (wanted is None or t.status in wanted)
        ]
        return sorted(trips, key=lambda t: parse_timestamp(t.planned_date))

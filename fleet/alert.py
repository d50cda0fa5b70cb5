"""Alert and AlertFeed dataclasses for computed maintenance alerts."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from .rule import MaintenanceType
from .severity import Severity

if TYPE_CHECKING:
    from .truck import Truck


class AlertType(Enum):
    """Which interval triggered the alert."""

    DISTANCE = "km"
    TIME = "time"


@dataclass
class Alert:
    """A due-soon or overdue maintenance alert for one truck and rule."""

    truck: "Truck"
    maintenance_type: MaintenanceType
    alert_type: AlertType
    message: str
    severity: Optional[Severity] = None
    overdue: bool = False
    remaining_km: Optional[float] = None
    overdue_km: Optional[float] = None
    remaining_months: Optional[int] = None
    overdue_months: Optional[int] = None

    def to_dict(self, include_severity: bool = True) -> Dict[str, Any]:
        """Serialize to the API shape, omitting fields that don't apply."""
        data: Dict[str, Any] = {
            "truckId": self.truck.id,
            "maintenanceType": self.maintenance_type.value,
            "alertType": self.alert_type.value,
        }
        if include_severity and self.severity is not None:
            data["severity"] = self.severity.value
        if self.overdue:
            data["overdue"] = True
        if self.remaining_km is not None:
            data["remainingKm"] = self.remaining_km
        if self.overdue_km is not None:
            data["overdueKm"] = self.overdue_km
        if self.remaining_months is not None:
            data["remainingMonths"] = self.remaining_months
        if self.overdue_months is not None:
            data["overdueMonths"] = self.overdue_months
        data["message"] = self.message
        data["truck"] = self.truck.summary()
        return data


@dataclass
class AlertFeed:
    """Alerts returned to a caller, plus the driver's assignment flag."""

    alerts: List[Alert] = field(default_factory=list)
    has_assigned_trip: Optional[bool] = None

    @property
    def total_alerts(self) -> int:
        return len(self.alerts)

    def to_dict(self, include_severity: bool = True) -> Dict[str, Any]:
        if self.has_assigned_trip is False:
            return {"hasAssignedTrip": False, "alerts": []}
        data: Dict[str, Any] = {}
        if self.has_assigned_trip is not None:
            data["hasAssignedTrip"] = self.has_assigned_trip
        data["totalAlerts"] = self.total_alerts
        data["alerts"] = [a.to_dict(include_severity) for a in self.alerts]
        return data

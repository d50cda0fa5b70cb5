"""MaintenanceLogEntry class for performed maintenance records."""
from typing import Optional, Union

from .rule import MaintenanceType


class MaintenanceLogEntry:
    """A record of maintenance performed on a truck."""

    def __init__(
            self,
            truck_id: str,
            type: Union[MaintenanceType, str],
            date: str,
            km: Optional[float] = None,
            trip_id: Optional[str] = None,
            description: Optional[str] = None,
            cost: Optional[float] = None,
    ):
        self.truck_id = truck_id
        self.type = MaintenanceType(type)
        self.date = date
        self.km = km
        self.trip_id = trip_id
        self.description = description
        self.cost = cost

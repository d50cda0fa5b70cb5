"""Trip class linking drivers to the trucks they drive."""

from typing import Optional

# Pending and active trips; finished trips don't tie a driver to a truck
ACTIVE_TRIP_STATUSES = ("to_do", "in_progress")


class Trip:
    """A planned, running or finished trip."""

    def __init__(
        self,
        id: str,
        driver_id: str,
        truck_id: str,
        planned_date: str,
        status: str = "to_do",
        start_location: Optional[str] = None,
        end_location: Optional[str] = None,
    ):
        self.id = id
        self.driver_id = driver_id
        self.truck_id = truck_id
        self.planned_date = planned_date
        self.status = status
        self.start_location = start_location
        self.end_location = end_location

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_TRIP_STATUSES

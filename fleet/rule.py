"""MaintenanceRule class for maintenance interval definitions."""

from enum import Enum
from typing import Optional, Union


class MaintenanceType(Enum):
    """Maintenance categories shared by rules and log entries."""

    OIL = "oil"
    TIRES = "tires"
    ENGINE = "engine"
    GENERAL = "general"


class MaintenanceRule:
    """A fleet-wide rule defining how often a type of maintenance is due."""

    def __init__(
            self,
            type: Union[MaintenanceType, str],
            every_km: Optional[float] = None,
            every_months: Optional[float] = None,
    ):
        self.type = MaintenanceType(type)
        self.every_km = every_km
        self.every_months = every_months

    @property
    def has_interval(self) -> bool:
        """True if the rule can ever produce an alert."""
        return bool(self.every_km) or bool(self.every_months)

    @property
    def display_name(self) -> str:
        return self.type.value.capitalize()

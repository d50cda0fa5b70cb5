"""Truck class for fleet vehicle identification and odometer state."""

from typing import Any, Dict, Optional


class Truck:
    """A fleet truck with its current odometer reading."""

    def __init__(
        self,
        id: str,
        registration_number: str,
        current_km: float,
        created_at: str,
        brand: Optional[str] = None,
        model: Optional[str] = None,
        status: str = "available",
    ):
        self.id = id
        self.registration_number = registration_number
        self.current_km = current_km
        self.created_at = created_at
        self.brand = brand
        self.model = model
        self.status = status

    @property
    def name(self) -> str:
        """Human-readable truck name."""
        parts = [p for p in (self.brand, self.model) if p]
        if parts:
            return f"{self.registration_number} ({' '.join(parts)})"
        return self.registration_number

    def summary(self) -> Dict[str, Any]:
        """Truck fields embedded in each alert."""
        return {
            "_id": self.id,
            "registrationNumber": self.registration_number,
            "brand": self.brand,
            "model": self.model,
            "currentKm": self.current_km,
            "status": self.status,
        }

#!/usr/bin/env python3
"""Tests for Truck class."""
from fleet import Truck


class TestTruck:
    """Tests for Truck class."""

    def test_init_defaults(self):
        truck = Truck("t1", "12345-A-6", 152400, "2023-02-01")
        assert truck.id == "t1"
        assert truck.current_km == 152400
        assert truck.brand is None
        assert truck.status == "available"

    def test_name_with_brand_and_model(self):
        truck = Truck("t1", "12345-A-6", 0, "2023-02-01", "Volvo", "FH16")
        assert truck.name == "12345-A-6 (Volvo FH16)"

    def test_name_without_brand(self):
        truck = Truck("t1", "12345-A-6", 0, "2023-02-01")
        assert truck.name == "12345-A-6"

    def test_summary(self):
        truck = Truck("t1", "12345-A-6", 1500, "2023-02-01", "Volvo", "FH16", "on_trip")
        assert truck.summary() == {
            "_id": "t1",
            "registrationNumber": "12345-A-6",
            "brand": "Volvo",
            "model": "FH16",
            "currentKm": 1500,
            "status": "on_trip",
        }

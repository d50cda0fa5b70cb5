#!/usr/bin/env python3
"""Tests for Alert and AlertFeed dataclasses."""
import pytest
from fleet import Alert, AlertFeed, AlertType, MaintenanceType, Severity, Truck


@pytest.fixture
def truck():
    return Truck("t1", "12345-A-6", 10001, "2024-01-01", "Volvo", "FH16", "on_trip")


def overdue_km_alert(truck):
    return Alert(
        truck=truck,
        maintenance_type=MaintenanceType.OIL,
        alert_type=AlertType.DISTANCE,
        severity=Severity.CRITICAL,
        overdue=True,
        overdue_km=1,
        message="oil maintenance is overdue by 1 km!",
    )


class TestAlertToDict:
    """Tests for Alert.to_dict."""

    def test_overdue_distance_shape(self, truck):
        data = overdue_km_alert(truck).to_dict()
        assert data == {
            "truckId": "t1",
            "maintenanceType": "oil",
            "alertType": "km",
            "severity": "critical",
            "overdue": True,
            "overdueKm": 1,
            "message": "oil maintenance is overdue by 1 km!",
            "truck": truck.summary(),
        }

    def test_due_soon_time_omits_overdue(self, truck):
        alert = Alert(
            truck=truck,
            maintenance_type=MaintenanceType.GENERAL,
            alert_type=AlertType.TIME,
            severity=Severity.MEDIUM,
            remaining_months=1,
            message="general maintenance needed in 1 month(s)",
        )
        data = alert.to_dict()
        assert data["alertType"] == "time"
        assert data["remainingMonths"] == 1
        assert "overdue" not in data
        assert "remainingKm" not in data
        assert "overdueMonths" not in data

    def test_without_severity(self, truck):
        data = overdue_km_alert(truck).to_dict(include_severity=False)
        assert "severity" not in data
        assert data["overdue"] is True


class TestAlertFeed:
    """Tests for AlertFeed."""

    def test_total_alerts(self, truck):
        feed = AlertFeed([overdue_km_alert(truck), overdue_km_alert(truck)])
        assert feed.total_alerts == 2

    def test_admin_shape(self, truck):
        data = AlertFeed([overdue_km_alert(truck)]).to_dict(include_severity=False)
        assert set(data) == {"totalAlerts", "alerts"}
        assert data["totalAlerts"] == 1
        assert "severity" not in data["alerts"][0]

    def test_empty_admin_shape(self):
        assert AlertFeed().to_dict() == {"totalAlerts": 0, "alerts": []}

    def test_driver_shape(self, truck):
        data = AlertFeed([overdue_km_alert(truck)], has_assigned_trip=True).to_dict()
        assert data["hasAssignedTrip"] is True
        assert data["totalAlerts"] == 1
        assert data["alerts"][0]["severity"] == "critical"

    def test_driver_without_trip_shape(self):
        feed = AlertFeed([], has_assigned_trip=False)
        assert feed.to_dict() == {"hasAssignedTrip": False, "alerts": []}

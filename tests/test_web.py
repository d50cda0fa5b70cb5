#!/usr/bin/env python3
"""Tests for the Flask alerts API."""

from datetime import date

import pytest
from dateutil.relativedelta import relativedelta

from web.app import app

ADMIN = {"X-User-Id": "a1", "X-User-Role": "admin"}
DRIVER = {"X-User-Id": "d1", "X-User-Role": "driver"}


def fleet_yaml(created_at=None):
    created_at = created_at or date.today().isoformat()
    return f"""
trucks:
  - id: t1
    registrationNumber: AAA-1
    brand: Volvo
    model: FH16
    currentKm: 9700
    status: on_trip
    createdAt: '{created_at}'
  - id: t2
    registrationNumber: BBB-2
    currentKm: 12000
    createdAt: '{created_at}'
rules:
  - type: oil
    everyKm: 10000
    everyMonths: 6
trips:
  - id: trip1
    driverId: d1
    truckId: t1
    plannedDate: '2025-04-01'
    status: in_progress
  - id: trip2
    driverId: d1
    truckId: t2
    plannedDate: '2025-04-05'
  - id: trip3
    driverId: d1
    truckId: t1
    plannedDate: '2025-04-09'
  - id: trip4
    driverId: d2
    truckId: t2
    plannedDate: '2025-04-09'
    status: finished
"""


@pytest.fixture
def client(tmp_path, monkeypatch):
    path = tmp_path / "fleet.yaml"
    path.write_text(fleet_yaml())
    monkeypatch.setitem(app.config, "FLEET_FILE", str(path))
    monkeypatch.setitem(app.config, "ADMIN_INDEPENDENT_CHECKS", False)
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


class TestAuth:
    """Tests for role checks."""

    def test_missing_identity(self, client):
        resp = client.get("/api/v1/admin/maintenance-alerts")
        assert resp.status_code == 401
        assert resp.get_json()["success"] is False

    def test_wrong_role(self, client):
        resp = client.get("/api/v1/admin/maintenance-alerts", headers=DRIVER)
        assert resp.status_code == 403
        assert resp.get_json()["message"] == (
            "Access denied. Required role(s): admin. Your role: driver"
        )

    def test_admin_cannot_use_driver_route(self, client):
        resp = client.get("/api/v1/driver/my-truck-alerts", headers=ADMIN)
        assert resp.status_code == 403


class TestAdminAlerts:
    """Tests for GET /api/v1/admin/maintenance-alerts."""

    def test_returns_all_truck_alerts(self, client):
        resp = client.get("/api/v1/admin/maintenance-alerts", headers=ADMIN)
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["success"] is True
        assert body["message"] == "Maintenance alerts fetched successfully"
        data = body["data"]
        assert data["totalAlerts"] == 2
        assert [a["truckId"] for a in data["alerts"]] == ["t1", "t2"]

    def test_alert_shape_without_severity(self, client):
        resp = client.get("/api/v1/admin/maintenance-alerts", headers=ADMIN)
        alert = resp.get_json()["data"]["alerts"][1]
        assert "severity" not in alert
        assert alert["alertType"] == "km"
        assert alert["overdue"] is True
        assert alert["overdueKm"] == 2000
        assert alert["message"] == "oil maintenance is overdue by 2000 km!"
        assert alert["truck"]["registrationNumber"] == "BBB-2"

    def test_independent_checks_mode(self, client, tmp_path, monkeypatch):
        path = tmp_path / "old.yaml"
        created = date.today() - relativedelta(months=8)
        path.write_text(fleet_yaml(created.isoformat()))
        monkeypatch.setitem(app.config, "FLEET_FILE", str(path))

        resp = client.get("/api/v1/admin/maintenance-alerts", headers=ADMIN)
        assert resp.get_json()["data"]["totalAlerts"] == 2

        monkeypatch.setitem(app.config, "ADMIN_INDEPENDENT_CHECKS", True)
        resp = client.get("/api/v1/admin/maintenance-alerts", headers=ADMIN)
        alerts = resp.get_json()["data"]["alerts"]
        assert len(alerts) == 4
        assert [a["alertType"] for a in alerts] == ["km", "time", "km", "time"]


class TestDriverAlerts:
    """Tests for GET /api/v1/driver/my-truck-alerts."""

    def test_assigned_trucks_ordered_by_severity(self, client):
        resp = client.get("/api/v1/driver/my-truck-alerts", headers=DRIVER)
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["hasAssignedTrip"] is True
        assert data["totalAlerts"] == 2
        assert [a["severity"] for a in data["alerts"]] == ["critical", "high"]
        assert [a["truckId"] for a in data["alerts"]] == ["t2", "t1"]
        assert data["alerts"][1]["remainingKm"] == 300
        assert data["alerts"][1]["truck"]["status"] == "on_trip"

    def test_no_assigned_trip(self, client):
        headers = {"X-User-Id": "d2", "X-User-Role": "driver"}
        resp = client.get("/api/v1/driver/my-truck-alerts", headers=headers)
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["message"] == "No assigned trips found"
        assert body["data"] == {"hasAssignedTrip": False, "alerts": []}


class TestErrors:
    """Tests for error handling."""

    def test_store_failure_is_500(self, client, tmp_path, monkeypatch):
        monkeypatch.setitem(app.config, "FLEET_FILE", str(tmp_path / "missing.yaml"))
        resp = client.get("/api/v1/admin/maintenance-alerts", headers=ADMIN)
        assert resp.status_code == 500
        assert resp.get_json()["success"] is False

    def test_unknown_route_is_404(self, client):
        resp = client.get("/api/v1/nope")
        assert resp.status_code == 404
        assert resp.get_json()["success"] is False

    def test_health(self, client):
        assert client.get("/health").get_json() == {"status": "healthy"}

    def test_unexpected_error_is_json_500(self, client, tmp_path, monkeypatch):
        path = tmp_path / "odd.yaml"
        path.write_text("""
trucks:
  - id: t1
    currentKm: 12000
rules:
  - type: oil
    everyKm: 10000
""")
        monkeypatch.setitem(app.config, "FLEET_FILE", str(path))
        resp = client.get("/api/v1/admin/maintenance-alerts", headers=ADMIN)
        assert resp.status_code == 500
        assert resp.get_json() == {"success": False, "message": "Internal server error"}

    def test_wrong_method_keeps_status(self, client):
        resp = client.post("/health")
        assert resp.status_code == 405
        assert resp.get_json()["success"] is False

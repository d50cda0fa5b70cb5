"""Flask JSON API exposing fleet maintenance alerts."""

import logging
import os
from functools import wraps
from pathlib import Path

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from fleet.alerts import admin_alerts, driver_alerts
from fleet.loader import StoreError, load_fleet

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# Path to the fleet file (relative to project root by default)
app.config["FLEET_FILE"] = os.environ.get(
    "FLEET_FILE", str(Path(__file__).parent.parent / "fleets" / "demo.yaml")
)
# Alternate admin mode: distance and time checks both fire for one rule
app.config["ADMIN_INDEPENDENT_CHECKS"] = (
    os.environ.get("ADMIN_INDEPENDENT_CHECKS", "").lower() == "true"
)


def success_response(status: int, message: str, data=None):
    """Standard success envelope."""
    body = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def error_response(status: int, message: str):
    """Standard error envelope."""
    return jsonify({"success": False, "message": message}), status


def require_role(*roles):
    """
    Allow the request only for the given role(s).

    Identity is set upstream by the auth layer via X-User-Id/X-User-Role.
    """

    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            user_id = request.headers.get("X-User-Id")
            role = request.headers.get("X-User-Role")
            if not user_id or not role:
                return error_response(401, "Not authorized, please login")
            if role not in roles:
                return error_response(
                    403,
                    f"Access denied. Required role(s): {' or '.join(roles)}. "
                    f"Your role: {role}",
                )
            g.user_id = user_id
            g.role = role
            return view(*args, **kwargs)

        return wrapped

    return decorator


def get_fleet():
    """Load the configured fleet file (fresh on every request)."""
    return load_fleet(app.config["FLEET_FILE"])


@app.errorhandler(StoreError)
def handle_store_error(error):
    logger.exception("Fleet storage failure: %s", error)
    return error_response(500, "Fleet data is unavailable")


@app.errorhandler(Exception)
def handle_unexpected_error(error):
    if isinstance(error, HTTPException):
        return error_response(error.code, error.description)
    logger.exception("Unhandled error: %s", error)
    return error_response(500, "Internal server error")


@app.errorhandler(404)
def handle_not_found(error):
    return error_response(404, "The route you requested does not exist.")


@app.route("/health")
def health_check():
    return jsonify({"status": "healthy"})


@app.route("/api/v1/admin/maintenance-alerts")
@require_role("admin")
def maintenance_alerts():
    """Trucks that need maintenance soon, across the whole fleet."""
    feed = admin_alerts(
        get_fleet(),
        distance_priority=not app.config["ADMIN_INDEPENDENT_CHECKS"],
    )
    return success_response(
        200,
        "Maintenance alerts fetched successfully",
        feed.to_dict(include_severity=False),
    )


@app.route("/api/v1/driver/my-truck-alerts")
@require_role("driver")
def my_truck_alerts():
    """Maintenance alerts for the trucks on the driver's open trips."""
    feed = driver_alerts(get_fleet(), g.user_id)
    if not feed.has_assigned_trip:
        return success_response(200, "No assigned trips found", feed.to_dict())
    return success_response(
        200, "Maintenance alerts fetched successfully", feed.to_dict()
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)

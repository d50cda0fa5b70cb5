"""YAML loading and saving utilities for fleet data."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .fleet import Fleet
from .maintenance_log import MaintenanceLogEntry
from .rule import MaintenanceRule, MaintenanceType
from .trip import Trip
from .truck import Truck

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Fleet data could not be read or written."""


def _json_default(value: Any) -> str:
    # PyYAML turns unquoted dates/timestamps into date objects
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Unsupported value in fleet file: {value!r}")


def _parse_object(
    dct: Dict[str, Any]
) -> Union[Trip, MaintenanceLogEntry, Truck, MaintenanceRule, dict]:
    """Parse dictionary into appropriate object type."""
    # Trip (checked before log entries, both carry truckId)
    if "driverId" in dct:
        return Trip(
            dct["id"],
            dct["driverId"],
            dct["truckId"],
            dct["plannedDate"],
            dct.get("status") or "to_do",
            dct.get("startLocation"),
            dct.get("endLocation"),
        )
    # Maintenance log entry
    elif "truckId" in dct and "type" in dct:
        return MaintenanceLogEntry(
            dct["truckId"],
            dct["type"],
            dct["date"],
            dct.get("km"),
            dct.get("tripId"),
            dct.get("description"),
            dct.get("cost"),
        )
    # Truck
    elif "registrationNumber" in dct:
        return Truck(
            dct["id"],
            dct["registrationNumber"],
            dct.get("currentKm") or 0,
            dct["createdAt"],
            dct.get("brand"),
            dct.get("model"),
            dct.get("status") or "available",
        )
    # Maintenance rule
    elif "type" in dct:
        return MaintenanceRule(
            dct["type"],
            dct.get("everyKm"),
            dct.get("everyMonths"),
        )
    else:
        # Top-level document and unknown structures stay as dicts
        return dct


def load_fleet(filename: Union[str, Path]) -> Fleet:
    """Load a fleet from a YAML file."""
    try:
        with open(filename, "rb") as fp:
            raw = yaml.load(fp, Loader=yaml.SafeLoader) or {}
        json_data = json.dumps(raw, indent=4, default=_json_default)
        data = json.loads(json_data, object_hook=_parse_object)
    except (OSError, yaml.YAMLError) as e:
        raise StoreError(f"Cannot read fleet file {filename}: {e}") from e
    except (KeyError, TypeError, ValueError) as e:
        raise StoreError(f"Malformed record in fleet file {filename}: {e}") from e

    if not isinstance(data, dict):
        raise StoreError(f"Fleet file {filename} must contain a mapping")

    fleet = Fleet(
        data.get("trucks"),
        data.get("rules"),
        data.get("maintenanceLogs"),
        data.get("trips"),
    )
    logger.info(
        "Loaded fleet %s: %d trucks, %d rules, %d maintenance logs, %d trips",
        filename,
        len(fleet.trucks),
        len(fleet.rules),
        len(fleet.maintenance_logs),
        len(fleet.trips),
    )
    return fleet


def _load_raw(filename: Union[str, Path]) -> Dict[str, Any]:
    """Load the raw YAML data (not parsed into objects)."""
    try:
        with open(filename, "r") as fp:
            return yaml.load(fp, Loader=yaml.SafeLoader) or {}
    except (OSError, yaml.YAMLError) as e:
        raise StoreError(f"Cannot read fleet file {filename}: {e}") from e


def _dump_raw(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    """Write raw YAML data back to the file."""
    try:
        with open(filename, "w") as fp:
            yaml.dump(
                data,
                fp,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                width=120,
            )
    except OSError as e:
        raise StoreError(f"Cannot write fleet file {filename}: {e}") from e


def _rule_to_dict(rule: MaintenanceRule) -> Dict[str, Any]:
    """Serialize a MaintenanceRule to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {"type": rule.type.value}
    if rule.every_km is not None:
        d["everyKm"] = rule.every_km
    if rule.every_months is not None:
        d["everyMonths"] = rule.every_months
    return d


def _log_entry_to_dict(entry: MaintenanceLogEntry) -> Dict[str, Any]:
    """Serialize a log entry, omitting None values for cleaner YAML."""
    d: Dict[str, Any] = {
        "truckId": entry.truck_id,
        "type": entry.type.value,
        "date": entry.date,
    }
    if entry.km is not None:
        d["km"] = entry.km
    if entry.trip_id is not None:
        d["tripId"] = entry.trip_id
    if entry.description is not None:
        d["description"] = entry.description
    if entry.cost is not None:
        d["cost"] = entry.cost
    return d


def _find_rule_index(rules: list, type: MaintenanceType) -> int:
    for index, rule in enumerate(rules):
        if rule.get("type") == type.value:
            return index
    raise KeyError(f"No maintenance rule for type '{type.value}'")


def add_rule(filename: Union[str, Path], rule: MaintenanceRule) -> None:
    """
    Append a rule to a fleet YAML file.

    Only one rule may exist per maintenance type, and a rule needs
    at least one of everyKm/everyMonths.
    """
    if not rule.has_interval:
        raise ValueError("At least one of everyKm or everyMonths must be provided")

    data = _load_raw(filename)
    if data.get("rules") is None:
        data["rules"] = []

    if any(r.get("type") == rule.type.value for r in data["rules"]):
        raise ValueError(
            f"Maintenance rule for type '{rule.type.value}' already exists"
        )

    data["rules"].append(_rule_to_dict(rule))
    _dump_raw(filename, data)
    logger.info("Added %s rule to %s", rule.type.value, filename)


def update_rule(filename: Union[str, Path], rule: MaintenanceRule) -> None:
    """Replace the rule with the same maintenance type in a fleet YAML file."""
    if not rule.has_interval:
        raise ValueError("At least one of everyKm or everyMonths must be provided")

    data = _load_raw(filename)
    rules = data.get("rules") or []
    rules[_find_rule_index(rules, rule.type)] = _rule_to_dict(rule)
    _dump_raw(filename, data)
    logger.info("Updated %s rule in %s", rule.type.value, filename)


def delete_rule(filename: Union[str, Path], type: Union[MaintenanceType, str]) -> None:
    """Remove the rule for a maintenance type from a fleet YAML file."""
    type = MaintenanceType(type)
    data = _load_raw(filename)
    rules = data.get("rules") or []
    del rules[_find_rule_index(rules, type)]
    _dump_raw(filename, data)
    logger.info("Deleted %s rule from %s", type.value, filename)


def save_maintenance_log(
    filename: Union[str, Path], entry: MaintenanceLogEntry
) -> None:
    """Append a maintenance log entry to a fleet YAML file."""
    data = _load_raw(filename)
    if data.get("maintenanceLogs") is None:
        data["maintenanceLogs"] = []

    data["maintenanceLogs"].append(_log_entry_to_dict(entry))
    _dump_raw(filename, data)
    logger.info(
        "Logged %s maintenance for truck %s in %s",
        entry.type.value,
        entry.truck_id,
        filename,
    )


def save_current_km(filename: Union[str, Path], truck_id: str, km: float) -> None:
    """Update a truck's odometer reading in a fleet YAML file."""
    data = _load_raw(filename)
    for truck in data.get("trucks") or []:
        if truck.get("id") == truck_id:
            truck["currentKm"] = km
            break
    else:
        raise KeyError(f"Truck '{truck_id}' not found")

    _dump_raw(filename, data)
    logger.info("Set truck %s to %s km in %s", truck_id, km, filename)

"""YAML loading utilities for fleet history snapshots.

A snapshot stands in for the history store: the vehicle registry plus each
vehicle's inspections and maintenance, nested under the vehicle.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from dateutil.parser import isoparse
from jsonschema import ValidationError, validate

from .config import HealthConfig
from .engine import evaluate
from .health import FleetHealthResult
from .records import ChecklistItem, InspectionRecord, MaintenanceRecord
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.yaml"


class SnapshotError(Exception):
    """Raised when a snapshot file can't be read, parsed or validated."""


class FleetSnapshot:
    """Fleet registry and history, grouped per vehicle."""

    def __init__(
        self,
        vehicles: List[Vehicle],
        inspections_by_vehicle: Optional[Dict[str, List[InspectionRecord]]] = None,
        maintenance_by_vehicle: Optional[Dict[str, List[MaintenanceRecord]]] = None,
        as_of: Optional[datetime] = None,
    ):
        self.vehicles = vehicles
        self.inspections_by_vehicle = inspections_by_vehicle or {}
        self.maintenance_by_vehicle = maintenance_by_vehicle or {}
        self.as_of = as_of

    def get_vehicle(self, code_or_id: str) -> Optional[Vehicle]:
        """Find a vehicle by code (case-insensitive) or id."""
        for vehicle in self.vehicles:
            if vehicle.code.lower() == code_or_id.lower() or vehicle.id == code_or_id:
                return vehicle
        return None

    def evaluate(
        self, config: Optional[HealthConfig] = None, now: Optional[datetime] = None
    ) -> FleetHealthResult:
        """
        Run the engine over this snapshot.

        Evaluation time is, in order: the explicit ``now``, the snapshot's
        asOf, the current UTC time.
        """
        if now is None:
            now = self.as_of or datetime.now(timezone.utc)
        return evaluate(
            self.vehicles,
            self.inspections_by_vehicle,
            self.maintenance_by_vehicle,
            now,
            config,
        )


def load_schema() -> dict:
    """Load the snapshot JSON schema."""
    with open(SCHEMA_PATH) as f:
        return yaml.safe_load(f)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime string."""
    return isoparse(value.strip())


def _parse_checklist(dct: Optional[Dict[str, Any]]) -> Dict[str, ChecklistItem]:
    checklist = {}
    for key, item in (dct or {}).items():
        passed = item["passed"] if "passed" in item else item["ok"]
        checklist[key] = ChecklistItem(passed, item.get("remark"))
    return checklist


def _parse_inspection(vehicle_id: str, dct: Dict[str, Any]) -> InspectionRecord:
    return InspectionRecord(
        vehicle_id,
        parse_timestamp(dct["timestamp"]),
        dct.get("odometerKm"),
        dct.get("driver"),
        _parse_checklist(dct.get("checklist")),
    )


def _parse_maintenance(vehicle_id: str, dct: Dict[str, Any]) -> MaintenanceRecord:
    return MaintenanceRecord(
        vehicle_id,
        parse_timestamp(dct["timestamp"]),
        dct.get("odometerKm"),
        dct.get("supplier"),
        dct.get("amount"),
        dct.get("remarks"),
    )


def parse_snapshot(data: Dict[str, Any]) -> FleetSnapshot:
    """Build a FleetSnapshot from already-validated snapshot data."""
    vehicles = []
    inspections_by_vehicle = {}
    maintenance_by_vehicle = {}
    for dct in data.get("vehicles") or []:
        vehicle = Vehicle(
            str(dct["id"]),
            dct["code"],
            dct.get("brand"),
            dct.get("model"),
            dct.get("active", True),
        )
        vehicles.append(vehicle)
        inspections_by_vehicle[vehicle.id] = [
            _parse_inspection(vehicle.id, i) for i in dct.get("inspections") or []
        ]
        maintenance_by_vehicle[vehicle.id] = [
            _parse_maintenance(vehicle.id, m) for m in dct.get("maintenance") or []
        ]

    as_of = parse_timestamp(data["asOf"]) if data.get("asOf") else None
    return FleetSnapshot(vehicles, inspections_by_vehicle, maintenance_by_vehicle, as_of)


def read_snapshot_data(filename: Union[str, Path]) -> Any:
    """
    Read a snapshot file into plain JSON-compatible data.

    YAML timestamps are normalized to strings, so quoted and unquoted dates
    validate alike. Raises OSError or yaml.YAMLError; undecodable bytes
    surface as a YAMLError from the reader.
    """
    with open(filename, "rb") as fp:
        raw = yaml.load(fp, Loader=yaml.SafeLoader)
    return json.loads(json.dumps(raw, default=str))


def load_snapshot(filename: Union[str, Path]) -> FleetSnapshot:
    """Load and validate a fleet snapshot from a YAML file."""
    try:
        data = read_snapshot_data(filename)
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot {filename}: {e}") from e
    except yaml.YAMLError as e:
        raise SnapshotError(f"YAML parse error in {filename}: {e}") from e

    try:
        validate(instance=data, schema=load_schema())
    except ValidationError as e:
        where = ".".join(str(p) for p in e.path)
        suffix = f" at {where}" if where else ""
        raise SnapshotError(f"Invalid snapshot {filename}: {e.message}{suffix}") from e

    try:
        snapshot = parse_snapshot(data)
    except ValueError as e:
        raise SnapshotError(f"Invalid timestamp in {filename}: {e}") from e

    logger.info(
        "Loaded %s: %d vehicles, %d inspections, %d maintenance records",
        filename,
        len(snapshot.vehicles),
        sum(len(v) for v in snapshot.inspections_by_vehicle.values()),
        sum(len(v) for v in snapshot.maintenance_by_vehicle.values()),
    )
    return snapshot

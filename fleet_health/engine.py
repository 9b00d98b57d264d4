"""
Fleet health evaluation.

Combines the issue detectors into a per-vehicle verdict and folds the
verdicts into a fleet summary. Everything here is a pure function of the
history handed in: no I/O, no caching, no state kept between calls.
"""

import logging
from collections import Counter
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, TypeVar

from .calculations import baseline_interval, days_between, format_iso, to_datetime
from .config import HealthConfig
from .detectors import (
    detect_inspection_timing,
    detect_recent_failures,
    detect_recurring_failures,
    detect_service_overdue,
)
from .health import FleetHealthResult, FleetSummary, VehicleHealth
from .issue import Issue
from .records import InspectionRecord, MaintenanceRecord, Timestamp
from .status import HealthStatus, Severity
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

R = TypeVar("R", InspectionRecord, MaintenanceRecord)


def aggregate(issues: Iterable[Issue]) -> Tuple[HealthStatus, List[Issue]]:
    """
    Merge a vehicle's issues into an overall status and an ordered list.

    Critical issues come first, then warnings; each group keeps the order
    the detectors emitted them in.
    """
    ordered = sorted(issues, key=lambda i: i.severity.value)
    if any(i.severity == Severity.CRITICAL for i in ordered):
        return HealthStatus.CRITICAL, ordered
    if any(i.severity == Severity.WARNING for i in ordered):
        return HealthStatus.WARNING, ordered
    return HealthStatus.OK, ordered


def _newest_first(records: Optional[Iterable[R]]) -> List[R]:
    """Sort records newest first, dropping any without a timestamp."""
    dated = [r for r in records or [] if r.timestamp is not None]
    return sorted(dated, key=lambda r: to_datetime(r.timestamp), reverse=True)


def evaluate_vehicle(
    vehicle: Vehicle,
    inspections: Optional[Sequence[InspectionRecord]],
    maintenance: Optional[Sequence[MaintenanceRecord]],
    now: Timestamp,
    config: Optional[HealthConfig] = None,
) -> VehicleHealth:
    """
    Compute the health verdict for a single vehicle.

    A vehicle with no inspections and no maintenance skips every detector
    and is NO_DATA: a clean verdict can't be asserted from nothing.
    """
    config = config or HealthConfig()
    inspections = _newest_first(inspections)
    maintenance = _newest_first(maintenance)

    health = VehicleHealth(
        vehicle_id=vehicle.id,
        vehicle_code=vehicle.code,
        vehicle_brand=vehicle.brand,
        vehicle_model=vehicle.model,
        status=HealthStatus.NO_DATA,
    )
    if not inspections and not maintenance:
        logger.debug("Vehicle %s: no history", vehicle.code)
        return health

    latest_inspection = inspections[0] if inspections else None
    latest_maintenance = maintenance[0] if maintenance else None
    if latest_inspection is not None:
        health.days_since_inspection = days_between(latest_inspection.timestamp, now)
        health.last_inspection_date = format_iso(latest_inspection.timestamp)
    if latest_maintenance is not None:
        health.days_since_maintenance = days_between(latest_maintenance.timestamp, now)
        health.last_maintenance_date = format_iso(latest_maintenance.timestamp)

    baseline = baseline_interval(i.timestamp for i in inspections)

    issues: List[Issue] = []
    issues += detect_inspection_timing(
        baseline,
        health.days_since_inspection,
        config,
        has_maintenance=latest_maintenance is not None,
    )
    issues += detect_recurring_failures(inspections, config)
    issues += detect_recent_failures(inspections, now, config)
    issues += detect_service_overdue(
        latest_inspection, latest_maintenance, health.days_since_maintenance, config
    )

    health.status, health.issues = aggregate(issues)
    logger.debug(
        "Vehicle %s: %s (%d issues, baseline %s)",
        vehicle.code,
        health.status.label,
        len(health.issues),
        f"{baseline:.1f}d" if baseline is not None else "none",
    )
    return health


def summarize(verdicts: Iterable[VehicleHealth]) -> FleetSummary:
    """Fold per-vehicle verdicts into fleet-wide counts."""
    counts = Counter(v.status for v in verdicts)
    return FleetSummary(
        critical=counts[HealthStatus.CRITICAL],
        warning=counts[HealthStatus.WARNING],
        ok=counts[HealthStatus.OK],
        no_data=counts[HealthStatus.NO_DATA],
    )


def _sort_key(health: VehicleHealth):
    # Most urgent first, then most issues, then by code
    return (health.status.value, -len(health.issues), health.vehicle_code)


def evaluate(
    vehicles: Iterable[Vehicle],
    inspections_by_vehicle: Optional[Mapping[str, Sequence[InspectionRecord]]],
    maintenance_by_vehicle: Optional[Mapping[str, Sequence[MaintenanceRecord]]],
    now: Timestamp,
    config: Optional[HealthConfig] = None,
) -> FleetHealthResult:
    """
    Evaluate every active vehicle and summarize the fleet.

    Args:
        vehicles: Fleet registry; inactive vehicles are ignored
        inspections_by_vehicle: Vehicle id -> inspection history
        maintenance_by_vehicle: Vehicle id -> maintenance history
        now: Evaluation time; all "days since" values are relative to it
        config: Detector thresholds (defaults if omitted)
    """
    config = config or HealthConfig()
    inspections_by_vehicle = inspections_by_vehicle or {}
    maintenance_by_vehicle = maintenance_by_vehicle or {}

    verdicts = [
        evaluate_vehicle(
            v,
            inspections_by_vehicle.get(v.id),
            maintenance_by_vehicle.get(v.id),
            now,
            config,
        )
        for v in vehicles
        if v.active
    ]
    verdicts.sort(key=_sort_key)

    summary = summarize(verdicts)
    logger.info(
        "Fleet health: %d critical, %d warning, %d ok, %d no data (%d active)",
        summary.critical,
        summary.warning,
        summary.ok,
        summary.no_data,
        summary.total_active,
    )
    return FleetHealthResult(vehicles=verdicts, summary=summary)

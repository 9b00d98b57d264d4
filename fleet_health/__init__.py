"""
Fleet health engine.

This package turns vehicle inspection and maintenance history into a
per-vehicle health verdict and a fleet-wide summary:
- Severity / HealthStatus: Issue severity and overall verdict levels
- Vehicle: Fleet registry identification
- InspectionRecord / MaintenanceRecord: History records
- Issue: A single detected problem
- VehicleHealth / FleetSummary / FleetHealthResult: Engine output
- HealthConfig: Detector thresholds
- evaluate: Evaluate a whole fleet
"""

from .status import Severity, HealthStatus
from .vehicle import Vehicle
from .records import ChecklistItem, InspectionRecord, MaintenanceRecord
from .issue import Issue
from .health import VehicleHealth, FleetSummary, FleetHealthResult
from .config import (
    ConfigError,
    HealthConfig,
    SAFETY_CRITICAL_ITEM_KEYS,
    load_config,
)
from .calculations import baseline_interval, days_between, item_label
from .detectors import (
    detect_inspection_timing,
    detect_recurring_failures,
    detect_recent_failures,
    detect_service_overdue,
)
from .engine import aggregate, evaluate, evaluate_vehicle, summarize
from .loader import FleetSnapshot, SnapshotError, load_snapshot

__all__ = [
    "Severity",
    "HealthStatus",
    "Vehicle",
    "ChecklistItem",
    "InspectionRecord",
    "MaintenanceRecord",
    "Issue",
    "VehicleHealth",
    "FleetSummary",
    "FleetHealthResult",
    "ConfigError",
    "HealthConfig",
    "SAFETY_CRITICAL_ITEM_KEYS",
    "load_config",
    "baseline_interval",
    "days_between",
    "item_label",
    "detect_inspection_timing",
    "detect_recurring_failures",
    "detect_recent_failures",
    "detect_service_overdue",
    "aggregate",
    "evaluate",
    "evaluate_vehicle",
    "summarize",
    "FleetSnapshot",
    "SnapshotError",
    "load_snapshot",
]

"""Engine output types: per-vehicle verdicts and the fleet summary.

These are ephemeral. They are recomputed on every evaluation and never
persisted; ``to_dict`` gives the camelCase shape the hosting layer serves.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .issue import Issue
from .status import HealthStatus, Severity


@dataclass
class VehicleHealth:
    """Health verdict for one active vehicle."""

    vehicle_id: str
    vehicle_code: str
    status: HealthStatus
    vehicle_brand: Optional[str] = None
    vehicle_model: Optional[str] = None
    issues: List[Issue] = field(default_factory=list)
    days_since_inspection: Optional[int] = None
    days_since_maintenance: Optional[int] = None
    last_inspection_date: Optional[str] = None
    last_maintenance_date: Optional[str] = None

    def count(self, severity: Severity) -> int:
        """Number of issues with the given severity."""
        return sum(1 for i in self.issues if i.severity == severity)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vehicleId": self.vehicle_id,
            "vehicleCode": self.vehicle_code,
            "vehicleBrand": self.vehicle_brand,
            "vehicleModel": self.vehicle_model,
            "status": self.status.label,
            "issues": [i.to_dict() for i in self.issues],
            "lastInspectionDate": self.last_inspection_date,
            "lastMaintenanceDate": self.last_maintenance_date,
            "daysSinceInspection": self.days_since_inspection,
            "daysSinceMaintenance": self.days_since_maintenance,
        }


@dataclass
class FleetSummary:
    """Fleet-wide verdict counts. Every active vehicle is in exactly one bucket."""

    critical: int = 0
    warning: int = 0
    ok: int = 0
    no_data: int = 0

    @property
    def total_active(self) -> int:
        return self.critical + self.warning + self.ok + self.no_data

    def to_dict(self) -> Dict[str, int]:
        return {
            "critical": self.critical,
            "warning": self.warning,
            "ok": self.ok,
            "noData": self.no_data,
            "totalActive": self.total_active,
        }


@dataclass
class FleetHealthResult:
    """Result of one evaluation cycle."""

    vehicles: List[VehicleHealth]
    summary: FleetSummary

    def get(self, vehicle_id: str) -> Optional[VehicleHealth]:
        """Find a vehicle verdict by vehicle id."""
        for health in self.vehicles:
            if health.vehicle_id == vehicle_id:
                return health
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "vehicles": [v.to_dict() for v in self.vehicles],
        }

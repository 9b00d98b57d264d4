"""Inspection and maintenance record classes."""

from datetime import date, datetime
from typing import Dict, Iterator, Optional, Tuple, Union

Timestamp = Union[datetime, date]


class ChecklistItem:
    """Outcome of a single checklist criterion within an inspection."""

    def __init__(self, passed: bool, remark: Optional[str] = None):
        self.passed = bool(passed)
        # Upstream requires a remark on failure; tolerate its absence
        self.remark = remark or ""

    def __repr__(self) -> str:
        return f"ChecklistItem(passed={self.passed!r}, remark={self.remark!r})"


class InspectionRecord:
    """A driver inspection with its pass/fail checklist."""

    def __init__(
        self,
        vehicle_id: str,
        timestamp: Timestamp,
        odometer_km: Optional[float] = None,
        driver: Optional[str] = None,
        checklist: Optional[Dict[str, ChecklistItem]] = None,
    ):
        self.vehicle_id = vehicle_id
        self.timestamp = timestamp
        self.odometer_km = odometer_km
        self.driver = driver
        self.checklist = checklist or {}

    def failed_items(self) -> Iterator[Tuple[str, str]]:
        """Yield (item_key, remark) for every failed checklist item."""
        for key, item in self.checklist.items():
            if item is None or item.passed:
                continue
            yield key, item.remark or ""


class MaintenanceRecord:
    """A record of maintenance performed (a service bill)."""

    def __init__(
        self,
        vehicle_id: str,
        timestamp: Timestamp,
        odometer_km: Optional[float] = None,
        supplier: Optional[str] = None,
        amount: Optional[float] = None,
        remarks: Optional[str] = None,
    ):
        self.vehicle_id = vehicle_id
        self.timestamp = timestamp
        self.odometer_km = odometer_km
        self.supplier = supplier
        self.amount = amount
        self.remarks = remarks

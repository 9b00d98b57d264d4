"""Severity and health status enums."""

from enum import Enum


class Severity(Enum):
    """Issue severity. Lower value = more urgent."""

    CRITICAL = 1
    WARNING = 2

    @property
    def label(self) -> str:
        return self.name.lower()


class HealthStatus(Enum):
    """Overall vehicle verdict. Lower value = more urgent."""

    CRITICAL = 1
    WARNING = 2
    OK = 3
    NO_DATA = 4  # No inspections and no maintenance, can't be judged

    @property
    def label(self) -> str:
        """Wire name used in serialized output (ok, warning, critical, noData)."""
        if self is HealthStatus.NO_DATA:
            return "noData"
        return self.name.lower()

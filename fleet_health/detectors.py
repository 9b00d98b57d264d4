"""
Issue detectors.

Each detector looks at one aspect of a single vehicle's history and returns
a list of issues (possibly empty). Detectors are independent of each other;
severity policy across detectors lives in the engine.

Inspection lists are expected newest first.
"""

from typing import Dict, List, Optional, Sequence

from .calculations import days_between, format_short_date, item_label
from .config import HealthConfig
from .issue import Issue
from .records import InspectionRecord, MaintenanceRecord, Timestamp
from .status import Severity

TIMING = "timing"
RECURRING = "recurring"
RECENT = "recent"
SERVICE = "service"


def detect_inspection_timing(
    baseline: Optional[float],
    days_since_inspection: Optional[int],
    config: HealthConfig,
    has_maintenance: bool = False,
) -> List[Issue]:
    """
    Flag a vehicle whose last inspection is late relative to its own cadence.

    No fixed deadline is used. With fewer than two inspections there is no
    baseline and nothing is reported (insufficient history, not overdue).
    """
    if days_since_inspection is None:
        if config.flag_missing_records and has_maintenance:
            return [Issue(Severity.WARNING, "No inspection on record yet", TIMING)]
        return []
    if baseline is None:
        return []

    days = days_since_inspection
    if days > baseline * config.inspection_critical_multiplier:
        return [
            Issue(
                Severity.CRITICAL,
                f"No inspection in {days} days, typically every ~{baseline:.0f} days",
                TIMING,
            )
        ]
    if days > baseline * config.inspection_warning_multiplier:
        return [
            Issue(
                Severity.WARNING,
                f"Due for inspection ({days} days since last, "
                f"typical interval ~{baseline:.0f} days)",
                TIMING,
            )
        ]
    return []


def detect_recurring_failures(
    inspections: Sequence[InspectionRecord], config: HealthConfig
) -> List[Issue]:
    """
    Flag checklist items that keep failing.

    Looks at the last N inspections (N = recurring_failure_window) and does
    not fire with fewer. Each item failed in at least the threshold number
    of them is a separate warning.
    """
    window = config.recurring_failure_window
    if len(inspections) < window:
        return []

    counts: Dict[str, int] = {}
    for inspection in inspections[:window]:
        # A key can appear once per checklist, so this counts inspections
        for key, _ in inspection.failed_items():
            counts[key] = counts.get(key, 0) + 1

    issues = []
    for key, count in counts.items():
        if count < config.recurring_failure_threshold:
            continue
        label = item_label(key, config.item_labels)
        issues.append(
            Issue(
                Severity.WARNING,
                f"{label} failed {count} of last {window} inspections",
                RECURRING,
                item_key=key,
            )
        )
    return issues


def detect_recent_failures(
    inspections: Sequence[InspectionRecord],
    now: Timestamp,
    config: HealthConfig,
) -> List[Issue]:
    """
    Flag every item failed in an inspection within the recent window.

    Safety-critical items are always critical; everything else is a warning.
    An item failed in several recent inspections is reported once, with the
    most recent remark.
    """
    seen: Dict[str, Issue] = {}
    for inspection in inspections:
        if days_between(inspection.timestamp, now) > config.recent_failure_window_days:
            continue
        for key, remark in inspection.failed_items():
            if key in seen:
                continue
            severity = (
                Severity.CRITICAL
                if key in config.safety_critical_item_keys
                else Severity.WARNING
            )
            label = item_label(key, config.item_labels)
            text = f"{label} failed on {format_short_date(inspection.timestamp)}"
            if remark:
                text += f": {remark}"
            seen[key] = Issue(severity, text, RECENT, item_key=key)
    return list(seen.values())


def detect_service_overdue(
    latest_inspection: Optional[InspectionRecord],
    latest_maintenance: Optional[MaintenanceRecord],
    days_since_maintenance: Optional[int],
    config: HealthConfig,
) -> List[Issue]:
    """
    Flag overdue service, by elapsed time and by odometer distance.

    The two sub-checks are independent and may both fire. The elapsed-time
    check emits at most one issue, at the highest severity reached. The
    odometer check needs both records and both readings.
    """
    issues = []

    if latest_maintenance is None:
        if config.flag_missing_records and latest_inspection is not None:
            issues.append(Issue(Severity.WARNING, "No service on record yet", SERVICE))
        return issues

    if days_since_maintenance is not None:
        if days_since_maintenance >= config.service_critical_days:
            issues.append(
                Issue(
                    Severity.CRITICAL,
                    f"No service in {days_since_maintenance} days",
                    SERVICE,
                )
            )
        elif days_since_maintenance >= config.service_warning_days:
            issues.append(
                Issue(
                    Severity.WARNING,
                    f"Last service {days_since_maintenance} days ago "
                    f"({format_short_date(latest_maintenance.timestamp)})",
                    SERVICE,
                )
            )

    if latest_inspection is None:
        return issues
    inspection_km = latest_inspection.odometer_km
    service_km = latest_maintenance.odometer_km
    if inspection_km is None or service_km is None:
        return issues
    gap = inspection_km - service_km
    if gap >= config.odometer_gap_warning_km:
        issues.append(
            Issue(
                Severity.WARNING,
                f"service may be due — {gap:.0f} km since last service",
                SERVICE,
            )
        )
    return issues

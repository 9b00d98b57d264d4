"""Helper functions for date arithmetic, interval baselines and labels."""

import re
from datetime import date, datetime, timezone
from typing import Iterable, Mapping, Optional

from .records import Timestamp

SECONDS_PER_DAY = 86400


def to_datetime(value: Timestamp) -> datetime:
    """
    Normalize a timestamp to a naive UTC datetime.

    - Aware datetimes are converted to UTC and stripped of tzinfo
    - Naive datetimes are assumed to already be UTC
    - Plain dates become midnight of that day
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    return datetime(value.year, value.month, value.day)


def days_between(earlier: Timestamp, later: Timestamp) -> int:
    """Whole days elapsed from earlier to later (floored)."""
    delta = to_datetime(later) - to_datetime(earlier)
    return int(delta.total_seconds() // SECONDS_PER_DAY)


def baseline_interval(timestamps: Iterable[Timestamp]) -> Optional[float]:
    """
    Mean gap in days between consecutive inspections.

    Returns None with fewer than 2 timestamps (no baseline can be computed).
    Each gap is measured in whole days; the mean itself is not rounded.
    """
    ordered = sorted(to_datetime(t) for t in timestamps)
    if len(ordered) < 2:
        return None
    total = sum(days_between(a, b) for a, b in zip(ordered, ordered[1:]))
    return total / (len(ordered) - 1)


def format_short_date(value: Timestamp) -> str:
    """Format a timestamp as e.g. '5 Mar'."""
    dt = to_datetime(value)
    return f"{dt.day} {dt:%b}"


def format_iso(value: Optional[Timestamp]) -> Optional[str]:
    """ISO-8601 string of a timestamp in UTC, or None."""
    if value is None:
        return None
    return to_datetime(value).isoformat()


def humanize_key(key: str) -> str:
    """Turn a checklist key like 'brake_pads' into 'Brake pads'."""
    text = key.replace("_", " ").strip()
    return text[:1].upper() + text[1:]


def item_label(key: str, labels: Mapping[str, str]) -> str:
    """Display label for a checklist item, without parenthetical detail."""
    label = labels.get(key)
    if not label:
        return humanize_key(key)
    return re.sub(r"\s*\(.*\)", "", label)

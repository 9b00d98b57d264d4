"""Engine configuration: detector thresholds and checklist metadata."""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Union

import yaml
from jsonschema import Draft7Validator


class ConfigError(ValueError):
    """Raised when a configuration file or value is invalid."""


# Failure of any of these is critical even on a single, non-recurring failure
SAFETY_CRITICAL_ITEM_KEYS: FrozenSet[str] = frozenset(
    {
        "brakes",
        "brake_lights",
        "foot_brake",
        "brake_performance",
        "tyres",
        "seat_belts",
        "dashboard_warning",
        "steering",
    }
)

# Standard inspection checklist
DEFAULT_ITEM_LABELS: Dict[str, str] = {
    "body_condition": "Body condition (scratches, dents, rust)",
    "windshield": "Windshield and windows (cracks, chips)",
    "mirrors": "Mirrors (side & rearview)",
    "headlights": "Headlights / Tail lights / Indicators",
    "brake_lights": "Brake lights",
    "wipers": "Wipers and washer fluid",
    "doors": "Doors, locks, and handles",
    "tyres": "Tyres (tread depth, condition)",
    "battery": "Battery",
    "seat_belts": "Seat belts condition",
    "dashboard_warning": "Dashboard warning lights",
    "speedometer": "Speedometer functioning",
    "fuel_gauge": "Fuel gauge working",
    "interior_lights": "Interior lights",
    "handbrake": "Handbrake functioning",
    "foot_brake": "Foot brake response",
    "dry_cleaning": "Dry Cleaning",
    "ac_heater": "Air conditioning / Heater",
    "engine_start": "Smooth engine start",
    "steering": "Steering alignment",
    "brake_performance": "Brake performance",
    "suspension": "Suspension condition",
    "unusual_noises": "Unusual noises",
    "gear_shifting": "Gear shifting smooth",
    "clutch": "Clutch",
    "wheel_alignment": "Wheel alignment",
    "horn": "Horn",
    "music_system": "Music system",
}

# camelCase file key -> HealthConfig attribute
_FILE_KEYS = {
    "inspectionWarningMultiplier": "inspection_warning_multiplier",
    "inspectionCriticalMultiplier": "inspection_critical_multiplier",
    "recurringFailureWindow": "recurring_failure_window",
    "recurringFailureThreshold": "recurring_failure_threshold",
    "recentFailureWindowDays": "recent_failure_window_days",
    "safetyCriticalItemKeys": "safety_critical_item_keys",
    "serviceWarningDays": "service_warning_days",
    "serviceCriticalDays": "service_critical_days",
    "odometerGapWarningKm": "odometer_gap_warning_km",
    "flagMissingRecords": "flag_missing_records",
    "itemLabels": "item_labels",
}

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "inspectionWarningMultiplier": {"type": "number", "exclusiveMinimum": 0},
        "inspectionCriticalMultiplier": {"type": "number", "exclusiveMinimum": 0},
        "recurringFailureWindow": {"type": "integer", "minimum": 1},
        "recurringFailureThreshold": {"type": "integer", "minimum": 1},
        "recentFailureWindowDays": {"type": "number", "minimum": 0},
        "safetyCriticalItemKeys": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
            "uniqueItems": True,
        },
        "serviceWarningDays": {"type": "number", "minimum": 0},
        "serviceCriticalDays": {"type": "number", "minimum": 0},
        "odometerGapWarningKm": {"type": "number", "exclusiveMinimum": 0},
        "flagMissingRecords": {"type": "boolean"},
        "itemLabels": {
            "type": "object",
            "additionalProperties": {"type": "string"},
        },
    },
}


@dataclass(frozen=True)
class HealthConfig:
    """
    Tunable policy for the issue detectors.

    The inspection multipliers are calibrated defaults, not structural
    constants: a vehicle is flagged relative to its own average interval.
    """

    inspection_warning_multiplier: float = 1.5
    inspection_critical_multiplier: float = 2.0
    recurring_failure_window: int = 3
    recurring_failure_threshold: int = 2
    recent_failure_window_days: float = 10
    safety_critical_item_keys: FrozenSet[str] = SAFETY_CRITICAL_ITEM_KEYS
    service_warning_days: float = 90
    service_critical_days: float = 180
    odometer_gap_warning_km: float = 5000
    flag_missing_records: bool = False
    item_labels: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_ITEM_LABELS), hash=False
    )

    def __post_init__(self):
        # Accept any iterable of keys but store an immutable set
        object.__setattr__(
            self, "safety_critical_item_keys", frozenset(self.safety_critical_item_keys)
        )
        if self.inspection_critical_multiplier < self.inspection_warning_multiplier:
            raise ConfigError(
                "inspectionCriticalMultiplier must not be below inspectionWarningMultiplier"
            )
        if self.service_critical_days < self.service_warning_days:
            raise ConfigError("serviceCriticalDays must not be below serviceWarningDays")
        if self.recurring_failure_threshold > self.recurring_failure_window:
            raise ConfigError(
                "recurringFailureThreshold must not exceed recurringFailureWindow"
            )

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "HealthConfig":
        """
        Build a config from camelCase option names.

        Unknown keys and wrong types raise ConfigError. Absent keys keep
        their defaults; itemLabels is merged over the standard checklist.
        """
        data = data or {}
        errors = sorted(
            Draft7Validator(CONFIG_SCHEMA).iter_errors(data), key=lambda e: list(e.path)
        )
        if errors:
            first = errors[0]
            where = ".".join(str(p) for p in first.path)
            suffix = f" (at {where})" if where else ""
            raise ConfigError(f"Invalid configuration: {first.message}{suffix}")

        kwargs: Dict[str, Any] = {}
        for file_key, attr in _FILE_KEYS.items():
            if file_key in data:
                kwargs[attr] = data[file_key]
        if "item_labels" in kwargs:
            kwargs["item_labels"] = {**DEFAULT_ITEM_LABELS, **kwargs["item_labels"]}
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to camelCase option names (inverse of from_dict)."""
        by_attr = {attr: key for key, attr in _FILE_KEYS.items()}
        d: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, frozenset):
                value = sorted(value)
            elif isinstance(value, Mapping):
                value = dict(value)
            d[by_attr[f.name]] = value
        return d


def load_config(filename: Union[str, Path, None]) -> HealthConfig:
    """Load a HealthConfig from a YAML file. None gives the defaults."""
    if filename is None:
        return HealthConfig()
    try:
        with open(filename, "rb") as fp:
            data = yaml.load(fp, Loader=yaml.SafeLoader)
    except OSError as e:
        raise ConfigError(f"Cannot read config {filename}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error in {filename}: {e}") from e
    if data is not None and not isinstance(data, dict):
        raise ConfigError(f"Config {filename} must be a mapping")
    return HealthConfig.from_dict(data)

#!/usr/bin/env python3
"""Tests for HealthConfig and config file loading."""

import pytest

from fleet_health import ConfigError, HealthConfig, SAFETY_CRITICAL_ITEM_KEYS, load_config


class TestHealthConfigDefaults:
    """Default thresholds."""

    def test_defaults(self):
        config = HealthConfig()
        assert config.inspection_warning_multiplier == 1.5
        assert config.inspection_critical_multiplier == 2.0
        assert config.recurring_failure_window == 3
        assert config.recurring_failure_threshold == 2
        assert config.recent_failure_window_days == 10
        assert config.service_warning_days == 90
        assert config.service_critical_days == 180
        assert config.odometer_gap_warning_km == 5000
        assert config.flag_missing_records is False

    def test_safety_critical_set(self):
        keys = HealthConfig().safety_critical_item_keys
        assert keys == SAFETY_CRITICAL_ITEM_KEYS
        for key in ("brakes", "tyres", "seat_belts", "dashboard_warning"):
            assert key in keys
        assert "wipers" not in keys

    def test_safety_keys_accept_list(self):
        config = HealthConfig(safety_critical_item_keys=["horn", "horn"])
        assert config.safety_critical_item_keys == frozenset({"horn"})

    def test_hashable(self):
        assert hash(HealthConfig()) == hash(HealthConfig())
        assert len({HealthConfig(), HealthConfig(service_warning_days=60)}) == 2


class TestHealthConfigConsistency:
    """Inconsistent thresholds are rejected."""

    def test_critical_multiplier_below_warning(self):
        with pytest.raises(ConfigError):
            HealthConfig(inspection_warning_multiplier=2.0, inspection_critical_multiplier=1.5)

    def test_service_critical_below_warning(self):
        with pytest.raises(ConfigError):
            HealthConfig(service_warning_days=200, service_critical_days=180)

    def test_threshold_above_window(self):
        with pytest.raises(ConfigError):
            HealthConfig(recurring_failure_window=2, recurring_failure_threshold=3)


class TestFromDict:
    """Tests for HealthConfig.from_dict."""

    def test_none_gives_defaults(self):
        assert HealthConfig.from_dict(None) == HealthConfig()

    def test_camel_case_keys(self):
        config = HealthConfig.from_dict(
            {
                "inspectionWarningMultiplier": 1.4,
                "inspectionCriticalMultiplier": 2.1,
                "serviceWarningDays": 60,
                "odometerGapWarningKm": 7500,
                "flagMissingRecords": True,
                "safetyCriticalItemKeys": ["brakes"],
            }
        )
        assert config.inspection_warning_multiplier == 1.4
        assert config.inspection_critical_multiplier == 2.1
        assert config.service_warning_days == 60
        assert config.service_critical_days == 180
        assert config.odometer_gap_warning_km == 7500
        assert config.flag_missing_records is True
        assert config.safety_critical_item_keys == frozenset({"brakes"})

    def test_item_labels_merged_over_defaults(self):
        config = HealthConfig.from_dict({"itemLabels": {"brake_pads": "Brake pads"}})
        assert config.item_labels["brake_pads"] == "Brake pads"
        assert config.item_labels["horn"] == "Horn"

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigError, match="Invalid configuration"):
            HealthConfig.from_dict({"inspectionMultiplier": 1.5})

    def test_wrong_type_rejected(self):
        with pytest.raises(ConfigError):
            HealthConfig.from_dict({"recurringFailureWindow": "three"})

    def test_non_positive_multiplier_rejected(self):
        with pytest.raises(ConfigError):
            HealthConfig.from_dict({"inspectionWarningMultiplier": 0})

    def test_to_dict_round_trip(self):
        config = HealthConfig(service_warning_days=60)
        assert HealthConfig.from_dict(config.to_dict()) == config


class TestLoadConfig:
    """Tests for load_config."""

    def test_none_gives_defaults(self):
        assert load_config(None) == HealthConfig()

    def test_loads_yaml_file(self, tmp_path):
        path = tmp_path / "health.yaml"
        path.write_text("serviceWarningDays: 60\nrecentFailureWindowDays: 7\n")
        config = load_config(path)
        assert config.service_warning_days == 60
        assert config.recent_failure_window_days == 7

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "health.yaml"
        path.write_text("")
        assert load_config(path) == HealthConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read config"):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "health.yaml"
        path.write_text("serviceWarningDays: [unclosed\n")
        with pytest.raises(ConfigError, match="YAML parse error"):
            load_config(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "health.yaml"
        path.write_bytes(b"serviceWarningDays: \xff\xfe\n")
        with pytest.raises(ConfigError, match="YAML parse error"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "health.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_config(path)

#!/usr/bin/env python3
"""Tests for Severity and HealthStatus enums."""

from fleet_health import HealthStatus, Severity


class TestSeverity:
    """Tests for Severity ordering and labels."""

    def test_urgency_ordering(self):
        """Lower value = more urgent."""
        assert Severity.CRITICAL.value < Severity.WARNING.value

    def test_labels(self):
        assert Severity.CRITICAL.label == "critical"
        assert Severity.WARNING.label == "warning"


class TestHealthStatus:
    """Tests for HealthStatus ordering and labels."""

    def test_urgency_ordering(self):
        assert HealthStatus.CRITICAL.value < HealthStatus.WARNING.value
        assert HealthStatus.WARNING.value < HealthStatus.OK.value
        assert HealthStatus.OK.value < HealthStatus.NO_DATA.value

    def test_labels(self):
        assert HealthStatus.CRITICAL.label == "critical"
        assert HealthStatus.WARNING.label == "warning"
        assert HealthStatus.OK.label == "ok"
        assert HealthStatus.NO_DATA.label == "noData"

#!/usr/bin/env python3
"""Tests for validate_fleet schema validation."""

from fleet_health.loader import load_schema
from validate_fleet import main, validate_snapshot_file

VALID = """
asOf: 2025-10-18T09:00:00Z
vehicles:
  - id: v1
    code: HR38AF-4440
    inspections:
      - timestamp: 2025-10-15T08:30:00Z
        odometerKm: 55000
        checklist:
          brakes: {passed: false, remark: Soft pedal}
    maintenance:
      - timestamp: '2025-06-20'
        odometerKm: 49000
"""


class TestValidateSnapshotFile:
    """Tests for validate_snapshot_file function."""

    def test_valid_returns_no_errors(self, tmp_path):
        path = tmp_path / "valid.yaml"
        path.write_text(VALID)
        assert validate_snapshot_file(path, load_schema()) == []

    def test_missing_required_field_returns_errors(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
vehicles:
  - id: v1
    # code missing
""")
        errors = validate_snapshot_file(path, load_schema())
        assert len(errors) >= 1
        assert any("Schema validation" in e for e in errors)

    def test_unknown_field_reported_with_path(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
vehicles:
  - id: v1
    code: A
    inspections:
      - timestamp: '2025-10-15'
        odometer: 55000
""")
        errors = validate_snapshot_file(path, load_schema())
        assert any("Schema validation" in e for e in errors)
        assert any("at path: vehicles.0.inspections.0" in e for e in errors)

    def test_checklist_item_needs_outcome(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
vehicles:
  - id: v1
    code: A
    inspections:
      - timestamp: '2025-10-15'
        checklist:
          horn: {remark: loud}
""")
        assert validate_snapshot_file(path, load_schema()) != []

    def test_invalid_yaml_returns_parse_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("vehicles: [unclosed\n")
        errors = validate_snapshot_file(path, load_schema())
        assert any("YAML" in e for e in errors)

    def test_invalid_utf8_returns_parse_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_bytes(b"vehicles:\n  - id: v1\n    code: \xff\xfe\n")
        errors = validate_snapshot_file(path, load_schema())
        assert any("YAML" in e for e in errors)

    def test_nonexistent_file_returns_errors(self, tmp_path):
        errors = validate_snapshot_file(tmp_path / "does_not_exist.yaml", load_schema())
        assert len(errors) >= 1
        assert any("Error" in e for e in errors)


class TestMain:
    """Tests for the validate_fleet command line."""

    def test_all_valid(self, tmp_path, capsys):
        path = tmp_path / "fleet.yaml"
        path.write_text(VALID)
        assert main([str(path)]) == 0
        assert "OK: fleet.yaml" in capsys.readouterr().out

    def test_reports_failures(self, tmp_path, capsys):
        good = tmp_path / "a.yaml"
        good.write_text(VALID)
        bad = tmp_path / "b.yaml"
        bad.write_text("vehicles: 3\n")
        assert main([str(good), str(bad)]) == 1
        out = capsys.readouterr().out
        assert "OK: a.yaml" in out
        assert "FAIL: b.yaml" in out

    def test_undecodable_file_reported_as_failure(self, tmp_path, capsys):
        path = tmp_path / "garbled.yaml"
        path.write_bytes(b"code: \xff\xfe\n")
        assert main([str(path)]) == 1
        assert "FAIL: garbled.yaml" in capsys.readouterr().out

    def test_sample_snapshots_valid(self, capsys):
        assert main([]) == 0

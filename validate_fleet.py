#!/usr/bin/env python3
"""Validate fleet snapshot YAML files against the schema."""
import argparse
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from fleet_health.loader import load_schema, read_snapshot_data

SNAPSHOTS_DIR = Path(__file__).parent / "snapshots"


def validate_snapshot_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single snapshot YAML file. Returns list of errors."""
    errors = []
    try:
        validate(instance=read_snapshot_data(filepath), schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def main(argv=None):
    """Validate the given snapshot files, or all files in snapshots/."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("files", nargs="*", type=Path, help="Snapshot YAML files")
    args = parser.parse_args(argv)

    schema = load_schema()
    yaml_files = list(args.files)
    if not yaml_files:
        if not SNAPSHOTS_DIR.exists():
            print(f"Error: snapshots directory not found: {SNAPSHOTS_DIR}")
            return 1
        yaml_files = list(SNAPSHOTS_DIR.glob("*.yaml")) + list(
            SNAPSHOTS_DIR.glob("*.yml")
        )

    if not yaml_files:
        print(f"Warning: No YAML files found in {SNAPSHOTS_DIR}")
        return 0

    all_valid = True
    for filepath in sorted(yaml_files):
        errors = validate_snapshot_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())

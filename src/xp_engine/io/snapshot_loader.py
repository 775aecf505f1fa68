"""
JSON / YAML snapshot files → typed engine inputs.

The CLI reads its inputs from snapshot files exported by the tracker:

Attendance snapshot (either form)::

    [{"date": "2026-03-01", "time_spent_minutes": 30, "goal_minutes": 30}, ...]
    {"goal_type": "daily", "records": [...]}

Skills snapshot::

    {"skills": [{"id": "s1", "name": "Python", "xp": 1200, "area": "Programming"}],
     "characteristics": [{"id": "c1", "name": "Grit", "xp": 300,
                          "contributes_to": {"Discipline": 0.5}}]}

Files ending in .yaml / .yml are parsed with PyYAML, anything else as JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from ..core.models import AttendanceRecord, CharacteristicContributionData, SkillContributionData
from .serializers import (
    ValidationError,
    dict_to_attendance_record,
    dict_to_characteristic,
    dict_to_skill,
)

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def load_document(path: str | Path) -> Any:
    """
    Parse a JSON or YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If the file cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")

    with open(path, "r", encoding="utf-8") as fh:
        try:
            if path.suffix.lower() in _YAML_SUFFIXES:
                return yaml.safe_load(fh)
            return json.load(fh)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValidationError(f"Could not parse {path.name}: {e}") from e


def _as_list(value: Any, what: str) -> list[dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise ValidationError(f"'{what}' must be a list of objects")
    return value


def load_attendance(path: str | Path) -> tuple[list[AttendanceRecord], str | None]:
    """
    Load attendance records and an optional goal type from a snapshot.

    Returns:
        (records, goal_type) where goal_type is None if the file has none
    """
    doc = load_document(path)
    goal_type: str | None = None

    if isinstance(doc, dict):
        goal_type = doc.get("goal_type")
        raw = _as_list(doc.get("records"), "records")
    else:
        raw = _as_list(doc, "records")

    if goal_type is not None and goal_type not in ("daily", "weekly"):
        raise ValidationError(f"Invalid goal_type: {goal_type}. Must be 'daily' or 'weekly'")

    records = [dict_to_attendance_record(r) for r in raw]
    return records, goal_type


def load_contribution_snapshot(
    path: str | Path,
    strict_areas: bool = False,
) -> tuple[list[SkillContributionData], list[CharacteristicContributionData]]:
    """
    Load the skills and characteristics that feed core metrics.

    Args:
        path: Snapshot file
        strict_areas: Reject skills whose area is not a known skill area

    Returns:
        (skills, characteristics)
    """
    doc = load_document(path)
    if not isinstance(doc, dict):
        raise ValidationError("Skills snapshot must be an object with 'skills' / 'characteristics'")

    skills = [dict_to_skill(d, strict_area=strict_areas) for d in _as_list(doc.get("skills"), "skills")]
    characteristics = [
        dict_to_characteristic(d) for d in _as_list(doc.get("characteristics"), "characteristics")
    ]
    return skills, characteristics

"""
JSON serialization for engine inputs and results.

Handles conversion between dataclasses and JSON-compatible dicts, and
validates data arriving from outside the engine.
"""

import re
from datetime import datetime
from typing import Any

from ..core.metric_catalog import is_core_metric, is_known_area, validate_contribution_weights
from ..core.models import (
    AttendanceRecord,
    CharacteristicContributionData,
    ComputedCoreMetric,
    ConsistencyResult,
    ExerciseSet,
    LevelProgress,
    MetricContributionDetail,
    SkillContributionData,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is a non-negative number.

    Raises:
        ValidationError: If value is negative or not a number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_positive(value: int | float, name: str) -> int | float:
    """
    Validate that a value is a positive number.

    Raises:
        ValidationError: If value is not positive
    """
    validate_non_negative(value, name)
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def validate_area(area: str | None) -> str | None:
    """
    Reject skill areas outside the known set.

    None is allowed (the engine then uses its fallback mapping).

    Raises:
        ValidationError: If area is not a known skill area
    """
    if area is not None and not is_known_area(area):
        raise ValidationError(f"Unknown skill area: {area!r}")
    return area


def validate_weights(weights: Any, name: str) -> dict[str, float]:
    """
    Validate a metric → weight mapping.

    Every key must be a core metric, every weight in [0, 1], and the sum
    may not exceed 1 (within floating-point tolerance).

    Raises:
        ValidationError: On unknown metrics, bad weights or an excessive sum
    """
    if not isinstance(weights, dict):
        raise ValidationError(f"{name}: contributes_to must be a mapping")

    result: dict[str, float] = {}
    for metric, weight in weights.items():
        if not is_core_metric(metric):
            raise ValidationError(f"{name}: unknown core metric {metric!r}")
        validate_non_negative(weight, f"{name}: weight for {metric}")
        if weight > 1:
            raise ValidationError(f"{name}: weight for {metric} exceeds 1, got {weight}")
        result[metric] = float(weight)

    if not validate_contribution_weights(result):
        raise ValidationError(f"{name}: contribution weights sum above 1")
    return result


def _require(data: dict[str, Any], key: str, *aliases: str) -> Any:
    for k in (key, *aliases):
        if k in data:
            return data[k]
    raise ValidationError(f"Missing required field: {key}")


def exercise_set_to_dict(exercise_set: ExerciseSet) -> dict[str, Any]:
    return {"reps": exercise_set.reps, "weight_kg": exercise_set.weight_kg}


def dict_to_exercise_set(data: dict[str, Any]) -> ExerciseSet:
    """
    Convert dict to ExerciseSet.

    Raises:
        ValidationError: If reps or weight are invalid
    """
    reps = validate_non_negative(_require(data, "reps"), "reps")
    if isinstance(reps, float) and not reps.is_integer():
        raise ValidationError(f"reps must be a whole number, got {reps}")
    weight = data.get("weight_kg")
    if weight is not None:
        weight = float(validate_non_negative(weight, "weight_kg"))
    return ExerciseSet(reps=int(reps), weight_kg=weight)


def attendance_record_to_dict(record: AttendanceRecord) -> dict[str, Any]:
    return {
        "date": record.date,
        "time_spent_minutes": record.time_spent_minutes,
        "goal_minutes": record.goal_minutes,
    }


def dict_to_attendance_record(data: dict[str, Any]) -> AttendanceRecord:
    """
    Convert dict to AttendanceRecord.

    Accepts snake_case keys and the camelCase keys used by the web client.

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    return AttendanceRecord(
        date=validate_date(str(_require(data, "date"))),
        time_spent_minutes=float(
            validate_non_negative(
                _require(data, "time_spent_minutes", "timeSpentMinutes"),
                "time_spent_minutes",
            )
        ),
        goal_minutes=float(
            validate_positive(_require(data, "goal_minutes", "goalMinutes"), "goal_minutes")
        ),
    )


def dict_to_skill(data: dict[str, Any], strict_area: bool = False) -> SkillContributionData:
    """
    Convert dict to SkillContributionData.

    Args:
        data: Raw skill dict
        strict_area: Reject areas outside the known set

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    skill_id = str(_require(data, "id"))
    area = data.get("area")
    if strict_area:
        validate_area(area)

    raw_weights = data.get("contributes_to", data.get("contributesTo"))
    weights = None if raw_weights is None else validate_weights(raw_weights, f"skill {skill_id}")

    return SkillContributionData(
        id=skill_id,
        name=str(_require(data, "name")),
        xp=float(validate_non_negative(_require(data, "xp"), "xp")),
        area=area,
        contributes_to=weights,
    )


def dict_to_characteristic(data: dict[str, Any]) -> CharacteristicContributionData:
    """
    Convert dict to CharacteristicContributionData.

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    char_id = str(_require(data, "id"))
    raw_weights = data.get("contributes_to", data.get("contributesTo"))
    weights = (
        None if raw_weights is None else validate_weights(raw_weights, f"characteristic {char_id}")
    )
    return CharacteristicContributionData(
        id=char_id,
        name=str(_require(data, "name")),
        xp=float(validate_non_negative(_require(data, "xp"), "xp")),
        contributes_to=weights,
    )


def consistency_result_to_dict(result: ConsistencyResult) -> dict[str, Any]:
    return {
        "current_streak": result.current_streak,
        "best_streak": result.best_streak,
        "consistency_state": result.consistency_state,
    }


def level_progress_to_dict(progress: LevelProgress) -> dict[str, Any]:
    return {
        "current_level": progress.current_level,
        "current_level_xp": progress.current_level_xp,
        "next_level_xp": progress.next_level_xp,
        "xp_in_current_level": progress.xp_in_current_level,
        "xp_needed_for_next_level": progress.xp_needed_for_next_level,
        "progress_percentage": round(progress.progress_percentage, 2),
    }


def contribution_to_dict(detail: MetricContributionDetail) -> dict[str, Any]:
    return {
        "source_id": detail.source_id,
        "source_name": detail.source_name,
        "source_xp": detail.source_xp,
        "weight": detail.weight,
        "contributed_xp": detail.contributed_xp,
    }


def computed_metric_to_dict(metric: ComputedCoreMetric) -> dict[str, Any]:
    """Convert ComputedCoreMetric to a JSON-compatible dict."""
    return {
        "id": metric.id,
        "name": metric.name,
        "xp": metric.xp,
        "level": metric.level,
        "contributions": [contribution_to_dict(c) for c in metric.contributions],
    }


def parse_sets_string(sets_str: str) -> list[ExerciseSet]:
    """
    Parse a comma-separated sets string.

    Per-set formats:
        reps@kg     e.g. "10@100"   canonical
        reps kg     e.g. "10 100"   space-separated
        reps        e.g. "12"       bare int, unloaded

    Args:
        sets_str: Sets string to parse

    Returns:
        List of ExerciseSet

    Raises:
        ValidationError: If format is invalid
    """
    if not sets_str or not sets_str.strip():
        raise ValidationError("Sets string cannot be empty")

    sets: list[ExerciseSet] = []
    parts = [p.strip() for p in sets_str.split(",") if p.strip()]

    for part in parts:
        match_at = re.match(r"^(\d+)\s*@\s*(\d+\.?\d*)(?:\s*kg)?$", part)
        match_sp = re.match(r"^(\d+)\s+(\d+\.?\d*)$", part)
        match_bare = re.match(r"^(\d+)$", part)

        if match_at:
            sets.append(ExerciseSet(reps=int(match_at.group(1)), weight_kg=float(match_at.group(2))))
        elif match_sp:
            sets.append(ExerciseSet(reps=int(match_sp.group(1)), weight_kg=float(match_sp.group(2))))
        elif match_bare:
            sets.append(ExerciseSet(reps=int(match_bare.group(1)), weight_kg=None))
        else:
            raise ValidationError(
                f"Invalid set format: '{part}'.\n"
                f"Use: reps@weight (e.g. 10@100), reps weight (e.g. 10 100), or reps (e.g. 12)."
            )

    return sets

"""
The fixed universe of 18 core metrics and skill-area default mappings.

Core metrics receive XP from skills and characteristics; they are never
edited directly. A skill created without explicit weights contributes
according to the default table for its area.
"""

from typing import Mapping

from .config import (
    CORE_METRIC_NAMES,
    DEFAULT_AREA_MAPPINGS,
    FALLBACK_AREA_MAPPING,
    SKILL_AREAS,
    WEIGHT_SUM_TOLERANCE,
)
from .models import CoreMetricName


def is_core_metric(name: str) -> bool:
    return name in CORE_METRIC_NAMES


def is_known_area(area: str | None) -> bool:
    """True if area is one of the known skill areas."""
    return area in SKILL_AREAS


def get_default_mapping(area: str | None) -> dict[CoreMetricName, float]:
    """
    Default metric weights for a skill area.

    Unknown or missing areas fall back to Learning/Discipline/Productivity.

    Args:
        area: Skill area, may be None

    Returns:
        A fresh dict of metric name → weight
    """
    if area is not None and area in DEFAULT_AREA_MAPPINGS:
        return dict(DEFAULT_AREA_MAPPINGS[area])
    return dict(FALLBACK_AREA_MAPPING)


def _weight_sum(contributions: Mapping[str, float | None]) -> float:
    return sum(weight or 0.0 for weight in contributions.values())


def validate_contribution_weights(contributions: Mapping[str, float | None]) -> bool:
    """
    Check that weights sum to at most 1 (within WEIGHT_SUM_TOLERANCE).

    The aggregator does not enforce this; callers accepting a mapping from
    a user may check it first.
    """
    return _weight_sum(contributions) <= WEIGHT_SUM_TOLERANCE


def normalize_contribution_weights(
    contributions: Mapping[str, float | None],
) -> dict[CoreMetricName, float]:
    """
    Rescale weights to sum to 1 when they exceed the tolerance.

    Mappings already within tolerance are copied unchanged, with missing
    weights replaced by 0.
    """
    total = _weight_sum(contributions)
    if total <= WEIGHT_SUM_TOLERANCE:
        return {name: weight or 0.0 for name, weight in contributions.items()}
    return {name: (weight or 0.0) / total for name, weight in contributions.items()}

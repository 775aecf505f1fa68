"""
Core metric XP aggregation.

    metric.xp = Σ floor(source.xp × weight)

over every skill and characteristic with a positive weight for the metric.
Metric XP is recomputed from the full current snapshot on every call, so a
removed skill leaves no trace in any metric. The radar chart reads only
these computed values.
"""

import math
from typing import Mapping, Sequence

from .config import CORE_METRIC_NAMES, MAX_METRIC_XP
from .levels import calculate_level_from_xp
from .metric_catalog import get_default_mapping
from .models import (
    CharacteristicContributionData,
    ComputedCoreMetric,
    CoreMetricName,
    MetricContributionDetail,
    RadarPoint,
    SkillContributionData,
    SkillMetricContribution,
)


def _skill_mapping(skill: SkillContributionData) -> Mapping[str, float]:
    if skill.contributes_to is not None:
        return skill.contributes_to
    return get_default_mapping(skill.area)


def _contribution(
    source_id: str,
    source_name: str,
    source_xp: float,
    weight: float,
) -> MetricContributionDetail:
    return MetricContributionDetail(
        source_id=source_id,
        source_name=source_name,
        source_xp=source_xp,
        weight=weight,
        contributed_xp=math.floor(source_xp * weight),
    )


def compute_core_metric_xp(
    metric_name: CoreMetricName,
    skills: Sequence[SkillContributionData],
    characteristics: Sequence[CharacteristicContributionData] = (),
) -> ComputedCoreMetric:
    """
    Compute one core metric from all contributing skills and characteristics.

    Each contribution is floored to an integer before summing.

    Args:
        metric_name: Core metric to compute
        skills: Current skills
        characteristics: Current characteristics

    Returns:
        ComputedCoreMetric with XP, level and per-source contributions
    """
    contributions: list[MetricContributionDetail] = []

    for skill in skills:
        weight = _skill_mapping(skill).get(metric_name) or 0.0
        if weight > 0:
            contributions.append(_contribution(skill.id, skill.name, skill.xp, weight))

    for char in characteristics:
        weight = (char.contributes_to or {}).get(metric_name) or 0.0
        if weight > 0:
            contributions.append(_contribution(char.id, char.name, char.xp, weight))

    total_xp = sum(c.contributed_xp for c in contributions)

    return ComputedCoreMetric(
        id=metric_name,
        name=metric_name,
        xp=total_xp,
        level=calculate_level_from_xp(total_xp),
        contributions=contributions,
    )


def compute_all_core_metrics(
    skills: Sequence[SkillContributionData],
    characteristics: Sequence[CharacteristicContributionData] = (),
) -> list[ComputedCoreMetric]:
    """
    Compute all 18 core metrics, in catalog order.

    Every metric is present even with no contributors.
    """
    return [
        compute_core_metric_xp(name, skills, characteristics)
        for name in CORE_METRIC_NAMES
    ]


def get_radar_chart_data(metrics: Sequence[ComputedCoreMetric]) -> list[RadarPoint]:
    """Radar axes, with values clamped to MAX_METRIC_XP for display."""
    return [RadarPoint(label=m.name, value=min(m.xp, MAX_METRIC_XP)) for m in metrics]


def get_skill_metric_contributions(
    skill: SkillContributionData,
) -> list[SkillMetricContribution]:
    """
    Metrics a single skill feeds, heaviest weight first.

    Args:
        skill: Skill with explicit or area-derived weights

    Returns:
        List of SkillMetricContribution sorted by weight descending
    """
    contributions = [
        SkillMetricContribution(
            metric_name=name,
            weight=weight,
            contributed_xp=math.floor(skill.xp * weight),
        )
        for name, weight in _skill_mapping(skill).items()
        if weight and weight > 0
    ]
    return sorted(contributions, key=lambda c: c.weight, reverse=True)


def get_metric_contributors(
    metrics: Sequence[ComputedCoreMetric],
    metric_name: CoreMetricName,
) -> list[MetricContributionDetail]:
    """Contributions recorded on a computed metric, or [] if not present."""
    for metric in metrics:
        if metric.name == metric_name:
            return list(metric.contributions)
    return []


def calculate_balance_score(metrics: Sequence[ComputedCoreMetric]) -> int:
    """
    Score how evenly XP is spread across metrics, 0-100.

    Uses the coefficient of variation of display-clamped XP values:
    score = 100 * (1 - stddev / mean), clipped to [0, 100]. All-equal
    metrics score 100, all-zero metrics score 0.
    """
    if not metrics:
        return 0

    values = [min(m.xp, MAX_METRIC_XP) for m in metrics]
    if max(values) == 0:
        return 0

    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    cv = math.sqrt(variance) / mean if mean > 0 else 0.0

    score = max(0.0, min(100.0, 100 * (1 - cv)))
    return math.floor(score + 0.5)


def get_total_metric_xp(metrics: Sequence[ComputedCoreMetric]) -> int:
    return sum(m.xp for m in metrics)


def get_average_metric_level(metrics: Sequence[ComputedCoreMetric]) -> int:
    """Mean level across metrics, rounded; 1 when there are none."""
    if not metrics:
        return 1
    return math.floor(sum(m.level for m in metrics) / len(metrics) + 0.5)

"""
Data models for xp-engine.

Value types passed into and returned from the calculation functions.
Numeric fields are not validated here: the engine normalizes negative or
missing values itself, and strict checks live in io.serializers.
"""

from dataclasses import dataclass, field
from typing import Literal

ConsistencyState = Literal["consistent", "partial", "broken", "neutral"]
GoalType = Literal["daily", "weekly"]
# Same names, same order as config.CORE_METRIC_NAMES
CoreMetricName = Literal[
    "Programming",
    "Learning",
    "Erudition",
    "Discipline",
    "Productivity",
    "Foreign Language",
    "Fitness",
    "Drawing",
    "Hygiene",
    "Reading",
    "Communication",
    "Cooking",
    "Meditation",
    "Swimming",
    "Running",
    "Math",
    "Music",
    "Cleaning",
]


@dataclass(frozen=True)
class ExerciseSet:
    """A single logged set. weight_kg is None for unloaded work; reps None counts as 0."""

    reps: int | None
    weight_kg: float | None = None


@dataclass(frozen=True)
class WorkoutData:
    """Loggable facts of one completed session at scoring time."""

    sets: tuple[ExerciseSet, ...] | list[ExerciseSet]
    duration_minutes: int
    is_edited: bool = False


@dataclass(frozen=True)
class FatigueData:
    """Self-reported fatigue, 0 (fresh) to 100 (exhausted)."""

    fatigue_level: float = 0.0


@dataclass(frozen=True)
class ConsistencyData:
    """Training frequency in the current week."""

    sessions_this_week: int = 0


@dataclass(frozen=True)
class BodyweightData:
    bodyweight_kg: float | None = None


@dataclass(frozen=True)
class AttendanceRecord:
    """
    Time spent on a skill or characteristic on one calendar day.

    The goal counts as met when time_spent_minutes >= goal_minutes.
    """

    date: str  # ISO format: YYYY-MM-DD
    time_spent_minutes: float
    goal_minutes: float


@dataclass(frozen=True)
class ConsistencyResult:
    """Streaks and state derived from a set of attendance records."""

    current_streak: int
    best_streak: int
    consistency_state: ConsistencyState


@dataclass(frozen=True)
class LevelProgress:
    """
    Position of an XP total within its level.

    progress_percentage is not clamped.
    """

    current_level: int
    current_level_xp: int
    next_level_xp: int
    xp_in_current_level: float
    xp_needed_for_next_level: int
    progress_percentage: float


@dataclass
class SkillContributionData:
    """
    A skill as seen by the metric aggregator.

    When contributes_to is None, the default mapping for `area` applies.
    """

    id: str
    name: str
    xp: float
    area: str | None = None
    contributes_to: dict[str, float] | None = None


@dataclass
class CharacteristicContributionData:
    """A characteristic; a missing contributes_to means no contributions."""

    id: str
    name: str
    xp: float
    contributes_to: dict[str, float] | None = None


@dataclass(frozen=True)
class MetricContributionDetail:
    """One source's share of a core metric, kept for traceability."""

    source_id: str
    source_name: str
    source_xp: float
    weight: float
    contributed_xp: int


@dataclass
class ComputedCoreMetric:
    """A core metric whose XP was derived from the current skill set."""

    id: CoreMetricName
    name: CoreMetricName
    xp: int
    level: int
    contributions: list[MetricContributionDetail] = field(default_factory=list)


@dataclass(frozen=True)
class RadarPoint:
    label: str
    value: int


@dataclass(frozen=True)
class SkillMetricContribution:
    metric_name: CoreMetricName
    weight: float
    contributed_xp: int

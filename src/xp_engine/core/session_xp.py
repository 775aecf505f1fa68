"""
Session XP scoring for a completed workout.

XP represents training stress: it scales with load moved relative to
bodyweight, work density and time under training, then is adjusted for
fatigue, weekly frequency and retroactive edits.

    base = (sqrt(volume / BW) * 1.5 + density * 0.4 + minutes * 0.3) * intensity
    xp   = clip(round(base * F_fatigue * F_frequency * F_edit), 20, 120)

Sessions shorter than 20 minutes or without any loaded volume score 0.
All functions are pure; degenerate input never raises.
"""

import math
from typing import Sequence

from .config import (
    BODYWEIGHT_MAX_KG,
    BODYWEIGHT_MIN_KG,
    DEFAULT_BODYWEIGHT_KG,
    DENSITY_COEFF,
    DURATION_COEFF,
    EDIT_PENALTY,
    FATIGUE_BUCKETS,
    FATIGUE_EXHAUSTED_MODIFIER,
    INTENSITY_BUCKETS,
    INTENSITY_HIGH_REP_FACTOR,
    MIN_SESSION_MINUTES,
    SESSION_XP_MAX,
    SESSION_XP_MIN,
    VOLUME_COEFF,
    WEEKLY_FREQUENCY_BONUS,
    XP_HEAVY,
    XP_NORMAL,
    XP_VERY_INTENSE,
)
from .models import (
    BodyweightData,
    ConsistencyData,
    ExerciseSet,
    FatigueData,
    WorkoutData,
)


def _non_negative(value: float | None) -> float:
    if value is None or value < 0:
        return 0.0
    return float(value)


def calculate_intensity_factor(reps: int) -> float:
    """
    Approximate intensity from the rep count of a set.

    Lower reps imply a heavier load relative to max:
    <=5 → 1.3, 6-8 → 1.15, 9-12 → 1.0, >12 → 0.9

    Args:
        reps: Reps performed in the set

    Returns:
        Intensity factor
    """
    for upper_reps, factor in INTENSITY_BUCKETS:
        if reps <= upper_reps:
            return factor
    return INTENSITY_HIGH_REP_FACTOR


def calculate_total_volume(sets: Sequence[ExerciseSet]) -> float:
    """
    Total volume = Σ(weight_kg × reps).

    Missing or negative weights and reps count as 0.
    """
    return sum(_non_negative(s.weight_kg) * _non_negative(s.reps) for s in sets)


def calculate_average_intensity(sets: Sequence[ExerciseSet]) -> float:
    """
    Mean intensity factor over all sets, 1.0 for an empty session.

    Missing or negative reps count as 0.
    """
    if not sets:
        return 1.0
    return sum(calculate_intensity_factor(int(_non_negative(s.reps))) for s in sets) / len(sets)


def calculate_work_density(total_volume: float, duration_minutes: float) -> float:
    """
    Work density = volume / minutes.

    Args:
        total_volume: Session volume in kg
        duration_minutes: Session length

    Returns:
        kg per minute, or 0 for non-positive durations
    """
    if duration_minutes <= 0:
        return 0.0
    return total_volume / duration_minutes


def clamp_bodyweight(bodyweight_kg: float | None) -> float:
    """
    Bound bodyweight to [50, 120] kg; missing or non-positive → 70 kg.

    Keeps implausible entries from inflating relative-volume scoring.
    """
    if bodyweight_kg is None or bodyweight_kg <= 0:
        return DEFAULT_BODYWEIGHT_KG
    return max(BODYWEIGHT_MIN_KG, min(BODYWEIGHT_MAX_KG, float(bodyweight_kg)))


def calculate_base_xp(
    total_volume: float,
    work_density: float,
    duration_minutes: float,
    intensity_factor: float,
    bodyweight_kg: float | None = None,
) -> float:
    """
    Calculate unbounded base XP from effort.

    The square root compresses returns on sheer volume so that no single
    component (load, density or duration) dominates the score.

    Args:
        total_volume: Session volume in kg
        work_density: kg per minute
        duration_minutes: Session length
        intensity_factor: Mean intensity factor of the session
        bodyweight_kg: Lifter bodyweight (clamped, defaulted when missing)

    Returns:
        Base XP before modifiers
    """
    bw = clamp_bodyweight(bodyweight_kg)
    relative_volume = _non_negative(total_volume) / bw

    volume_component = math.sqrt(relative_volume) * VOLUME_COEFF
    density_component = work_density * DENSITY_COEFF
    duration_component = duration_minutes * DURATION_COEFF

    return (volume_component + density_component + duration_component) * intensity_factor


def get_fatigue_modifier(fatigue_level: float) -> float:
    """
    Training efficiency given current fatigue.

    <40 → 1.0, <60 → 0.85, <80 → 0.7, otherwise 0.55
    """
    for upper_fatigue, modifier in FATIGUE_BUCKETS:
        if fatigue_level < upper_fatigue:
            return modifier
    return FATIGUE_EXHAUSTED_MODIFIER


def get_consistency_multiplier(sessions_this_week: int) -> float:
    """
    Weekly frequency bonus.

    >=5 → 1.25, 4 → 1.2, 3 → 1.1, otherwise 1.0
    """
    for min_sessions, multiplier in WEEKLY_FREQUENCY_BONUS:
        if sessions_this_week >= min_sessions:
            return multiplier
    return 1.0


def apply_xp_bounds(xp: float) -> int:
    """Round half up and clamp to [20, 120]."""
    rounded = math.floor(xp + 0.5)
    return max(SESSION_XP_MIN, min(SESSION_XP_MAX, rounded))


def calculate_session_xp(
    workout: WorkoutData,
    fatigue: FatigueData | None = None,
    consistency: ConsistencyData | None = None,
    bodyweight: BodyweightData | None = None,
) -> int:
    """
    Calculate the XP award for one completed session.

    Args:
        workout: Logged sets, duration and edit flag
        fatigue: Fatigue context (defaults to fresh)
        consistency: Sessions already trained this week (defaults to 0)
        bodyweight: Lifter bodyweight (defaults to 70 kg)

    Returns:
        0 if the session is too short or has no volume, else XP in [20, 120]
    """
    if fatigue is None:
        fatigue = FatigueData()
    if consistency is None:
        consistency = ConsistencyData()
    if bodyweight is None:
        bodyweight = BodyweightData()

    if workout.duration_minutes < MIN_SESSION_MINUTES:
        return 0

    total_volume = calculate_total_volume(workout.sets)
    if total_volume <= 0:
        return 0

    intensity = calculate_average_intensity(workout.sets)
    density = calculate_work_density(total_volume, workout.duration_minutes)

    xp = calculate_base_xp(
        total_volume,
        density,
        workout.duration_minutes,
        intensity,
        bodyweight.bodyweight_kg,
    )
    xp *= get_fatigue_modifier(fatigue.fatigue_level)
    xp *= get_consistency_multiplier(consistency.sessions_this_week)

    if workout.is_edited:
        xp *= EDIT_PENALTY

    return apply_xp_bounds(xp)


def classify_workout(xp: int) -> str:
    """Label a session by its XP award."""
    if xp >= XP_VERY_INTENSE:
        return "Very intense session"
    if xp >= XP_HEAVY:
        return "Heavy compound day"
    if xp >= XP_NORMAL:
        return "Normal hypertrophy"
    return "Light / recovery"


def get_system_message(xp: int) -> str:
    """Flavour text shown after a session is logged."""
    if xp >= XP_VERY_INTENSE:
        return "Exceptional training stress detected. Maximum adaptation stimulus achieved."
    if xp >= XP_HEAVY:
        return "Significant training load registered. Adaptation in progress."
    if xp >= XP_NORMAL:
        return "Training stress registered. Adaptation in progress."
    return "Recovery session logged. Maintaining baseline adaptation."

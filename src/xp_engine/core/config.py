"""
Configuration constants for the XP engine.

All adjustable parameters are centralized here for easy tuning.
"""

from typing import Final

# =============================================================================
# SESSION XP: PRECONDITIONS AND BOUNDS
# =============================================================================

MIN_SESSION_MINUTES: Final[int] = 20  # Shorter sessions earn nothing
SESSION_XP_MIN: Final[int] = 20  # Floor for any scored session
SESSION_XP_MAX: Final[int] = 120  # Ceiling for any scored session

# =============================================================================
# SESSION XP: BODYWEIGHT NORMALIZATION
# =============================================================================

DEFAULT_BODYWEIGHT_KG: Final[float] = 70.0
BODYWEIGHT_MIN_KG: Final[float] = 50.0
BODYWEIGHT_MAX_KG: Final[float] = 120.0

# =============================================================================
# SESSION XP: BASE FORMULA WEIGHTS
# =============================================================================

VOLUME_COEFF: Final[float] = 1.5  # Applied to sqrt(relative volume)
DENSITY_COEFF: Final[float] = 0.4  # Applied to kg moved per minute
DURATION_COEFF: Final[float] = 0.3  # Applied to session minutes

# =============================================================================
# SESSION XP: INTENSITY BUCKETS (upper rep bound, factor)
# =============================================================================

INTENSITY_BUCKETS: Final[tuple[tuple[int, float], ...]] = (
    (5, 1.3),
    (8, 1.15),
    (12, 1.0),
)
INTENSITY_HIGH_REP_FACTOR: Final[float] = 0.9  # Anything above 12 reps

# =============================================================================
# SESSION XP: FATIGUE BUCKETS (exclusive upper fatigue bound, modifier)
# =============================================================================

FATIGUE_BUCKETS: Final[tuple[tuple[float, float], ...]] = (
    (40, 1.0),
    (60, 0.85),
    (80, 0.7),
)
FATIGUE_EXHAUSTED_MODIFIER: Final[float] = 0.55  # fatigue >= 80

# =============================================================================
# SESSION XP: WEEKLY FREQUENCY BONUS (min sessions, multiplier)
# =============================================================================

WEEKLY_FREQUENCY_BONUS: Final[tuple[tuple[int, float], ...]] = (
    (5, 1.25),
    (4, 1.2),
    (3, 1.1),
)

EDIT_PENALTY: Final[float] = 0.8  # Applied to retroactively edited logs

# =============================================================================
# SESSION CLASSIFICATION THRESHOLDS
# =============================================================================

XP_VERY_INTENSE: Final[int] = 100
XP_HEAVY: Final[int] = 70
XP_NORMAL: Final[int] = 45

# =============================================================================
# CONSISTENCY
# =============================================================================

RECENT_WINDOW_RECORDS: Final[int] = 7  # Records used for state classification
PARTIAL_THRESHOLD: Final[float] = 0.5  # Fraction of recent goals met for "partial"

STREAK_BONUS_PER_DAY: Final[float] = 0.05
STREAK_MULTIPLIER_CAP: Final[float] = 2.0
PARTIAL_MULTIPLIER: Final[float] = 0.8
BROKEN_MULTIPLIER: Final[float] = 0.5
NEUTRAL_MULTIPLIER: Final[float] = 1.0

# =============================================================================
# LEVELS
# =============================================================================

XP_LEVEL_MULTIPLIER: Final[int] = 100  # Level = floor(sqrt(XP / 100)) + 1

# =============================================================================
# CORE METRICS
# =============================================================================

MAX_METRIC_XP: Final[int] = 2000  # Radar display clamp only

# Floating-point slack allowed when checking that weights sum to <= 1
WEIGHT_SUM_TOLERANCE: Final[float] = 1.0001

CORE_METRIC_NAMES: Final[tuple[str, ...]] = (
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
)

SKILL_AREAS: Final[tuple[str, ...]] = (
    "Programming",
    "Music",
    "Fitness",
    "Art",
    "Languages",
    "Business",
    "Science",
    "Writing",
)

DEFAULT_AREA_MAPPINGS: Final[dict[str, dict[str, float]]] = {
    "Programming": {"Programming": 0.8, "Math": 0.1, "Productivity": 0.1},
    "Music": {"Music": 0.8, "Discipline": 0.1, "Meditation": 0.1},
    "Fitness": {"Fitness": 0.6, "Discipline": 0.2, "Running": 0.1, "Swimming": 0.1},
    "Art": {"Drawing": 0.7, "Meditation": 0.15, "Discipline": 0.15},
    "Languages": {"Foreign Language": 0.7, "Communication": 0.15, "Learning": 0.15},
    "Business": {"Productivity": 0.5, "Communication": 0.3, "Discipline": 0.2},
    "Science": {"Erudition": 0.5, "Math": 0.3, "Learning": 0.2},
    "Writing": {"Communication": 0.5, "Reading": 0.25, "Erudition": 0.25},
}

# Used when a skill has no area or an area outside SKILL_AREAS
FALLBACK_AREA_MAPPING: Final[dict[str, float]] = {
    "Learning": 0.5,
    "Discipline": 0.3,
    "Productivity": 0.2,
}

"""
XP → level projection shared by skills, characteristics and core metrics.

    level = floor(sqrt(XP / 100)) + 1
    XP(level) = (level - 1)^2 * 100

XP thresholds:
    Level 1: 0-99
    Level 2: 100-399
    Level 3: 400-899
    Level 4: 900-1599
    Level 5: 1600-2499
"""

import math

from .config import XP_LEVEL_MULTIPLIER
from .models import LevelProgress


def calculate_level_from_xp(xp: float) -> int:
    """
    Calculate level from an XP total.

    Negative XP is treated as 0. Uses integer square root so that level
    boundaries are exact.

    Args:
        xp: Accumulated XP

    Returns:
        Level, starting at 1
    """
    units = int(max(0.0, xp) // XP_LEVEL_MULTIPLIER)
    return math.isqrt(units) + 1


def calculate_xp_for_level(level: int) -> int:
    """
    XP required to reach a level (inverse of calculate_level_from_xp).

    Args:
        level: Target level (1-based)

    Returns:
        Minimum XP of that level
    """
    return (level - 1) ** 2 * XP_LEVEL_MULTIPLIER


def calculate_xp_for_next_level(current_level: int) -> int:
    """XP threshold of the level after current_level."""
    return calculate_xp_for_level(current_level + 1)


def xp_to_next_level(current_xp: float) -> float:
    """XP still missing before the next level is reached."""
    level = calculate_level_from_xp(current_xp)
    return calculate_xp_for_next_level(level) - current_xp


def calculate_level_progress(xp: float) -> LevelProgress:
    """
    Describe where an XP total sits inside its level.

    Args:
        xp: Accumulated XP

    Returns:
        LevelProgress; progress_percentage = xp_in_level / level_span * 100
    """
    current_level = calculate_level_from_xp(xp)
    current_level_xp = calculate_xp_for_level(current_level)
    next_level_xp = calculate_xp_for_level(current_level + 1)
    xp_in_current_level = xp - current_level_xp
    xp_needed = next_level_xp - current_level_xp

    return LevelProgress(
        current_level=current_level,
        current_level_xp=current_level_xp,
        next_level_xp=next_level_xp,
        xp_in_current_level=xp_in_current_level,
        xp_needed_for_next_level=xp_needed,
        progress_percentage=(xp_in_current_level / xp_needed) * 100,
    )

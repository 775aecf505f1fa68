"""
Streak and consistency-state analysis over attendance records.

A record meets its goal when time spent >= goal minutes. Streaks count
goal-met records on consecutive calendar days, most recent first. The
state is judged on the 7 most recent records only.
"""

import math
from datetime import datetime
from typing import Sequence

from .config import (
    BROKEN_MULTIPLIER,
    NEUTRAL_MULTIPLIER,
    PARTIAL_MULTIPLIER,
    PARTIAL_THRESHOLD,
    RECENT_WINDOW_RECORDS,
    STREAK_BONUS_PER_DAY,
    STREAK_MULTIPLIER_CAP,
)
from .models import AttendanceRecord, ConsistencyResult, ConsistencyState, GoalType


def _parse_date(date_str: str) -> datetime:
    return datetime.strptime(date_str[:10], "%Y-%m-%d")


def is_goal_met(time_spent_minutes: float, goal_minutes: float) -> bool:
    """A day's goal is met at 100% or more, with no tolerance."""
    return time_spent_minutes >= goal_minutes


def calculate_consistency_multiplier(
    current_streak: int,
    consistency_state: ConsistencyState,
) -> float:
    """
    XP multiplier for a streak and state.

    consistent → 1.0 + 0.05 per streak day, capped at 2.0
    partial → 0.8, broken → 0.5, neutral → 1.0

    Args:
        current_streak: Current streak length
        consistency_state: Current consistency state

    Returns:
        Multiplier in [0.5, 2.0]
    """
    if consistency_state == "consistent":
        return min(1.0 + current_streak * STREAK_BONUS_PER_DAY, STREAK_MULTIPLIER_CAP)
    if consistency_state == "partial":
        return PARTIAL_MULTIPLIER
    if consistency_state == "broken":
        return BROKEN_MULTIPLIER
    return NEUTRAL_MULTIPLIER


def calculate_daily_xp(
    base_xp: float,
    time_spent: float,
    goal_minutes: float,
    current_streak: int,
    consistency_state: ConsistencyState,
) -> int:
    """
    XP earned for a single day of practice.

    Partial completion earns partial credit:

        xp = floor(base_xp * min(time_spent / goal, 1.0) * multiplier)

    Args:
        base_xp: Base XP of the skill or characteristic
        time_spent: Minutes spent today
        goal_minutes: Daily goal in minutes (values below 1 are treated as 1)
        current_streak: Current streak length
        consistency_state: Current consistency state

    Returns:
        Non-negative integer XP
    """
    completion_ratio = min(time_spent / max(goal_minutes, 1), 1.0)
    multiplier = calculate_consistency_multiplier(current_streak, consistency_state)
    return max(math.floor(base_xp * completion_ratio * multiplier), 0)


def analyze_consistency(
    records: Sequence[AttendanceRecord],
    goal_type: GoalType = "daily",
) -> ConsistencyResult:
    """
    Compute current streak, best streak and consistency state.

    Records may arrive in any order; they are scanned most recent first.
    A goal-met record extends the running streak when it is exactly one day
    before the previously scanned record. A missed goal ends the running
    streak, and clears the current streak only within the first 7 records
    scanned.

    The state uses the 7 most recent records:
    all met with a live streak → consistent, at least half met → partial,
    otherwise broken.

    Args:
        records: Attendance records, one per date
        goal_type: "daily" or "weekly"; both use the one-day gap rule

    Returns:
        ConsistencyResult
    """
    if not records:
        return ConsistencyResult(current_streak=0, best_streak=0, consistency_state="neutral")

    ordered = sorted(records, key=lambda r: _parse_date(r.date), reverse=True)

    current_streak = 0
    best_streak = 0
    run = 0
    last_date: datetime | None = None

    for i, record in enumerate(ordered):
        record_date = _parse_date(record.date)

        if is_goal_met(record.time_spent_minutes, record.goal_minutes):
            if last_date is None:
                run = 1
                if i == 0:
                    current_streak = 1
            elif (last_date - record_date).days == 1:
                run += 1
                # Still unbroken since the most recent record
                if i == run - 1:
                    current_streak = run
            else:
                best_streak = max(best_streak, run)
                run = 1
        else:
            best_streak = max(best_streak, run)
            run = 0
            if i < RECENT_WINDOW_RECORDS:
                current_streak = 0

        last_date = record_date

    best_streak = max(best_streak, run, current_streak)

    recent = ordered[:RECENT_WINDOW_RECORDS]
    recent_met = sum(1 for r in recent if is_goal_met(r.time_spent_minutes, r.goal_minutes))

    state: ConsistencyState
    if not recent:
        state = "neutral"
    elif recent_met == len(recent) and current_streak > 0:
        state = "consistent"
    elif recent_met / len(recent) >= PARTIAL_THRESHOLD:
        state = "partial"
    else:
        state = "broken"

    return ConsistencyResult(
        current_streak=current_streak,
        best_streak=best_streak,
        consistency_state=state,
    )


def get_consistency_status_message(
    consistency_state: ConsistencyState,
    current_streak: int,
) -> str:
    """Short status label for a consistency state."""
    if consistency_state == "consistent":
        if current_streak >= 30:
            return "🔥 On Fire!"
        if current_streak >= 14:
            return "💪 Crushing It!"
        if current_streak >= 7:
            return "✨ Building Momentum"
        return "✓ Consistent"
    if consistency_state == "partial":
        return "~ Recovering"
    if consistency_state == "broken":
        return "⚠ Inconsistent"
    return "○ Not Started"

"""Consistency command: streaks and state from an attendance snapshot."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.consistency import (
    analyze_consistency,
    calculate_consistency_multiplier,
    calculate_daily_xp,
    get_consistency_status_message,
)
from ...io.serializers import (
    ValidationError,
    attendance_record_to_dict,
    consistency_result_to_dict,
)
from ...io.snapshot_loader import load_attendance
from .. import views
from ..app import JsonOption, app


@app.command()
def consistency(
    attendance_file: Annotated[
        Path,
        typer.Argument(help="Attendance snapshot (JSON or YAML)"),
    ],
    goal_type: Annotated[
        Optional[str],
        typer.Option("--goal-type", "-g", help="daily or weekly (overrides the file)"),
    ] = None,
    base_xp: Annotated[
        Optional[float],
        typer.Option("--base-xp", help="Base XP to score the most recent day with"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Analyze streaks and consistency state.
    """
    if goal_type is not None and goal_type not in ("daily", "weekly"):
        views.print_error(f"Invalid goal type: {goal_type}. Must be 'daily' or 'weekly'")
        raise typer.Exit(1)

    try:
        records, file_goal_type = load_attendance(attendance_file)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    result = analyze_consistency(records, goal_type or file_goal_type or "daily")
    multiplier = calculate_consistency_multiplier(result.current_streak, result.consistency_state)
    status = get_consistency_status_message(result.consistency_state, result.current_streak)

    latest = max(records, key=lambda r: r.date) if records else None
    daily_xp: int | None = None
    if base_xp is not None and latest is not None:
        daily_xp = calculate_daily_xp(
            base_xp,
            latest.time_spent_minutes,
            latest.goal_minutes,
            result.current_streak,
            result.consistency_state,
        )

    if json_out:
        payload = consistency_result_to_dict(result)
        payload["multiplier"] = multiplier
        if latest is not None:
            payload["latest_record"] = attendance_record_to_dict(latest)
        if daily_xp is not None:
            payload["daily_xp"] = daily_xp
        print(json.dumps(payload, indent=2))
        return

    if not records:
        views.print_info("No attendance records yet.")

    views.print_consistency(
        result,
        multiplier,
        status,
        daily_xp=daily_xp,
        minutes_logged=latest.time_spent_minutes if latest is not None else None,
    )

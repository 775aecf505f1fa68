"""Session commands: session-xp, level."""

import json
from typing import Annotated, Optional

import typer

from ...core.levels import calculate_level_progress
from ...core.models import BodyweightData, ConsistencyData, FatigueData, WorkoutData
from ...core.session_xp import (
    calculate_average_intensity,
    calculate_session_xp,
    calculate_total_volume,
    calculate_work_density,
    clamp_bodyweight,
    classify_workout,
    get_consistency_multiplier,
    get_fatigue_modifier,
    get_system_message,
)
from ...io.serializers import (
    ValidationError,
    exercise_set_to_dict,
    level_progress_to_dict,
    parse_sets_string,
)
from .. import views
from ..app import JsonOption, app


@app.command("session-xp")
def session_xp(
    sets: Annotated[
        str,
        typer.Option("--sets", "-s", help="Sets as reps@kg, comma-separated (e.g. 10@100,8@110)"),
    ],
    duration: Annotated[
        int,
        typer.Option("--duration", "-d", help="Session duration in minutes"),
    ],
    fatigue: Annotated[
        float,
        typer.Option("--fatigue", "-f", help="Fatigue level 0-100"),
    ] = 0.0,
    sessions_this_week: Annotated[
        int,
        typer.Option("--sessions-this-week", "-w", help="Sessions trained this week"),
    ] = 0,
    bodyweight: Annotated[
        Optional[float],
        typer.Option("--bodyweight", "-b", help="Bodyweight in kg (default 70)"),
    ] = None,
    edited: Annotated[
        bool,
        typer.Option("--edited", help="Score as a retroactively edited log"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Score one completed workout session.
    """
    try:
        parsed_sets = parse_sets_string(sets)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    workout = WorkoutData(sets=parsed_sets, duration_minutes=duration, is_edited=edited)
    xp = calculate_session_xp(
        workout,
        FatigueData(fatigue_level=fatigue),
        ConsistencyData(sessions_this_week=sessions_this_week),
        BodyweightData(bodyweight_kg=bodyweight),
    )

    volume = calculate_total_volume(parsed_sets)
    breakdown = views.SessionBreakdown(
        total_volume=volume,
        intensity=calculate_average_intensity(parsed_sets),
        work_density=calculate_work_density(volume, duration),
        bodyweight_kg=clamp_bodyweight(bodyweight),
        fatigue_modifier=get_fatigue_modifier(fatigue),
        frequency_multiplier=get_consistency_multiplier(sessions_this_week),
        is_edited=edited,
        xp=xp,
        classification=classify_workout(xp),
        message=get_system_message(xp),
    )

    if json_out:
        print(json.dumps({
            "xp": xp,
            "classification": breakdown.classification,
            "total_volume": round(breakdown.total_volume, 2),
            "intensity_factor": round(breakdown.intensity, 4),
            "work_density": round(breakdown.work_density, 4),
            "bodyweight_kg": breakdown.bodyweight_kg,
            "fatigue_modifier": breakdown.fatigue_modifier,
            "consistency_multiplier": breakdown.frequency_multiplier,
            "is_edited": edited,
            "sets": [exercise_set_to_dict(s) for s in parsed_sets],
        }, indent=2))
        return

    if xp == 0:
        views.print_warning(
            "Session earns no XP (needs at least 20 minutes and some loaded volume)."
        )
        return

    views.console.print()
    views.print_session_breakdown(breakdown)
    views.console.print()


@app.command()
def level(
    xp: Annotated[float, typer.Argument(help="Accumulated XP")],
    json_out: JsonOption = False,
) -> None:
    """
    Show level and progress for an XP total.
    """
    if xp < 0:
        views.print_error(f"XP must be non-negative, got {xp:g}")
        raise typer.Exit(1)

    progress = calculate_level_progress(xp)

    if json_out:
        print(json.dumps(level_progress_to_dict(progress), indent=2))
        return

    views.print_level_progress(xp, progress)

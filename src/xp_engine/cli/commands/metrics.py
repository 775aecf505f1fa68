"""Core metric commands: metrics, contributions."""

import json
from pathlib import Path
from typing import Annotated

import typer

from ...core.metric_aggregator import (
    calculate_balance_score,
    compute_all_core_metrics,
    get_average_metric_level,
    get_radar_chart_data,
    get_skill_metric_contributions,
    get_total_metric_xp,
)
from ...core.models import CharacteristicContributionData, SkillContributionData
from ...io.serializers import ValidationError, computed_metric_to_dict
from ...io.snapshot_loader import load_contribution_snapshot
from .. import views
from ..app import JsonOption, app

SnapshotArgument = Annotated[
    Path,
    typer.Argument(help="Skills/characteristics snapshot (JSON or YAML)"),
]


def _load(
    snapshot_file: Path,
    strict_areas: bool = False,
) -> tuple[list[SkillContributionData], list[CharacteristicContributionData]]:
    try:
        return load_contribution_snapshot(snapshot_file, strict_areas=strict_areas)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)


@app.command()
def metrics(
    snapshot_file: SnapshotArgument,
    strict_areas: Annotated[
        bool,
        typer.Option("--strict-areas", help="Reject skills with an unknown area"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Compute all 18 core metrics and their radar values.
    """
    skills, characteristics = _load(snapshot_file, strict_areas)

    computed = compute_all_core_metrics(skills, characteristics)
    radar = get_radar_chart_data(computed)
    balance = calculate_balance_score(computed)

    if json_out:
        print(json.dumps({
            "metrics": [computed_metric_to_dict(m) for m in computed],
            "radar": [{"label": p.label, "value": p.value} for p in radar],
            "balance_score": balance,
            "total_xp": get_total_metric_xp(computed),
            "average_level": get_average_metric_level(computed),
        }, indent=2))
        return

    views.console.print()
    views.print_metrics_table(computed, radar, balance)
    views.console.print(
        f"Total XP: {get_total_metric_xp(computed)}   "
        f"Average level: {get_average_metric_level(computed)}"
    )


@app.command()
def contributions(
    snapshot_file: SnapshotArgument,
    skill_id: Annotated[str, typer.Argument(help="ID of the skill to inspect")],
    json_out: JsonOption = False,
) -> None:
    """
    Show which core metrics a skill feeds, heaviest first.
    """
    skills, _ = _load(snapshot_file)

    skill = next((s for s in skills if s.id == skill_id), None)
    if skill is None:
        views.print_error(f"Skill not found: {skill_id}")
        raise typer.Exit(1)

    rows = get_skill_metric_contributions(skill)

    if json_out:
        print(json.dumps([
            {"metric_name": c.metric_name, "weight": c.weight, "contributed_xp": c.contributed_xp}
            for c in rows
        ], indent=2))
        return

    views.print_skill_contributions(skill.name, rows)

"""Shared Typer app object and shared option types."""

from typing import Annotated

import typer

# Shared --json option type used across all commands
JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="xp-engine",
    help="XP, streak and core-metric calculations for a gamified progress tracker.",
    no_args_is_help=True,
)

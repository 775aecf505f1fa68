"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of engine results.
"""

from dataclasses import dataclass

from rich.console import Console
from rich.table import Table

from ..core.config import MAX_METRIC_XP
from ..core.models import (
    ComputedCoreMetric,
    ConsistencyResult,
    LevelProgress,
    RadarPoint,
    SkillMetricContribution,
)

console = Console()

_STATE_STYLES = {
    "consistent": "green",
    "partial": "yellow",
    "broken": "red",
    "neutral": "dim",
}


@dataclass
class SessionBreakdown:
    """Intermediate values of a session score, for display."""

    total_volume: float
    intensity: float
    work_density: float
    bodyweight_kg: float
    fatigue_modifier: float
    frequency_multiplier: float
    is_edited: bool
    xp: int
    classification: str
    message: str


def format_minutes(minutes: float) -> str:
    """
    Format minutes as hours and minutes.

    Examples: 150 → "2h 30m", 120 → "2h", 45 → "45m"
    """
    total = int(minutes)
    hours, mins = divmod(total, 60)
    if hours > 0:
        return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"
    return f"{mins}m"


def _bar(value: float, maximum: float, width: int = 20) -> str:
    if maximum <= 0:
        return " " * width
    filled = int(round(width * min(value, maximum) / maximum))
    return "█" * filled + "░" * (width - filled)


def print_session_breakdown(b: SessionBreakdown) -> None:
    """Print a scored session with its contributing factors."""
    table = Table(title="Session XP", show_header=False)
    table.add_column("Factor", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Total volume", f"{b.total_volume:.0f} kg")
    table.add_row("Bodyweight (clamped)", f"{b.bodyweight_kg:.1f} kg")
    table.add_row("Avg intensity", f"×{b.intensity:.3f}")
    table.add_row("Work density", f"{b.work_density:.1f} kg/min")
    table.add_row("Fatigue modifier", f"×{b.fatigue_modifier:.2f}")
    table.add_row("Frequency bonus", f"×{b.frequency_multiplier:.2f}")
    if b.is_edited:
        table.add_row("Edited log", "[yellow]×0.80[/yellow]")
    table.add_row("[bold]XP[/bold]", f"[bold green]{b.xp}[/bold green]")
    table.add_row("Class", b.classification)

    console.print(table)
    console.print(f"[italic]{b.message}[/italic]")


def print_consistency(
    result: ConsistencyResult,
    multiplier: float,
    status: str,
    daily_xp: int | None = None,
    minutes_logged: float | None = None,
) -> None:
    """Print streak analysis."""
    style = _STATE_STYLES.get(result.consistency_state, "white")
    table = Table(title="Consistency", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("State", f"[{style}]{result.consistency_state}[/{style}]")
    table.add_row("Status", status)
    table.add_row("Current streak", str(result.current_streak))
    table.add_row("Best streak", str(result.best_streak))
    table.add_row("XP multiplier", f"×{multiplier:.2f}")
    if minutes_logged is not None:
        table.add_row("Latest day", format_minutes(minutes_logged))
    if daily_xp is not None:
        table.add_row("[bold]Latest day XP[/bold]", f"[bold green]{daily_xp}[/bold green]")

    console.print(table)


def print_metrics_table(
    metrics: list[ComputedCoreMetric],
    radar: list[RadarPoint],
    balance_score: int,
) -> None:
    """Print all core metrics with radar values."""
    table = Table(title="Core Metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("XP", justify="right")
    table.add_column("Lvl", justify="right")
    table.add_column("Radar", justify="left")
    table.add_column("Sources", justify="right", style="dim")

    for metric, point in zip(metrics, radar):
        table.add_row(
            metric.name,
            str(metric.xp),
            str(metric.level),
            _bar(point.value, MAX_METRIC_XP),
            str(len(metric.contributions)),
        )

    console.print(table)
    console.print(f"Balance score: [bold]{balance_score}[/bold]/100")


def print_skill_contributions(skill_name: str, contributions: list[SkillMetricContribution]) -> None:
    """Print the metrics a single skill feeds."""
    table = Table(title=f"Contributions: {skill_name}")
    table.add_column("Metric", style="cyan")
    table.add_column("Weight", justify="right")
    table.add_column("XP", justify="right")

    for c in contributions:
        table.add_row(c.metric_name, f"{c.weight:.0%}", str(c.contributed_xp))

    console.print(table)


def print_level_progress(xp: float, progress: LevelProgress) -> None:
    """Print level and progress bar for an XP total."""
    pct = max(0.0, min(100.0, progress.progress_percentage))
    console.print(f"[bold]Level {progress.current_level}[/bold]  ({xp:g} XP)")
    console.print(
        f"{_bar(pct, 100, width=30)} {pct:.1f}%  "
        f"[dim]{progress.xp_in_current_level:g}/{progress.xp_needed_for_next_level} "
        f"→ level {progress.current_level + 1} at {progress.next_level_xp} XP[/dim]"
    )


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")

"""
CLI entry point using Typer.

Provides commands over the calculation engine:
- session-xp: Score a workout session
- consistency: Analyze streaks from an attendance snapshot
- metrics: Compute the 18 core metrics and radar values
- contributions: Show which metrics a skill feeds
- level: Show level progress for an XP total
"""

from .app import app
from .commands import consistency, metrics, sessions  # noqa: F401  (registers commands)

__all__ = ["app"]


if __name__ == "__main__":
    app()

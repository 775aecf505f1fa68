"""
Minimal smoke tests for the xp-engine CLI.

Tests basic functionality:
- App runs and shows help
- Sessions are scored
- Attendance snapshots are analyzed
- Core metrics are computed from a snapshot
"""

import json
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from xp_engine.cli.main import app

runner = CliRunner()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for snapshot files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def skills_snapshot(temp_dir):
    path = temp_dir / "skills.json"
    path.write_text(json.dumps({
        "skills": [
            {"id": "s1", "name": "Python", "xp": 1000, "area": "Programming"},
            {"id": "s2", "name": "Deadlift", "xp": 5000, "contributes_to": {"Fitness": 1.0}},
        ],
        "characteristics": [
            {"id": "c1", "name": "Grit", "xp": 300, "contributes_to": {"Discipline": 0.5}},
        ],
    }))
    return path


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "session-xp" in result.output

    def test_session_xp_json(self):
        result = runner.invoke(app, [
            "session-xp", "--sets", "10@100,8@110", "--duration", "45", "--json",
        ])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["xp"] == 41
        assert data["classification"] == "Light / recovery"
        assert data["total_volume"] == 1880
        assert data["sets"] == [
            {"reps": 10, "weight_kg": 100.0},
            {"reps": 8, "weight_kg": 110.0},
        ]

    def test_session_xp_table(self):
        result = runner.invoke(app, [
            "session-xp", "-s", "5@140,5@140,5@140", "-d", "40", "-w", "4",
        ])
        assert result.exit_code == 0
        assert "Session XP" in result.output

    def test_short_session_warns(self):
        result = runner.invoke(app, ["session-xp", "--sets", "10@100", "--duration", "10"])
        assert result.exit_code == 0
        assert "no XP" in result.output

    def test_bad_sets_string(self):
        result = runner.invoke(app, ["session-xp", "--sets", "lots", "--duration", "45"])
        assert result.exit_code == 1
        assert "Invalid set format" in result.output

    def test_level_json(self):
        result = runner.invoke(app, ["level", "250", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["current_level"] == 2
        assert data["progress_percentage"] == 50.0

    def test_consistency_json(self, temp_dir):
        path = temp_dir / "attendance.json"
        path.write_text(json.dumps([
            {"date": f"2026-03-0{d}", "time_spent_minutes": 30, "goal_minutes": 30}
            for d in range(1, 8)
        ]))
        result = runner.invoke(app, ["consistency", str(path), "--base-xp", "100", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["current_streak"] == 7
        assert data["consistency_state"] == "consistent"
        assert data["multiplier"] == pytest.approx(1.35)
        assert data["daily_xp"] == 135
        assert data["latest_record"] == {
            "date": "2026-03-07",
            "time_spent_minutes": 30.0,
            "goal_minutes": 30.0,
        }

    def test_consistency_table(self, temp_dir):
        path = temp_dir / "attendance.yaml"
        path.write_text("- {date: '2026-03-01', time_spent_minutes: 10, goal_minutes: 30}\n")
        result = runner.invoke(app, ["consistency", str(path)])
        assert result.exit_code == 0
        assert "broken" in result.output

    def test_consistency_missing_file(self, temp_dir):
        result = runner.invoke(app, ["consistency", str(temp_dir / "missing.json")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_consistency_bad_goal_type(self, temp_dir):
        path = temp_dir / "attendance.json"
        path.write_text("[]")
        result = runner.invoke(app, ["consistency", str(path), "--goal-type", "hourly"])
        assert result.exit_code == 1

    def test_metrics_json(self, skills_snapshot):
        result = runner.invoke(app, ["metrics", str(skills_snapshot), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["metrics"]) == 18
        by_name = {m["name"]: m for m in data["metrics"]}
        radar = {p["label"]: p["value"] for p in data["radar"]}
        assert by_name["Programming"]["xp"] == 800
        assert by_name["Fitness"]["xp"] == 5000
        assert radar["Fitness"] == 2000
        assert by_name["Discipline"]["xp"] == 150
        assert data["total_xp"] == 800 + 100 + 100 + 5000 + 150

    def test_metrics_table(self, skills_snapshot):
        result = runner.invoke(app, ["metrics", str(skills_snapshot)])
        assert result.exit_code == 0
        assert "Balance score" in result.output

    def test_metrics_strict_areas(self, temp_dir):
        path = temp_dir / "skills.json"
        path.write_text(json.dumps({"skills": [{"id": "s1", "name": "X", "xp": 1, "area": "Circus"}]}))
        assert runner.invoke(app, ["metrics", str(path)]).exit_code == 0
        result = runner.invoke(app, ["metrics", str(path), "--strict-areas"])
        assert result.exit_code == 1
        assert "Unknown skill area" in result.output

    def test_contributions_json(self, skills_snapshot):
        result = runner.invoke(app, ["contributions", str(skills_snapshot), "s1", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0] == {"metric_name": "Programming", "weight": 0.8, "contributed_xp": 800}

    def test_contributions_unknown_skill(self, skills_snapshot):
        result = runner.invoke(app, ["contributions", str(skills_snapshot), "nope"])
        assert result.exit_code == 1
        assert "Skill not found" in result.output


class TestViews:

    @pytest.mark.parametrize("minutes,expected", [
        (150, "2h 30m"),
        (120, "2h"),
        (45, "45m"),
        (0, "0m"),
    ])
    def test_format_minutes(self, minutes, expected):
        from xp_engine.cli.views import format_minutes
        assert format_minutes(minutes) == expected

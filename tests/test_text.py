"""Tests for HUD and results panel text."""

from lanebeat.models import RunState
from lanebeat.renderer.hud import hud_lines
from lanebeat.renderer.overlay import results_lines


def test_hud_lines():
    state = RunState(score=30, streak=3)
    assert hud_lines(state) == ["Score: 30", "Streak: 3x"]


def test_results_lines():
    state = RunState(score=20, max_streak=2, total_spawned=3, total_hit=2)
    assert results_lines(state) == [
        "Game Over",
        "Score: 20",
        "Max Streak: 2",
        "Notes Hit: 2 / 3",
        "Accuracy: 66.67%",
    ]


def test_results_lines_with_nothing_spawned():
    assert results_lines(RunState())[-1] == "Accuracy: 0.00%"

"""Tests for the game-clock scheduler."""

import pytest

from lanebeat.scheduler import Scheduler


def test_periodic_task_fires_each_interval():
    sched = Scheduler()
    hits = []
    sched.every(100, lambda: hits.append(sched.now_ms))

    for _ in range(5):
        sched.advance(50)

    assert hits == [100, 200]


def test_large_step_fires_once_per_elapsed_interval():
    sched = Scheduler()
    hits = []
    sched.every(100, lambda: hits.append(1))

    assert sched.advance(350) == 3
    assert len(hits) == 3


def test_one_shot_fires_once():
    sched = Scheduler()
    hits = []
    task = sched.after(200, lambda: hits.append(1))

    sched.advance(250)
    sched.advance(1000)

    assert hits == [1]
    assert task.fired == 1
    assert sched.tasks == []


def test_tasks_fire_in_due_order():
    sched = Scheduler()
    order = []
    sched.every(300, lambda: order.append("slow"))
    sched.every(100, lambda: order.append("fast"))

    sched.advance(300)

    assert order == ["fast", "fast", "slow", "fast"]


def test_cancel_returns_true_only_once():
    sched = Scheduler()
    hits = []
    task = sched.every(100, lambda: hits.append(1))

    assert task.cancel()
    assert not task.cancel()
    sched.advance(500)
    assert hits == []


def test_cancel_all_from_a_callback_stops_other_tasks():
    sched = Scheduler()
    hits = []
    sched.after(100, sched.cancel_all, name="stop")
    sched.every(100, lambda: hits.append(1), name="spawn")

    sched.advance(1000)

    assert hits == []
    assert sched.tasks == []


def test_cancel_all_counts_live_tasks():
    sched = Scheduler()
    sched.every(100, lambda: None)
    sched.every(200, lambda: None)
    done = sched.after(10, lambda: None)
    sched.advance(10)

    assert done.cancelled
    assert sched.cancel_all() == 2
    assert sched.cancel_all() == 0


def test_invalid_arguments():
    sched = Scheduler()
    with pytest.raises(ValueError):
        sched.every(0, lambda: None)
    with pytest.raises(ValueError):
        sched.advance(-1)

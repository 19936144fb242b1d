"""Tests for the rhythm engine: spawning, motion, hits, misses, and phases."""

import random

import pytest

from lanebeat.engine import RhythmEngine
from lanebeat.models import BindingTable, Circle, Difficulty, JudgementKind, Rect, SessionPhase

# 400x100 viewport: lanes are 100 wide, the hit zone is position > 60, misses are position > 100.
VIEWPORT = (400, 100)


def make_engine(**kwargs):
    kwargs.setdefault("difficulty", Difficulty.EASY)
    kwargs.setdefault("viewport", VIEWPORT)
    kwargs.setdefault("rng", random.Random(7))
    engine = RhythmEngine(**kwargs)
    engine.start()
    return engine


def advance_into_zone(engine, note):
    while note.position <= 60:
        engine.advance()


def test_hit_scores_and_removes_note():
    engine = make_engine()
    note = engine.spawn_note(0)
    advance_into_zone(engine, note)

    result = engine.handle_key_down("a")

    assert result is not None
    assert result.kind == JudgementKind.HIT
    assert result.note is note
    assert note.hit
    assert engine.state.score == 10
    assert engine.state.streak == 1
    assert engine.state.total_hit == 1
    assert engine.notes == []


def test_missed_note_cannot_be_hit_afterwards():
    engine = make_engine()
    engine.spawn_note(0)
    misses = []
    while engine.notes:
        misses.extend(engine.advance())

    assert [j.kind for j in misses] == [JudgementKind.MISS]
    assert engine.handle_key_down("a") is None
    assert engine.state.score == 0
    assert engine.state.total_hit == 0
    assert engine.state.total_missed == 1
    assert engine.state.streak == 0


def test_miss_resets_streak_but_keeps_max():
    engine = make_engine()
    for _ in range(3):
        note = engine.spawn_note(1)
        advance_into_zone(engine, note)
        engine.handle_key_down("s")
        engine.handle_key_up("s")
    assert engine.state.streak == 3

    engine.spawn_note(2)
    while engine.notes:
        engine.advance()

    assert engine.state.streak == 0
    assert engine.state.max_streak == 3


def test_press_without_eligible_note_is_not_a_miss():
    engine = make_engine()
    note = engine.spawn_note(0)
    for _ in range(5):
        engine.advance()

    assert engine.handle_key_down("a") is None
    assert engine.notes == [note]
    assert engine.state.total_missed == 0


def test_press_in_other_column_does_not_hit():
    engine = make_engine()
    note = engine.spawn_note(0)
    advance_into_zone(engine, note)

    assert engine.handle_key_down("d") is None
    assert engine.notes == [note]


def test_unbound_key_is_ignored():
    engine = make_engine()
    note = engine.spawn_note(0)
    advance_into_zone(engine, note)

    assert engine.handle_key_down("z") is None
    assert engine.state.score == 0


def test_earliest_spawned_note_wins():
    engine = make_engine()
    first = engine.spawn_note(0)
    for _ in range(5):
        engine.advance()
    second = engine.spawn_note(0)
    advance_into_zone(engine, second)
    assert engine.notes == [first, second]

    result = engine.handle_key_down("a")

    assert result.note is first
    assert engine.notes == [second]


def test_miss_margin_delays_the_miss():
    engine = make_engine(miss_margin=40)
    note = engine.spawn_note(0)
    for _ in range(60):
        engine.advance()

    assert note.position == 120
    assert engine.notes == [note]


def test_positions_increase_while_running_and_freeze_while_paused():
    engine = make_engine()
    note = engine.spawn_note(3)
    last = note.position
    for _ in range(10):
        engine.advance()
        assert note.position > last
        last = note.position

    engine.toggle_pause()
    assert engine.phase == SessionPhase.PAUSED
    for _ in range(10):
        assert engine.advance() == []
    assert note.position == last

    engine.toggle_pause()
    engine.advance()
    assert note.position > last


def test_key_press_while_paused_does_not_hit():
    engine = make_engine()
    note = engine.spawn_note(0)
    advance_into_zone(engine, note)
    engine.toggle_pause()

    assert engine.handle_key_down("a") is None
    assert engine.notes == [note]


def test_advance_before_start_is_a_no_op():
    engine = RhythmEngine(viewport=VIEWPORT)
    note = engine.spawn_note(0)

    assert engine.advance() == []
    assert note.position == 0


def test_advance_rejects_non_positive_distance():
    engine = make_engine()
    with pytest.raises(ValueError):
        engine.advance(0)


def test_advance_uses_difficulty_speed():
    engine = make_engine(difficulty=Difficulty.ULTRAHARD)
    note = engine.spawn_note(0)
    engine.advance()
    engine.advance(3)
    assert note.position == 15


def test_spawn_places_note_centered_in_lane():
    engine = make_engine(shape=Rect(40, 10))
    note = engine.spawn_note(2)

    # lane width 100: 100 * 2 + 50 - 20
    assert note.x == 230
    assert note.center_x == 250
    assert note.color == engine.bindings[2].body_color
    assert engine.state.total_spawned == 1


def test_random_spawn_uses_bound_columns():
    engine = make_engine()
    columns = {engine.spawn_note().column for _ in range(200)}
    assert columns == {0, 1, 2, 3}


def test_spawn_records_tick():
    engine = make_engine()
    for _ in range(4):
        engine.advance()
    assert engine.spawn_note(0).spawn_time == 4


def test_rebind_keeps_live_note_columns():
    engine = make_engine()
    note = engine.spawn_note(0)
    engine.rebind(0, "s")  # swaps a and s
    assert engine.bindings.key_for(0) == "s"
    assert engine.bindings.key_for(1) == "a"

    advance_into_zone(engine, note)

    assert engine.handle_key_down("a") is None
    result = engine.handle_key_down("s")
    assert result is not None
    assert result.note.column == 0


def test_rebind_rejects_bad_column():
    engine = make_engine()
    with pytest.raises(ValueError):
        engine.rebind(4, "j")


def test_resize_moves_live_circle_notes_onto_new_lanes():
    engine = make_engine(viewport=(1280, 720), shape=Circle(40))
    note = engine.spawn_note(3)
    engine.resize(1340, 720)

    assert note.center_x == 1340 / 4 * 3.5
    while note.position <= 680:
        engine.advance()
    result = engine.handle_key_down("f")

    assert result is not None
    assert result.kind == JudgementKind.HIT


def test_circle_note_off_lane_center_cannot_be_hit():
    engine = make_engine(shape=Circle(40))
    note = engine.spawn_note(1)
    note.x += 60
    advance_into_zone(engine, note)

    assert engine.handle_key_down("s") is None


def test_rect_note_ignores_horizontal_offset():
    engine = make_engine(shape=Rect(80, 30))
    note = engine.spawn_note(1)
    note.x += 60
    advance_into_zone(engine, note)

    assert engine.handle_key_down("s") is not None


def test_held_key_hits_note_entering_zone():
    engine = make_engine(hold_hits=True)
    engine.handle_key_down("a")
    engine.spawn_note(0)

    judgements = []
    for _ in range(40):
        judgements.extend(engine.advance())

    assert [j.kind for j in judgements] == [JudgementKind.HIT]
    assert engine.state.score == 10
    assert engine.notes == []


def test_held_key_without_hold_hits_does_nothing():
    engine = make_engine()
    engine.handle_key_down("a")
    engine.spawn_note(0)
    for _ in range(40):
        engine.advance()

    assert engine.state.total_hit == 0


def test_key_up_releases_key():
    engine = make_engine()
    engine.handle_key_down("a")
    assert engine.is_held(0)
    engine.handle_key_up("a")
    assert not engine.is_held(0)


def test_hit_queues_a_pop():
    engine = make_engine()
    note = engine.spawn_note(0)
    advance_into_zone(engine, note)
    engine.handle_key_down("a")

    pops = engine.take_pops()
    assert len(pops) == 1
    assert pops[0].x == note.center_x
    assert pops[0].color == note.color
    assert engine.take_pops() == []


def test_end_is_final_and_idempotent():
    engine = make_engine()
    engine.spawn_note(0)

    assert engine.end()
    assert not engine.end()
    assert engine.phase == SessionPhase.ENDED
    assert engine.notes == []

    assert not engine.start()
    assert engine.toggle_pause() == SessionPhase.ENDED
    assert engine.advance() == []


def test_check_end_needs_finished_track_and_no_notes():
    engine = make_engine()
    engine.spawn_note(0)

    assert not engine.check_end(track_finished=False)
    assert not engine.check_end(track_finished=True)

    while engine.notes:
        engine.advance()

    assert not engine.check_end(track_finished=False)
    assert engine.check_end(track_finished=True)
    assert engine.phase == SessionPhase.ENDED


def test_pause_toggle_only_between_running_and_paused():
    engine = RhythmEngine(viewport=VIEWPORT)
    assert engine.toggle_pause() == SessionPhase.NOT_STARTED
    engine.start()
    assert engine.toggle_pause() == SessionPhase.PAUSED
    assert engine.toggle_pause() == SessionPhase.RUNNING


def test_counters_stay_consistent_under_random_play():
    rng = random.Random(1234)
    engine = make_engine(bindings=BindingTable(("j", "k", "l", ";")), rng=random.Random(99))
    keys = ["j", "k", "l", ";", "x"]

    for step in range(3000):
        if step % 25 == 0:
            engine.spawn_note()
        roll = rng.random()
        if roll < 0.1:
            engine.handle_key_down(rng.choice(keys))
        elif roll < 0.2:
            engine.handle_key_up(rng.choice(keys))
        engine.advance()

        state = engine.state
        assert state.streak >= 0
        assert state.max_streak >= state.streak
        assert state.total_hit <= state.total_spawned
        assert state.total_hit + state.total_missed + len(engine.notes) == state.total_spawned
        assert state.score == state.total_hit * 10

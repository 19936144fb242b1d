"""Rhythm engine: live notes, scoring, and phase transitions for one run."""

from __future__ import annotations

import logging
import random

from lanebeat.config import (
    COLUMN_COUNT,
    DEFAULT_MISS_MARGIN,
    HIT_ZONE_HEIGHT,
    NOTE_RADIUS,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from lanebeat.layout import hit_zone_top, lane_center, miss_line, note_x
from lanebeat.models import (
    BindingTable,
    Circle,
    Difficulty,
    Judgement,
    JudgementKind,
    Note,
    Pop,
    RunState,
    SessionPhase,
    Shape,
)

logger = logging.getLogger(__name__)


class RhythmEngine:
    """Owns the live notes and run counters; driven by ticks and key events.

    The engine never schedules anything itself. Spawning, end checks and
    the frame loop are driven from outside (see ``GameSession``).
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.MEDIUM,
        viewport: tuple[float, float] = (WINDOW_WIDTH, WINDOW_HEIGHT),
        bindings: BindingTable | None = None,
        shape: Shape | None = None,
        hit_zone_height: float = HIT_ZONE_HEIGHT,
        miss_margin: float = DEFAULT_MISS_MARGIN,
        hold_hits: bool = False,
        rng: random.Random | None = None,
    ) -> None:
        self.difficulty = difficulty
        self.speed: float = difficulty.speed
        self.width, self.height = viewport
        self.bindings = bindings if bindings is not None else BindingTable()
        self.column_count: int = len(self.bindings) or COLUMN_COUNT
        self.shape: Shape = shape if shape is not None else Circle(NOTE_RADIUS)
        self.hit_zone_height = hit_zone_height
        self.miss_margin = miss_margin
        self.hold_hits = hold_hits

        self.notes: list[Note] = []
        self.state = RunState()
        self.phase = SessionPhase.NOT_STARTED
        self.pressed: set[str] = set()
        self.ticks: int = 0
        self._pops: list[Pop] = []
        self._rng = rng if rng is not None else random.Random()

    @property
    def running(self) -> bool:
        return self.phase == SessionPhase.RUNNING

    @property
    def ended(self) -> bool:
        return self.phase == SessionPhase.ENDED

    def start(self) -> bool:
        if self.phase != SessionPhase.NOT_STARTED:
            return False
        self.phase = SessionPhase.RUNNING
        logger.debug("Run started (difficulty=%s, speed=%s)", self.difficulty.value, self.speed)
        return True

    def toggle_pause(self) -> SessionPhase:
        if self.phase == SessionPhase.RUNNING:
            self.phase = SessionPhase.PAUSED
        elif self.phase == SessionPhase.PAUSED:
            self.phase = SessionPhase.RUNNING
        return self.phase

    def check_end(self, track_finished: bool) -> bool:
        """End the run once the track is over and every note has been resolved."""
        if track_finished and not self.notes:
            self.end()
        return self.ended

    def end(self) -> bool:
        """Enter ENDED. Returns False if the run had already ended."""
        if self.ended:
            return False
        self.phase = SessionPhase.ENDED
        self.notes.clear()
        self.pressed.clear()
        logger.debug("Run ended: %s", self.state)
        return True

    def spawn_note(self, column: int | None = None) -> Note:
        if column is None:
            column = self._rng.choice(self.bindings.columns())
        binding = self.bindings[column]
        note = Note(
            column=column,
            x=note_x(column, self.width, self.shape.width, self.column_count),
            shape=self.shape,
            color=binding.body_color,
            spawn_time=self.ticks,
        )
        self.notes.append(note)
        self.state.record_spawn()
        return note

    def advance(self, distance: float | None = None) -> list[Judgement]:
        """Move every live note one tick. Returns the misses (and held-key hits)."""
        if not self.running:
            return []
        if distance is None:
            distance = self.speed
        if distance <= 0:
            raise ValueError(f"Advance distance must be positive, got {distance}")

        self.ticks += 1
        limit = miss_line(self.height, self.miss_margin)
        judgements: list[Judgement] = []
        still_live: list[Note] = []

        for note in self.notes:
            note.position += distance
            if note.position > limit:
                self.state.record_miss()
                judgements.append(Judgement(JudgementKind.MISS, note))
            else:
                still_live.append(note)
        self.notes = still_live

        if self.hold_hits:
            for key in sorted(self.pressed):
                result = self._strike_key(key)
                if result is not None:
                    judgements.append(result)

        return judgements

    def resize(self, width: float, height: float) -> None:
        """Adopt a new viewport and move live notes onto the new lane centers."""
        self.width, self.height = width, height
        for note in self.notes:
            note.x = note_x(note.column, width, note.shape.width, self.column_count)

    def handle_key_down(self, key: str) -> Judgement | None:
        self.pressed.add(key)
        if not self.running:
            return None
        return self._strike_key(key)

    def handle_key_up(self, key: str) -> None:
        self.pressed.discard(key)

    def rebind(self, column: int, key: str) -> None:
        """Rebind a column. Live notes keep their column index."""
        self.bindings.rebind(column, key)
        logger.info("Column %d bound to %r", column, key)

    def is_held(self, column: int) -> bool:
        return self.bindings.key_for(column) in self.pressed

    def _strike_key(self, key: str) -> Judgement | None:
        column = self.bindings.column_for(key)
        if column is None:
            return None

        zone_top = hit_zone_top(self.height, self.hit_zone_height)
        center = lane_center(column, self.width, self.column_count)
        for note in self.notes:
            if note.hit or note.column != column:
                continue
            if note.shape.in_hit_zone(note.center_x - center, note.position, zone_top):
                note.hit = True
                self.notes.remove(note)
                self.state.record_hit()
                self._pops.append(Pop(x=note.center_x, y=note.position, color=note.color))
                return Judgement(JudgementKind.HIT, note)
        return None

    def take_pops(self) -> list[Pop]:
        pops, self._pops = self._pops, []
        return pops

    def summary(self) -> RunState:
        return self.state.copy()

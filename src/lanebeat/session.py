"""Game session: wires the engine to its timers, the audio layer, and input."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from lanebeat.config import END_CHECK_INTERVAL_MS, PAUSE_KEY, SPAWN_INTERVAL_MS
from lanebeat.engine import RhythmEngine
from lanebeat.models import Judgement, JudgementKind, RunState, SessionPhase
from lanebeat.scheduler import Scheduler

logger = logging.getLogger(__name__)


@runtime_checkable
class AudioSink(Protocol):
    """What the session needs from the audio layer."""

    @property
    def track_ready(self) -> bool: ...
    @property
    def track_finished(self) -> bool: ...
    @property
    def track_duration_ms(self) -> float | None: ...
    def play_track(self) -> bool: ...
    def pause_track(self) -> None: ...
    def resume_track(self) -> bool: ...
    def stop_track(self) -> None: ...
    def play_cue(self, name: str) -> None: ...
    def update(self, dt_ms: float) -> None: ...


class GameSession:
    """One play-through of a track.

    Timers run on the scheduler's game clock, which only moves inside
    ``frame``. Pausing therefore suspends spawning, end checks and the
    end-of-track deadline together with the frame loop.
    """

    def __init__(
        self,
        engine: RhythmEngine,
        audio: AudioSink | None = None,
        scheduler: Scheduler | None = None,
        spawn_interval_ms: float = SPAWN_INTERVAL_MS,
        end_check_interval_ms: float = END_CHECK_INTERVAL_MS,
        length_ms: float | None = None,
        wait_for_input: bool = False,
        pause_key: str = PAUSE_KEY,
    ) -> None:
        self.engine = engine
        self.audio = audio
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.spawn_interval_ms = spawn_interval_ms
        self.end_check_interval_ms = end_check_interval_ms
        self.length_ms = length_ms
        self.wait_for_input = wait_for_input
        self.pause_key = pause_key
        self._closed = False

    @property
    def phase(self) -> SessionPhase:
        return self.engine.phase

    def start(self) -> bool:
        if not self.engine.start():
            return False
        if self.audio is not None:
            self.audio.play_track()
        self._arm_timers()
        return True

    def on_track_ready(self) -> bool:
        """Track finished loading. Auto-starts unless waiting for the player."""
        if self.wait_for_input:
            return False
        return self.start()

    def toggle_pause(self) -> SessionPhase:
        before = self.engine.phase
        after = self.engine.toggle_pause()
        if self.audio is not None and before != after:
            if after == SessionPhase.PAUSED:
                self.audio.pause_track()
            else:
                self.audio.resume_track()
        if before != after:
            logger.info("Session %s", "paused" if after == SessionPhase.PAUSED else "resumed")
        return after

    def end(self) -> bool:
        """Stop the run. Safe to call repeatedly; only the first call acts."""
        if self._closed:
            return False
        self._closed = True
        self.engine.end()
        cancelled = self.scheduler.cancel_all()
        if self.audio is not None:
            self.audio.stop_track()
        state = self.engine.summary()
        logger.info(
            "Game over: score=%d max_streak=%d hit=%d/%d accuracy=%.2f%% (%d timers cancelled)",
            state.score,
            state.max_streak,
            state.total_hit,
            state.total_spawned,
            state.accuracy_pct,
            cancelled,
        )
        return True

    def summary(self) -> RunState:
        return self.engine.summary()

    def frame(self, dt_ms: float) -> list[Judgement]:
        """Per-frame callback. Does nothing unless the run is live."""
        if not self.engine.running:
            return []
        if self.audio is not None:
            self.audio.update(dt_ms)
        self.scheduler.advance(dt_ms)
        judgements = self.engine.advance()
        for judgement in judgements:
            self._cue(judgement)
        return judgements

    def handle_key_down(self, key: str) -> Judgement | None:
        if self.engine.phase == SessionPhase.NOT_STARTED:
            # Any key, the pause key included, is the first interaction.
            self.start()
            if key == self.pause_key:
                return None
        elif key == self.pause_key:
            self.toggle_pause()
            return None
        result = self.engine.handle_key_down(key)
        if result is not None:
            self._cue(result)
        return result

    def handle_key_up(self, key: str) -> None:
        self.engine.handle_key_up(key)

    def handle_click(self) -> None:
        """Any click counts as the first interaction."""
        if self.engine.phase == SessionPhase.NOT_STARTED:
            self.start()

    def rebind(self, column: int, key: str) -> None:
        if key == self.pause_key:
            raise ValueError(f"{key!r} is reserved for pause")
        self.engine.rebind(column, key)

    def _arm_timers(self) -> None:
        self.scheduler.every(self.spawn_interval_ms, self.engine.spawn_note, name="spawn")
        self.scheduler.every(self.end_check_interval_ms, self._check_end, name="end-check")
        length = self.length_ms
        if length is None and self.audio is not None:
            length = self.audio.track_duration_ms
        if length:
            self.scheduler.after(length, self.end, name="deadline")
        else:
            logger.debug("No track length known; relying on end checks only")

    def _check_end(self) -> None:
        finished = self.audio.track_finished if self.audio is not None else False
        if self.engine.check_end(finished):
            self.end()

    def _cue(self, judgement: Judgement) -> None:
        if self.audio is None:
            return
        self.audio.play_cue("hit" if judgement.kind == JudgementKind.HIT else "miss")

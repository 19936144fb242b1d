"""Audio layer: backing track playback and hit/miss cues via pygame.mixer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import pygame

from lanebeat.config import CUE_VOLUME, SOUNDS_DIR, TRACK_VOLUME
from lanebeat.tracks import CUE_NAMES, SAMPLE_SUFFIXES, TrackNotFoundError, find_track, is_midi

logger = logging.getLogger(__name__)


class Track(Protocol):
    duration_s: float | None

    def play(self) -> None: ...
    def pause(self) -> None: ...
    def resume(self) -> None: ...
    def stop(self) -> None: ...
    def update(self, dt_ms: float) -> None: ...
    @property
    def finished(self) -> bool: ...


class SampledTrack:
    """An mp3/ogg/wav track streamed through ``pygame.mixer.music``."""

    def __init__(self, path: str | Path, volume: float = TRACK_VOLUME) -> None:
        self.path = Path(path)
        pygame.mixer.music.load(str(self.path))
        pygame.mixer.music.set_volume(volume)
        self.duration_s: float | None = self._probe_length(self.path)
        self._started = False
        self._paused = False

    @staticmethod
    def _probe_length(path: Path) -> float | None:
        try:
            return pygame.mixer.Sound(str(path)).get_length()
        except pygame.error as exc:
            logger.warning("Could not read length of %s: %s", path.name, exc)
            return None

    def play(self) -> None:
        pygame.mixer.music.play()
        self._started = True
        self._paused = False

    def pause(self) -> None:
        pygame.mixer.music.pause()
        self._paused = True

    def resume(self) -> None:
        pygame.mixer.music.unpause()
        self._paused = False

    def stop(self) -> None:
        pygame.mixer.music.stop()

    def update(self, dt_ms: float) -> None:
        pass

    @property
    def finished(self) -> bool:
        return self._started and not self._paused and not pygame.mixer.music.get_busy()


class AudioLayer:
    """Backing track plus one-shot cues.

    Every failure here is logged and swallowed: a missing or unplayable
    sound never stops the game.
    """

    def __init__(
        self,
        sounds_dir: str | Path = SOUNDS_DIR,
        track_volume: float = TRACK_VOLUME,
        cue_volume: float = CUE_VOLUME,
        soundfont_path: str | Path | None = None,
    ) -> None:
        if not pygame.mixer.get_init():
            pygame.mixer.init()
        self.sounds_dir = Path(sounds_dir)
        self.track_volume = track_volume
        self.soundfont_path = soundfont_path
        self._track: Track | None = None
        self._cues: dict[str, pygame.mixer.Sound] = {}
        for name in CUE_NAMES:
            sound = self._load_cue(name, cue_volume)
            if sound is not None:
                self._cues[name] = sound

    def _load_cue(self, name: str, volume: float) -> pygame.mixer.Sound | None:
        try:
            path = find_track(self.sounds_dir, name, SAMPLE_SUFFIXES)
            sound = pygame.mixer.Sound(str(path))
        except (TrackNotFoundError, pygame.error) as exc:
            logger.warning("Failed to load %s cue: %s", name, exc)
            return None
        sound.set_volume(volume)
        return sound

    def load_track(self, path: str | Path) -> bool:
        path = Path(path)
        self._release_track()
        try:
            if is_midi(path):
                from lanebeat.midi_track import MidiTrack
                self._track = MidiTrack(path, self.soundfont_path, self.track_volume)
            else:
                self._track = SampledTrack(path, self.track_volume)
        except Exception as exc:
            logger.warning("Failed to load the song file %s: %s", path, exc)
            self._track = None
            return False
        logger.info("Loaded track %s (%s s)", path.name, self._track.duration_s)
        return True

    @property
    def track_ready(self) -> bool:
        return self._track is not None

    @property
    def track_finished(self) -> bool:
        return self._track is not None and self._track.finished

    @property
    def track_duration_ms(self) -> float | None:
        if self._track is None or not self._track.duration_s:
            return None
        return self._track.duration_s * 1000.0

    def play_track(self) -> bool:
        return self._guarded("play", lambda t: t.play())

    def pause_track(self) -> None:
        self._guarded("pause", lambda t: t.pause())

    def resume_track(self) -> bool:
        return self._guarded("resume", lambda t: t.resume())

    def stop_track(self) -> None:
        self._guarded("stop", lambda t: t.stop())

    def update(self, dt_ms: float) -> None:
        if self._track is not None:
            self._track.update(dt_ms)

    def _guarded(self, action: str, op) -> bool:
        if self._track is None:
            return False
        try:
            op(self._track)
        except Exception as exc:
            logger.error("Playback %s failed: %s", action, exc)
            return False
        return True

    def play_cue(self, name: str) -> None:
        sound = self._cues.get(name)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as exc:
            logger.error("Cue %s failed: %s", name, exc)

    def _release_track(self) -> None:
        if self._track is None:
            return
        self.stop_track()
        shutdown = getattr(self._track, "shutdown", None)
        if shutdown is not None:
            shutdown()
        self._track = None

    def shutdown(self) -> None:
        self._release_track()
        pygame.mixer.quit()

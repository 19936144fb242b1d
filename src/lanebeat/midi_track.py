"""MIDI backing tracks rendered through FluidSynth + SoundFonts."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import fluidsynth
import mido

from lanebeat.config import TRACK_VOLUME

logger = logging.getLogger(__name__)

_DRUM_CHANNEL = 9


def _detect_audio_driver() -> str:
    """Auto-detect the appropriate FluidSynth audio driver for the platform."""
    if sys.platform == "linux":
        return "pulseaudio"
    elif sys.platform == "darwin":
        return "coreaudio"
    elif sys.platform == "win32":
        return "dsound"
    return "alsa"


def flatten_messages(midi: mido.MidiFile) -> list[tuple[float, mido.Message]]:
    """Absolute-time (seconds) channel messages of a MIDI file, meta events dropped."""
    events: list[tuple[float, mido.Message]] = []
    now = 0.0
    for msg in midi:
        now += msg.time
        if not msg.is_meta:
            events.append((now, msg))
    return events


class MidiTrack:
    """Plays a MIDI file in step with the game clock via ``update``."""

    def __init__(
        self,
        path: str | Path,
        soundfont_path: str | Path | None = None,
        volume: float = TRACK_VOLUME,
    ) -> None:
        self.path = Path(path)
        midi = mido.MidiFile(str(self.path))
        self.duration_s: float | None = midi.length
        self._events = flatten_messages(midi)
        self._index = 0
        self._position = 0.0
        self._playing = False
        self._started = False

        self.fs = fluidsynth.Synth(gain=volume)
        self.fs.start(driver=_detect_audio_driver())
        if soundfont_path:
            sfid = self.fs.sfload(str(soundfont_path))
            for channel in range(16):
                bank = 128 if channel == _DRUM_CHANNEL else 0
                self.fs.program_select(channel, sfid, bank, 0)
        else:
            logger.warning("No SoundFont given; MIDI track %s will be silent", self.path.name)

    def play(self) -> None:
        self._index = 0
        self._position = 0.0
        self._started = True
        self._playing = True

    def pause(self) -> None:
        self._playing = False
        self._all_notes_off()

    def resume(self) -> None:
        if self._started:
            self._playing = True

    def stop(self) -> None:
        self._playing = False
        self._all_notes_off()

    def update(self, dt_ms: float) -> None:
        """Send every message that fell due within the last ``dt_ms``."""
        if not self._playing:
            return
        self._position += dt_ms / 1000.0
        while self._index < len(self._events):
            when, msg = self._events[self._index]
            if when > self._position:
                break
            self._send(msg)
            self._index += 1

    @property
    def finished(self) -> bool:
        return self._started and self._index >= len(self._events) and self._position >= (self.duration_s or 0.0)

    def _send(self, msg: mido.Message) -> None:
        if msg.type == "note_on":
            self.fs.noteon(msg.channel, msg.note, msg.velocity)
        elif msg.type == "note_off":
            self.fs.noteoff(msg.channel, msg.note)
        elif msg.type == "control_change":
            self.fs.cc(msg.channel, msg.control, msg.value)
        elif msg.type == "program_change":
            self.fs.program_change(msg.channel, msg.program)
        elif msg.type == "pitchwheel":
            self.fs.pitch_bend(msg.channel, msg.pitch)

    def _all_notes_off(self) -> None:
        for channel in range(16):
            for pitch in range(128):
                self.fs.noteoff(channel, pitch)

    def shutdown(self) -> None:
        self._all_notes_off()
        self.fs.delete()

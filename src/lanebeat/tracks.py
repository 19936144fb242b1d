"""Resolve track identifiers and sound cues to files in the sounds directory."""

from __future__ import annotations

from pathlib import Path

SAMPLE_SUFFIXES = (".mp3", ".ogg", ".wav")
MIDI_SUFFIXES = (".mid", ".midi")
TRACK_SUFFIXES = SAMPLE_SUFFIXES + MIDI_SUFFIXES

# Cue files share the sounds directory with tracks but are never listed as tracks.
CUE_NAMES = ("hit", "miss")


class TrackNotFoundError(Exception):
    """Raised when no file matches a track identifier."""


def is_midi(path: str | Path) -> bool:
    return Path(path).suffix.lower() in MIDI_SUFFIXES


def find_track(
    sounds_dir: str | Path,
    track_id: str,
    suffixes: tuple[str, ...] = TRACK_SUFFIXES,
) -> Path:
    """Return the file for ``track_id``, trying each suffix in order.

    ``track_id`` may also be a direct path to an existing file.

    Raises:
        TrackNotFoundError: If nothing matches.
    """
    direct = Path(track_id)
    if direct.suffix.lower() in suffixes and direct.is_file():
        return direct

    base = Path(sounds_dir)
    for suffix in suffixes:
        candidate = base / f"{track_id}{suffix}"
        if candidate.is_file():
            return candidate
    raise TrackNotFoundError(f"No track named {track_id!r} in {base}")


def list_tracks(sounds_dir: str | Path) -> list[str]:
    """Track identifiers available in ``sounds_dir``, sorted."""
    base = Path(sounds_dir)
    if not base.is_dir():
        return []
    names = {
        p.stem
        for p in base.iterdir()
        if p.is_file() and p.suffix.lower() in TRACK_SUFFIXES and p.stem not in CUE_NAMES
    }
    return sorted(names)

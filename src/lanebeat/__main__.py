"""Entry point for `python -m lanebeat` or the `lanebeat` console script."""

from __future__ import annotations

import argparse
import logging
import sys

from lanebeat.config import (
    COLUMN_COUNT,
    DEFAULT_DIFFICULTY,
    DEFAULT_KEYS,
    DEFAULT_MISS_MARGIN,
    PAUSE_KEY,
    SOUNDS_DIR,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from lanebeat.logging_setup import setup_logging
from lanebeat.models import Difficulty
from lanebeat.tracks import TrackNotFoundError, find_track, list_tracks

logger = logging.getLogger("lanebeat")


def parse_keys(value: str) -> tuple[str, ...]:
    """``asdf`` or ``a,s,d,f`` -> one key per column."""
    keys = tuple(k.strip() for k in value.split(",")) if "," in value else tuple(value)
    if len(keys) != COLUMN_COUNT or len(set(keys)) != len(keys) or not all(keys):
        raise argparse.ArgumentTypeError(f"need {COLUMN_COUNT} distinct keys, got {value!r}")
    if PAUSE_KEY in keys:
        raise argparse.ArgumentTypeError(f"{PAUSE_KEY!r} is reserved for pause")
    return keys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lanebeat: four-lane falling-note rhythm game")
    parser.add_argument("track", nargs="?", help="Track name in the sounds directory, or a path")
    parser.add_argument("--sounds-dir", default=SOUNDS_DIR, help="Directory with tracks and hit/miss cues")
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=DEFAULT_DIFFICULTY,
        help="Note fall speed",
    )
    parser.add_argument("--keys", type=parse_keys, default=DEFAULT_KEYS, help="Column keys, e.g. asdf or j,k,l,;")
    parser.add_argument("--shape", choices=["circle", "rect"], default="circle", help="Note shape")
    parser.add_argument("--miss-margin", type=float, default=DEFAULT_MISS_MARGIN, help="Pixels past the bottom before a miss")
    parser.add_argument("--hold-hits", action="store_true", help="Held keys also hit notes entering the zone")
    parser.add_argument("--click-to-start", action="store_true", help="Wait for a click or key instead of auto-starting")
    parser.add_argument("--length", type=float, default=None, help="Session length in seconds (overrides track length)")
    parser.add_argument("--soundfont", default=None, help="SoundFont for MIDI tracks")
    parser.add_argument("--size", default=f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}", help="Window size WxH")
    parser.add_argument("--mute", action="store_true", help="Run without audio")
    parser.add_argument("--list", action="store_true", help="List available tracks and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Warnings and errors only")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    if args.list:
        for name in list_tracks(args.sounds_dir):
            print(name)
        return 0

    try:
        width, height = (int(part) for part in args.size.lower().split("x"))
    except ValueError:
        parser.error(f"--size must look like 1280x720, got {args.size!r}")

    track_path = None
    if args.track:
        try:
            track_path = find_track(args.sounds_dir, args.track)
        except TrackNotFoundError as exc:
            logger.error("%s", exc)
            return 1

    from lanebeat.app import App

    app = App(
        context_overrides={
            "track_path": track_path,
            "difficulty": Difficulty(args.difficulty),
            "keys": args.keys,
            "shape": args.shape,
            "miss_margin": args.miss_margin,
            "hold_hits": args.hold_hits,
            "wait_for_input": args.click_to_start,
            "length_ms": args.length * 1000.0 if args.length else None,
        },
        sounds_dir=args.sounds_dir,
        soundfont=args.soundfont,
        window_size=(width, height),
        mute=args.mute,
    )
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())

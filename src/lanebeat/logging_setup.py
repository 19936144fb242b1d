"""One-shot logging configuration for the CLI."""

from __future__ import annotations

import logging
import os

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the root logger once.

    Priority (highest first): env LANEBEAT_LOG_LEVEL, --verbose / --quiet, INFO.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    level = logging.INFO
    if quiet:
        level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    env_level = _LEVELS.get(os.environ.get("LANEBEAT_LOG_LEVEL", "").strip().upper())
    if env_level is not None:
        level = env_level

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )

"""Symbolic output verbosity levels.

Documents spell the level by name (``<io verbosity="NORMAL"/>``). The names are
matched exactly; an unknown or wrongly-cased name is a ParseError rather than a
silent fallback to the default.
"""

from __future__ import annotations

import logging
from enum import IntEnum

from .errors import ParseError


class Verbosity(IntEnum):
    """Output verbosity, ordered from quietest to noisiest."""

    ERROR = 0
    SILENT = 1
    NORMAL = 2
    VERBOSE = 3
    NERD = 4
    ANAL = 5


LEVEL_NAMES: tuple[str, ...] = tuple(level.name for level in Verbosity)

_LOGGING_LEVELS = {
    Verbosity.ERROR: logging.ERROR,
    Verbosity.SILENT: logging.WARNING,
    Verbosity.NORMAL: logging.INFO,
    Verbosity.VERBOSE: logging.DEBUG,
    Verbosity.NERD: logging.DEBUG,
    Verbosity.ANAL: logging.DEBUG,
}


def decode(name: str) -> Verbosity:
    """Convert a symbolic level name to a Verbosity.

    Args:
        name: One of ERROR, SILENT, NORMAL, VERBOSE, NERD, ANAL

    Returns:
        Matching Verbosity member

    Raises:
        ParseError: If the name is not one of the six levels
    """
    token = name.strip()
    if token not in LEVEL_NAMES:
        raise ParseError(
            f"unknown verbosity {name!r}, expected one of {', '.join(LEVEL_NAMES)}",
            raw=name,
        )
    return Verbosity[token]


def encode(level: Verbosity | int) -> str:
    """Convert a Verbosity back to its symbolic name."""
    return Verbosity(level).name


def logging_level(level: Verbosity | int) -> int:
    """Python logging level matching an output verbosity."""
    return _LOGGING_LEVELS[Verbosity(level)]


__all__ = [
    "Verbosity",
    "LEVEL_NAMES",
    "decode",
    "encode",
    "logging_level",
]

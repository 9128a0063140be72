# pluglog/levels.py
"""
Severity levels and the level codec.

Levels are ordered from most to least severe:

    CRITICAL > ERROR > WARNING > INFO > DEBUG

The numeric value grows as severity drops, so "level L is enabled for a
module configured at M" is simply ``L <= M``.

Usage:
    from pluglog.levels import Level, parse_level, parse_string

    level = parse_level("Warning")   # Level.WARNING
    parse_string(level)              # "WARNING"
"""

from __future__ import annotations

import logging
from enum import IntEnum


class Level(IntEnum):
    """Logging severity, most severe first."""

    CRITICAL = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4


DEFAULT_LEVEL = Level.INFO
"""Minimum level for any module that was never configured."""


class LevelParseError(ValueError):
    """Raised when a string does not name a known level."""

    def __init__(self, value: str):
        super().__init__(f"logger: invalid log level {value!r}")
        self.value = value


_BY_NAME: dict[str, Level] = {level.name: level for level in Level}

_STDLIB_LEVELS: dict[Level, int] = {
    Level.CRITICAL: logging.CRITICAL,
    Level.ERROR: logging.ERROR,
    Level.WARNING: logging.WARNING,
    Level.INFO: logging.INFO,
    Level.DEBUG: logging.DEBUG,
}


def parse_level(value: str) -> Level:
    """
    Parse a level name, ignoring case.

    Only the five canonical names are accepted. Abbreviations, numbers and
    names with surrounding or embedded whitespace are rejected.

    Args:
        value: Level name, e.g. "debug" or "WARNING"

    Returns:
        The matching Level

    Raises:
        LevelParseError: If value is not a level name
    """
    level = _BY_NAME.get(value.upper()) if isinstance(value, str) else None
    if level is None:
        raise LevelParseError(value)
    return level


def parse_string(level: Level) -> str:
    """Return the canonical upper-case name of a level."""
    return Level(level).name


def to_stdlib(level: Level) -> int:
    """Map a Level onto the numeric levels of the logging module."""
    return _STDLIB_LEVELS[Level(level)]


__all__ = [
    "DEFAULT_LEVEL",
    "Level",
    "LevelParseError",
    "parse_level",
    "parse_string",
    "to_stdlib",
]

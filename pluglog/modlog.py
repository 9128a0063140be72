# pluglog/modlog.py
"""
Module-aware logger wrapper.

ModuleLogger sits in front of any backend that implements the Logger
protocol and applies the per-module settings from a LevelRegistry:

    - A call for a disabled (module, level) pair returns before any
      formatting happens
    - When caller info is shown for the pair, the line is prefixed with the
      call site: ``[file.py:42 function]``

Settings are read from the registry on every call, never cached, so
set_level() and show_caller_info() take effect for handles that already
exist.

Custom providers can wrap their own backend to get the same behavior:

    class MyProvider:
        def get_logger(self, module):
            return ModuleLogger(MyBackend(module), module, registry)
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from typing import Any

from pluglog.levels import Level
from pluglog.metadata import LevelRegistry

logger = logging.getLogger(__name__)

# Frames between _caller_info() and the code that called a log method:
# _caller_info <- _emit <- info/debug/... <- caller
_CALLER_DEPTH = 3


def _caller_info(depth: int = _CALLER_DEPTH) -> str:
    try:
        frame = sys._getframe(depth)
    except ValueError:
        return "[unknown]"
    code = frame.f_code
    return f"[{os.path.basename(code.co_filename)}:{frame.f_lineno} {code.co_name}]"


def _format(msg: str, args: tuple) -> str:
    if not args:
        return msg
    # A single non-empty mapping feeds %(name)s templates, as in logging.LogRecord
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        args = args[0]
    try:
        return msg % args
    except (TypeError, ValueError, KeyError) as e:
        logger.warning(f"Bad log template {msg!r} with args {args!r}: {e}")
        return f"{msg} {args!r}"


class ModuleLogger:
    """Logger handle for one module, filtered through a LevelRegistry."""

    def __init__(self, backend: Any, module: str, registry: LevelRegistry):
        self.backend = backend
        self.module = module
        self.registry = registry

    def __repr__(self) -> str:
        return f"ModuleLogger(module={self.module!r}, backend={type(self.backend).__name__})"

    def is_enabled_for(self, level: Level) -> bool:
        return self.registry.is_enabled_for(self.module, level)

    def debug(self, msg: str, *args: Any) -> None:
        self._emit(Level.DEBUG, msg, args)

    def info(self, msg: str, *args: Any) -> None:
        self._emit(Level.INFO, msg, args)

    def warning(self, msg: str, *args: Any) -> None:
        self._emit(Level.WARNING, msg, args)

    def error(self, msg: str, *args: Any) -> None:
        self._emit(Level.ERROR, msg, args)

    def critical(self, msg: str, *args: Any) -> None:
        self._emit(Level.CRITICAL, msg, args)

    # Logs at CRITICAL; never exits the process.
    fatal = critical

    def _emit(self, level: Level, msg: str, args: tuple) -> None:
        if not self.registry.is_enabled_for(self.module, level):
            return

        text = _format(msg, args)
        if self.registry.is_caller_info_enabled(self.module, level):
            text = f"{_caller_info()} {text}"

        # Already formatted: hand it over without args so the backend
        # does not format it a second time.
        getattr(self.backend, level.name.lower())(text)


__all__ = ["ModuleLogger"]

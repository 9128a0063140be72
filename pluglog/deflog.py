# pluglog/deflog.py
"""
Built-in logger implementation backed by the standard library.

Each module gets its own stdlib logger under the ``pluglog.modules.`` namespace with
a single stream handler. These loggers do not propagate, so application-level
logging configuration never duplicates or swallows their output.

Level filtering is not done here: DefaultLogger writes whatever it is given.
ModuleLogger (pluglog.modlog) decides what reaches it.

Line format:
    2026-10-19 08:15:02,114 UTC - svc -> WARNING disk almost full
"""

from __future__ import annotations

import io
import logging
import sys
import time
from typing import Any, TextIO

from pluglog.levels import Level, to_stdlib

NAMESPACE = "pluglog.modules"
LOG_FORMAT = "%(asctime)s UTC - %(log_module)s -> %(levelname)s %(message)s"


def _stream_handler(stream: TextIO) -> logging.StreamHandler:
    handler = logging.StreamHandler(stream)
    formatter = logging.Formatter(LOG_FORMAT)
    formatter.converter = time.gmtime
    handler.setFormatter(formatter)
    return handler


class DefaultLogger:
    """
    Plain logger bound to one module name.

    Handles for the same module share the underlying stdlib logger and
    handler.
    """

    def __init__(self, module: str, stream: TextIO | None = None):
        self.module = module
        self._logger = logging.getLogger(f"{NAMESPACE}.{module}")
        self._logger.propagate = False
        self._logger.setLevel(logging.DEBUG)
        if not self._logger.handlers:
            self._logger.addHandler(_stream_handler(stream or sys.stdout))
        elif stream is not None:
            self.set_stream(stream)

    @property
    def stdlib_logger(self) -> logging.Logger:
        return self._logger

    def set_stream(self, stream: TextIO) -> None:
        """Point this module's output at another stream."""
        for handler in self._logger.handlers:
            if isinstance(handler, logging.StreamHandler):
                handler.setStream(stream)

    def debug(self, msg: str, *args: Any) -> None:
        self.log(Level.DEBUG, msg, *args)

    def info(self, msg: str, *args: Any) -> None:
        self.log(Level.INFO, msg, *args)

    def warning(self, msg: str, *args: Any) -> None:
        self.log(Level.WARNING, msg, *args)

    def error(self, msg: str, *args: Any) -> None:
        self.log(Level.ERROR, msg, *args)

    def critical(self, msg: str, *args: Any) -> None:
        self.log(Level.CRITICAL, msg, *args)

    def log(self, level: Level, msg: str, *args: Any) -> None:
        self._logger.log(to_stdlib(level), msg, *args, extra={"log_module": self.module})


def switch_output(logger: Any, stream: TextIO) -> None:
    """
    Redirect a default-implementation logger to `stream`.

    Accepts either a DefaultLogger or a ModuleLogger wrapping one.

    Raises:
        TypeError: If the logger is not backed by DefaultLogger
    """
    backend = getattr(logger, "backend", logger)
    if not isinstance(backend, DefaultLogger):
        raise TypeError(
            f"Cannot switch output of {type(backend).__name__}; "
            "only the built-in logger supports it"
        )
    backend.set_stream(stream)


def switch_output_to_buffer(logger: Any) -> io.StringIO:
    """Redirect a default-implementation logger into a fresh buffer and return it."""
    buffer = io.StringIO()
    switch_output(logger, buffer)
    return buffer


__all__ = [
    "DefaultLogger",
    "LOG_FORMAT",
    "NAMESPACE",
    "switch_output",
    "switch_output_to_buffer",
]

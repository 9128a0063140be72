# pluglog/__init__.py
"""
pluglog - Pluggable per-module logging.

Application code asks for a logger by module name and logs through it.
Verbosity and caller-info annotation are tuned per module at runtime, no
matter which logger implementation writes the output.

Public API:
    Loggers:
        - new: Logger for a module from the current provider
        - initialize: Install a custom LoggerProvider
        - LoggingContext: Injectable owner of a registry and provider

    Levels:
        - Level: CRITICAL > ERROR > WARNING > INFO > DEBUG
        - set_level / get_level / get_all_levels / is_enabled_for
        - parse_level / parse_string

    Caller info:
        - show_caller_info / hide_caller_info / is_caller_info_enabled

Examples:
    Default implementation, no setup:
    >>> import pluglog
    >>> logger = pluglog.new("svc")
    >>> logger.info("started on port %d", 8080)

    Tuning a module:
    >>> pluglog.set_level("svc", pluglog.Level.DEBUG)
    >>> pluglog.show_caller_info("svc", pluglog.Level.ERROR)

    Custom implementation (call before logging anything):
    >>> pluglog.initialize(MyProvider())

The functions below operate on LoggingContext.get_global(). Components
that take a LoggingContext explicitly can use its ``new()`` and
``registry`` instead.
"""

from __future__ import annotations

from typing import Dict

from pluglog.levels import DEFAULT_LEVEL, Level, LevelParseError, parse_level, parse_string
from pluglog.metadata import LevelRegistry
from pluglog.modlog import ModuleLogger
from pluglog.provider import DefaultProvider, Logger, LoggerProvider, LoggingContext

__version__ = "0.1.0"


def _registry() -> LevelRegistry:
    return LoggingContext.get_global().registry


# =============================================================================
# Providers
# =============================================================================


def new(module: str) -> Logger:
    """
    Create a logger for `module`.

    If initialize() has not been called, the built-in implementation is
    installed on first use. Call initialize() before logging anything to use
    your own implementation.
    """
    return LoggingContext.get_global().new(module)


def initialize(provider: LoggerProvider) -> None:
    """Install a custom logger provider for all loggers created afterwards."""
    LoggingContext.get_global().initialize(provider)


# =============================================================================
# Levels
# =============================================================================


def set_level(module: str, level: Level) -> None:
    """Set the log level for a module. Modules default to INFO."""
    _registry().set_level(module, level)


def get_level(module: str) -> Level:
    """Get the log level for a module, INFO if never set."""
    return _registry().get_level(module)


def get_all_levels() -> Dict[str, Level]:
    """Get all explicitly set module levels."""
    return _registry().get_all_levels()


def is_enabled_for(module: str, level: Level) -> bool:
    """Check whether `level` is logged for `module`."""
    return _registry().is_enabled_for(module, level)


# =============================================================================
# Caller Info
# =============================================================================
# Caller info is always available with the built-in implementation; custom
# providers may ignore it.


def show_caller_info(module: str, level: Level) -> None:
    """Include the call site in log lines for this module and level."""
    _registry().show_caller_info(module, level)


def hide_caller_info(module: str, level: Level) -> None:
    """Leave the call site out of log lines for this module and level."""
    _registry().hide_caller_info(module, level)


def is_caller_info_enabled(module: str, level: Level) -> bool:
    return _registry().is_caller_info_enabled(module, level)


__all__ = [
    "DEFAULT_LEVEL",
    "DefaultProvider",
    "Level",
    "LevelParseError",
    "LevelRegistry",
    "Logger",
    "LoggerProvider",
    "LoggingContext",
    "ModuleLogger",
    "get_all_levels",
    "get_level",
    "hide_caller_info",
    "initialize",
    "is_caller_info_enabled",
    "is_enabled_for",
    "new",
    "parse_level",
    "parse_string",
    "set_level",
    "show_caller_info",
]

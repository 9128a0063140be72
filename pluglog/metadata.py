# pluglog/metadata.py
"""
Per-module level and caller-info registry.

Every (module, level) pair has a definite answer to "is it enabled" and
"does it carry caller info", whether or not the module was ever configured:

    - Minimum level falls back to the registry default (INFO unless changed)
    - Caller info is off unless explicitly shown

Loggers consult the registry on every call, so changes made here are seen
immediately by handles that already exist.

Usage:
    from pluglog.metadata import LevelRegistry
    from pluglog.levels import Level

    registry = LevelRegistry()
    registry.set_level("svc", Level.WARNING)
    registry.is_enabled_for("svc", Level.INFO)   # False
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Set

from pluglog.levels import DEFAULT_LEVEL, Level
from pluglog.rwlock import ReadWriteLock


@dataclass
class ModuleSettings:
    """Settings tracked for a single module."""

    level: Level | None = None
    """Minimum level, or None to follow the registry default."""

    caller_info: Set[Level] = field(default_factory=set)
    """Levels whose log lines include the caller location."""


class LevelRegistry:
    """
    Thread-safe mapping of module name to ModuleSettings.

    All state sits behind one ReadWriteLock: lookups share it, updates take
    it exclusively.
    """

    def __init__(self, default_level: Level = DEFAULT_LEVEL):
        self._lock = ReadWriteLock()
        self._modules: Dict[str, ModuleSettings] = {}
        self._default_level = Level(default_level)

    # -------------------------------------------------------------------------
    # Levels
    # -------------------------------------------------------------------------

    @property
    def default_level(self) -> Level:
        """Level used for modules without an explicit setting."""
        with self._lock.read_lock():
            return self._default_level

    def set_default_level(self, level: Level) -> None:
        with self._lock.write_lock():
            self._default_level = Level(level)

    def set_level(self, module: str, level: Level) -> None:
        """
        Set the minimum level for a module.

        Unknown modules are created on the fly.
        """
        with self._lock.write_lock():
            self._settings(module).level = Level(level)

    def get_level(self, module: str) -> Level:
        """Return the module's minimum level, or the default if never set."""
        with self._lock.read_lock():
            return self._level_of(module)

    def get_all_levels(self) -> Dict[str, Level]:
        """
        Snapshot of explicitly configured module levels.

        Modules that only ever used the default level are not included.
        """
        with self._lock.read_lock():
            return {
                module: settings.level
                for module, settings in self._modules.items()
                if settings.level is not None
            }

    def is_enabled_for(self, module: str, level: Level) -> bool:
        """True if `level` is at least as severe as the module's minimum."""
        with self._lock.read_lock():
            return Level(level) <= self._level_of(module)

    # -------------------------------------------------------------------------
    # Caller info
    # -------------------------------------------------------------------------

    def show_caller_info(self, module: str, level: Level) -> None:
        with self._lock.write_lock():
            self._settings(module).caller_info.add(Level(level))

    def hide_caller_info(self, module: str, level: Level) -> None:
        with self._lock.write_lock():
            self._settings(module).caller_info.discard(Level(level))

    def is_caller_info_enabled(self, module: str, level: Level) -> bool:
        with self._lock.read_lock():
            settings = self._modules.get(module)
            return settings is not None and Level(level) in settings.caller_info

    # -------------------------------------------------------------------------
    # Internals (caller holds the lock)
    # -------------------------------------------------------------------------

    def _settings(self, module: str) -> ModuleSettings:
        settings = self._modules.get(module)
        if settings is None:
            settings = ModuleSettings()
            self._modules[module] = settings
        return settings

    def _level_of(self, module: str) -> Level:
        settings = self._modules.get(module)
        if settings is None or settings.level is None:
            return self._default_level
        return settings.level


__all__ = ["LevelRegistry", "ModuleSettings"]

# pluglog/provider.py
"""
Logger providers and the logging context.

A provider is anything with ``get_logger(module)``. Exactly one provider is
current per LoggingContext:

    Unset ──new()──────────► DefaultInstalled
      │                           │
      └──initialize(p)──► CustomInstalled ◄──initialize(p)

The default provider is installed lazily by the first new() call when
initialize() was never called. initialize() always replaces the current
provider outright; the default provider never wraps a custom one.
Handles that were already issued keep the provider they came from.

Usage:
    from pluglog.provider import LoggingContext

    context = LoggingContext()
    logger = context.new("svc")                 # built-in default provider
    context.initialize(MyProvider())
    other = context.new("db")                   # from MyProvider

Most code uses the package-level wrappers, which delegate to
LoggingContext.get_global().
"""

from __future__ import annotations

import logging
import threading
from typing import Any, ClassVar, Optional, Protocol, runtime_checkable

from pluglog.deflog import DefaultLogger
from pluglog.metadata import LevelRegistry
from pluglog.modlog import ModuleLogger
from pluglog.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

LOGGER_MODULE = "pluglog"
"""Module name of the context's own diagnostic logger."""

NOT_INITIALIZED_MSG = (
    "Default logger initialized "
    "(please call pluglog.initialize() if you wish to use a custom logger)"
)


# =============================================================================
# Protocols
# =============================================================================


@runtime_checkable
class Logger(Protocol):
    """
    Logger handle bound to one module.

    Each method takes a %-style template and its arguments, and must be a
    no-op when the (module, level) pair is disabled.
    """

    def debug(self, msg: str, *args: Any) -> None: ...

    def info(self, msg: str, *args: Any) -> None: ...

    def warning(self, msg: str, *args: Any) -> None: ...

    def error(self, msg: str, *args: Any) -> None: ...

    def critical(self, msg: str, *args: Any) -> None: ...


@runtime_checkable
class LoggerProvider(Protocol):
    """Factory that produces a Logger for a module name."""

    def get_logger(self, module: str) -> Logger: ...


# =============================================================================
# Default Provider
# =============================================================================


class DefaultProvider:
    """Provider for the built-in stdlib-backed implementation."""

    def __init__(self, registry: LevelRegistry):
        self.registry = registry

    def get_logger(self, module: str) -> Logger:
        return ModuleLogger(DefaultLogger(module), module, self.registry)


# =============================================================================
# Logging Context
# =============================================================================


class LoggingContext:
    """
    Owns a LevelRegistry and the current LoggerProvider.

    Pass a context to components that need loggers, or use the process-wide
    one from get_global(). All methods are safe to call from any thread.
    """

    _global_context: ClassVar[Optional["LoggingContext"]] = None
    _global_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, registry: Optional[LevelRegistry] = None):
        self.registry = registry or LevelRegistry()
        self._provider: Optional[LoggerProvider] = None
        self._custom = False
        self._lock = ReadWriteLock()

    @classmethod
    def get_global(cls) -> "LoggingContext":
        """Get the process-wide context, creating it on first use."""
        context = cls._global_context
        if context is not None:
            return context

        with cls._global_lock:
            if cls._global_context is None:
                cls._global_context = cls()
            return cls._global_context

    @classmethod
    def reset_global(cls) -> None:
        """Drop the process-wide context (for testing)."""
        with cls._global_lock:
            cls._global_context = None

    @property
    def has_custom_provider(self) -> bool:
        """True once initialize() has installed a provider."""
        with self._lock.read_lock():
            return self._custom

    def initialize(self, provider: LoggerProvider) -> None:
        """
        Install `provider` for all loggers created from now on.

        Replaces whatever was current, including a lazily installed default.
        Loggers created before the call are not migrated.
        """
        with self._lock.write_lock():
            logger.debug(f"Initializing custom logger provider {type(provider).__name__}")
            self._provider = provider
            self._custom = True

        self._trace(provider, "Logger provider initialized")

    def provider(self) -> LoggerProvider:
        """
        Return the current provider, installing the default one if unset.

        Racing first callers all get the same default provider instance.
        """
        with self._lock.read_lock():
            provider = self._provider
        if provider is not None:
            return provider

        with self._lock.write_lock():
            # Another thread may have installed a provider while we waited
            if self._provider is not None:
                return self._provider

            logger.debug("Initializing default logger provider")
            provider = DefaultProvider(self.registry)
            self._provider = provider

        self._trace(provider, NOT_INITIALIZED_MSG)
        return provider

    def new(self, module: str) -> Logger:
        """Create a logger for `module` from the current provider."""
        return self.provider().get_logger(module)

    def _trace(self, provider: LoggerProvider, message: str) -> None:
        # Runs outside the lock: a provider may create loggers of its own.
        try:
            provider.get_logger(LOGGER_MODULE).debug(message)
        except Exception as e:
            logger.warning(
                f"Logger provider {type(provider).__name__} failed its first log call: {e}"
            )


__all__ = [
    "DefaultProvider",
    "LOGGER_MODULE",
    "Logger",
    "LoggerProvider",
    "LoggingContext",
]

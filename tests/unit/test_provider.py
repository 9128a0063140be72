# tests/unit/test_provider.py
"""Tests for LoggingContext provider selection."""

import threading

import pytest

from pluglog.deflog import DefaultLogger, switch_output_to_buffer
from pluglog.levels import Level
from pluglog.modlog import ModuleLogger
from pluglog.provider import (
    LOGGER_MODULE,
    DefaultProvider,
    Logger,
    LoggerProvider,
    LoggingContext,
)


class CustomLogger:
    def __init__(self, provider, module):
        self.provider = provider
        self.module = module

    def debug(self, msg, *args):
        self.provider.lines.append((self.module, "debug", msg % args if args else msg))

    def info(self, msg, *args):
        self.provider.lines.append((self.module, "info", msg % args if args else msg))

    def warning(self, msg, *args):
        self.provider.lines.append((self.module, "warning", msg % args if args else msg))

    def error(self, msg, *args):
        self.provider.lines.append((self.module, "error", msg % args if args else msg))

    def critical(self, msg, *args):
        self.provider.lines.append((self.module, "critical", msg % args if args else msg))


class CustomProvider:
    def __init__(self):
        self.lines = []
        self.requested = []

    def get_logger(self, module):
        self.requested.append(module)
        return CustomLogger(self, module)


class BrokenProvider:
    """Provider that is not ready yet."""

    def get_logger(self, module):
        raise RuntimeError("backend not connected")


def test_new_without_initialize_uses_default_provider(context):
    logger = context.new("x")

    assert isinstance(logger, ModuleLogger)
    assert isinstance(logger.backend, DefaultLogger)
    assert isinstance(context.provider(), DefaultProvider)
    assert not context.has_custom_provider


def test_default_logger_follows_registry(context):
    logger = context.new("default-follows")
    buffer = switch_output_to_buffer(logger)

    logger.debug("hidden")
    context.registry.set_level("default-follows", Level.DEBUG)
    logger.debug("shown")

    output = buffer.getvalue()
    assert "hidden" not in output
    assert "default-follows -> DEBUG shown" in output


def test_default_provider_is_installed_once(context):
    first = context.provider()
    context.new("a")
    context.new("b")

    assert context.provider() is first


def test_initialize_replaces_default_without_migrating_handles(context):
    default_logger = context.new("x")
    custom = CustomProvider()

    context.initialize(custom)
    custom_logger = context.new("y")

    assert context.provider() is custom
    assert context.has_custom_provider
    assert isinstance(custom_logger, CustomLogger)
    assert custom_logger.provider is custom
    assert isinstance(default_logger, ModuleLogger)
    assert isinstance(default_logger.backend, DefaultLogger)


def test_initialize_before_first_use_skips_default(context):
    custom = CustomProvider()

    context.initialize(custom)
    context.new("svc").info("hello %s", "there")

    assert context.provider() is custom
    assert ("svc", "info", "hello there") in custom.lines


def test_initialize_emits_debug_trace(context):
    custom = CustomProvider()

    context.initialize(custom)

    assert custom.requested[0] == LOGGER_MODULE
    assert (LOGGER_MODULE, "debug", "Logger provider initialized") in custom.lines


def test_initialize_last_write_wins(context):
    first = CustomProvider()
    second = CustomProvider()

    context.initialize(first)
    context.initialize(second)

    assert context.provider() is second


def test_initialize_tolerates_unready_provider(context):
    broken = BrokenProvider()

    context.initialize(broken)

    assert context.provider() is broken
    with pytest.raises(RuntimeError):
        context.new("svc")


def test_provider_may_create_loggers_during_initialize(context):
    class ReentrantProvider(CustomProvider):
        def get_logger(self, module):
            # Asks the context for the current provider while being installed
            context.provider()
            return super().get_logger(module)

    provider = ReentrantProvider()
    context.initialize(provider)

    assert context.provider() is provider


def test_concurrent_first_use_installs_one_default_provider(context):
    thread_count = 32
    barrier = threading.Barrier(thread_count, timeout=5)
    loggers = [None] * thread_count
    providers = [None] * thread_count

    def first_use(i):
        barrier.wait()
        loggers[i] = context.new("race")
        providers[i] = context.provider()

    threads = [threading.Thread(target=first_use, args=(i,)) for i in range(thread_count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    installed = context.provider()
    assert isinstance(installed, DefaultProvider)
    assert all(p is installed for p in providers)
    assert all(isinstance(l, ModuleLogger) for l in loggers)
    assert all(l.registry is context.registry for l in loggers)


def test_initialize_races_with_new(context):
    custom = CustomProvider()
    results = []
    lock = threading.Lock()

    def create():
        for _ in range(50):
            logger = context.new("race")
            with lock:
                results.append(logger)

    threads = [threading.Thread(target=create) for _ in range(8)]
    for t in threads:
        t.start()
    context.initialize(custom)
    for t in threads:
        t.join()

    assert context.provider() is custom
    for logger in results:
        assert isinstance(logger, (ModuleLogger, CustomLogger))


def test_protocols_match_implementations(context):
    assert isinstance(DefaultProvider(context.registry), LoggerProvider)
    assert isinstance(CustomProvider(), LoggerProvider)
    assert isinstance(context.new("proto"), Logger)
    assert isinstance(CustomLogger(CustomProvider(), "proto"), Logger)


def test_contexts_are_isolated():
    first = LoggingContext()
    second = LoggingContext()

    first.registry.set_level("svc", Level.DEBUG)
    first.initialize(CustomProvider())

    assert second.registry.get_level("svc") is Level.INFO
    assert not second.has_custom_provider


def test_global_context_is_shared_until_reset():
    context = LoggingContext.get_global()

    assert LoggingContext.get_global() is context

    LoggingContext.reset_global()

    assert LoggingContext.get_global() is not context

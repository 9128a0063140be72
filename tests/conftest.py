# tests/conftest.py
"""
Root conftest.

Every test starts from a fresh global LoggingContext: no provider installed,
no module levels set.

Test Tiers:
- tier1: Pure logic, no I/O (everything under tests/unit/)
         Run: pytest -m tier1
"""

from __future__ import annotations

import pytest

from pluglog.provider import LoggingContext


def pytest_collection_modifyitems(config, items):
    """Mark unit tests as tier1."""
    for item in items:
        fspath = str(item.fspath)
        if "/unit/" not in fspath and "\\unit\\" not in fspath:
            continue
        if not any(marker.name.startswith("tier") for marker in item.iter_markers()):
            item.add_marker(pytest.mark.tier1)


@pytest.fixture(autouse=True)
def fresh_logging_context():
    """Reset the process-wide logging context around each test."""
    LoggingContext.reset_global()
    yield
    LoggingContext.reset_global()


@pytest.fixture
def context() -> LoggingContext:
    """An isolated LoggingContext, independent of the global one."""
    return LoggingContext()

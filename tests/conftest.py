"""
Shared pytest fixtures and configuration for dbspine tests.

This module provides:
- Logging configured once, quietly, before any test logs
- Dispatch-table isolation (snapshot before, restore after each test)
- Settings cache reset
- Fake "loaded module" namespaces for resolver tests
"""

import sys
import types
from pathlib import Path

import pytest

# Ensure dbspine package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dbspine.core import settings as settings_module  # noqa: E402
from dbspine.core.dispatch import dispatch_table  # noqa: E402
from dbspine.core.logging import configure_logging  # noqa: E402

# Import built-in drivers now so their overrides are part of every snapshot.
import dbspine.drivers  # noqa: E402,F401

configure_logging(level="WARNING", json_format=True)


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark all tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def restore_dispatch_table():
    """Undo any registrations a test makes on the global dispatch table."""
    state = dispatch_table.snapshot()
    yield
    dispatch_table.restore(state)


@pytest.fixture(autouse=True)
def reset_settings():
    """Drop cached settings so env overrides in one test don't leak."""
    settings_module._settings = None
    yield
    settings_module._settings = None


# =============================================================================
# Resolver Fixtures
# =============================================================================


@pytest.fixture
def make_module():
    """Build a fake loaded module exporting the given bindings."""

    def _make(name: str, **bindings) -> types.ModuleType:
        module = types.ModuleType(name)
        for key, value in bindings.items():
            setattr(module, key, value)
        return module

    return _make

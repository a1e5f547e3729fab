"""Pytest fixtures and configuration for burrow tests.

Plugins talk to the host engine only through a router and a chain
handle; both are replaced with mocks here.
"""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from burrow.parsers.registry import load_builtin_parsers
from burrow.plugins.filter import BurrowFilter
from burrow.plugins.output import BurrowOutput


@pytest.fixture(scope="session", autouse=True)
def builtin_parsers() -> None:
    """Register the built-in format parsers once per session."""
    load_builtin_parsers()


# =============================================================================
# Host Engine Fixtures
# =============================================================================


@pytest.fixture
def router() -> MagicMock:
    """Mock downstream router collecting emitted events."""
    return MagicMock()


@pytest.fixture
def chain() -> MagicMock:
    """Mock output chain continuation."""
    return MagicMock()


# =============================================================================
# Plugin Factories
# =============================================================================


@pytest.fixture
def make_filter() -> Callable[..., BurrowFilter]:
    """Factory for configured and started filter plugins."""

    def _make(**conf: Any) -> BurrowFilter:
        conf.setdefault("key_name", "message")
        conf.setdefault("format", "json")
        plugin = BurrowFilter()
        plugin.configure(conf)
        plugin.start()
        return plugin

    return _make


@pytest.fixture
def make_output(router: MagicMock) -> Callable[..., BurrowOutput]:
    """Factory for configured and started output plugins."""

    def _make(**conf: Any) -> BurrowOutput:
        conf.setdefault("key_name", "message")
        conf.setdefault("format", "json")
        plugin = BurrowOutput(router=router)
        plugin.configure(conf)
        plugin.start()
        return plugin

    return _make

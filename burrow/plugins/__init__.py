"""Burrow host engine plugins.

Thin adapters that bind the core engine to a pipeline host:
- BurrowFilter: re-parses a field and returns the recombined record
- BurrowOutput: re-parses a field and re-emits the event under a new tag
"""

from burrow.plugins.base import BasePlugin, PluginMetrics, PluginState
from burrow.plugins.filter import BurrowFilter
from burrow.plugins.output import BurrowOutput
from burrow.plugins.registry import create_plugin, list_plugins, register_plugin

__all__ = [
    "BasePlugin",
    "BurrowFilter",
    "BurrowOutput",
    "PluginMetrics",
    "PluginState",
    "create_plugin",
    "list_plugins",
    "register_plugin",
]

"""Plugin registry for host engine integration.

Maps (kind, name) pairs such as ("filter", "burrow") to plugin classes so
that a host can instantiate plugins from a pipeline definition.
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from burrow.exceptions import ConfigError

logger = logging.getLogger(__name__)

PLUGIN_KINDS = ("filter", "output")

T = TypeVar("T")

_plugins: dict[tuple[str, str], type] = {}


def register_plugin(kind: str, name: str) -> Callable[[type[T]], type[T]]:
    """Decorator to register a plugin class.

    Usage:
        @register_plugin("filter", "burrow")
        class BurrowFilter(BasePlugin):
            ...
    """
    if kind not in PLUGIN_KINDS:
        raise ValueError(f"Unknown plugin kind '{kind}'")

    def decorator(plugin_class: type[T]) -> type[T]:
        key = (kind, name)
        if key in _plugins:
            logger.warning(f"Overwriting existing {kind} plugin registration: {name}")
        _plugins[key] = plugin_class
        logger.debug(f"Registered {kind} plugin: {name}")
        return plugin_class

    return decorator


def get_plugin_class(kind: str, name: str) -> type:
    """Look up a registered plugin class.

    Raises:
        ConfigError: If no such plugin is registered
    """
    load_builtin_plugins()
    plugin_class = _plugins.get((kind, name))
    if plugin_class is None:
        raise ConfigError(f"Unknown {kind} plugin type '{name}'")
    return plugin_class


def create_plugin(kind: str, name: str, **kwargs: Any) -> Any:
    """Instantiate a registered plugin."""
    return get_plugin_class(kind, name)(**kwargs)


def list_plugins() -> list[dict[str, str]]:
    """List all registered plugins."""
    load_builtin_plugins()
    return [{"kind": kind, "name": name} for kind, name in sorted(_plugins)]


def load_builtin_plugins() -> None:
    """Import the built-in plugin modules to trigger registration."""
    from burrow.plugins import filter, output  # noqa: F401

"""Parser registry for resolving format names to parsers.

The registry maintains the collection of available format parsers and
resolves a configured format identifier to a ready-to-use parser instance.
Resolution happens once, at configuration time.
"""

import logging
from typing import Any, Type

from burrow.exceptions import UnknownFormatError
from burrow.parsers.base import BaseParser, ParserCategory, ParserMetadata
from burrow.parsers.options import ParserOptions

logger = logging.getLogger(__name__)


class ParserRegistry:
    """Central registry for format parsers.

    Maintains a collection of parser classes keyed by format name and
    provides lookup by name and alias.
    """

    def __init__(self):
        self._parsers: dict[str, Type[BaseParser]] = {}
        self._aliases: dict[str, str] = {}

    def register(self, parser_class: Type[BaseParser]) -> None:
        """Register a parser class.

        Args:
            parser_class: Parser class to register
        """
        meta = _require_metadata(parser_class)
        name = meta.name

        if name in self._parsers:
            logger.warning(f"Parser '{name}' already registered, overwriting")

        self._parsers[name] = parser_class

        for alias in meta.aliases:
            self._aliases[alias] = name

        logger.debug(f"Registered parser: {name}")

    def __contains__(self, name: str) -> bool:
        return name in self._parsers or name in self._aliases

    def names(self) -> list[str]:
        """Return all registered format names."""
        return list(self._parsers)

    def get(self, name: str, options: ParserOptions | None = None) -> BaseParser | None:
        """Get a parser instance by name or alias.

        Args:
            name: Name of parser to get
            options: Parser options

        Returns:
            Parser instance or None if not found
        """
        name = self._aliases.get(name, name)
        parser_class = self._parsers.get(name)
        return parser_class(options) if parser_class else None

    def resolve(self, format_name: str, options: ParserOptions | None = None) -> BaseParser:
        """Resolve a configured format to a parser instance.

        A format of the form ``/EXPR/`` selects the regexp parser with
        EXPR as its expression.

        Args:
            format_name: Format identifier from the configuration
            options: Parser options

        Returns:
            Configured parser

        Raises:
            UnknownFormatError: If no parser is registered for the format
            ConfigError: If the parser rejects its options
        """
        options = options or ParserOptions()

        if len(format_name) > 2 and format_name.startswith("/") and format_name.endswith("/"):
            options = options.model_copy(update={"expression": format_name[1:-1]})
            format_name = "regexp"

        parser = self.get(format_name, options)
        if parser is None:
            raise UnknownFormatError(format_name, self.names())

        logger.debug(f"Resolved format '{format_name}' to {parser.__class__.__name__}")
        return parser

    def list_parsers(self) -> list[dict[str, Any]]:
        """List all registered parsers.

        Returns:
            List of parser info dictionaries
        """
        result = []
        for name, parser_class in self._parsers.items():
            meta = _require_metadata(parser_class)
            result.append({
                "name": name,
                "display_name": meta.display_name,
                "description": meta.description,
                "category": _category_of(meta).value,
                "aliases": meta.aliases,
            })
        return result


def _require_metadata(parser_class: Type[BaseParser]) -> ParserMetadata:
    meta = parser_class.get_metadata()
    if meta is None:
        raise TypeError(f"{parser_class.__name__} must implement get_metadata()")
    return meta


def _category_of(meta: ParserMetadata) -> ParserCategory:
    try:
        return ParserCategory(meta.category)
    except ValueError:
        return ParserCategory.GENERIC


# Global registry instance
_registry = ParserRegistry()


def get_registry() -> ParserRegistry:
    """Get the global parser registry."""
    return _registry


def register_parser(parser_class: Type[BaseParser]) -> Type[BaseParser]:
    """Decorator to register a parser class.

    Usage:
        @register_parser
        class MyParser(BaseParser):
            ...
    """
    _registry.register(parser_class)
    return parser_class


def get_parser(format_name: str, options: ParserOptions | None = None) -> BaseParser:
    """Resolve a format using the global registry.

    Convenience function that loads the built-in parsers first.
    """
    load_builtin_parsers()
    return _registry.resolve(format_name, options)


_builtins_loaded = False


def load_builtin_parsers() -> None:
    """Load all built-in parsers.

    Importing the format modules triggers their registration.
    """
    global _builtins_loaded
    if _builtins_loaded:
        return

    from burrow.parsers.formats import (  # noqa: F401
        delimited,
        json as json_parser,
        ltsv,
        regexp,
        syslog,
        webserver,
    )

    _builtins_loaded = True
    logger.info(f"Loaded {len(_registry.names())} built-in parsers")

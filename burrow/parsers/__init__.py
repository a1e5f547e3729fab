"""Burrow format parser system.

Resolves a configured format name to a parser that turns one raw field
value into a sub-record and an optional timestamp.
"""

from burrow.parsers.base import BaseParser, ParseOutcome, ParserCategory, ParserMetadata
from burrow.parsers.options import ParserOptions
from burrow.parsers.registry import (
    ParserRegistry,
    get_parser,
    get_registry,
    load_builtin_parsers,
    register_parser,
)

__all__ = [
    "BaseParser",
    "ParseOutcome",
    "ParserCategory",
    "ParserMetadata",
    "ParserOptions",
    "ParserRegistry",
    "get_parser",
    "get_registry",
    "load_builtin_parsers",
    "register_parser",
]

"""Burrow: re-parse one field of a streamed event as a nested event.

Extracts a designated record field, parses it with a pluggable format
parser (JSON, CSV, TSV, LTSV, web server logs, syslog, regular
expressions) and recombines the result with the original record.
"""

from burrow._version import __version__
from burrow.config import BurrowFilterConfig, BurrowOutputConfig, Settings, get_settings
from burrow.core import Action, Event, FieldExtractor, RecordCombiner
from burrow.exceptions import BurrowException, ConfigError, ParseError, UnknownFormatError
from burrow.plugins import BurrowFilter, BurrowOutput

__all__ = [
    "Action",
    "BurrowException",
    "BurrowFilter",
    "BurrowFilterConfig",
    "BurrowOutput",
    "BurrowOutputConfig",
    "ConfigError",
    "Event",
    "FieldExtractor",
    "ParseError",
    "RecordCombiner",
    "Settings",
    "UnknownFormatError",
    "__version__",
    "get_settings",
]

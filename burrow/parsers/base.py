"""Base parser interface and data structures.

Defines the abstract interface that all format parsers must implement,
along with the outcome structure returned for a single raw value.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from burrow.exceptions import ConfigError, ErrorDetail, ParseError
from burrow.parsers.options import ParserOptions

# Fallback formats tried for string time values when no time_format is set
TIMESTAMP_FORMATS = [
    "%Y-%m-%dT%H:%M:%S.%fZ",
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%d/%b/%Y:%H:%M:%S %z",
]


class ParserCategory(str, Enum):
    """Categories of format parsers."""

    STRUCTURED = "structured"
    DELIMITED = "delimited"
    WEBSERVER = "webserver"
    SYSTEM = "system"
    GENERIC = "generic"


@dataclass
class ParserMetadata:
    """Metadata describing a parser's capabilities."""

    name: str
    display_name: str
    description: str
    category: str = "generic"
    aliases: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ParseOutcome:
    """Result of parsing one raw value.

    ``fields is None`` means the value held no parseable content. That is
    a valid outcome, not an error.
    """

    timestamp: int | None = None
    fields: dict[str, Any] | None = None


def parse_time(value: Any, time_format: str | None = None) -> int:
    """Convert a time value to integer epoch seconds.

    Raises:
        ParseError: If the value cannot be interpreted as a time
    """
    if isinstance(value, bool):
        raise ParseError(f"Invalid time value: {value!r}")

    if time_format:
        try:
            dt = datetime.strptime(str(value), time_format)
        except ValueError as e:
            raise ParseError(f"Time value {value!r} does not match '{time_format}'") from e
        if dt.year == 1900 and "%Y" not in time_format and "%y" not in time_format:
            # syslog-style stamps carry no year
            dt = dt.replace(year=datetime.now(UTC).year)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return int(dt.timestamp())

    if isinstance(value, (int, float)):
        try:
            if value > 1e12:  # Milliseconds
                return int(value / 1000)
            return int(value)
        except (ValueError, OverflowError) as e:
            raise ParseError(f"{type(value).__name__} time value out of range") from e

    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            try:
                number = int(text)
            except ValueError as e:
                raise ParseError(f"Invalid time value: {text[:32]!r}...") from e
            return parse_time(number)

        for fmt in TIMESTAMP_FORMATS:
            try:
                dt = datetime.strptime(text, fmt)
            except ValueError:
                continue
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=UTC)
            return int(dt.timestamp())

        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            pass
        else:
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=UTC)
            return int(dt.timestamp())

    raise ParseError(f"Invalid time value: {value!r}")


class BaseParser(ABC):
    """Abstract base class for all format parsers.

    Subclasses provide metadata through get_metadata() and implement
    parse_record(). Option validation belongs in configure(), which runs
    once from __init__ and must raise ConfigError on invalid options.

    Parsers keep no per-call mutable state and may be shared between
    workers.
    """

    _metadata: ParserMetadata | None = None

    # Used when the user does not supply time_format
    default_time_format: str | None = None

    def __init__(self, options: ParserOptions | None = None):
        self.options = options or ParserOptions()
        self.time_format = self.options.time_format or self.default_time_format
        self._null_pattern = (
            re.compile(self.options.null_value_pattern)
            if self.options.null_value_pattern
            else None
        )
        self.configure()

    @classmethod
    def get_metadata(cls) -> ParserMetadata | None:
        """Return parser metadata. Override in subclasses."""
        return None

    def _get_metadata(self) -> ParserMetadata | None:
        """Get cached metadata instance."""
        if self._metadata is None:
            self._metadata = self.__class__.get_metadata()
        return self._metadata

    @property
    def name(self) -> str:
        """Unique identifier for this parser."""
        meta = self._get_metadata()
        if meta:
            return meta.name
        return self.__class__.__name__.lower().replace("parser", "")

    @property
    def category(self) -> ParserCategory:
        """Category of input this parser handles."""
        meta = self._get_metadata()
        if meta:
            try:
                return ParserCategory(meta.category)
            except ValueError:
                return ParserCategory.GENERIC
        return ParserCategory.GENERIC

    @property
    def description(self) -> str:
        """Human-readable description of what this parser handles."""
        meta = self._get_metadata()
        if meta:
            return meta.description
        return ""

    def configure(self) -> None:
        """Validate format-specific options.

        Raises:
            ConfigError: If the options are unusable for this format
        """

    @abstractmethod
    def parse_record(self, raw: Any) -> dict[str, Any] | None:
        """Parse a raw value into a flat record.

        Args:
            raw: Value taken from the designated record field

        Returns:
            Parsed fields, or None if the value does not match the format

        Raises:
            ParseError: If the value is malformed for this format
        """
        ...

    def parse(self, raw: Any) -> ParseOutcome:
        """Parse a raw value and resolve its timestamp.

        Args:
            raw: Value taken from the designated record field

        Returns:
            ParseOutcome with the sub-record and its time, if any

        Raises:
            ParseError: If the value or its time field is malformed
        """
        fields = self.parse_record(raw)
        if fields is None:
            return ParseOutcome()

        fields = self._convert_nulls(fields)
        timestamp = self._extract_time(fields)
        return ParseOutcome(timestamp=timestamp, fields=fields)

    def _as_text(self, raw: Any) -> str:
        """Coerce a raw value to text."""
        if isinstance(raw, str):
            return raw
        if isinstance(raw, (bytes, bytearray)):
            return bytes(raw).decode("utf-8", errors="replace")
        if isinstance(raw, Mapping):
            raise ParseError(f"{self.name} parser expects text, got a mapping", self.name)
        return str(raw)

    def _convert_nulls(self, fields: dict[str, Any]) -> dict[str, Any]:
        if not self._null_pattern and not self.options.null_empty_string:
            return fields

        for key, value in fields.items():
            if not isinstance(value, str):
                continue
            if self.options.null_empty_string and value == "":
                fields[key] = None
            elif self._null_pattern and self._null_pattern.fullmatch(value):
                fields[key] = None
        return fields

    def _extract_time(self, fields: dict[str, Any]) -> int | None:
        time_key = self.options.time_key
        if time_key not in fields:
            return None

        if self.options.keep_time_key:
            value = fields[time_key]
        else:
            value = fields.pop(time_key)

        if value is None or value == "":
            return None
        return parse_time(value, self.time_format)

    def _require(self, condition: bool, option: str, message: str) -> None:
        """Raise ConfigError for this parser when condition is false."""
        if not condition:
            raise ConfigError(
                message=f"{self.name}: {message}",
                details=[ErrorDetail(field=option, message=message, code="parser_option")],
            )

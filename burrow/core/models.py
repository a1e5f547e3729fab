"""Core data structures shared by the filter and output variants."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from burrow.exceptions import ParseError
from burrow.parsers.base import ParseOutcome

Record = dict[str, Any]


class Action(str, Enum):
    """Placement policy for a parsed sub-record."""

    INPLACE = "inplace"
    OVERLAY = "overlay"
    REPLACE = "replace"
    PREFIX = "prefix"

    @classmethod
    def values(cls) -> list[str]:
        return [action.value for action in cls]


@dataclass(frozen=True)
class Event:
    """One unit of streamed data: tag + timestamp + record."""

    tag: str
    timestamp: int | None
    record: Record = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "tag": self.tag,
            "time": self.timestamp,
            "record": self.record,
        }


@dataclass(frozen=True)
class SubParse:
    """Result of extracting and re-parsing the designated field.

    ``original_time`` is the value of the record's time field (or the
    event's own timestamp when the field is absent), captured before the
    parser ran. ``timestamp`` is the time the re-emitted event should carry.
    """

    outcome: ParseOutcome
    raw_value: Any
    original_time: Any
    timestamp: int | None
    error: ParseError | None = None

    @property
    def fields(self) -> Record | None:
        return self.outcome.fields

    @property
    def parsed(self) -> bool:
        return self.outcome.fields is not None


__all__ = [
    "Action",
    "Event",
    "ParseOutcome",
    "Record",
    "SubParse",
]

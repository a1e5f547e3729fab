"""Field extraction and sub-parsing.

Pulls the designated field out of a record and re-parses it with the
resolved format parser.
"""

import logging
from typing import Any

from burrow.core.models import ParseOutcome, Record, SubParse
from burrow.exceptions import ParseError
from burrow.parsers.base import BaseParser

logger = logging.getLogger(__name__)

_EMPTY = ParseOutcome()


def is_empty(value: Any) -> bool:
    """Whether a field value carries nothing to parse."""
    return value is None or (isinstance(value, (str, bytes)) and len(value) == 0)


def resolve_event_time(
    parsed_time: int | None,
    original_time: Any,
    event_time: int | None,
) -> int | None:
    """Pick the time for the re-emitted event.

    The sub-record's own time wins. Otherwise the original record time is
    used when it is numeric, else the incoming event time.
    """
    if parsed_time is not None:
        return parsed_time
    if isinstance(original_time, (int, float)) and not isinstance(original_time, bool):
        return int(original_time)
    return event_time


class FieldExtractor:
    """Extracts one field from a record and parses it as a nested event.

    Stateless apart from its immutable configuration, so one instance can
    serve concurrent callers.
    """

    def __init__(self, parser: BaseParser, key_name: str, record_time_key: str = "time"):
        self.parser = parser
        self.key_name = key_name
        self.record_time_key = record_time_key

    def extract(self, record: Record, event_time: int | None = None) -> SubParse:
        """Extract and parse the designated field.

        Missing or empty fields and malformed values produce an outcome
        without fields; neither is raised.

        Args:
            record: The incoming event record
            event_time: The incoming event timestamp

        Returns:
            SubParse with the parse outcome and reconciled times
        """
        raw_value = record.get(self.key_name)

        # Captured before parsing: the parser may derive its own time
        original_time = record.get(self.record_time_key, event_time)

        if is_empty(raw_value):
            return SubParse(
                outcome=_EMPTY,
                raw_value=raw_value,
                original_time=original_time,
                timestamp=resolve_event_time(None, original_time, event_time),
            )

        error = None
        try:
            outcome = self.parser.parse(raw_value)
        except ParseError as e:
            logger.debug(f"Failed to parse '{self.key_name}' as {self.parser.name}: {e.message}")
            outcome = _EMPTY
            error = e

        return SubParse(
            outcome=outcome,
            raw_value=raw_value,
            original_time=original_time,
            timestamp=resolve_event_time(outcome.timestamp, original_time, event_time),
            error=error,
        )

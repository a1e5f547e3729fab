"""JSON format parser.

Parses a field holding a serialized JSON object. Values that were already
decoded into a mapping upstream are accepted as-is.
"""

import json
from collections.abc import Mapping
from typing import Any

from burrow.exceptions import ParseError
from burrow.parsers.base import BaseParser, ParserMetadata
from burrow.parsers.registry import register_parser


@register_parser
class JSONParser(BaseParser):
    """Parser for JSON object values."""

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="json",
            display_name="JSON Parser",
            description="Parses a serialized JSON object",
            category="structured",
        )

    def parse_record(self, raw: Any) -> dict[str, Any] | None:
        """Decode a JSON object."""
        if isinstance(raw, Mapping):
            return dict(raw)

        text = self._as_text(raw).strip()
        if not text:
            return None

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON at position {e.pos}: {e.msg}", self.name) from e
        except ValueError as e:
            # Integer literals above the interpreter's digit limit
            raise ParseError(f"Invalid JSON: {e}", self.name) from e

        if not isinstance(data, dict):
            raise ParseError(
                f"Expected a JSON object, got {type(data).__name__}", self.name
            )
        return data

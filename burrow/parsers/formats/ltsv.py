"""LTSV (Labeled Tab-Separated Values) parser."""

from typing import Any

from burrow.parsers.base import BaseParser, ParserMetadata
from burrow.parsers.registry import register_parser


@register_parser
class LTSVParser(BaseParser):
    """Parse Labeled Tab-Separated Values."""

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="ltsv",
            display_name="LTSV Parser",
            description="Parses label:value pairs separated by tabs",
            category="delimited",
        )

    def parse_record(self, raw: Any) -> dict[str, Any] | None:
        text = self._as_text(raw).rstrip("\r\n")
        if not text:
            return None

        fields: dict[str, Any] = {}
        for pair in text.split(self.options.delimiter):
            if self.options.label_delimiter not in pair:
                continue
            key, value = pair.split(self.options.label_delimiter, 1)
            if not key:
                continue
            fields[key] = value

        return fields or None

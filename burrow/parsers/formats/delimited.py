"""Delimiter-separated value parsers (CSV and TSV).

Column names are supplied through the ``keys`` option; each value is
mapped positionally onto them.
"""

import csv
from typing import Any

from burrow.exceptions import ParseError
from burrow.parsers.base import BaseParser, ParserMetadata
from burrow.parsers.registry import register_parser


@register_parser
class CSVParser(BaseParser):
    """Parser for a single CSV line."""

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="csv",
            display_name="CSV Parser",
            description="Parses one comma-separated line into the configured keys",
            category="delimited",
        )

    def configure(self) -> None:
        self._require(bool(self.options.keys), "keys", "'keys' is required")

    def parse_record(self, raw: Any) -> dict[str, Any] | None:
        text = self._as_text(raw).rstrip("\r\n")
        if not text:
            return None

        try:
            rows = list(csv.reader([text]))
        except csv.Error as e:
            raise ParseError(f"Invalid CSV: {e}", self.name) from e

        return self._zip(rows[0] if rows else [])

    def _zip(self, values: list[str]) -> dict[str, Any]:
        # Missing trailing columns become None, surplus columns are dropped
        keys = self.options.keys
        padded = values + [None] * (len(keys) - len(values))
        return dict(zip(keys, padded))


@register_parser
class TSVParser(CSVParser):
    """Parser for a single tab-separated line."""

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="tsv",
            display_name="TSV Parser",
            description="Parses one tab-separated line into the configured keys",
            category="delimited",
        )

    def parse_record(self, raw: Any) -> dict[str, Any] | None:
        text = self._as_text(raw).rstrip("\r\n")
        if not text:
            return None
        return self._zip(text.split("\t"))

"""Regular-expression and pass-through parsers.

RegexpParser is also the base for the fixed-pattern web server and syslog
parsers: named groups become record fields.
"""

import re
from typing import Any

from burrow.parsers.base import BaseParser, ParserMetadata
from burrow.parsers.registry import register_parser


@register_parser
class RegexpParser(BaseParser):
    """Parser driven by a user-supplied regular expression.

    Configured either with ``format regexp`` plus ``expression``, or with
    the shorthand ``format /EXPR/``.
    """

    # Fixed-pattern subclasses set this instead of using the expression option
    pattern: re.Pattern | None = None

    # Fields converted to int; "-" becomes None
    int_fields: tuple[str, ...] = ()

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="regexp",
            display_name="Regular Expression Parser",
            description="Parses values with a named-group regular expression",
            category="generic",
        )

    def configure(self) -> None:
        if self.pattern is not None:
            self._regex = self.pattern
            return

        expression = self.options.expression
        self._require(bool(expression), "expression", "'expression' is required")
        try:
            self._regex = re.compile(expression)
        except re.error as e:
            self._require(False, "expression", f"invalid regular expression: {e}")
        self._require(
            bool(self._regex.groupindex),
            "expression",
            "expression must contain at least one named group",
        )

    def parse_record(self, raw: Any) -> dict[str, Any] | None:
        text = self._as_text(raw).rstrip("\r\n")
        if not text:
            return None

        match = self._regex.search(text)
        if not match:
            return None

        fields = match.groupdict()
        for key in self.int_fields:
            value = fields.get(key)
            if value is None:
                continue
            try:
                fields[key] = int(value)
            except ValueError:
                fields[key] = None
        return fields


@register_parser
class NoneParser(BaseParser):
    """Pass-through parser: the whole value becomes one field."""

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="none",
            display_name="Pass-through Parser",
            description="Stores the raw value under message_key without parsing",
            category="generic",
        )

    def parse_record(self, raw: Any) -> dict[str, Any] | None:
        text = self._as_text(raw).rstrip("\r\n")
        if not text:
            return None
        return {self.options.message_key: text}

"""Syslog message parsers.

Parses single syslog lines in the traditional BSD format (RFC 3164) and
the structured RFC 5424 format.
"""

import re
from typing import Any

from burrow.parsers.base import ParserMetadata
from burrow.parsers.formats.regexp import RegexpParser
from burrow.parsers.registry import register_parser


@register_parser
class SyslogParser(RegexpParser):
    """Parser for RFC 3164 syslog lines."""

    # Standard syslog: Month Day HH:MM:SS host ident[pid]: message
    pattern = re.compile(
        r"^(?:<(?P<pri>\d+)>)?"
        r"(?P<time>\w{3}\s+\d{1,2}\s+\d{2}:\d{2}:\d{2})\s+"
        r"(?P<host>\S+)\s+"
        r"(?P<ident>[a-zA-Z0-9_/.\-]*)(?:\[(?P<pid>\d+)\])?"
        r"(?:[^:]*:)?\s*"
        r"(?P<message>.*)$"
    )
    default_time_format = "%b %d %H:%M:%S"

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="syslog",
            display_name="Syslog Parser",
            description="Parses RFC 3164 (BSD) syslog lines",
            category="system",
            aliases=["rfc3164"],
        )

    def parse_record(self, raw: Any) -> dict[str, Any] | None:
        fields = super().parse_record(raw)
        if fields is None:
            return None

        # Collapse the double space used for single-digit days
        if fields.get("time"):
            fields["time"] = re.sub(r"\s+", " ", fields["time"])
        if fields.get("pri") is None:
            fields.pop("pri", None)
        return fields


@register_parser
class Rfc5424SyslogParser(RegexpParser):
    """Parser for RFC 5424 syslog lines."""

    # <PRI>VERSION TIMESTAMP HOSTNAME APP-NAME PROCID MSGID SD MSG
    pattern = re.compile(
        r"^<(?P<pri>\d+)>(?P<version>\d)?\s*(?P<time>\S+)\s+(?P<host>\S+)\s+"
        r"(?P<ident>\S+)\s+(?P<pid>\S+)\s+(?P<msgid>\S+)\s+"
        r"(?P<extradata>-|\[.*?\])\s*(?P<message>.*)$"
    )

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="syslog_rfc5424",
            display_name="RFC 5424 Syslog Parser",
            description="Parses RFC 5424 structured syslog lines",
            category="system",
            aliases=["rfc5424"],
        )

    def parse_record(self, raw: Any) -> dict[str, Any] | None:
        fields = super().parse_record(raw)
        if fields is None:
            return None

        # RFC 5424 uses "-" for absent header values
        for key in ("time", "host", "ident", "pid", "msgid", "extradata"):
            if fields.get(key) == "-":
                fields[key] = None
        return fields

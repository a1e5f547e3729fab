"""Web server log parsers.

Parses access and error log lines from:
- Apache HTTP Server (Common and Combined log formats, error log)
- Nginx (default combined access format)
"""

import re

from burrow.parsers.base import ParserMetadata
from burrow.parsers.formats.regexp import RegexpParser
from burrow.parsers.registry import register_parser

ACCESS_TIME_FORMAT = "%d/%b/%Y:%H:%M:%S %z"


@register_parser
class ApacheCommonParser(RegexpParser):
    """Parser for Apache Common Log Format lines."""

    # Common Log Format:
    # %h %l %u %t "%r" %>s %b
    pattern = re.compile(
        r'^(?P<host>[^ ]*) '  # Remote host
        r'[^ ]* '  # Ident (usually -)
        r'(?P<user>[^ ]*) '  # Remote user
        r'\[(?P<time>[^\]]*)\] '  # Timestamp
        r'"(?P<method>\S+)(?: +(?P<path>[^ ]*) +\S*)?" '  # Request line
        r'(?P<code>[^ ]*) '  # Status code
        r'(?P<size>[^ ]*)$'  # Bytes sent
    )
    int_fields = ("code", "size")
    default_time_format = ACCESS_TIME_FORMAT

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="apache",
            display_name="Apache Common Log Parser",
            description="Parses Apache HTTP Server access logs (Common format)",
            category="webserver",
        )


@register_parser
class ApacheCombinedParser(RegexpParser):
    """Parser for Apache Combined Log Format lines."""

    # Combined Log Format:
    # %h %l %u %t "%r" %>s %b "%{Referer}i" "%{User-Agent}i"
    pattern = re.compile(
        r'^(?P<host>[^ ]*) '
        r'[^ ]* '
        r'(?P<user>[^ ]*) '
        r'\[(?P<time>[^\]]*)\] '
        r'"(?P<method>\S+)(?: +(?P<path>[^ ]*) +\S*)?" '
        r'(?P<code>[^ ]*) '
        r'(?P<size>[^ ]*)'
        r'(?: "(?P<referer>[^"]*)" "(?P<agent>[^"]*)")?$'  # Referer and User-Agent (optional)
    )
    int_fields = ("code", "size")
    default_time_format = ACCESS_TIME_FORMAT

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="apache2",
            display_name="Apache Combined Log Parser",
            description="Parses Apache HTTP Server access logs (Combined format)",
            category="webserver",
            aliases=["apache_combined"],
        )


@register_parser
class ApacheErrorParser(RegexpParser):
    """Parser for Apache error log lines."""

    # [Wed Oct 11 14:32:52 2000] [error] [pid 1234] [client 127.0.0.1] message
    pattern = re.compile(
        r'^\[[^ ]* (?P<time>[^\]]*)\] '
        r'\[(?P<level>[^\]]*)\]'
        r'(?: \[pid (?P<pid>[^\]]*)\])?'
        r'(?: \[client (?P<client>[^\]]*)\])? '
        r'(?P<message>.*)$'
    )
    default_time_format = "%b %d %H:%M:%S %Y"

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="apache_error",
            display_name="Apache Error Log Parser",
            description="Parses Apache HTTP Server error logs",
            category="webserver",
        )


@register_parser
class NginxAccessParser(RegexpParser):
    """Parser for Nginx access log lines."""

    # $remote_addr - $remote_user [$time_local] "$request" $status $body_bytes_sent
    # "$http_referer" "$http_user_agent"
    pattern = re.compile(
        r'^(?P<remote>[^ ]*) '
        r'(?P<host>[^ ]*) '
        r'(?P<user>[^ ]*) '
        r'\[(?P<time>[^\]]*)\] '
        r'"(?P<method>\S+)(?: +(?P<path>[^"]*?)(?: +\S*)?)?" '
        r'(?P<code>[^ ]*) '
        r'(?P<size>[^ ]*)'
        r'(?: "(?P<referer>[^"]*)" "(?P<agent>[^"]*)")?'
    )
    int_fields = ("code", "size")
    default_time_format = ACCESS_TIME_FORMAT

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="nginx",
            display_name="Nginx Access Log Parser",
            description="Parses Nginx access logs (combined format)",
            category="webserver",
        )

"""Built-in format parsers."""

from burrow.parsers.formats.delimited import CSVParser, TSVParser
from burrow.parsers.formats.json import JSONParser
from burrow.parsers.formats.ltsv import LTSVParser
from burrow.parsers.formats.regexp import NoneParser, RegexpParser
from burrow.parsers.formats.syslog import Rfc5424SyslogParser, SyslogParser
from burrow.parsers.formats.webserver import (
    ApacheCombinedParser,
    ApacheCommonParser,
    ApacheErrorParser,
    NginxAccessParser,
)

__all__ = [
    "ApacheCombinedParser",
    "ApacheCommonParser",
    "ApacheErrorParser",
    "CSVParser",
    "JSONParser",
    "LTSVParser",
    "NginxAccessParser",
    "NoneParser",
    "RegexpParser",
    "Rfc5424SyslogParser",
    "SyslogParser",
    "TSVParser",
]

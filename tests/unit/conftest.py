"""Shared fixtures for unit tests.

Provides sample log lines for the built-in format parsers.
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest


@pytest.fixture
def apache_combined_line() -> str:
    """Apache Combined Log Format line."""
    return (
        '192.168.0.1 - - [28/Feb/2013:12:00:00 +0900] '
        '"GET / HTTP/1.1" 200 777 "-" "Opera/12.0"'
    )


@pytest.fixture
def apache_combined_time() -> int:
    """Epoch seconds of apache_combined_line."""
    tz = timezone(timedelta(hours=9))
    return int(datetime(2013, 2, 28, 12, 0, 0, tzinfo=tz).timestamp())


@pytest.fixture
def apache_common_line() -> str:
    """Apache Common Log Format line."""
    return '127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] "GET /apache_pb.gif HTTP/1.0" 200 2326'


@pytest.fixture
def apache_error_line() -> str:
    """Apache error log line."""
    return (
        "[Wed Oct 11 14:32:52 2000] [error] [client 127.0.0.1] "
        "client denied by server configuration"
    )


@pytest.fixture
def nginx_line() -> str:
    """Nginx combined access log line."""
    return (
        '127.0.0.1 - - [28/Feb/2013:12:00:00 +0900] '
        '"GET /index.html?q=1 HTTP/1.1" 404 0 "http://example.com/" "curl/8.0"'
    )


@pytest.fixture
def syslog_line() -> str:
    """RFC 3164 syslog line."""
    return "Feb 28 12:00:00 192.168.0.1 fluentd[11111]: [error] Syslog test"


@pytest.fixture
def rfc5424_line() -> str:
    """RFC 5424 syslog line."""
    return "<34>1 2003-10-11T22:14:15.003Z mymachine.example.com su - ID47 - 'su root' failed"


@pytest.fixture
def rfc5424_time() -> int:
    """Epoch seconds of rfc5424_line."""
    return int(datetime(2003, 10, 11, 22, 14, 15, tzinfo=UTC).timestamp())

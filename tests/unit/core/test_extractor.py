"""Unit tests for FieldExtractor and event time resolution."""

import pytest

from burrow.core.extractor import FieldExtractor, is_empty, resolve_event_time
from burrow.exceptions import ParseError
from burrow.parsers.formats.json import JSONParser

pytestmark = pytest.mark.unit


@pytest.fixture
def extractor():
    return FieldExtractor(JSONParser(), key_name="message")


class TestExtract:
    """Tests for FieldExtractor.extract()."""

    def test_parses_field(self, extractor):
        sub = extractor.extract({"message": '{"a": 1}'}, 100)

        assert sub.parsed
        assert sub.fields == {"a": 1}
        assert sub.raw_value == '{"a": 1}'
        assert sub.error is None

    @pytest.mark.parametrize("record", [
        {"other": 1},
        {"message": ""},
        {"message": b""},
        {"message": None},
    ])
    def test_missing_or_empty_field(self, extractor, record):
        sub = extractor.extract(record, 100)

        assert not sub.parsed
        assert sub.fields is None
        assert sub.error is None

    def test_malformed_value(self, extractor):
        sub = extractor.extract({"message": "{broken"}, 100)

        assert not sub.parsed
        assert isinstance(sub.error, ParseError)
        assert sub.raw_value == "{broken"

    def test_original_time_from_record(self, extractor):
        sub = extractor.extract({"message": '{"a": 1}', "time": "T0"}, 100)
        assert sub.original_time == "T0"

    def test_original_time_falls_back_to_event_time(self, extractor):
        sub = extractor.extract({"message": '{"a": 1}'}, 100)
        assert sub.original_time == 100

    def test_original_time_captured_for_empty_field(self, extractor):
        sub = extractor.extract({"message": "", "time": "T0"}, 100)
        assert sub.original_time == "T0"

    def test_custom_record_time_key(self):
        extractor = FieldExtractor(JSONParser(), key_name="log", record_time_key="ts")
        sub = extractor.extract({"log": "{}", "ts": 5, "time": 7}, 100)

        assert sub.original_time == 5
        assert sub.timestamp == 5

    def test_parsed_time_wins(self, extractor):
        sub = extractor.extract({"message": '{"time": 1700000000}', "time": 5}, 100)
        assert sub.timestamp == 1700000000

    def test_mapping_value(self, extractor):
        sub = extractor.extract({"message": {"already": "decoded"}}, 100)
        assert sub.fields == {"already": "decoded"}

    def test_record_not_mutated(self, extractor):
        record = {"message": '{"time": 1700000000}', "time": 5}
        extractor.extract(record, 100)

        assert record == {"message": '{"time": 1700000000}', "time": 5}


class TestResolveEventTime:
    """Tests for resolve_event_time()."""

    def test_parsed_time_first(self):
        assert resolve_event_time(10, 20, 30) == 10

    def test_numeric_original_time(self):
        assert resolve_event_time(None, 20, 30) == 20
        assert resolve_event_time(None, 20.7, 30) == 20

    @pytest.mark.parametrize("original", ["2013-10-31 12:48:33", None, True])
    def test_non_numeric_original_time(self, original):
        assert resolve_event_time(None, original, 30) == 30

    def test_all_absent(self):
        assert resolve_event_time(None, None, None) is None


class TestIsEmpty:
    """Tests for is_empty()."""

    @pytest.mark.parametrize("value", [None, "", b""])
    def test_empty(self, value):
        assert is_empty(value)

    @pytest.mark.parametrize("value", [0, False, " ", {}, "x"])
    def test_not_empty(self, value):
        assert not is_empty(value)

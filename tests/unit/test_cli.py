"""Unit tests for the command-line runner."""

import io
import json

import pytest

from burrow.cli import Pipeline, StreamRouter, main, read_events
from burrow.exceptions import ConfigError

pytestmark = pytest.mark.unit


def output_lines(out: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in out.getvalue().splitlines()]


@pytest.fixture
def write_file(tmp_path):
    def _write(name: str, content: str):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


class TestReadEvents:
    """Tests for JSON lines input."""

    def test_envelopes_and_bare_records(self):
        stream = io.StringIO(
            '{"tag": "raw.app", "time": 100, "record": {"message": "x"}}\n'
            '{"message": "y"}\n'
        )

        assert list(read_events(stream, "default")) == [
            ("raw.app", 100, {"message": "x"}),
            ("default", None, {"message": "y"}),
        ]

    def test_skips_invalid_lines(self, caplog):
        stream = io.StringIO('# comment\n\nnot json\n[1, 2]\n{"a": 1}\n')

        assert list(read_events(stream, "t")) == [("t", None, {"a": 1})]
        assert "Skipping line 3" in caplog.text
        assert "Skipping line 4" in caplog.text

    def test_non_integer_time_ignored(self):
        stream = io.StringIO('{"tag": "x", "time": true, "record": {}}\n')
        assert list(read_events(stream, "t")) == [("x", None, {})]


class TestPipeline:
    """Tests for building pipelines from definitions."""

    @pytest.fixture
    def router(self):
        return StreamRouter(io.StringIO())

    def test_filters_only(self, router):
        pipeline = Pipeline.from_definition(
            {"filters": [{"type": "burrow", "key_name": "message", "format": "json", "action": "replace"}]},
            router,
        )
        pipeline.start()
        pipeline.process("app", 1, {"message": '{"a":1}'})

        assert output_lines(router.stream) == [{"tag": "app", "time": 1, "record": {"a": 1}}]

    @pytest.mark.parametrize("definition", [
        [],
        {},
        {"filters": ["burrow"]},
        {"output": "burrow"},
        {"filters": [{"type": "unknown", "key_name": "m", "format": "json"}]},
    ])
    def test_invalid_definitions(self, router, definition):
        with pytest.raises(ConfigError):
            Pipeline.from_definition(definition, router)


class TestMain:
    """Tests for main()."""

    def test_list_formats(self):
        out = io.StringIO()

        assert main(["--list-formats"], stdout=out) == 0
        assert "apache2" in out.getvalue()
        assert "aliases: apache_combined" in out.getvalue()
        assert "webserver" in out.getvalue()

    def test_config_required(self):
        assert main([], stdout=io.StringIO()) == 2

    def test_missing_config_file(self, tmp_path):
        assert main(["-c", str(tmp_path / "missing.yaml")], stdout=io.StringIO()) == 2

    def test_invalid_config(self, write_file, capsys):
        config = write_file("pipeline.yaml", "filters:\n  - key_name: message\n    format: json\n    action: prefix\n")

        assert main(["-c", str(config)], stdout=io.StringIO()) == 2
        assert '"code": "CONFIG_ERROR"' in capsys.readouterr().err

    def test_runs_pipeline(self, write_file):
        config = write_file(
            "pipeline.yaml",
            "filters:\n"
            "  - type: burrow\n"
            "    key_name: message\n"
            "    format: json\n"
            "    action: replace\n"
            "output:\n"
            "  type: burrow\n"
            "  key_name: log\n"
            "  format: ltsv\n"
            "  action: overlay\n"
            "  remove_prefix: raw\n",
        )
        events = write_file(
            "events.jsonl",
            json.dumps({
                "tag": "raw.app",
                "time": 100,
                "record": {"message": json.dumps({"log": "level:info\tmsg:hi", "host": "web01"})},
            }) + "\n"
            + json.dumps({"tag": "raw.app", "time": 101, "record": {"message": "{}"}}) + "\n",
        )
        out = io.StringIO()

        assert main(["-c", str(config), "-i", str(events)], stdout=out) == 0
        assert output_lines(out) == [{
            "tag": "app",
            "time": 100,
            "record": {"host": "web01", "level": "info", "msg": "hi"},
        }]

    def test_bad_lines_do_not_stop_the_run(self, write_file):
        config = write_file(
            "pipeline.yaml",
            "filters:\n"
            "  - key_name: message\n"
            "    format: json\n"
            "    action: replace\n",
        )
        bad = {"message": '{"a":1,"time":NaN}'}
        events = write_file(
            "events.jsonl",
            json.dumps({"message": '{"a":1}'}) + "\n"
            + "not json at all\n"
            + json.dumps(bad) + "\n"
            + json.dumps({"message": '{"b":2}'}) + "\n",
        )
        out = io.StringIO()

        assert main(["-c", str(config), "-i", str(events), "-t", "app"], stdout=out) == 0
        assert [line["record"] for line in output_lines(out)] == [{"a": 1}, bad, {"b": 2}]

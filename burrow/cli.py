"""Command-line runner for burrow pipelines.

Reads JSON lines from a file or stdin, runs each event through the
configured filter stages and optional output stage, and writes the
resulting events to stdout as JSON lines.

Pipeline file example:

    filters:
      - type: burrow
        key_name: message
        format: json
        action: overlay
    output:
      type: burrow
      key_name: log
      format: apache2
      remove_prefix: raw

Input lines are either event envelopes ``{"tag": ..., "time": ...,
"record": {...}}`` or bare records, which get the ``--tag`` tag.
"""

import argparse
import json
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Any, TextIO

import yaml

from burrow.config import get_settings
from burrow.core.models import Event
from burrow.exceptions import BurrowException, ConfigError
from burrow.parsers.registry import get_registry, load_builtin_parsers
from burrow.plugins.filter import BurrowFilter
from burrow.plugins.output import BurrowOutput
from burrow.plugins.registry import get_plugin_class

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2


class StreamRouter:
    """Router that writes emitted events to a text stream as JSON lines."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def emit(self, tag: str, time: int | None, record: dict[str, Any]) -> None:
        event = Event(tag=tag, timestamp=time, record=record)
        self.stream.write(json.dumps(event.to_dict(), default=str) + "\n")


class Pipeline:
    """Filters followed by an optional output, built from a pipeline definition."""

    def __init__(self, filters: list[BurrowFilter], output: BurrowOutput | None, router: StreamRouter):
        self.filters = filters
        self.output = output
        self.router = router

    @classmethod
    def from_definition(cls, definition: dict[str, Any], router: StreamRouter) -> "Pipeline":
        """Build and configure all stages.

        Raises:
            ConfigError: If any stage is invalid
        """
        if not isinstance(definition, dict):
            raise ConfigError("Pipeline definition must be a mapping")

        filters = []
        for index, conf in enumerate(definition.get("filters") or []):
            if not isinstance(conf, dict):
                raise ConfigError(f"Filter stage {index} must be a mapping")
            plugin = get_plugin_class("filter", conf.get("type", "burrow"))()
            plugin.configure(conf)
            filters.append(plugin)

        output = None
        output_conf = definition.get("output")
        if output_conf is not None:
            if not isinstance(output_conf, dict):
                raise ConfigError("Output stage must be a mapping")
            output = get_plugin_class("output", output_conf.get("type", "burrow"))(router=router)
            output.configure(output_conf)

        if not filters and output is None:
            raise ConfigError("Pipeline defines no filters and no output")

        return cls(filters, output, router)

    def start(self) -> None:
        for plugin in self._plugins():
            plugin.start()

    def shutdown(self) -> None:
        for plugin in self._plugins():
            plugin.shutdown()

    def _plugins(self) -> list:
        return [*self.filters, *([self.output] if self.output else [])]

    def process(self, tag: str, time: int | None, record: dict[str, Any]) -> None:
        """Run one event through every stage."""
        for plugin in self.filters:
            record = plugin.filter(tag, time, record)
            if record is None:
                return

        if self.output is not None:
            self.output.emit(tag, [(time, record)])
        else:
            self.router.emit(tag, time, record)


def read_events(stream: TextIO, default_tag: str) -> Iterator[tuple[str, int | None, dict[str, Any]]]:
    """Yield (tag, time, record) triples from JSON lines."""
    for line_num, line in enumerate(stream, 1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Skipping line {line_num}: invalid JSON ({e.msg})")
            continue
        if not isinstance(data, dict):
            logger.warning(f"Skipping line {line_num}: expected a JSON object")
            continue

        if isinstance(data.get("record"), dict):
            time = data.get("time")
            yield (
                str(data.get("tag") or default_tag),
                time if isinstance(time, int) and not isinstance(time, bool) else None,
                data["record"],
            )
        else:
            yield default_tag, None, data


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="burrow",
        description="Re-parse one field of each event as a nested event",
    )
    parser.add_argument("-c", "--config", type=Path, help="Pipeline definition (YAML)")
    parser.add_argument("-i", "--input", type=Path, help="JSON lines input (default: stdin)")
    parser.add_argument("-t", "--tag", default="burrow", help="Tag for bare input records")
    parser.add_argument("--list-formats", action="store_true", help="List available formats")
    parser.add_argument("--log-level", help="Override BURROW_LOG_LEVEL")
    return parser


def list_formats(out: TextIO) -> None:
    load_builtin_parsers()
    for info in sorted(get_registry().list_parsers(), key=lambda p: p["name"]):
        aliases = f" (aliases: {', '.join(info['aliases'])})" if info["aliases"] else ""
        out.write(f"{info['name']:<16} {info['category']:<11} {info['description']}{aliases}\n")


def main(argv: list[str] | None = None, stdout: TextIO | None = None) -> int:
    stdout = stdout or sys.stdout
    args = build_arg_parser().parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, (args.log_level or settings.log_level).upper(), logging.INFO),
        format=settings.log_format,
        stream=sys.stderr,
    )

    if args.list_formats:
        list_formats(stdout)
        return EXIT_OK

    if args.config is None:
        logger.error("A pipeline definition is required (--config)")
        return EXIT_CONFIG_ERROR

    router = StreamRouter(stdout)
    try:
        definition = yaml.safe_load(args.config.read_text(encoding="utf-8"))
        pipeline = Pipeline.from_definition(definition, router)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Cannot load pipeline definition {args.config}: {e}")
        return EXIT_CONFIG_ERROR
    except ConfigError as e:
        logger.error(f"Invalid pipeline definition: {e.message}")
        sys.stderr.write(json.dumps(e.to_dict()) + "\n")
        return EXIT_CONFIG_ERROR

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    pipeline.start()
    try:
        if args.input:
            with open(args.input, encoding="utf-8", errors="replace") as f:
                for tag, time, record in read_events(f, args.tag):
                    pipeline.process(tag, time, record)
        else:
            for tag, time, record in read_events(sys.stdin, args.tag):
                pipeline.process(tag, time, record)
    except BurrowException as e:
        logger.error(f"Pipeline failed: {e.message}")
        return 1
    finally:
        pipeline.shutdown()

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

"""Burrow filter plugin.

Extracts a single key from an event record, re-parses it with the
configured format and returns the recombined record. The event tag is
never changed.

Example pipeline stage:

    - type: burrow
      key_name: message
      format: json
      action: overlay
      keep_time: true
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from burrow.config import BurrowConfig, BurrowFilterConfig
from burrow.plugins.base import BasePlugin
from burrow.plugins.registry import register_plugin

logger = logging.getLogger(__name__)


@register_plugin("filter", "burrow")
class BurrowFilter(BasePlugin):
    """Filter variant: one event in, one event out."""

    kind = "filter"
    config_class = BurrowFilterConfig

    def _setup(self, config: BurrowConfig) -> None:
        pass

    def filter(self, tag: str, time: int | None, record: dict[str, Any]) -> dict[str, Any] | None:
        """Transform one record.

        A record whose field is missing, empty or unparsable is returned
        unchanged.

        Args:
            tag: Event tag
            time: Event timestamp
            record: Event record (not mutated)

        Returns:
            The combined record, or the original record when nothing was parsed
        """
        self._ensure_ready("filter")
        self._record_received()

        sub = self.extractor.extract(record, time)
        if sub.error is not None:
            self._metrics.parse_failures += 1

        if not sub.parsed:
            self._metrics.events_passed_through += 1
            return record

        result = self.combiner.combine(record, sub)
        if result is None:
            self._metrics.events_dropped += 1
            logger.debug(f"Dropped event with tag '{tag}'")
            return None

        self._metrics.events_emitted += 1
        return result

    def filter_stream(
        self,
        tag: str,
        events: Iterable[tuple[int | None, dict[str, Any]]],
    ) -> Iterator[tuple[int | None, dict[str, Any]]]:
        """Apply filter() to a batch, skipping dropped events.

        Args:
            tag: Tag shared by the batch
            events: (time, record) pairs

        Yields:
            (time, record) pairs for the events that survive
        """
        for time, record in events:
            result = self.filter(tag, time, record)
            if result is not None:
                yield time, result

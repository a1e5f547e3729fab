"""Burrow output plugin.

Extracts a single key from each event of a stream, re-parses it with the
configured format and re-emits the result under a new tag.

If the incoming event is:

    {
      "time": "2013-10-31 12:48:33",
      "message": "{\\"name\\": \\"test\\", \\"age\\": 20}"
    }

then with

    - type: burrow
      key_name: message
      format: json
      action: replace
      keep_time: true
      remove_prefix: raw

an event tagged ``raw.test.tag`` is re-emitted as ``test.tag`` with

    {"name": "test", "age": 20, "time": "2013-10-31 12:48:33"}
"""

import logging
from collections.abc import Iterable
from typing import Any

from burrow.config import BurrowConfig, BurrowOutputConfig
from burrow.core.models import Event
from burrow.core.tagging import TagRule
from burrow.plugins.base import BasePlugin, EventRouter, OutputChain
from burrow.plugins.registry import register_plugin

logger = logging.getLogger(__name__)


@register_plugin("output", "burrow")
class BurrowOutput(BasePlugin):
    """Output variant: re-tags and re-emits parsed events."""

    kind = "output"
    config_class = BurrowOutputConfig

    def __init__(self, router: EventRouter | None = None):
        super().__init__()
        self.router = router
        self.tag_rule: TagRule | None = None

    def _setup(self, config: BurrowConfig) -> None:
        self.tag_rule = config.tag_rule

    def rewrite_tag(self, tag: str) -> str:
        """Compute the outgoing tag for an incoming tag."""
        self._ensure_ready("rewrite tags for")
        return self.tag_rule.rewrite(tag)

    def process(self, tag: str, time: int | None, record: dict[str, Any]) -> Event | None:
        """Transform one event.

        Args:
            tag: Incoming event tag
            time: Incoming event timestamp
            record: Event record (not mutated)

        Returns:
            The re-tagged event, or None when the event is dropped
        """
        self._ensure_ready("process events with")
        self._record_received()
        return self._transform(self.tag_rule.rewrite(tag), time, record)

    def emit(
        self,
        tag: str,
        events: Iterable[tuple[int | None, dict[str, Any]]],
        chain: OutputChain | None = None,
    ) -> list[Event]:
        """Process a batch of events sharing one tag.

        Every event is handled independently; a drop never stops the rest
        of the batch. The chain is always continued.

        Args:
            tag: Incoming tag of the batch
            events: (time, record) pairs
            chain: Host continuation, advanced once the batch is done

        Returns:
            The events that were emitted
        """
        self._ensure_ready("emit")
        if self.router is None:
            raise ValueError("BurrowOutput requires a router to emit events")

        new_tag = self.tag_rule.rewrite(tag)
        emitted: list[Event] = []

        try:
            for time, record in events:
                self._record_received()
                try:
                    event = self._transform(new_tag, time, record)
                    if event is None:
                        continue
                    self.router.emit(event.tag, event.timestamp, event.record)
                except Exception as e:
                    self._metrics.events_failed += 1
                    logger.exception(f"Failed to re-emit event for tag '{new_tag}': {e}")
                    continue
                emitted.append(event)
        finally:
            if chain is not None:
                chain.next()

        return emitted

    def _transform(self, new_tag: str, time: int | None, record: dict[str, Any]) -> Event | None:
        sub = self.extractor.extract(record, time)
        if sub.error is not None:
            self._metrics.parse_failures += 1

        result = self.combiner.combine(record, sub)
        if result is None:
            self._metrics.events_dropped += 1
            logger.debug(f"Dropped event for tag '{new_tag}': no parseable content")
            return None

        self._metrics.events_emitted += 1
        return Event(tag=new_tag, timestamp=sub.timestamp, record=result)

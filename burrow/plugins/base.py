"""Base plugin interface for the host pipeline engine.

Defines the lifecycle shared by the burrow filter and output plugins:
configure once, start, process events, shut down.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Protocol

from burrow.config import BurrowConfig
from burrow.core.combiner import RecordCombiner
from burrow.core.extractor import FieldExtractor
from burrow.exceptions import PluginStateError
from burrow.parsers.registry import get_parser

logger = logging.getLogger(__name__)


class PluginState(str, Enum):
    """Plugin lifecycle state."""

    CREATED = "created"
    CONFIGURED = "configured"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass
class PluginMetrics:
    """Runtime counters for a plugin."""

    events_received: int = 0
    events_emitted: int = 0
    events_passed_through: int = 0
    events_dropped: int = 0
    parse_failures: int = 0
    events_failed: int = 0
    last_event_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "events_received": self.events_received,
            "events_emitted": self.events_emitted,
            "events_passed_through": self.events_passed_through,
            "events_dropped": self.events_dropped,
            "parse_failures": self.parse_failures,
            "events_failed": self.events_failed,
            "last_event_at": self.last_event_at.isoformat() if self.last_event_at else None,
        }


class EventRouter(Protocol):
    """Downstream receiver for re-emitted events."""

    def emit(self, tag: str, time: int | None, record: dict[str, Any]) -> None: ...


class OutputChain(Protocol):
    """Continuation handle passed to outputs by the host engine."""

    def next(self) -> None: ...


class BasePlugin(ABC):
    """Abstract base class for burrow plugins.

    Plugins are responsible for:
    1. Validating their configuration before any event is seen
    2. Resolving the format parser once
    3. Delegating each event to the stateless core
    4. Tracking processing metrics

    Subclasses must set ``config_class`` and implement ``_setup()``.
    """

    name: str = "burrow"
    kind: str = "base"
    config_class: type[BurrowConfig] = BurrowConfig

    def __init__(self):
        self.config: BurrowConfig | None = None
        self.extractor: FieldExtractor | None = None
        self.combiner: RecordCombiner | None = None
        self._state = PluginState.CREATED
        self._metrics = PluginMetrics()

    @property
    def state(self) -> PluginState:
        """Get current plugin state."""
        return self._state

    @property
    def metrics(self) -> PluginMetrics:
        """Get current metrics."""
        return self._metrics

    def configure(self, conf: Mapping[str, Any] | BurrowConfig) -> None:
        """Validate the configuration and resolve the parser.

        Args:
            conf: Raw option mapping or an already validated config

        Raises:
            ConfigError: If the configuration is invalid or the format unknown
            PluginStateError: If the plugin was already started
        """
        if self._state not in (PluginState.CREATED, PluginState.CONFIGURED):
            raise PluginStateError(self.name, self._state.value, "configure")

        if isinstance(conf, BurrowConfig):
            config = conf
            if not isinstance(config, self.config_class):
                config = self.config_class.load(conf.model_dump(exclude_unset=True))
        else:
            config = self.config_class.load(conf)

        parser = get_parser(config.format, config.parser_options)

        self.config = config
        self.extractor = FieldExtractor(
            parser,
            key_name=config.key_name,
            record_time_key=config.record_time_key,
        )
        self.combiner = RecordCombiner.from_config(config)
        self._setup(config)
        self._state = PluginState.CONFIGURED

        logger.debug(
            f"Configured {self.kind} plugin '{self.name}'",
            extra={
                "key_name": config.key_name,
                "format": config.format,
                "action": config.action.value,
            },
        )

    @abstractmethod
    def _setup(self, config: BurrowConfig) -> None:
        """Prepare variant-specific state from a validated config."""
        ...

    def start(self) -> None:
        """Start the plugin."""
        if self._state is PluginState.RUNNING:
            return
        if self._state is not PluginState.CONFIGURED:
            raise PluginStateError(self.name, self._state.value, "start")
        self._state = PluginState.RUNNING
        logger.info(f"Started {self.kind} plugin '{self.name}'")

    def shutdown(self) -> None:
        """Stop the plugin."""
        if self._state is not PluginState.RUNNING:
            return
        self._state = PluginState.STOPPED
        logger.info(
            f"Stopped {self.kind} plugin '{self.name}'",
            extra=self._metrics.to_dict(),
        )

    def _ensure_ready(self, operation: str) -> None:
        # Events may arrive before start() on hosts without lifecycle hooks
        if self._state not in (PluginState.CONFIGURED, PluginState.RUNNING):
            raise PluginStateError(self.name, self._state.value, operation)

    def _record_received(self) -> None:
        self._metrics.events_received += 1
        self._metrics.last_event_at = datetime.now(UTC)

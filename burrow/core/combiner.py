"""Record combination.

Places a parsed sub-record into, or in place of, its parent record
according to the configured action, then applies key and time retention.

Placement policy:

    inplace   parent with key_name -> sub-record
    overlay   parent merged with sub-record (sub-record wins)
    replace   sub-record alone
    prefix    parent merged with {data_prefix: sub-record}

For overlay, replace and prefix, ``keep_key = False`` removes key_name
from the parent before merging, so a sub-record that carries key_name
itself keeps it. With replace, ``keep_key = True`` carries the raw value
over. ``keep_time`` writes the original time value last.
"""

from dataclasses import dataclass
from typing import Any

from burrow.core.models import Action, Record, SubParse


@dataclass(frozen=True)
class RecordCombiner:
    """Combines a parent record with its parsed sub-record."""

    action: Action
    key_name: str
    keep_key: bool = False
    keep_time: bool = False
    record_time_key: str = "time"
    data_prefix: str | None = None

    def __post_init__(self):
        if self.action is Action.INPLACE and self.keep_key:
            raise ValueError("keep_key is not supported with action 'inplace'")
        if self.action is Action.PREFIX and not self.data_prefix:
            raise ValueError("data_prefix is required with action 'prefix'")

    @classmethod
    def from_config(cls, config: Any) -> "RecordCombiner":
        """Build from a validated plugin configuration."""
        return cls(
            action=config.action,
            key_name=config.key_name,
            keep_key=config.keep_key,
            keep_time=config.keep_time,
            record_time_key=config.record_time_key,
            data_prefix=getattr(config, "data_prefix", None),
        )

    def combine(self, record: Record, sub: SubParse) -> Record | None:
        """Produce the output record.

        The input record is never mutated.

        Args:
            record: Original event record
            sub: Extraction result for that record

        Returns:
            Combined record, or None when there is nothing to emit
        """
        fields = sub.fields
        if fields is None:
            return None

        result = self._place(record, fields, sub.raw_value)
        if result is None:
            return None

        # Must run last: overrides anything placement wrote to the time field
        if self.keep_time:
            result[self.record_time_key] = sub.original_time

        return result

    def _place(self, record: Record, fields: Record, raw_value: Any) -> Record | None:
        match self.action:
            case Action.INPLACE:
                result = dict(record)
                result[self.key_name] = fields
                return result

            case Action.OVERLAY:
                result = self._parent(record)
                result.update(fields)
                return result

            case Action.REPLACE:
                result = {}
                if self.keep_key and self.key_name in record:
                    result[self.key_name] = raw_value
                result.update(fields)
                return result

            case Action.PREFIX:
                result = self._parent(record)
                result[self.data_prefix] = fields
                return result

        return None

    def _parent(self, record: Record) -> Record:
        """Copy of the parent record, minus key_name unless it is kept."""
        if self.keep_key:
            return dict(record)
        return {k: v for k, v in record.items() if k != self.key_name}

"""Burrow transform-and-recombine engine.

Provides the stateless core shared by the filter and output plugins:
- Field extraction and sub-parsing of one record field
- Recombination of the sub-record with its parent record
- Tag rewriting for re-emitted events
"""

from burrow.core.combiner import RecordCombiner
from burrow.core.extractor import FieldExtractor, resolve_event_time
from burrow.core.models import Action, Event, ParseOutcome, Record, SubParse
from burrow.core.tagging import ExplicitTag, PrefixRewrite, TagRule, build_tag_rule

__all__ = [
    "Action",
    "Event",
    "ExplicitTag",
    "FieldExtractor",
    "ParseOutcome",
    "PrefixRewrite",
    "Record",
    "RecordCombiner",
    "SubParse",
    "TagRule",
    "build_tag_rule",
    "resolve_event_time",
]

"""Tag rewriting for re-emitted events.

The outgoing tag is either an explicit override or the incoming tag with
a prefix removed and/or added. Prefixes are matched on whole dotted
segments: ``remove_prefix raw`` strips ``raw.`` from ``raw.app`` but
leaves ``rawdata.app`` untouched.
"""

from dataclasses import dataclass


def canonical_prefix(prefix: str) -> str:
    """Normalize a prefix to end with exactly one separator."""
    return prefix.removesuffix(".") + "."


@dataclass(frozen=True)
class ExplicitTag:
    """Every event is re-emitted under one fixed tag."""

    tag: str

    def rewrite(self, tag: str) -> str:
        return self.tag


@dataclass(frozen=True)
class PrefixRewrite:
    """Strip and/or prepend a dotted prefix on the incoming tag."""

    remove_prefix: str | None = None
    add_prefix: str | None = None

    def __post_init__(self):
        if not self.remove_prefix and not self.add_prefix:
            raise ValueError("One of 'remove_prefix' or 'add_prefix' must be specified")

    def rewrite(self, tag: str) -> str:
        if self.remove_prefix:
            removed = canonical_prefix(self.remove_prefix)
            if tag == self.remove_prefix or (
                tag.startswith(removed) and len(tag) > len(removed)
            ):
                tag = tag[len(removed):]

        if self.add_prefix:
            if tag:
                tag = canonical_prefix(self.add_prefix) + tag
            else:
                tag = self.add_prefix

        return tag


TagRule = ExplicitTag | PrefixRewrite


def build_tag_rule(
    tag: str | None = None,
    remove_prefix: str | None = None,
    add_prefix: str | None = None,
) -> TagRule:
    """Build the tag rule for a set of tag options.

    Raises:
        ValueError: If no option is set, or ``tag`` is combined with a prefix
    """
    if tag is None and remove_prefix is None and add_prefix is None:
        raise ValueError("One of 'tag', 'remove_prefix' or 'add_prefix' must be specified")
    if tag is not None:
        if remove_prefix is not None or add_prefix is not None:
            raise ValueError(
                "Specifying both 'tag' and either 'remove_prefix' or 'add_prefix' "
                "is not supported"
            )
        return ExplicitTag(tag)
    return PrefixRewrite(remove_prefix=remove_prefix, add_prefix=add_prefix)

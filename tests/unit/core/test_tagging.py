"""Unit tests for tag rewriting."""

import pytest

from burrow.core.tagging import ExplicitTag, PrefixRewrite, build_tag_rule, canonical_prefix

pytestmark = pytest.mark.unit


class TestCanonicalPrefix:
    @pytest.mark.parametrize("prefix", ["raw", "raw."])
    def test_single_trailing_separator(self, prefix):
        assert canonical_prefix(prefix) == "raw."


class TestExplicitTag:
    def test_returns_override(self):
        assert ExplicitTag("parsed").rewrite("raw.app") == "parsed"


class TestRemovePrefix:
    """Tests for remove_prefix."""

    @pytest.fixture
    def rule(self):
        return PrefixRewrite(remove_prefix="raw")

    def test_strips_prefix(self, rule):
        assert rule.rewrite("raw.test.tag") == "test.tag"

    def test_trailing_dot_in_option(self):
        assert PrefixRewrite(remove_prefix="raw.").rewrite("raw.app") == "app"

    def test_exact_match_strips_everything(self, rule):
        assert rule.rewrite("raw") == ""

    @pytest.mark.parametrize("tag", ["app.raw", "rawdata.app", "raw.", "other"])
    def test_non_matching_tag_unchanged(self, rule, tag):
        assert rule.rewrite(tag) == tag
        assert rule.rewrite(rule.rewrite(tag)) == tag


class TestAddPrefix:
    """Tests for add_prefix."""

    def test_prepends_prefix(self):
        assert PrefixRewrite(add_prefix="foo").rewrite("bar") == "foo.bar"

    def test_trailing_dot_in_option(self):
        assert PrefixRewrite(add_prefix="foo.").rewrite("bar") == "foo.bar"

    def test_empty_tag(self):
        assert PrefixRewrite(add_prefix="foo").rewrite("") == "foo"

    def test_after_remove(self):
        rule = PrefixRewrite(remove_prefix="raw", add_prefix="parsed")

        assert rule.rewrite("raw.app") == "parsed.app"
        assert rule.rewrite("raw") == "parsed"
        assert rule.rewrite("other.app") == "parsed.other.app"

    def test_requires_a_prefix(self):
        with pytest.raises(ValueError):
            PrefixRewrite()


class TestBuildTagRule:
    """Tests for build_tag_rule()."""

    def test_explicit_tag(self):
        assert build_tag_rule(tag="x") == ExplicitTag("x")

    def test_prefix_rule(self):
        assert build_tag_rule(remove_prefix="raw") == PrefixRewrite(remove_prefix="raw")

    def test_nothing_configured(self):
        with pytest.raises(ValueError, match="must be specified"):
            build_tag_rule()

    @pytest.mark.parametrize("options", [
        {"remove_prefix": "raw"},
        {"add_prefix": "new"},
        {"remove_prefix": "raw", "add_prefix": "new"},
    ])
    def test_tag_with_prefix_rejected(self, options):
        with pytest.raises(ValueError, match="not supported"):
            build_tag_rule(tag="x", **options)

"""Tests for translation_engine.i18n.resolver module."""

import pytest

from translation_engine.i18n.models import PluralForms, TextLeaf, parse_tree
from translation_engine.i18n.resolver import is_denylisted, resolve_key


@pytest.fixture
def tree():
    return parse_tree(
        {
            "common": {
                "hello": "Hello",
                "nested": {"deep": {"value": "Deep"}},
                "items": {"one": "1 item", "other": "{count} items"},
            },
            "tools/ip-converter": {"title": "IP Address Converter"},
            "constructor": {"polluted": "yes"},
        }
    )


class TestResolveKey:
    """Tests for dot-path key resolution."""

    def test_resolves_first_level(self, tree):
        """resolve_key() resolves a namespace-level key."""
        assert resolve_key(tree, "common.hello") == TextLeaf("Hello")

    def test_resolves_deeply_nested_key(self, tree):
        """resolve_key() walks several levels."""
        assert resolve_key(tree, "common.nested.deep.value") == TextLeaf("Deep")

    def test_resolves_namespace_with_slash(self, tree):
        """Namespaces containing "/" are ordinary top-level keys."""
        assert resolve_key(tree, "tools/ip-converter.title") == TextLeaf(
            "IP Address Converter"
        )

    def test_returns_plural_forms(self, tree):
        """resolve_key() returns plural form sets unchanged."""
        assert isinstance(resolve_key(tree, "common.items"), PluralForms)

    def test_resolves_single_plural_form(self, tree):
        """A plural tag can be addressed directly."""
        assert resolve_key(tree, "common.items.one") == TextLeaf("1 item")

    def test_missing_key(self, tree):
        """resolve_key() returns None for missing keys."""
        assert resolve_key(tree, "common.missing") is None
        assert resolve_key(tree, "nonexistent.key") is None

    def test_cannot_descend_into_text(self, tree):
        """Segments below a text leaf are not found."""
        assert resolve_key(tree, "common.hello.length") is None

    def test_empty_key(self, tree):
        """The empty key resolves to nothing."""
        assert resolve_key(tree, "") is None

    def test_none_tree(self):
        """Resolving against no tree returns None."""
        assert resolve_key(None, "common.hello") is None

    @pytest.mark.parametrize(
        "key",
        [
            "__proto__.polluted",
            "constructor.prototype.polluted",
            "constructor.polluted",
            "common.prototype",
            "common.__proto__.hello",
        ],
    )
    def test_denylisted_segments_are_not_found(self, tree, key):
        """Denylisted segments end resolution even when data exists."""
        assert resolve_key(tree, key) is None


class TestIsDenylisted:
    """Tests for the denylist helper."""

    def test_detects_denylisted_segment(self):
        assert is_denylisted("constructor.prototype.polluted")
        assert is_denylisted("a.__proto__")

    def test_allows_regular_keys(self):
        assert not is_denylisted("common.hello")
        assert not is_denylisted("common.constructors")

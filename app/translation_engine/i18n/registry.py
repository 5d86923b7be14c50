"""Translation registry: per-locale, per-namespace storage and lookup.

The registry is an explicitly constructed service, created once at
bootstrap and passed to its consumers. Reads are synchronous and never
suspend; they use whatever data is currently resident.
"""

from typing import Any, Dict, Mapping, Optional

from translation_engine.i18n.interpolation import interpolate
from translation_engine.i18n.models import (
    DEFAULT_LANGUAGE,
    PluralForms,
    SubTree,
    TextLeaf,
    TranslationNode,
    parse_node,
    parse_tree,
    to_raw,
)
from translation_engine.i18n.plurals import default_form, is_count, select_plural_form
from translation_engine.i18n.resolver import resolve_key
from translation_engine.logging import get_module_logger

logger = get_module_logger()


class TranslationRegistry:
    """Stores translation trees and answers ``translate(key, params)``.

    Lookup falls back from the current locale to the default locale, then to
    the key itself. No locale validation happens here; an unknown locale
    simply has no data.

    Attributes:
        default_locale: Locale whose data is the authoritative superset.
        trees: Mapping of locale to its root SubTree.
    """

    def __init__(
        self,
        default_locale: str = DEFAULT_LANGUAGE,
        locale: Optional[str] = None,
    ):
        """Initialize TranslationRegistry.

        Args:
            default_locale: Locale used as fallback when a key is missing.
            locale: Initial current locale (default: default_locale).
        """
        self.default_locale = default_locale
        self._locale = locale or default_locale
        self.trees: Dict[str, SubTree] = {}
        logger.info("initialized_registry", default_locale=default_locale)

    @property
    def locale(self) -> str:
        return self._locale

    def set_locale(self, locale: str) -> None:
        """Set the current locale."""
        self._locale = locale

    def get_locale(self) -> str:
        """Get the current locale."""
        return self._locale

    def locales(self) -> list[str]:
        """Get locales that have any data registered."""
        return list(self.trees.keys())

    def add_namespace(
        self, locale: str, namespace: str, tree: Mapping[str, Any]
    ) -> None:
        """Replace a namespace's entire subtree.

        Args:
            locale: Locale the data belongs to.
            namespace: Namespace name; used verbatim as a top-level key
                (it may contain "/").
            tree: Raw nested mapping for the namespace.
        """
        subtree = parse_tree(tree)
        root = self.trees.get(locale, SubTree())
        children = dict(root.children)
        children[namespace] = subtree
        self.trees[locale] = SubTree(children=children)
        logger.debug(
            "namespace_registered",
            locale=locale,
            namespace=namespace,
            key_count=len(subtree.children),
        )

    def merge_locale(self, locale: str, tree: Mapping[str, Any]) -> None:
        """Shallow-merge top-level keys into a locale's root.

        Top-level keys in ``tree`` overwrite existing keys of the same name;
        nothing below the top level is merged.

        Args:
            locale: Locale to merge into.
            tree: Raw mapping whose top-level keys are merged.
        """
        root = self.trees.get(locale, SubTree())
        children = dict(root.children)
        for key, value in tree.items():
            node = parse_node(value)
            if node is None:
                children.pop(str(key), None)
            else:
                children[str(key)] = node
        self.trees[locale] = SubTree(children=children)

    def has(self, key: str, locale: Optional[str] = None) -> bool:
        """Check if a key resolves under a locale.

        Args:
            key: Dot-delimited translation key.
            locale: Locale to check (default: current locale).

        Returns:
            True if the key resolves to any value in that locale's data.
        """
        return self._lookup(locale or self._locale, key) is not None

    def translate(self, key: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Retrieve, pluralize and interpolate a translated message.

        Args:
            key: Dot-delimited translation key.
            params: Optional interpolation parameters. A numeric ``count``
                selects a plural form.

        Returns:
            The translated string, or ``key`` unchanged if no locale has it.
        """
        try:
            return self._translate(key, params)
        except Exception as e:
            logger.exception("translation_failed", key=key, error=str(e))
            return key

    t = translate

    def _translate(self, key: str, params: Optional[Mapping[str, Any]]) -> str:
        node = self._text_node(self._locale, key)

        if node is None and self._locale != self.default_locale:
            node = self._text_node(self.default_locale, key)
            if node is not None:
                logger.warning(
                    "used_fallback_translation",
                    key=key,
                    requested_locale=self._locale,
                    fallback_locale=self.default_locale,
                )

        if node is None:
            logger.warning(
                "translation_missing",
                key=key,
                locale=self._locale,
                fallback_locale=self.default_locale,
            )
            return key

        match node:
            case PluralForms() if params and is_count(params.get("count")):
                text = select_plural_form(node, params["count"])
            case PluralForms():
                text = default_form(node)
            case TextLeaf(text=value):
                text = value

        if params is None:
            return text
        return interpolate(text, params)

    def _lookup(self, locale: str, key: str) -> Optional[TranslationNode]:
        tree = self.trees.get(locale)
        if tree is None:
            return None
        return resolve_key(tree, key)

    def _text_node(self, locale: str, key: str) -> Optional[TranslationNode]:
        node = self._lookup(locale, key)
        # Interior nodes are not displayable text
        if isinstance(node, SubTree):
            return None
        return node

    def get_all(self) -> Dict[str, Any]:
        """Get the current locale's data as plain nested dicts (for debugging)."""
        tree = self.trees.get(self._locale)
        return to_raw(tree) if tree is not None else {}

    def clear(self, locale: Optional[str] = None) -> None:
        """Drop registered data for one locale, or all locales."""
        if locale is None:
            self.trees.clear()
        else:
            self.trees.pop(locale, None)

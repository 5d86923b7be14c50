"""Translation models for the i18n system.

Translation data is a nested structure whose leaves are either plain text or
a plural form set. It is held as an explicit tagged union:

    TranslationNode = TextLeaf | PluralForms | SubTree

Raw documents (parsed YAML/JSON) are converted once on registration with
``parse_tree`` and never inspected by type again.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Union

PLURAL_TAGS = frozenset({"zero", "one", "two", "few", "many", "other"})


@dataclass(frozen=True)
class TextLeaf:
    """A plain translated string, possibly containing ``{tokens}``."""

    text: str


@dataclass(frozen=True)
class PluralForms:
    """Count-dependent variants keyed by plural tag.

    Attributes:
        forms: Mapping of plural tag (zero, one, other, ...) to template,
            in document order.
    """

    forms: Dict[str, str] = field(default_factory=dict)

    def get(self, tag: str) -> Optional[str]:
        return self.forms.get(tag)


@dataclass(frozen=True)
class SubTree:
    """Interior node mapping keys to child nodes."""

    children: Dict[str, "TranslationNode"] = field(default_factory=dict)


TranslationNode = Union[TextLeaf, PluralForms, SubTree]


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_plural_mapping(raw: Mapping) -> bool:
    if not raw:
        return False
    return all(
        str(key) in PLURAL_TAGS and value is not None and not isinstance(value, Mapping)
        for key, value in raw.items()
    )


def parse_node(raw: Any) -> Optional[TranslationNode]:
    """Convert a raw document value into a TranslationNode.

    Args:
        raw: Parsed YAML/JSON value.

    Returns:
        The node, or None for null values (treated as missing).
    """
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        if _is_plural_mapping(raw):
            return PluralForms(
                forms={str(tag): _scalar_text(text) for tag, text in raw.items()}
            )
        return parse_tree(raw)
    if isinstance(raw, (list, tuple)):
        # Sequences are addressed by index, like the documents they came from
        return parse_tree({str(index): item for index, item in enumerate(raw)})
    return TextLeaf(text=_scalar_text(raw))


def parse_tree(raw: Mapping) -> SubTree:
    """Convert a raw nested mapping into a SubTree.

    Args:
        raw: Parsed document (namespace content or locale root).

    Returns:
        SubTree holding a parsed copy of ``raw``.
    """
    children: Dict[str, TranslationNode] = {}
    for key, value in raw.items():
        node = parse_node(value)
        if node is not None:
            children[str(key)] = node
    return SubTree(children=children)


def to_raw(node: TranslationNode) -> Any:
    """Return the plain nested-dict form of a node."""
    if isinstance(node, TextLeaf):
        return node.text
    if isinstance(node, PluralForms):
        return dict(node.forms)
    return {key: to_raw(child) for key, child in node.children.items()}


@dataclass(frozen=True)
class Language:
    """Display metadata for a supported language.

    Attributes:
        code: ISO 639-1 code, also used as the locale code
        name: Native language name
        english_name: English name for reference
        flag: Unicode flag emoji
        rtl: Right-to-left script
    """

    code: str
    name: str
    english_name: str
    flag: str
    rtl: bool = False


DEFAULT_LANGUAGE = "en"

SUPPORTED_LANGUAGES: Sequence[Language] = (
    Language(code="en", name="English", english_name="English", flag="🇬🇧"),
    Language(code="de", name="Deutsch", english_name="German", flag="🇩🇪"),
    Language(code="es", name="Español", english_name="Spanish", flag="🇪🇸"),
    Language(code="fr", name="Français", english_name="French", flag="🇫🇷"),
)


def get_language(
    code: str, languages: Sequence[Language] = SUPPORTED_LANGUAGES
) -> Optional[Language]:
    """Get language metadata by code.

    Args:
        code: Locale code (e.g., "de").
        languages: Languages to search.

    Returns:
        Matching Language, or None if the code is unknown.
    """
    for language in languages:
        if language.code == code:
            return language
    return None


def languages_for(codes: Sequence[str]) -> list[Language]:
    """Build the Language list for a set of locale codes.

    Codes without bundled metadata get a placeholder entry named after the code.
    """
    result = []
    for code in codes:
        language = get_language(code)
        if language is None:
            language = Language(code=code, name=code, english_name=code, flag="")
        result.append(language)
    return result

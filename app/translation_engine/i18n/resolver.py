"""Safe dot-path traversal over translation trees.

Keys such as ``tools/ip-converter.title`` are split on ``.`` and walked one
segment at a time. Only a node's own children are ever visible; segments on
the denylist end the walk as if the key were missing.
"""

from typing import Optional

from translation_engine.i18n.models import (
    PluralForms,
    SubTree,
    TextLeaf,
    TranslationNode,
)

DENYLISTED_SEGMENTS = frozenset({"__proto__", "constructor", "prototype"})


def is_denylisted(key: str) -> bool:
    """Check whether any segment of a key is on the denylist."""
    return any(segment in DENYLISTED_SEGMENTS for segment in key.split("."))


def resolve_key(tree: Optional[TranslationNode], key: str) -> Optional[TranslationNode]:
    """Resolve a dot-delimited key against a tree.

    Args:
        tree: Root node to resolve against (usually a locale's SubTree).
        key: Dot-delimited key.

    Returns:
        The node found at ``key``, or None if any segment is missing or
        denylisted.
    """
    node = tree
    for segment in key.split("."):
        if segment in DENYLISTED_SEGMENTS:
            return None

        match node:
            case SubTree(children=children) if segment in children:
                node = children[segment]
            case PluralForms(forms=forms) if segment in forms:
                node = TextLeaf(text=forms[segment])
            case _:
                return None

    return node

"""i18n system - translation resolution and locale negotiation.

Main components:
- models: TranslationNode union (TextLeaf, PluralForms, SubTree), Language
- resolver: safe dot-path key resolution
- interpolation / plurals: template substitution and plural selection
- registry: TranslationRegistry with default-locale fallback
- negotiation: LocaleNegotiator and localized path helpers
- loader / cache: TranslationLoader implementations and NamespaceCache
- preferences: persisted locale preference stores
- service / factory: LanguageService and bootstrap helpers
"""

from translation_engine.i18n.cache import NamespaceCache
from translation_engine.i18n.exceptions import (
    I18nError,
    NamespaceLoadError,
    PreferenceStoreError,
)
from translation_engine.i18n.factory import create_language_service, create_registry
from translation_engine.i18n.interpolation import UNSET, interpolate
from translation_engine.i18n.loader import FileTranslationLoader, TranslationLoader
from translation_engine.i18n.models import (
    DEFAULT_LANGUAGE,
    SUPPORTED_LANGUAGES,
    Language,
    PluralForms,
    SubTree,
    TextLeaf,
    TranslationNode,
)
from translation_engine.i18n.negotiation import LocaleNegotiator, parse_accept_language
from translation_engine.i18n.plurals import select_plural_form
from translation_engine.i18n.preferences import (
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
    LocalePreferenceStore,
)
from translation_engine.i18n.registry import TranslationRegistry
from translation_engine.i18n.resolver import resolve_key
from translation_engine.i18n.service import LanguageService

__all__ = [
    "DEFAULT_LANGUAGE",
    "SUPPORTED_LANGUAGES",
    "UNSET",
    "FileTranslationLoader",
    "I18nError",
    "InMemoryPreferenceStore",
    "JsonFilePreferenceStore",
    "Language",
    "LanguageService",
    "LocaleNegotiator",
    "LocalePreferenceStore",
    "NamespaceCache",
    "NamespaceLoadError",
    "PluralForms",
    "PreferenceStoreError",
    "SubTree",
    "TextLeaf",
    "TranslationLoader",
    "TranslationNode",
    "TranslationRegistry",
    "create_language_service",
    "create_registry",
    "interpolate",
    "parse_accept_language",
    "resolve_key",
    "select_plural_form",
]

"""Factory functions for creating i18n components.

Provides bootstrap wiring with configuration-driven defaults. The default
locale's documents are read synchronously here so its data is resident
before the first lookup.
"""

from pathlib import Path
from typing import Optional

import structlog
from translation_engine.configuration import Settings
from translation_engine.i18n.cache import NamespaceCache
from translation_engine.i18n.exceptions import NamespaceLoadError
from translation_engine.i18n.loader import FileTranslationLoader, TranslationLoader
from translation_engine.i18n.negotiation import LocaleNegotiator
from translation_engine.i18n.preferences import (
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
    LocalePreferenceStore,
)
from translation_engine.i18n.registry import TranslationRegistry
from translation_engine.i18n.service import LanguageService
from translation_engine.logging import configure_logging

logger = structlog.get_logger()

BUNDLED_TRANSLATIONS_DIR = Path(__file__).resolve().parents[1] / "locales"


def _get_settings(settings: Optional[Settings]) -> Settings:
    if settings is not None:
        return settings
    from translation_engine.configuration import settings as default_settings

    return default_settings


def preload_default_locale(
    registry: TranslationRegistry,
    loader: FileTranslationLoader,
    cache: Optional[NamespaceCache] = None,
) -> list[str]:
    """Register every default-locale document found on disk.

    Args:
        registry: Registry to populate.
        loader: File loader to read documents with.
        cache: Optional cache whose loaded markers are updated.

    Returns:
        Namespaces that were registered.
    """
    locale = registry.default_locale
    registered = []
    for namespace in loader.list_namespaces(locale):
        try:
            tree = loader.read(locale, namespace)
        except NamespaceLoadError as e:
            logger.warning(
                "default_namespace_unavailable",
                locale=locale,
                namespace=namespace,
                error=str(e),
            )
            continue
        registry.add_namespace(locale, namespace, tree)
        if cache is not None:
            cache.mark_loaded(locale, namespace)
        registered.append(namespace)
    return registered


def create_registry(
    translations_dir: Optional[Path] = None,
    settings: Optional[Settings] = None,
) -> TranslationRegistry:
    """Create a registry with the default locale's documents resident.

    Args:
        translations_dir: Directory of <locale>/<namespace> documents
            (default: settings, then the bundled locales).
        settings: Settings instance (default: configuration singleton).

    Returns:
        TranslationRegistry: Populated registry.
    """
    settings = _get_settings(settings)
    loader = FileTranslationLoader(_translations_dir(translations_dir, settings))
    registry = TranslationRegistry(default_locale=settings.i18n.default_locale)
    preload_default_locale(registry, loader)
    return registry


def create_language_service(
    settings: Optional[Settings] = None,
    translations_dir: Optional[Path] = None,
    loader: Optional[TranslationLoader] = None,
    preference_store: Optional[LocalePreferenceStore] = None,
) -> LanguageService:
    """Create and configure a LanguageService instance.

    Args:
        settings: Settings instance (default: configuration singleton).
        translations_dir: Directory of translation documents (default:
            settings.i18n.translations_dir, then the bundled locales).
        loader: Loader for non-default locales (default: file loader over
            translations_dir). An injected file loader also supplies the
            default locale; for other loaders default-locale documents are
            read from translations_dir when it exists.
        preference_store: Store for the chosen locale (default: JSON file
            when settings.i18n.preference_file is set, else in-memory).

    Returns:
        LanguageService: Configured service with default data resident.

    Usage:
        service = create_language_service()
        await service.init_language(path="/de/tools")
    """
    settings = _get_settings(settings)
    i18n_settings = settings.i18n
    configure_logging(settings=settings)

    if loader is None:
        loader = FileTranslationLoader(_translations_dir(translations_dir, settings))
    default_source = _default_locale_source(loader, translations_dir, settings)

    if preference_store is None:
        if i18n_settings.preference_file:
            preference_store = JsonFilePreferenceStore(
                Path(i18n_settings.preference_file),
                key=i18n_settings.preference_key,
            )
        else:
            preference_store = InMemoryPreferenceStore()

    registry = TranslationRegistry(default_locale=i18n_settings.default_locale)
    cache = NamespaceCache(registry, loader)
    preloaded = []
    if default_source is not None:
        preloaded = preload_default_locale(registry, default_source, cache)

    negotiator = LocaleNegotiator(
        supported_locales=i18n_settings.supported_locales,
        default_locale=i18n_settings.default_locale,
        preference_store=preference_store,
        prefix_default_locale=i18n_settings.prefix_default_locale,
    )

    logger.info(
        "language_service_created",
        default_locale=i18n_settings.default_locale,
        supported_locales=negotiator.supported_locales,
        preloaded_namespaces=preloaded,
    )

    return LanguageService(
        registry=registry,
        negotiator=negotiator,
        cache=cache,
        namespaces=i18n_settings.preload_namespaces,
    )


def _default_locale_source(
    loader: TranslationLoader,
    translations_dir: Optional[Path],
    settings: Settings,
) -> Optional[FileTranslationLoader]:
    """Pick the file loader default-locale documents are read from.

    An injected file loader is reused. For any other loader the documents
    come from the configured directory; a missing directory is logged and
    nothing is preloaded.
    """
    if isinstance(loader, FileTranslationLoader):
        return loader
    try:
        return FileTranslationLoader(_translations_dir(translations_dir, settings))
    except ValueError as e:
        logger.warning("default_locale_source_unavailable", error=str(e))
        return None


def _translations_dir(translations_dir: Optional[Path], settings: Settings) -> Path:
    if translations_dir is not None:
        return Path(translations_dir)
    if settings.i18n.translations_dir:
        return Path(settings.i18n.translations_dir)
    return BUNDLED_TRANSLATIONS_DIR

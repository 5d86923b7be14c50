"""Language service: the application-facing facade of the i18n system.

Ties together negotiation, namespace loading and the registry, and keeps
subscribers informed of locale changes.
"""

from typing import Any, Callable, Mapping, Optional, Sequence, Union

from translation_engine.i18n.cache import NamespaceCache
from translation_engine.i18n.models import Language, get_language, languages_for
from translation_engine.i18n.negotiation import LocaleNegotiator
from translation_engine.i18n.registry import TranslationRegistry
from translation_engine.logging import bind_locale_context, get_module_logger

logger = get_module_logger()

LocaleListener = Callable[[str], None]


class LanguageService:
    """Class-based language service.

    Usage:
        service = create_language_service()
        await service.init_language(path="/de/tools")

        service.t("common.hello", {"name": "Ada"})
        service.localized_path("/settings")  # "/de/settings"

        await service.set_language("fr")
    """

    def __init__(
        self,
        registry: TranslationRegistry,
        negotiator: LocaleNegotiator,
        cache: NamespaceCache,
        namespaces: Sequence[str] = (),
        languages: Optional[Sequence[Language]] = None,
    ):
        """Initialize language service.

        Args:
            registry: Translation registry answering lookups.
            negotiator: Locale negotiator for the supported locale set.
            cache: Namespace cache feeding the registry.
            namespaces: Namespaces ensured whenever the locale changes.
            languages: Display metadata for the supported locales.
        """
        self.registry = registry
        self.negotiator = negotiator
        self.cache = cache
        self.namespaces = list(namespaces)
        self._languages = list(
            languages or languages_for(negotiator.supported_locales)
        )
        self._listeners: list[LocaleListener] = []

    @property
    def current_locale(self) -> str:
        return self.registry.get_locale()

    @property
    def default_locale(self) -> str:
        return self.negotiator.default_locale

    @property
    def languages(self) -> list[Language]:
        return list(self._languages)

    def get_language(self, code: str) -> Optional[Language]:
        return get_language(code, self._languages)

    async def init_language(
        self,
        path: Optional[str] = None,
        preferred: Union[str, Sequence[str], None] = None,
    ) -> str:
        """Detect and activate the initial locale.

        Args:
            path: Current path, checked for a locale prefix.
            preferred: Environment preferences (tags or Accept-Language header).

        Returns:
            The active locale.
        """
        detected = self.negotiator.negotiate(path=path, preferred=preferred)
        locale = self.negotiator.coerce(detected)
        await self._activate(locale)
        logger.info("language_initialized", locale=locale, path=path)
        return locale

    async def set_language(self, code: str) -> str:
        """Change the active locale and persist the choice.

        Unsupported codes fall back to the default locale.

        Args:
            code: Requested locale code.

        Returns:
            The active locale.
        """
        if not self.negotiator.is_supported(code):
            logger.warning(
                "invalid_language_code", code=code, fallback=self.default_locale
            )
            code = self.default_locale

        self.negotiator.store_locale(code)
        await self._activate(code)
        logger.info("language_changed", locale=code)
        return code

    async def ensure_namespaces(
        self, namespaces: Sequence[str], locale: Optional[str] = None
    ) -> None:
        """Ensure extra namespaces (e.g. page-specific ones) for a locale."""
        await self.cache.ensure_namespaces(locale or self.current_locale, namespaces)

    def t(self, key: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Translate a key in the active locale."""
        return self.registry.translate(key, params)

    def has(self, key: str, locale: Optional[str] = None) -> bool:
        return self.registry.has(key, locale)

    def localized_path(self, path: str) -> str:
        """Build the path for the active locale."""
        return self.negotiator.localized_path(self.current_locale, path)

    def base_path(self, path: str) -> str:
        return self.negotiator.base_path(path)

    def on_locale_change(self, callback: LocaleListener) -> Callable[[], None]:
        """Subscribe to locale changes.

        The callback is invoked immediately with the current locale, then
        after every change.

        Returns:
            Function that removes the subscription.
        """
        self._listeners.append(callback)
        self._call_listener(callback, self.current_locale)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    async def _activate(self, locale: str) -> None:
        self.registry.set_locale(locale)
        bind_locale_context(locale, default_locale=self.default_locale)
        if locale != self.default_locale and self.namespaces:
            await self.cache.ensure_namespaces(locale, self.namespaces)
        for listener in list(self._listeners):
            self._call_listener(listener, locale)

    def _call_listener(self, listener: LocaleListener, locale: str) -> None:
        try:
            listener(locale)
        except Exception as e:
            logger.exception("locale_listener_failed", locale=locale, error=str(e))

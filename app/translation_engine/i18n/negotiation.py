"""Locale negotiation and localized path helpers.

Determines the active locale from a priority chain of signals:
1. Stored preference
2. URL path segment (/de/...)
3. Environment preferences (Accept-Language, OS locale list)
4. Default locale
"""

import math
from typing import Iterable, Optional, Sequence, Union

import structlog

from translation_engine.i18n.exceptions import PreferenceStoreError
from translation_engine.i18n.preferences import LocalePreferenceStore

logger = structlog.get_logger(component="i18n.negotiator")


def _parse_quality(params: Sequence[str]) -> float:
    """Read the q parameter of one Accept-Language entry.

    A missing or unparseable q counts as 1.0; NaN and infinities count as 0
    so the entry is dropped.
    """
    for param in params:
        name, _, value = param.partition("=")
        if name.strip().lower() != "q":
            continue
        try:
            quality = float(value.strip())
        except ValueError:
            return 1.0
        return quality if math.isfinite(quality) else 0.0
    return 1.0


def parse_accept_language(header: Optional[str]) -> list[str]:
    """Parse an Accept-Language header into tags ordered by preference.

    "en-US,en;q=0.9,fr-FR;q=0.8" -> ["en-US", "en", "fr-FR"]

    Entries with an unparseable quality keep quality 1.0; entries with
    quality 0, a non-finite quality and the "*" wildcard are dropped.
    Parameters other than q are ignored. Ties keep header order.

    Args:
        header: Accept-Language header value.

    Returns:
        Language tags, most preferred first.
    """
    if not header:
        return []

    preferences = []
    for part in header.split(","):
        lang_range, *params = part.split(";")
        lang_range = lang_range.strip()
        if not lang_range or lang_range == "*":
            continue

        quality = _parse_quality(params)
        if quality <= 0:
            continue
        preferences.append((lang_range, quality))

    return [tag for tag, _ in sorted(preferences, key=lambda x: x[1], reverse=True)]


def primary_subtag(tag: str) -> str:
    """Language part of a tag ("pt-BR" -> "pt", "zh_Hant" -> "zh")."""
    return tag.replace("_", "-").split("-")[0].lower()


def _split_suffix(path: str) -> tuple[str, str]:
    cut = len(path)
    for marker in ("?", "#"):
        index = path.find(marker)
        if index != -1:
            cut = min(cut, index)
    return path[:cut], path[cut:]


class LocaleNegotiator:
    """Resolves the active locale from external signals.

    Holds no state of its own beyond configuration; every call re-reads
    the preference store.

    Attributes:
        supported_locales: Locale codes the application serves.
        default_locale: Locale used when nothing else matches.
        preference_store: Persisted single-value locale store.
        prefix_default_locale: Whether the default locale is addressed
            through a URL prefix like the other locales.
    """

    def __init__(
        self,
        supported_locales: Sequence[str],
        default_locale: str,
        preference_store: Optional[LocalePreferenceStore] = None,
        prefix_default_locale: bool = False,
    ):
        self.supported_locales = list(supported_locales)
        if default_locale not in self.supported_locales:
            self.supported_locales.insert(0, default_locale)
        self.default_locale = default_locale
        self.preference_store = preference_store
        self.prefix_default_locale = prefix_default_locale
        self.log = logger.bind(default_locale=default_locale)

    def is_supported(self, locale: Optional[str]) -> bool:
        return bool(locale) and locale in self.supported_locales

    def has_url_prefix(self, locale: str) -> bool:
        """Check whether a locale is addressed through a /<code> path prefix."""
        if not self.is_supported(locale):
            return False
        return self.prefix_default_locale or locale != self.default_locale

    # Stored preference

    def stored_locale(self) -> Optional[str]:
        """Read the stored preference; unsupported values are treated as absent."""
        if self.preference_store is None:
            return None
        try:
            stored = self.preference_store.get()
        except Exception as e:
            self.log.warning("preference_read_failed", error=str(e))
            return None
        if stored and self.is_supported(stored):
            return stored
        if stored:
            self.log.info("ignored_unsupported_preference", stored=stored)
        return None

    def store_locale(self, locale: str) -> bool:
        """Persist a locale choice.

        Only supported locales are stored; store failures are logged.

        Returns:
            True if the value was persisted.
        """
        if self.preference_store is None or not self.is_supported(locale):
            return False
        try:
            self.preference_store.set(locale)
        except PreferenceStoreError as e:
            self.log.warning("preference_write_failed", locale=locale, error=str(e))
            return False
        return True

    def clear_stored_locale(self) -> None:
        if self.preference_store is None:
            return
        try:
            self.preference_store.clear()
        except PreferenceStoreError as e:
            self.log.warning("preference_clear_failed", error=str(e))

    # URL path

    def locale_from_path(self, path: Optional[str]) -> Optional[str]:
        """Detect a locale from the first path segment.

        /de/settings -> "de"; /settings -> None. The default locale carries no
        prefix, so /en/settings -> None unless prefix_default_locale is set.
        """
        if not path:
            return None
        path_part, _ = _split_suffix(path)
        for segment in path_part.split("/"):
            if segment:
                return segment if self.has_url_prefix(segment) else None
        return None

    # Environment preferences

    def locale_from_preferences(self, preferred: Iterable[str]) -> Optional[str]:
        """Match environment-preferred tags against supported locales.

        Tags are tried in preference order. Each tag matches a supported
        locale exactly (case-insensitive) or, failing that, by primary
        subtag, before the next tag is considered.
        """
        by_lower = {locale.lower(): locale for locale in self.supported_locales}

        for tag in preferred:
            if not tag:
                continue
            match = by_lower.get(tag.replace("_", "-").lower())
            if match:
                return match

            language = primary_subtag(tag)
            for locale in self.supported_locales:
                if primary_subtag(locale) == language:
                    return locale

        return None

    def negotiate(
        self,
        path: Optional[str] = None,
        preferred: Union[str, Sequence[str], None] = None,
    ) -> str:
        """Compute the active locale.

        Args:
            path: Request/page path, checked for a locale prefix.
            preferred: Environment preferences, as a sequence of tags or a raw
                Accept-Language header.

        Returns:
            A supported locale; the default locale if no signal matches.
        """
        stored = self.stored_locale()
        if stored:
            self.log.debug("locale_negotiated", locale=stored, source="preference")
            return stored

        from_path = self.locale_from_path(path)
        if from_path:
            self.log.debug("locale_negotiated", locale=from_path, source="path")
            return from_path

        if isinstance(preferred, str):
            preferred = parse_accept_language(preferred)
        from_environment = self.locale_from_preferences(preferred or [])
        if from_environment:
            self.log.debug(
                "locale_negotiated", locale=from_environment, source="environment"
            )
            return from_environment

        self.log.debug("locale_negotiated", locale=self.default_locale, source="default")
        return self.default_locale

    def coerce(self, locale: Optional[str]) -> str:
        """Return locale if supported, else the default locale."""
        if self.is_supported(locale):
            return locale
        self.log.warning("unsupported_locale", locale=locale)
        return self.default_locale

    # Paths

    def base_path(self, path: str) -> str:
        """Strip a locale prefix from a path.

        /de/settings -> /settings; /de and /de/ -> /; /settings is unchanged.
        Query string and fragment are preserved.
        """
        path_part, suffix = _split_suffix(path)
        segment, _, rest = path_part.lstrip("/").partition("/")
        if segment and self.has_url_prefix(segment):
            return "/" + rest + suffix
        return path

    def localized_path(self, locale: str, path: str) -> str:
        """Build the path for a locale.

        ("de", "/settings") -> "/de/settings"; ("en", "/settings") ->
        "/settings" when the default locale has no prefix.
        """
        locale = self.coerce(locale)
        base = self.base_path(path)
        if not base.startswith("/"):
            base = "/" + base
        if not self.has_url_prefix(locale):
            return base
        return f"/{locale}{base}"

"""Custom exceptions for the i18n system.

None of these reach callers of ``translate``: loaders and stores raise them,
and the cache and negotiator absorb them into fallbacks.
"""

from typing import Optional


class I18nError(Exception):
    """Base exception for all i18n errors."""

    pass


class NamespaceLoadError(I18nError):
    """Raised by a loader when a (locale, namespace) document cannot be fetched.

    Attributes:
        locale: Locale that was requested
        namespace: Namespace that was requested
    """

    def __init__(self, locale: str, namespace: str, reason: Optional[str] = None):
        message = f"Failed to load namespace '{namespace}' for locale '{locale}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.locale = locale
        self.namespace = namespace


class PreferenceStoreError(I18nError):
    """Raised when the persisted locale preference cannot be written."""

    pass

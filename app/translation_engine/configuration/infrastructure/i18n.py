"""Internationalization settings."""

from typing import Optional

from pydantic import Field, model_validator

from translation_engine.configuration.base import InfrastructureSettings


class I18nSettings(InfrastructureSettings):
    """Locale and translation configuration.

    Environment Variables:
        I18N_DEFAULT_LOCALE: Locale whose data is the authoritative superset (default: en)
        I18N_SUPPORTED_LOCALES: JSON list of supported locale codes
        I18N_TRANSLATIONS_DIR: Directory of <locale>/<namespace>.yml documents
            (default: bundled locales)
        I18N_PRELOAD_NAMESPACES: JSON list of namespaces loaded on locale change
        I18N_PREFERENCE_FILE: JSON file persisting the user's locale choice
            (default: in-memory only)
        I18N_PREFERENCE_KEY: Key the locale choice is stored under
        I18N_PREFIX_DEFAULT_LOCALE: Give the default locale a URL prefix too
            (default: False, the default locale is served unprefixed)

    Example:
        ```python
        from translation_engine.configuration import settings

        if settings.i18n.prefix_default_locale:
            ...
        ```
    """

    default_locale: str = Field(
        default="en",
        alias="I18N_DEFAULT_LOCALE",
        description="Default locale code",
    )
    supported_locales: list[str] = Field(
        default_factory=lambda: ["en", "de", "es", "fr"],
        alias="I18N_SUPPORTED_LOCALES",
        description="Supported locale codes",
    )
    translations_dir: Optional[str] = Field(
        default=None,
        alias="I18N_TRANSLATIONS_DIR",
        description="Directory containing translation documents",
    )
    preload_namespaces: list[str] = Field(
        default_factory=lambda: ["common", "nav", "settings", "tools"],
        alias="I18N_PRELOAD_NAMESPACES",
        description="Namespaces ensured whenever the active locale changes",
    )
    preference_file: Optional[str] = Field(
        default=None,
        alias="I18N_PREFERENCE_FILE",
        description="Path of the JSON file holding the stored locale preference",
    )
    preference_key: str = Field(
        default="ntb-language",
        alias="I18N_PREFERENCE_KEY",
        description="Key under which the locale preference is stored",
    )
    prefix_default_locale: bool = Field(
        default=False,
        alias="I18N_PREFIX_DEFAULT_LOCALE",
        description="Address the default locale through a /<code> URL prefix",
    )

    @model_validator(mode="after")
    def _ensure_default_supported(self) -> "I18nSettings":
        if self.default_locale not in self.supported_locales:
            self.supported_locales = [self.default_locale, *self.supported_locales]
        return self

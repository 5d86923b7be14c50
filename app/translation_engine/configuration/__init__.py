"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Locale and translation settings class

Example:
    ```python
    from translation_engine.configuration import settings

    supported = settings.i18n.supported_locales
    ```
"""

from translation_engine.configuration.settings import Settings, settings
from translation_engine.configuration.infrastructure.i18n import I18nSettings

__all__ = ["Settings", "I18nSettings", "settings"]

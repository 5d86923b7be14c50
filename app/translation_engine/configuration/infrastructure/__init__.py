"""Infrastructure settings sections."""

from translation_engine.configuration.infrastructure.i18n import I18nSettings

__all__ = ["I18nSettings"]

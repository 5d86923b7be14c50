"""Translation engine.

Components:
- configuration: Settings management (settings, I18nSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- i18n: Translation registry, locale negotiation and namespace loading
"""

__version__ = "0.1.0"

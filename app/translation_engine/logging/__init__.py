"""Structured logging infrastructure.

Public API:
    - configure_logging(): Initialize logging from settings
    - get_module_logger(): Get a logger for the calling module
    - bind_locale_context(): Attach the active locale to subsequent events

Example:
    from translation_engine.logging import configure_logging, get_module_logger

    # At application startup (create_language_service() does this)
    configure_logging()

    # In a module
    logger = get_module_logger()
    logger.info("module_initialized")
"""

from translation_engine.logging.context import bind_locale_context
from translation_engine.logging.setup import configure_logging, get_module_logger

__all__ = ["bind_locale_context", "configure_logging", "get_module_logger"]

"""Structlog configuration for the translation engine.

Every event carries the service name. Once a LanguageService has activated
a locale, events also carry ``locale`` (bound through structlog context
variables, see ``translation_engine.logging.context``).

Usage:
    from translation_engine.logging import configure_logging, get_module_logger

    # Done by create_language_service(); call directly for custom wiring
    configure_logging()

    logger = get_module_logger()
    logger.info("namespace_loaded", namespace="common")
"""

import inspect
import logging
import sys
from typing import Any, MutableMapping, Optional

import structlog
from structlog.stdlib import BoundLogger

from translation_engine.configuration import Settings

SERVICE_NAME = "translation-engine"

# Above CRITICAL: nothing reaches the handlers
SILENT_LEVEL = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    """Detect if running under pytest."""
    return "pytest" in sys.modules


def add_service_name(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Processor stamping the service name on every event."""
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def build_processors(prod_mode: bool) -> list:
    """Processor chain for JSON (production) or console (development) output.

    Args:
        prod_mode: Render JSON lines instead of coloured console output.

    Returns:
        Processors ending with the renderer.
    """
    if prod_mode:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    return [
        structlog.contextvars.merge_contextvars,
        add_service_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def resolve_level(level_name: Optional[str]) -> int:
    """Map a level name such as "debug" to its number; unknown names give INFO."""
    level = logging.getLevelName((level_name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def _apply(processors: list, level: int, force: bool = False) -> None:
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, force=force)
    logging.root.setLevel(level)


def configure_logging(
    settings: Optional[Settings] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the standard logging backend.

    Under pytest all output is suppressed; loggers still accept calls.

    Args:
        settings: Settings instance (default: configuration singleton).
        log_level: Level name overriding settings.LOG_LEVEL.
        is_production: Overrides settings.is_production (JSON vs console).

    Returns:
        Logger bound to the service name.
    """
    if _is_test_environment():
        _apply(
            [
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            SILENT_LEVEL,
            force=True,
        )
        return structlog.stdlib.get_logger(service=SERVICE_NAME)

    if settings is None:
        from translation_engine.configuration import settings as default_settings

        settings = default_settings

    prod_mode = is_production if is_production is not None else settings.is_production
    _apply(build_processors(prod_mode), resolve_level(log_level or settings.LOG_LEVEL))

    return structlog.stdlib.get_logger(service=SERVICE_NAME)


# Loggers are usable on import; create_language_service() reconfigures from settings
configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger bound to the calling module.

    The logger is lazy: it picks up whatever configure_logging() set up
    before its first use, so module-level loggers can be created on import.

    Returns:
        Logger with ``service``, ``component`` (last dotted part of the module
        name) and ``module_path`` bound.

    Example:
        # In translation_engine/i18n/registry.py
        logger = get_module_logger()
        # context: {"component": "registry", "module_path": "translation_engine.i18n.registry"}
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module_name = caller.f_globals.get("__name__") if caller is not None else None
    if not module_name:
        return structlog.stdlib.get_logger(service=SERVICE_NAME, component="unknown")
    return structlog.stdlib.get_logger(
        service=SERVICE_NAME,
        component=module_name.rsplit(".", 1)[-1],
        module_path=module_name,
    )

"""Locale context binding for structured logging.

Binds the active locale to structlog's context variables so every event
logged afterwards in the same context carries it.

Usage:
    from translation_engine.logging import bind_locale_context

    bind_locale_context("de", default_locale="en")
    logger.warning("translation_missing", key="nav.home")
    # event includes locale="de", default_locale="en"
"""

from typing import Any, Optional

import structlog


def bind_locale_context(locale: str, default_locale: Optional[str] = None, **extra: Any) -> None:
    """Bind the active locale (and optional extras) to the logging context.

    Args:
        locale: Active locale code.
        default_locale: Fallback locale code.
        **extra: Additional key-value pairs to include in logs.
    """
    context = {"locale": locale, **extra}
    if default_locale is not None:
        context["default_locale"] = default_locale
    structlog.contextvars.bind_contextvars(**context)

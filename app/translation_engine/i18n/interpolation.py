"""String interpolation for translated templates.

"Hello {name}" + {"name": "World"} -> "Hello World"
"""

import re
from typing import Any, Mapping, Optional


class _Unset:
    """Marker for a parameter that is supplied but has no value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()

TOKEN_PATTERN = re.compile(r"\{(\w+)\}")


def format_value(value: Any) -> str:
    """Render an interpolation value as text.

    None renders as "null" and booleans as "true"/"false"; floats with no
    fractional part drop the trailing ".0".
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def interpolate(template: str, params: Optional[Mapping[str, Any]]) -> str:
    """Replace ``{identifier}`` tokens with values from params.

    Tokens whose identifier is not in params, or is bound to UNSET, are left
    verbatim (braces included).

    Args:
        template: Template string.
        params: Mapping of identifier to value.

    Returns:
        The interpolated string.
    """
    if not params:
        return template

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        if name not in params:
            return match.group(0)
        value = params[name]
        if value is UNSET:
            return match.group(0)
        return format_value(value)

    return TOKEN_PATTERN.sub(_replace, template)

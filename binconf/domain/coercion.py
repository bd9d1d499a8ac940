"""Value coercion for parsed configuration data.

Values read from a file do not always carry the type of the default they
replace: legacy INI files only hold strings, and hand-edited TOML may quote
numbers or booleans. Each function here converts one raw value to the type
implied by a FieldKind.
"""

import math
import re
from typing import Any

from binconf.domain.config import FieldKind

_TRUE_WORDS = frozenset({"true", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "no", "off", "none"})
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_bool(value: Any) -> bool:
    """Coerce a raw value to a boolean.

    Words like "yes"/"off" map to their meaning, "0" and "" are false,
    any other string is true. Numbers are true when non-zero.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        return word not in ("", "0")
    return bool(value)


def coerce_int(value: Any) -> int:
    """Coerce a raw value to an integer, falling back to 0.

    Strings are parsed by their leading digits, so "12abc" gives 12 and
    "bar" gives 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def coerce_str(value: Any) -> str:
    """Render a raw value as a string."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def coerce(kind: FieldKind, value: Any, default: Any = None) -> Any:
    """Coerce a file value to the given kind.

    Args:
        kind: Expected kind of the value
        value: Raw value from the parsed file
        default: Default of the key, kept when a string value is empty

    Returns:
        The coerced value
    """
    if kind is FieldKind.BOOL:
        return coerce_bool(value)
    if kind is FieldKind.INT:
        return coerce_int(value)
    if kind is FieldKind.OPTIONAL_STRING:
        return value
    text = coerce_str(value)
    return text if text else default

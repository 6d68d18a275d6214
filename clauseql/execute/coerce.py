"""Result-shape coercion for the scalar helpers of the executor."""
from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

#: Strings that read as "true" (case-insensitive).
TRUE_PATTERN = re.compile(r"^(t(rue)?|on|yes|enabled|ok|[1-9]\d*)$", re.IGNORECASE)


def coerce_bool(value: Any) -> bool:
    """Interpret a database value as a boolean.

    Numbers are true when greater than zero; strings are true when they
    match :data:`TRUE_PATTERN` after trimming.  Everything else, ``None``
    included, is false.  NaN is false.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, Decimal) and value.is_nan():
        return False
    if isinstance(value, (int, float, Decimal)):
        return value > 0
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        return TRUE_PATTERN.match(value.strip()) is not None
    return False


def coerce_int(value: Any, default: int = 0) -> int:
    """Interpret a database value as an integer, ``default`` when impossible.

    Floats and numeric strings are truncated toward zero; ``True`` is 1.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        try:
            return int(value)
        except (OverflowError, ValueError):
            return default
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return int(float(text))
        except (OverflowError, ValueError):
            return default
    return default


def coerce_float(value: Any, default: float = 0.0) -> float:
    """Interpret a database value as a float, ``default`` when impossible."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, Decimal):
        return default if value.is_snan() else float(value)
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return default
    return default

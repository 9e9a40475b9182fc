"""Cache key derivation for paginated queries."""

from __future__ import annotations

import math
from typing import Any

SEPARATOR = "|"


def normalize(query: Any) -> str:
    """Trim and lower-case a query; falsy or missing input becomes ``""``."""

    if not query:
        return ""
    return str(query).strip().lower()


def _number(value: Any) -> str:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and not value.strip():
        return "0"
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return "NaN"
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer():
        return str(int(number))
    return repr(number)


def key_base(query: Any, limit: Any) -> str:
    """SearchKey: identifies one logical paginated query regardless of offset."""

    return f"{normalize(query)}{SEPARATOR}{_number(limit)}"


def page_key(base: str, offset: Any) -> str:
    """PageKey: identifies one physical page fetch of ``base``."""

    return f"{base}{SEPARATOR}{_number(offset)}"


__all__ = ["SEPARATOR", "key_base", "normalize", "page_key"]

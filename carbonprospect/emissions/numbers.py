"""Numeric coercion shared by every stage of the report pipeline."""

from __future__ import annotations

import math
from typing import Any


def safe_number(value: Any) -> float:
    """Coerce *value* to a finite float, returning ``0.0`` when that fails.

    Mirrors the permissive ``Number(value)`` behaviour the front end relies
    on: ``None``, empty strings, booleans' string forms, ``NaN`` and
    infinities all collapse to zero.  Never raises.

    >>> safe_number("12.5")
    12.5
    >>> safe_number("n/a")
    0.0
    """
    if value is None or isinstance(value, bool):
        return float(value or 0)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def safe_divide(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator``, or ``0.0`` when the denominator is not positive."""
    if denominator > 0:
        return numerator / denominator
    return 0.0


def first_present(mapping: dict[str, Any], *keys: str) -> Any:
    """Return the first value under *keys* that is not ``None``."""
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return value
    return None

"""Number and date formatting for report text and tables.

These strings appear verbatim in a compliance document, so each helper has
one fixed output shape:

    tonnes(1234.5)          -> "1234.50"
    percent(12.345)         -> "12.3%"
    share(50, 200)          -> "25.0%"     ("0%" when the total is not positive)
    grouped(1234567.891)    -> "1,234,567.891"
    currency(1500000)       -> "$1,500,000"
    payback(2.5)            -> "2.5 years" (None -> "N/A")
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional

from carbonprospect.emissions.numbers import safe_number

_FILENAME_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def tonnes(value: Any) -> str:
    return f"{safe_number(value):.2f}"


def percent(value: Any) -> str:
    return f"{safe_number(value):.1f}%"


def share(part: Any, total: Any) -> str:
    """*part* as a percentage of *total*; signed when *part* is negative."""
    total = safe_number(total)
    if total <= 0:
        return "0%"
    return percent(safe_number(part) / total * 100)


def grouped(value: Any, max_fraction_digits: int = 3) -> str:
    """Thousands-grouped number with at most *max_fraction_digits* decimals.

    >>> grouped(2500.5)
    '2,500.5'
    >>> grouped(12)
    '12'
    """
    text = f"{safe_number(value):,.{max_fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def currency(value: Any) -> str:
    return f"${grouped(value)}"


def count(value: Any) -> str:
    return f"{round(safe_number(value)):,}"


def plain_number(value: Any) -> str:
    """Shortest plain rendering: ``2088.0`` -> ``"2088"``, ``0.155`` -> ``"0.155"``."""
    number = safe_number(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def payback(years: Optional[float]) -> str:
    if years is None:
        return "N/A"
    return f"{years:.1f} years"


def change_vs_baseline(value: Any, baseline: Any) -> str:
    """Signed change of *value* against *baseline*, e.g. ``"+12.5%"``."""
    baseline = safe_number(baseline)
    if baseline <= 0:
        return "0%"
    diff = (safe_number(value) - baseline) / baseline * 100
    text = f"{diff:.1f}%"
    return f"+{text}" if diff > 0 and text != "0.0%" else text


def short_date(day: date) -> str:
    """``date(2026, 10, 19)`` -> ``"10/19/2026"``."""
    return f"{day.month}/{day.day}/{day.year}"


def filename_part(text: str) -> str:
    """Collapse characters that are unsafe in a download filename to ``_``."""
    return _FILENAME_UNSAFE.sub("_", text.strip()).strip("_")

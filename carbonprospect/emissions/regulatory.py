"""Mandatory-reporting group classification and reporting standards lookup."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from carbonprospect.emissions.numbers import safe_number

# (group, revenue threshold in $M, employee threshold), highest group first.
_GROUP_THRESHOLDS = (
    (1, 500, 500),
    (2, 200, 250),
    (3, 50, 100),
)

STANDARDS_BY_LOCATION: dict[str, tuple[str, ...]] = {
    "australia": ("NGER Act", "Climate Active", "TCFD"),
    "united_states": ("EPA GHG Reporting", "SEC Climate Disclosure", "TCFD"),
    "european_union": ("EU CSRD", "EU Taxonomy", "SFDR"),
    "united_kingdom": ("UK SECR", "TCFD", "UK Taxonomy"),
    "canada": ("ECCC Reporting", "TCFD", "OSFI Guidelines"),
    "new_zealand": ("Climate Standards", "TCFD", "XRB Standards"),
    "japan": ("GHG Reporting System", "TCFD", "METI Guidelines"),
    "singapore": ("SGX Climate Reporting", "TCFD", "MAS Guidelines"),
}

DEFAULT_STANDARDS: tuple[str, ...] = ("GHG Protocol", "ISO 14064", "TCFD")


def regulatory_group(annual_revenue: Any, employee_count: Any) -> int:
    """Return the reporting group (1-3), or 0 when no threshold is met.

    Group 1 is the strictest tier.  Either criterion alone qualifies, and
    the first (strictest) matching tier wins.

    >>> regulatory_group(600_000_000, 10)
    1
    >>> regulatory_group(0, 120)
    3
    """
    revenue_millions = safe_number(annual_revenue) / 1_000_000
    employees = safe_number(employee_count)
    for group, revenue_floor, employee_floor in _GROUP_THRESHOLDS:
        if revenue_millions >= revenue_floor or employees >= employee_floor:
            return group
    return 0


def normalize_location(location: Any) -> str:
    """``"United Kingdom"`` -> ``"united_kingdom"``."""
    if not location:
        return ""
    return str(location).strip().lower().replace(" ", "_").replace("-", "_")


def applicable_standards(
    location: Any, explicit: Optional[Sequence[str]] = None
) -> list[str]:
    """Return the reporting standards for *location*.

    A non-empty *explicit* list is returned verbatim.
    """
    if explicit:
        return list(explicit)
    return list(STANDARDS_BY_LOCATION.get(normalize_location(location), DEFAULT_STANDARDS))

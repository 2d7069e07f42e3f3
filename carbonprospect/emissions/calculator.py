"""Activity-to-emissions calculator.

Converts raw activity quantities (liters, kWh, head of livestock, ...) into
tonnes CO2e per activity key and rolls them up into Scope 1/2/3 totals.

Usage::

    from carbonprospect.emissions.calculator import compute_emissions

    result = compute_emissions({"electricity": 120_000, "diesel": 4_000})
    result.totals.scope2   # 50.4
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from carbonprospect.emissions.factors import (
    CURRENCY_ACTIVITIES,
    EMISSION_FACTORS,
    EmissionFactor,
)
from carbonprospect.emissions.numbers import safe_number

logger = logging.getLogger(__name__)

KG_PER_TONNE = 1000.0

#: Absolute tolerance used when comparing a caller total with the scope sum.
TOTAL_TOLERANCE = 1e-6


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class EmissionsTotals(BaseModel):
    """Scope 1/2/3 subtotals in tonnes CO2e.

    ``total`` is always re-derived as the signed sum of the three scopes,
    whatever value the caller passes for it.  Scope subtotals may be
    negative when avoided-emission factors (recycling, composting)
    dominate a scope.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    scope1: float = 0.0
    scope2: float = 0.0
    scope3: float = 0.0
    total: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def _derive_total(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        scopes = {k: safe_number(data.get(k)) for k in ("scope1", "scope2", "scope3")}
        return {**scopes, "total": sum(scopes.values())}


class EmissionsResult(BaseModel):
    """Output of :func:`compute_emissions`."""

    model_config = ConfigDict(frozen=True)

    per_category: dict[str, float] = Field(
        default_factory=dict,
        description="Tonnes CO2e per activity key, only for keys that were supplied.",
    )
    totals: EmissionsTotals = Field(default_factory=EmissionsTotals)


class ActivityRow(BaseModel):
    """One line of the detailed emissions breakdown."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    quantity: float
    activity_unit: str
    factor: float
    factor_unit: str
    tonnes: float
    is_currency: bool = False


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def scope_for(key: str, factors: Mapping[str, EmissionFactor] = EMISSION_FACTORS) -> Optional[int]:
    """Return the scope of activity *key*, or ``None`` for unknown keys."""
    factor = factors.get(key)
    return factor.scope if factor is not None else None


def compute_emissions(
    raw_inputs: Optional[Mapping[str, Any]],
    detailed_overrides: Optional[Mapping[str, Any]] = None,
    totals: Optional[Mapping[str, Any]] = None,
    factors: Mapping[str, EmissionFactor] = EMISSION_FACTORS,
) -> EmissionsResult:
    """Compute per-activity emissions and scope totals.

    Args:
        raw_inputs:  Activity key -> quantity.  Absent, ``None`` and
            non-numeric quantities count as zero; unknown keys are ignored.
        detailed_overrides:  Activity key -> tonnes CO2e already computed
            upstream.  An override wins over recomputation for its key.
        totals:  Pre-aggregated ``{scope1, scope2, scope3[, total]}``.  When
            given, its scope values are kept as supplied and are never
            replaced by the per-activity roll-up.
        factors:  Emission factor table; defaults to the reference table.

    Returns:
        An :class:`EmissionsResult`.  Never raises on degraded input.
    """
    raw_inputs = raw_inputs or {}
    overrides = detailed_overrides or {}

    per_category: dict[str, float] = {}
    for key, factor in factors.items():
        override = overrides.get(key)
        if override is not None:
            per_category[key] = safe_number(override)
        elif key in raw_inputs:
            quantity = safe_number(raw_inputs[key])
            per_category[key] = quantity * factor.factor / KG_PER_TONNE

    derived = {"scope1": 0.0, "scope2": 0.0, "scope3": 0.0}
    for key, tonnes in per_category.items():
        derived[f"scope{factors[key].scope}"] += tonnes

    if totals is None:
        return EmissionsResult(per_category=per_category, totals=EmissionsTotals(**derived))

    reconciled = EmissionsTotals.model_validate(totals)
    claimed = totals.get("total")
    if claimed is not None and abs(safe_number(claimed) - reconciled.total) > TOTAL_TOLERANCE:
        logger.warning(
            "Supplied total %.6f disagrees with scope sum %.6f; using the scope sum",
            safe_number(claimed),
            reconciled.total,
        )
    if per_category and any(
        abs(getattr(reconciled, scope) - value) > TOTAL_TOLERANCE
        for scope, value in derived.items()
    ):
        logger.info(
            "Caller-supplied scope totals differ from activity roll-up %s; keeping caller values",
            derived,
        )
    return EmissionsResult(per_category=per_category, totals=reconciled)


def activity_rows(
    per_category: Mapping[str, float],
    raw_inputs: Optional[Mapping[str, Any]],
    scope: int,
    factors: Mapping[str, EmissionFactor] = EMISSION_FACTORS,
) -> list[ActivityRow]:
    """Build the detailed-breakdown rows for *scope*.

    Only activities with a positive raw quantity appear, in factor-table
    order.  The tonnes column prefers the value in *per_category* and falls
    back to recomputing from the quantity.
    """
    raw_inputs = raw_inputs or {}
    rows: list[ActivityRow] = []
    for key, factor in factors.items():
        if factor.scope != scope:
            continue
        quantity = safe_number(raw_inputs.get(key))
        if quantity <= 0:
            continue
        tonnes = per_category.get(key)
        if tonnes is None:
            tonnes = quantity * factor.factor / KG_PER_TONNE
        rows.append(
            ActivityRow(
                key=key,
                label=factor.label,
                quantity=quantity,
                activity_unit=factor.activity_unit,
                factor=factor.factor,
                factor_unit=factor.unit,
                tonnes=safe_number(tonnes),
                is_currency=key in CURRENCY_ACTIVITIES,
            )
        )
    return rows

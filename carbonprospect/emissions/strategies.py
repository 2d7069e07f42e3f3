"""Reduction strategy normalizer.

Strategy records arrive in three shapes:

* ``reductionType == "absolute"``   -- ``reductionTonnes`` is a tonnage
* ``reductionType == "percentage"`` -- ``reductionPotential`` is a percent
* no ``reductionType``              -- legacy records; the value is found in
  ``potentialReduction``, ``reductionPotential`` or ``reductionTonnes`` and
  anything above 100 is read as tonnes, anything else as a percent.

The shape is decided once by :func:`classify_strategy`, which returns one
member of the :data:`StrategyVariant` union.  Everything downstream
pattern-matches on the variant instead of re-inspecting raw fields.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from carbonprospect.emissions.calculator import EmissionsTotals
from carbonprospect.emissions.numbers import first_present, safe_divide, safe_number

logger = logging.getLogger(__name__)

#: Legacy values strictly above this are read as absolute tonnes.
LEGACY_ABSOLUTE_THRESHOLD = 100.0

SCOPE_LABELS = {"scope1": "Scope 1", "scope2": "Scope 2", "scope3": "Scope 3"}


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class _StrategyBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    scope: str = "Various"
    timeframe: str = "TBD"
    capex: float = 0.0
    opex_savings: float = 0.0


class AbsoluteStrategy(_StrategyBase):
    kind: Literal["absolute"] = "absolute"
    tonnes: float = 0.0


class PercentageStrategy(_StrategyBase):
    kind: Literal["percentage"] = "percentage"
    percent: float = 0.0


class LegacyStrategy(_StrategyBase):
    """A record with no declared ``reductionType``."""

    kind: Literal["legacy"] = "legacy"
    value: float = 0.0


StrategyVariant = Annotated[
    Union[AbsoluteStrategy, PercentageStrategy, LegacyStrategy],
    Field(discriminator="kind"),
]


class NormalizedStrategy(BaseModel):
    """A strategy with both its tonnage and percentage reduction resolved."""

    model_config = ConfigDict(frozen=True)

    name: str
    scope: str
    timeframe: str
    capex: float = Field(ge=0)
    opex_savings: float = Field(ge=0)
    absolute_reduction: float = Field(description="Tonnes CO2e avoided.")
    percentage_reduction: float = Field(
        description="Percent of total emissions avoided; may exceed 100.",
    )
    source_kind: Literal["absolute", "percentage", "legacy"]

    @computed_field
    @property
    def payback_years(self) -> Optional[float]:
        if self.opex_savings > 0:
            return self.capex / self.opex_savings
        return None


class ScopeBreakdown(BaseModel):
    """Per-scope figures plus an overall value."""

    model_config = ConfigDict(frozen=True)

    scope1: float = 0.0
    scope2: float = 0.0
    scope3: float = 0.0
    total: float = 0.0


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def _text(value: Any, default: str) -> str:
    if value is None or value == "":
        return default
    return str(value)


def classify_strategy(raw: Mapping[str, Any]) -> Optional[
    Union[AbsoluteStrategy, PercentageStrategy, LegacyStrategy]
]:
    """Decide the shape of one raw strategy record.

    Returns ``None`` for records with neither a ``name`` nor a ``strategy``
    field; such records are dropped from the report entirely.
    """
    if not isinstance(raw, Mapping):
        return None
    name = raw.get("name") or raw.get("strategy")
    if not name:
        return None

    common = dict(
        name=str(name),
        scope=_text(raw.get("scope"), "Various"),
        timeframe=_text(raw.get("timeframe"), "TBD"),
        capex=max(0.0, safe_number(raw.get("capex") or raw.get("implementationCost"))),
        opex_savings=max(0.0, safe_number(raw.get("opexSavings"))),
    )

    reduction_type = raw.get("reductionType")
    if reduction_type == "absolute":
        return AbsoluteStrategy(tonnes=safe_number(raw.get("reductionTonnes")), **common)
    if reduction_type == "percentage":
        return PercentageStrategy(percent=safe_number(raw.get("reductionPotential")), **common)

    value = safe_number(
        first_present(raw, "potentialReduction", "reductionPotential", "reductionTonnes")
    )
    return LegacyStrategy(value=value, **common)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def _from_tonnes(tonnes: float, total_emissions: float) -> tuple[float, float]:
    if total_emissions <= 0:
        return 0.0, 0.0
    return tonnes, tonnes / total_emissions * 100


def _from_percent(percent: float, total_emissions: float) -> tuple[float, float]:
    if total_emissions <= 0:
        return 0.0, 0.0
    return total_emissions * percent / 100, percent


def normalize_strategy(
    variant: Union[AbsoluteStrategy, PercentageStrategy, LegacyStrategy],
    total_emissions: float,
) -> NormalizedStrategy:
    """Resolve one classified strategy against the organisation's total."""
    total_emissions = safe_number(total_emissions)
    match variant:
        case AbsoluteStrategy(tonnes=tonnes):
            absolute, percent = _from_tonnes(tonnes, total_emissions)
        case PercentageStrategy(percent=declared):
            absolute, percent = _from_percent(declared, total_emissions)
        case LegacyStrategy(value=value) if value > LEGACY_ABSOLUTE_THRESHOLD:
            logger.info(
                "Strategy %r has no reductionType; reading %s as absolute tonnes",
                variant.name,
                value,
            )
            absolute, percent = _from_tonnes(value, total_emissions)
        case LegacyStrategy(value=value):
            logger.info(
                "Strategy %r has no reductionType; reading %s as a percentage",
                variant.name,
                value,
            )
            absolute, percent = _from_percent(value, total_emissions)

    return NormalizedStrategy(
        name=variant.name,
        scope=variant.scope,
        timeframe=variant.timeframe,
        capex=variant.capex,
        opex_savings=variant.opex_savings,
        absolute_reduction=absolute,
        percentage_reduction=percent,
        source_kind=variant.kind,
    )


def normalize_strategies(
    raw_strategies: Optional[list[Any]], total_emissions: float
) -> list[NormalizedStrategy]:
    """Classify and normalize every usable record, preserving input order."""
    if not isinstance(raw_strategies, list):
        return []
    normalized = []
    for raw in raw_strategies:
        variant = classify_strategy(raw)
        if variant is None:
            logger.debug("Dropping strategy record without a name: %r", raw)
            continue
        normalized.append(normalize_strategy(variant, total_emissions))
    return normalized


def aggregate_reductions(
    strategies: list[NormalizedStrategy], totals: EmissionsTotals
) -> tuple[ScopeBreakdown, ScopeBreakdown]:
    """Sum reductions per scope and express them against each scope's total.

    Only strategies whose ``scope`` is exactly ``"Scope 1"``, ``"Scope 2"``
    or ``"Scope 3"`` count towards a scope; "Various" and other labels are
    excluded from every bucket.

    Returns:
        ``(reductions_by_scope, reduction_percentages)``.  The ``total`` of
        the first is the sum of the three scope reductions; the ``total`` of
        the second is that sum over the grand total.
    """
    tonnes = {
        field: sum(s.absolute_reduction for s in strategies if s.scope == label)
        for field, label in SCOPE_LABELS.items()
    }
    combined = sum(tonnes.values())
    by_scope = ScopeBreakdown(**tonnes, total=combined)
    percentages = ScopeBreakdown(
        scope1=safe_divide(tonnes["scope1"], totals.scope1) * 100,
        scope2=safe_divide(tonnes["scope2"], totals.scope2) * 100,
        scope3=safe_divide(tonnes["scope3"], totals.scope3) * 100,
        total=safe_divide(combined, totals.total) * 100,
    )
    return by_scope, percentages

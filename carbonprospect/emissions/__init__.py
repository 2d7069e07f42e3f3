from carbonprospect.emissions.calculator import (
    EmissionsResult,
    EmissionsTotals,
    activity_rows,
    compute_emissions,
    scope_for,
)
from carbonprospect.emissions.factors import EMISSION_FACTORS, EmissionFactor
from carbonprospect.emissions.projection import PROJECTION_YEARS, ProjectionPoint, project_five_years
from carbonprospect.emissions.regulatory import applicable_standards, regulatory_group
from carbonprospect.emissions.strategies import (
    NormalizedStrategy,
    ScopeBreakdown,
    aggregate_reductions,
    classify_strategy,
    normalize_strategies,
)

__all__ = [
    "EMISSION_FACTORS",
    "EmissionFactor",
    "EmissionsResult",
    "EmissionsTotals",
    "NormalizedStrategy",
    "PROJECTION_YEARS",
    "ProjectionPoint",
    "ScopeBreakdown",
    "activity_rows",
    "aggregate_reductions",
    "applicable_standards",
    "classify_strategy",
    "compute_emissions",
    "normalize_strategies",
    "project_five_years",
    "regulatory_group",
    "scope_for",
]

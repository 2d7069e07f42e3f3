"""Report builder: assembles a ReportRecord from raw front-end inputs.

Usage::

    from datetime import date
    from report.builder import assemble_report
    from report.models import ReportingContext

    record = assemble_report(
        {"emissions": {"scope1": 100, "scope2": 50, "scope3": 50}},
        [{"name": "Solar", "reductionType": "percentage",
          "reductionPotential": 25, "scope": "Scope 2"}],
        {"companyName": "Acme Pty Ltd", "employeeCount": 120},
        context=ReportingContext(project_id="42", today=date(2026, 10, 19)),
    )
    record.report_id   # "REP-42-20261019"

The builder never raises on degraded input: missing or non-numeric values
become zero, and missing identity fields become placeholder strings.  Each
call builds its own state; nothing is shared between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from carbonprospect.config import get_settings
from carbonprospect.emissions.calculator import compute_emissions
from carbonprospect.emissions.factors import EMISSION_FACTORS, EmissionFactor
from carbonprospect.emissions.numbers import safe_divide, safe_number
from carbonprospect.emissions.projection import project_five_years
from carbonprospect.emissions.regulatory import applicable_standards, regulatory_group
from carbonprospect.emissions.strategies import aggregate_reductions, normalize_strategies
from report.models import (
    CurrentUser,
    EmissionsData,
    IntensityMetrics,
    OrganizationInfo,
    ReportingContext,
    ReportingRequirement,
    ReportRecord,
    Scenario,
)

logger = logging.getLogger(__name__)

UNKNOWN_ORGANIZATION = "Unknown Organization"
NOT_SPECIFIED = "Not specified"

CONSOLIDATION_APPROACH = "Operational control"
EMISSION_FACTOR_SOURCE = "Government published emission factors (DEFRA, EPA, NGER)"
DATA_QUALITY = "Primary data where available, secondary data based on industry averages"
BOUNDARIES = "Organizational boundaries set using operational control approach"
EXCLUSIONS = "No material exclusions from the inventory"
UNCERTAINTY_LEVEL = "±10% for Scope 1 & 2, ±30% for Scope 3 emissions"
VERIFICATION_STATUS = "Self-declared (pending third-party verification)"
PREPARER_TITLE = "Sustainability Manager"
UNKNOWN_PREPARER = "Unknown"

_M = TypeVar("_M", bound=BaseModel)


def assemble_report(
    emissions_data: Any,
    strategies: Any,
    organization_info: Any,
    scenarios: Any = None,
    context: Optional[ReportingContext] = None,
    *,
    factors: Mapping[str, EmissionFactor] = EMISSION_FACTORS,
) -> ReportRecord:
    """Build the canonical :class:`~report.models.ReportRecord`.

    Args:
        emissions_data:  ``EmissionsData`` or its camelCase dict form.  A
            missing ``emissions`` key yields zero totals, not an error.
        strategies:  Raw reduction strategy records (any of the three
            shapes handled by the strategy normalizer).
        organization_info:  ``OrganizationInfo`` or its dict form.
        scenarios:  Optional scenario records for the comparison table.
        context:  Project ID, generation date and preparer overrides.
            ``context.today`` defaults to the current date.
        factors:  Emission factor table used for activity roll-ups.

    Returns:
        A frozen ``ReportRecord``.  Two calls with identical inputs and an
        identical ``context.today`` return equal records.
    """
    settings = get_settings()
    context = context or ReportingContext()
    today = context.today or date.today()

    data = _coerce(EmissionsData, emissions_data)
    org = _coerce(OrganizationInfo, organization_info)

    result = compute_emissions(
        data.raw_inputs,
        detailed_overrides=data.detailed_emissions,
        totals=data.emissions,
        factors=factors,
    )
    totals = result.totals
    has_emissions_data = data.emissions is not None or bool(result.per_category)

    normalized = normalize_strategies(_as_list(strategies), totals.total)
    reductions_by_scope, reduction_percentages = aggregate_reductions(normalized, totals)

    reduction_target = safe_number(data.reduction_target) or settings.default_reduction_target
    projection = project_five_years(
        totals.total,
        reduction_percentages.total,
        reduction_target / 100,
        today.year,
    )

    location = org.location or data.location
    preparer = _preparer(context)

    return ReportRecord(
        report_id=report_id(context.project_id, today),
        formatted_date=format_long_date(today),
        generated_on=today,
        project_id=context.project_id,
        company_name=org.company_name or UNKNOWN_ORGANIZATION,
        industry=org.industry_type or data.industry_type or NOT_SPECIFIED,
        country=location or NOT_SPECIFIED,
        location=location or NOT_SPECIFIED,
        organization=org,
        emissions=totals,
        has_emissions_data=has_emissions_data,
        per_category_emissions=result.per_category,
        raw_inputs={key: safe_number(value) for key, value in data.raw_inputs.items()},
        intensity=IntensityMetrics(
            per_employee=safe_divide(totals.total, org.employee_count),
            per_revenue_million=safe_divide(totals.total, org.annual_revenue / 1_000_000),
        ),
        reduction_target=reduction_target,
        strategies=normalized,
        reductions_by_scope=reductions_by_scope,
        reduction_percentages=reduction_percentages,
        five_year_projection=projection,
        scenarios=_scenarios(scenarios),
        regulatory_group=regulatory_group(org.annual_revenue, org.employee_count),
        applicable_standards=applicable_standards(
            location, context.applicable_standards or data.applicable_schemes
        ),
        reporting_requirements=_requirements(data.reporting_requirements),
        offset_requirements=data.offset_requirements,
        reporting_period=int(
            safe_number(data.reporting_year) or org.reporting_year or today.year - 1
        ),
        baseline_year=int(org.baseline_year or today.year - 1),
        consolidation_approach=CONSOLIDATION_APPROACH,
        emission_factor_source=EMISSION_FACTOR_SOURCE,
        data_quality=DATA_QUALITY,
        boundaries=BOUNDARIES,
        exclusions=EXCLUSIONS,
        uncertainty_level=UNCERTAINTY_LEVEL,
        verification_status=context.verification_status or VERIFICATION_STATUS,
        report_preparer=preparer,
        preparer_title=(context.current_user and context.current_user.title) or PREPARER_TITLE,
        carbon_credit_price=(
            safe_number(data.carbon_credit_price) or settings.default_carbon_credit_price
        ),
    )


def report_id(project_id: Optional[str], today: date) -> str:
    """``REP-<projectId>-<YYYYMMDD>``, with ``NEW`` for unsaved projects."""
    return f"REP-{project_id or 'NEW'}-{today:%Y%m%d}"


def format_long_date(day: date) -> str:
    """``date(2026, 10, 19)`` -> ``"October 19, 2026"``."""
    return f"{day:%B} {day.day}, {day.year}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _coerce(model: type[_M], value: Any) -> _M:
    """Validate *value* into *model*, degrading to defaults on bad input."""
    if isinstance(value, model):
        return value
    if not isinstance(value, Mapping):
        return model()
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        logger.warning(
            "Discarding malformed %s input (%d errors); using defaults",
            model.__name__,
            exc.error_count(),
        )
        return model()


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _scenarios(raw: Any) -> list[Scenario]:
    scenarios = []
    for item in _as_list(raw):
        if isinstance(item, Scenario):
            scenarios.append(item)
        elif isinstance(item, Mapping):
            try:
                scenarios.append(Scenario.from_raw(item))
            except ValidationError:
                logger.warning("Skipping malformed scenario %r", item.get("name"))
    return scenarios


def _requirements(raw: list[dict[str, Any]]) -> list[ReportingRequirement]:
    requirements = []
    for item in raw:
        try:
            requirements.append(ReportingRequirement.model_validate(item))
        except ValidationError:
            logger.warning("Skipping malformed reporting requirement %r", item.get("scheme"))
    return requirements


def _preparer(context: ReportingContext) -> str:
    if context.report_preparer:
        return context.report_preparer
    user: Optional[CurrentUser] = context.current_user
    if user is not None and user.display_name:
        return user.display_name
    return UNKNOWN_PREPARER

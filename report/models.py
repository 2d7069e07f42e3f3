"""Domain models for the GHG emissions report.

Hierarchy:
    EmissionsData        -- inbound activity data and pre-aggregated totals
    OrganizationInfo     -- inbound organisational metadata
    Scenario             -- an alternative pathway shown for comparison only
    ReportingRequirement -- a scheme/legislation block for the compliance section
    CurrentUser          -- the signed-in user, used to default the preparer
    ReportingContext     -- per-request values: project, date, overrides
    IntensityMetrics     -- derived per-employee / per-revenue intensity
    ReportRecord         -- the fully assembled, immutable report

Inbound models accept the camelCase keys sent by the front end as well as
snake_case names, ignore unknown keys, and coerce field by field: numeric
fields go through ``safe_number`` so malformed values become zero, and
free-text fields drop anything that is not a string or a number.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from carbonprospect.emissions.calculator import EmissionsTotals
from carbonprospect.emissions.numbers import safe_number
from carbonprospect.emissions.projection import ProjectionPoint
from carbonprospect.emissions.strategies import NormalizedStrategy, ScopeBreakdown


def _as_dict(value: Any) -> dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _text(value: Any) -> Optional[str]:
    """Strings pass through, numbers become strings, anything else is dropped."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


class _Inbound(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


# ---------------------------------------------------------------------------
# Inbound records
# ---------------------------------------------------------------------------


class EmissionsData(_Inbound):
    """Activity data and totals supplied by the calculator front end."""

    emissions: Optional[dict[str, Any]] = Field(
        default=None,
        description="Pre-aggregated {scope1, scope2, scope3, total} in tonnes.",
    )
    detailed_emissions: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices(
            "detailedEmissions", "detailed_emissions", "emissionValues"
        ),
        description="Activity key -> tonnes CO2e already computed upstream.",
    )
    raw_inputs: dict[str, Any] = Field(default_factory=dict)
    reporting_year: Optional[Any] = None
    reduction_target: Optional[Any] = None
    carbon_credit_price: Optional[Any] = None
    applicable_schemes: list[str] = Field(default_factory=list)
    reporting_requirements: list[dict[str, Any]] = Field(default_factory=list)
    offset_requirements: dict[str, Any] = Field(default_factory=dict)
    location: Optional[str] = None
    industry_type: Optional[str] = None

    @field_validator("location", "industry_type", mode="before")
    @classmethod
    def _free_text(cls, v: Any) -> Optional[str]:
        return _text(v)

    @field_validator("emissions", mode="before")
    @classmethod
    def _mapping_or_none(cls, v: Any) -> Optional[dict[str, Any]]:
        return dict(v) if isinstance(v, Mapping) else None

    @field_validator("detailed_emissions", "raw_inputs", "offset_requirements", mode="before")
    @classmethod
    def _mapping(cls, v: Any) -> dict[str, Any]:
        return _as_dict(v)

    @field_validator("applicable_schemes", mode="before")
    @classmethod
    def _strings(cls, v: Any) -> list[str]:
        return [str(item) for item in _as_list(v) if item]

    @field_validator("reporting_requirements", mode="before")
    @classmethod
    def _mappings(cls, v: Any) -> list[dict[str, Any]]:
        return [dict(item) for item in _as_list(v) if isinstance(item, Mapping)]


class OrganizationInfo(_Inbound):
    """Organisational metadata, including the report-form contact fields."""

    company_name: Optional[str] = None
    annual_revenue: float = 0.0
    employee_count: float = 0.0
    facility_count: float = 0.0
    fleet_size: float = 0.0
    is_listed: bool = False
    industry_type: Optional[str] = None
    location: Optional[str] = None
    reporting_year: float = 0.0
    baseline_year: float = 0.0
    organization_type: str = "Corporate"

    business_number: Optional[str] = None
    registered_address: Optional[str] = None
    contact_person: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    website: Optional[str] = None

    @field_validator(
        "company_name",
        "industry_type",
        "location",
        "business_number",
        "registered_address",
        "contact_person",
        "contact_email",
        "contact_phone",
        "website",
        mode="before",
    )
    @classmethod
    def _free_text(cls, v: Any) -> Optional[str]:
        return _text(v)

    @field_validator(
        "annual_revenue",
        "employee_count",
        "facility_count",
        "fleet_size",
        "reporting_year",
        "baseline_year",
        mode="before",
    )
    @classmethod
    def _number(cls, v: Any) -> float:
        return safe_number(v)

    @field_validator("is_listed", mode="before")
    @classmethod
    def _flag(cls, v: Any) -> bool:
        return v is True or (isinstance(v, str) and v.strip().lower() in ("true", "yes", "1"))

    @field_validator("organization_type", mode="before")
    @classmethod
    def _org_type(cls, v: Any) -> str:
        return _text(v) or "Corporate"


class ScenarioEmissions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    total: float = 0.0

    @field_validator("total", mode="before")
    @classmethod
    def _number(cls, v: Any) -> float:
        return safe_number(v)


class Scenario(_Inbound):
    """A scenario row for the comparison table; never recomputed."""

    model_config = ConfigDict(frozen=True)

    name: str = "Unnamed Scenario"
    emissions: ScenarioEmissions = Field(default_factory=ScenarioEmissions)
    strategies: list[str] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v: Any) -> str:
        return str(v) if v else "Unnamed Scenario"

    @field_validator("emissions", mode="before")
    @classmethod
    def _emissions(cls, v: Any) -> Any:
        if isinstance(v, ScenarioEmissions):
            return v
        return _as_dict(v)

    @field_validator("strategies", mode="before")
    @classmethod
    def _strategies(cls, v: Any) -> list[str]:
        return [str(item) for item in _as_list(v)]

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Scenario":
        """Accept both ``{"emissions": ...}`` and ``{"data": {"emissions": ...}}``."""
        emissions = raw.get("emissions") or _as_dict(raw.get("data")).get("emissions")
        return cls.model_validate({**raw, "emissions": emissions})


class ReportingRequirement(_Inbound):
    """A reporting scheme and the legislation behind it."""

    model_config = ConfigDict(frozen=True)

    scheme: Optional[str] = None
    name: Optional[str] = None
    legislation: Optional[str] = None
    thresholds: dict[str, Any] = Field(default_factory=dict)
    requirements: list[str] = Field(default_factory=list)
    extract: Optional[str] = None

    @field_validator("scheme", "name", "legislation", "extract", mode="before")
    @classmethod
    def _free_text(cls, v: Any) -> Optional[str]:
        return _text(v)

    @field_validator("thresholds", mode="before")
    @classmethod
    def _thresholds(cls, v: Any) -> dict[str, Any]:
        return _as_dict(v)

    @field_validator("requirements", mode="before")
    @classmethod
    def _requirements(cls, v: Any) -> list[str]:
        return [str(item) for item in _as_list(v)]

    @property
    def heading(self) -> str:
        return self.scheme or self.name or "Reporting Requirement"


class CurrentUser(_Inbound):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    title: Optional[str] = None

    @field_validator("first_name", "last_name", "name", "email", "title", mode="before")
    @classmethod
    def _free_text(cls, v: Any) -> Optional[str]:
        return _text(v)

    @property
    def display_name(self) -> Optional[str]:
        full = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full or self.name or None


class ReportingContext(_Inbound):
    """Per-request values that are not part of the emissions data."""

    project_id: Optional[str] = None
    today: Optional[date] = Field(
        default=None,
        description="Generation date; defaults to the current date when omitted.",
    )
    current_user: Optional[CurrentUser] = None
    verification_status: Optional[str] = None
    report_preparer: Optional[str] = None
    applicable_standards: list[str] = Field(default_factory=list)

    @field_validator("project_id", "verification_status", "report_preparer", mode="before")
    @classmethod
    def _free_text(cls, v: Any) -> Optional[str]:
        return _text(v)


# ---------------------------------------------------------------------------
# Assembled record
# ---------------------------------------------------------------------------


class IntensityMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    per_employee: float = Field(description="tCO2e per employee.")
    per_revenue_million: float = Field(description="tCO2e per $1M revenue.")


class ReportRecord(BaseModel):
    """Fully assembled GHG emissions report.

    Built only by :func:`report.builder.assemble_report`; everything
    downstream (renderer, store, email) reads it and never mutates it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    report_id: str = Field(description="REP-<projectId|NEW>-<YYYYMMDD>.")
    formatted_date: str = Field(description="Long en-US date, e.g. 'October 19, 2026'.")
    generated_on: date
    project_id: Optional[str] = None

    company_name: str
    industry: str
    country: str
    location: str
    organization: OrganizationInfo

    emissions: EmissionsTotals
    has_emissions_data: bool = Field(
        description="False when no emissions totals or activity data were supplied.",
    )
    per_category_emissions: dict[str, float] = Field(default_factory=dict)
    raw_inputs: dict[str, float] = Field(default_factory=dict)
    intensity: IntensityMetrics

    reduction_target: float
    strategies: list[NormalizedStrategy] = Field(default_factory=list)
    reductions_by_scope: ScopeBreakdown
    reduction_percentages: ScopeBreakdown
    five_year_projection: list[ProjectionPoint]
    scenarios: list[Scenario] = Field(default_factory=list)

    regulatory_group: int = Field(ge=0, le=3)
    applicable_standards: list[str]
    reporting_requirements: list[ReportingRequirement] = Field(default_factory=list)
    offset_requirements: dict[str, Any] = Field(default_factory=dict)

    reporting_period: int
    baseline_year: int
    consolidation_approach: str
    emission_factor_source: str
    data_quality: str
    boundaries: str
    exclusions: str
    uncertainty_level: str
    verification_status: str
    report_preparer: str
    preparer_title: str
    carbon_credit_price: float

"""Tests for builder.py: assembling a ReportRecord from front-end inputs."""
from datetime import date

import pytest
from pydantic import ValidationError

from report.builder import (
    BOUNDARIES,
    NOT_SPECIFIED,
    UNKNOWN_ORGANIZATION,
    UNKNOWN_PREPARER,
    VERIFICATION_STATUS,
    assemble_report,
    format_long_date,
    report_id,
)
from report.models import CurrentUser, ReportingContext


# ---------------------------------------------------------------------------
# Identity and dates
# ---------------------------------------------------------------------------


class TestIdentity:
    def test_report_id(self, report):
        assert report.report_id == "REP-42-20261019"

    def test_report_id_for_unsaved_project(self):
        assert report_id(None, date(2026, 10, 19)) == "REP-NEW-20261019"

    def test_formatted_date(self, report):
        assert report.formatted_date == "October 19, 2026"
        assert format_long_date(date(2026, 1, 5)) == "January 5, 2026"

    def test_reporting_period_defaults_to_previous_year(self, report):
        assert report.reporting_period == 2025
        assert report.baseline_year == 2025

    def test_reporting_year_from_emissions_data(self, emissions_data, context):
        record = assemble_report({**emissions_data, "reportingYear": "2024"}, [], {}, context=context)
        assert record.reporting_period == 2024


# ---------------------------------------------------------------------------
# Emissions, intensity and reductions
# ---------------------------------------------------------------------------


class TestFigures:
    def test_totals_kept_from_caller(self, report):
        assert report.emissions.scope1 == 100
        assert report.emissions.total == 200
        assert report.has_emissions_data is True

    def test_intensity(self, report):
        assert report.intensity.per_employee == pytest.approx(200 / 120)
        assert report.intensity.per_revenue_million == pytest.approx(2.5)

    def test_intensity_without_headcount_or_revenue(self, emissions_data, context):
        record = assemble_report(emissions_data, [], {"companyName": "X"}, context=context)
        assert record.intensity.per_employee == 0
        assert record.intensity.per_revenue_million == 0

    def test_solar_reductions(self, report):
        assert report.strategies[0].absolute_reduction == pytest.approx(50)
        assert report.reductions_by_scope.scope2 == pytest.approx(50)
        assert report.reduction_percentages.scope2 == pytest.approx(100)
        assert report.reduction_percentages.total == pytest.approx(25)

    def test_projection(self, report):
        points = report.five_year_projection
        assert [p.year for p in points] == [2026, 2027, 2028, 2029, 2030]
        assert points[0].emissions == 200
        assert points[-1].emissions == pytest.approx(160)
        assert points[-1].target == pytest.approx(140)

    def test_default_reduction_target(self, context):
        record = assemble_report({"emissions": {"scope1": 10}}, [], {}, context=context)
        assert record.reduction_target == 20

    def test_raw_inputs_recomputed_per_category(self, report):
        assert report.per_category_emissions["naturalGas"] == pytest.approx(53)
        assert report.raw_inputs["diesel"] == 17500

    def test_totals_derived_from_raw_inputs_when_absent(self, context):
        record = assemble_report({"rawInputs": {"electricity": 10000}}, [], {}, context=context)
        assert record.emissions.scope2 == pytest.approx(4.2)
        assert record.has_emissions_data is True

    def test_detailed_emissions_override(self, context):
        record = assemble_report(
            {"rawInputs": {"diesel": 1000}, "detailedEmissions": {"diesel": 9}}, [], {}, context=context
        )
        assert record.emissions.scope1 == 9


# ---------------------------------------------------------------------------
# Defaults on degraded input
# ---------------------------------------------------------------------------


class TestDegradedInput:
    def test_empty_inputs(self, empty_report):
        assert empty_report.company_name == UNKNOWN_ORGANIZATION
        assert empty_report.industry == NOT_SPECIFIED
        assert empty_report.location == NOT_SPECIFIED
        assert empty_report.emissions.total == 0
        assert empty_report.has_emissions_data is False
        assert empty_report.strategies == []
        assert empty_report.regulatory_group == 0
        assert empty_report.applicable_standards == ["GHG Protocol", "ISO 14064", "TCFD"]

    @pytest.mark.parametrize("garbage", [None, "text", 42, ["list"]])
    def test_non_mapping_inputs(self, garbage, context):
        record = assemble_report(garbage, garbage, garbage, garbage, context)
        assert record.emissions.total == 0
        assert record.scenarios == []

    def test_non_numeric_fields(self, context):
        record = assemble_report(
            {"emissions": {"scope1": "abc", "scope2": "12", "scope3": None}},
            [{"name": "Bad", "reductionType": "percentage", "reductionPotential": "lots"}],
            {"companyName": "Acme", "employeeCount": "many", "annualRevenue": ""},
            context=context,
        )
        assert record.emissions.total == 12
        assert record.strategies[0].absolute_reduction == 0
        assert record.intensity.per_employee == 0

    def test_malformed_text_field_keeps_totals(self, context):
        record = assemble_report(
            {"emissions": {"scope1": 100, "scope2": 50, "scope3": 50}, "location": {"x": 1}},
            [],
            {"companyName": ["Acme"], "contactEmail": {"bad": True}, "website": "https://acme.example"},
            context=context,
        )
        assert record.emissions.total == 200
        assert record.has_emissions_data is True
        assert record.location == NOT_SPECIFIED
        assert record.company_name == UNKNOWN_ORGANIZATION
        assert record.organization.contact_email is None
        assert record.organization.website == "https://acme.example"

    def test_numeric_text_fields_become_strings(self, context):
        record = assemble_report(
            {"location": "Australia"},
            [],
            {"companyName": 3, "contactPhone": 5551234},
            context=context,
        )
        assert record.company_name == "3"
        assert record.organization.contact_phone == "5551234"

    def test_malformed_requirement_text(self, context):
        record = assemble_report(
            {"reportingRequirements": [{"scheme": "NGER", "legislation": ["not", "text"]}]},
            [],
            {},
            context=context,
        )
        assert [r.heading for r in record.reporting_requirements] == ["NGER"]
        assert record.reporting_requirements[0].legislation is None

    def test_zero_total_zeroes_every_strategy(self, context, solar_strategy):
        record = assemble_report({"emissions": {}}, [solar_strategy], {}, context=context)
        assert record.strategies[0].absolute_reduction == 0
        assert record.strategies[0].percentage_reduction == 0
        assert record.has_emissions_data is True

    def test_fixed_methodology_text(self, empty_report):
        assert empty_report.boundaries == BOUNDARIES
        assert empty_report.verification_status == VERIFICATION_STATUS


# ---------------------------------------------------------------------------
# Context overrides
# ---------------------------------------------------------------------------


class TestContext:
    def test_preparer_from_current_user(self, today):
        ctx = ReportingContext(today=today, current_user=CurrentUser(first_name="Sam", last_name="Ng"))
        assert assemble_report({}, [], {}, context=ctx).report_preparer == "Sam Ng"

    def test_explicit_preparer_wins(self, today):
        ctx = ReportingContext(
            today=today,
            report_preparer="Auditor",
            current_user=CurrentUser(first_name="Sam"),
        )
        assert assemble_report({}, [], {}, context=ctx).report_preparer == "Auditor"

    def test_unknown_preparer(self, empty_report):
        assert empty_report.report_preparer == UNKNOWN_PREPARER

    def test_verification_status_override(self, today):
        ctx = ReportingContext(today=today, verification_status="Third-party verified")
        assert assemble_report({}, [], {}, context=ctx).verification_status == "Third-party verified"

    def test_explicit_standards(self, today, organization_info):
        ctx = ReportingContext(today=today, applicable_standards=["ISO 14064"])
        record = assemble_report({}, [], organization_info, context=ctx)
        assert record.applicable_standards == ["ISO 14064"]

    def test_standards_from_location(self, report):
        assert report.applicable_standards == ["NGER Act", "Climate Active", "TCFD"]
        assert report.regulatory_group == 3


# ---------------------------------------------------------------------------
# Scenarios and requirements
# ---------------------------------------------------------------------------


def test_scenarios_accept_nested_data_shape(emissions_data, context):
    scenarios = [
        {"name": "Aggressive", "emissions": {"total": 150}, "strategies": ["Solar", "EV"]},
        {"name": "Nested", "data": {"emissions": {"total": "120"}}},
        {"emissions": {"total": 10}},
        "not a scenario",
    ]
    record = assemble_report(emissions_data, [], {}, scenarios, context)
    assert [s.name for s in record.scenarios] == ["Aggressive", "Nested", "Unnamed Scenario"]
    assert record.scenarios[1].emissions.total == 120


def test_reporting_requirements_kept(emissions_data, context):
    data = {
        **emissions_data,
        "reportingRequirements": [
            {"scheme": "NGER", "legislation": "NGER Act 2007", "thresholds": {"facility": "25 kt"}},
            "junk",
        ],
        "offsetRequirements": {"tonnes": 12},
    }
    record = assemble_report(data, [], {}, context=context)
    assert len(record.reporting_requirements) == 1
    assert record.reporting_requirements[0].heading == "NGER"
    assert record.offset_requirements == {"tonnes": 12}


# ---------------------------------------------------------------------------
# Purity
# ---------------------------------------------------------------------------


def test_assembly_is_idempotent(emissions_data, solar_strategy, organization_info, context):
    first = assemble_report(emissions_data, [solar_strategy], organization_info, context=context)
    second = assemble_report(emissions_data, [solar_strategy], organization_info, context=context)
    assert first == second


def test_inputs_not_mutated(emissions_data, solar_strategy, organization_info, context):
    before = (repr(emissions_data), repr(solar_strategy), repr(organization_info))
    assemble_report(emissions_data, [solar_strategy], organization_info, context=context)
    assert (repr(emissions_data), repr(solar_strategy), repr(organization_info)) == before


def test_record_is_frozen(report):
    with pytest.raises(ValidationError):
        report.company_name = "Other"

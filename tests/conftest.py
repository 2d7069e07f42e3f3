"""Shared fixtures for the emissions and report tests."""
from datetime import date

import pytest

from report.builder import assemble_report
from report.models import ReportingContext

TODAY = date(2026, 10, 19)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def context() -> ReportingContext:
    return ReportingContext(project_id="42", today=TODAY)


@pytest.fixture
def emissions_data():
    """Pre-aggregated totals plus the activity data behind them."""
    return {
        "emissions": {"scope1": 100, "scope2": 50, "scope3": 50, "total": 200},
        "rawInputs": {
            "naturalGas": 10000,
            "diesel": 17500,
            "electricity": 119047.62,
            "businessFlights": 150000,
            "wasteGenerated": 30,
            "purchasedGoods": 0,
        },
        "reductionTarget": 30,
        "location": "Australia",
    }


@pytest.fixture
def solar_strategy():
    return {
        "name": "Solar",
        "reductionType": "percentage",
        "reductionPotential": 25,
        "scope": "Scope 2",
        "timeframe": "1-2 years",
        "capex": 120000,
        "opexSavings": 48000,
    }


@pytest.fixture
def organization_info():
    return {
        "companyName": "Acme Pty Ltd",
        "industryType": "Manufacturing",
        "location": "Australia",
        "employeeCount": 120,
        "annualRevenue": 80_000_000,
        "facilityCount": 2,
        "fleetSize": 12,
        "contactPerson": "Jordan Lee",
        "contactEmail": "jordan@acme.example",
        "contactPhone": "+61 2 5550 1234",
    }


@pytest.fixture
def report(emissions_data, solar_strategy, organization_info, context):
    return assemble_report(emissions_data, [solar_strategy], organization_info, context=context)


@pytest.fixture
def empty_report(context):
    """Report built from no data at all."""
    return assemble_report({}, [], {}, context=context)

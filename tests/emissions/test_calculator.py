"""Tests for calculator.py: per-activity tonnes and scope roll-ups."""
import logging
from types import MappingProxyType

import pytest

from carbonprospect.emissions.calculator import (
    EmissionsTotals,
    activity_rows,
    compute_emissions,
    scope_for,
)
from carbonprospect.emissions.factors import EMISSION_FACTORS, EmissionFactor


# ---------------------------------------------------------------------------
# EmissionsTotals invariant
# ---------------------------------------------------------------------------


class TestEmissionsTotals:
    @pytest.mark.parametrize(
        "scopes",
        [
            {"scope1": 100, "scope2": 50, "scope3": 50},
            {"scope1": 0.1, "scope2": 0.2, "scope3": 0.3},
            {"scope1": 1e9, "scope2": 3.3333333, "scope3": -12.5},
            {},
        ],
    )
    def test_total_is_sum_of_scopes(self, scopes):
        totals = EmissionsTotals(**scopes)
        assert abs(totals.total - (totals.scope1 + totals.scope2 + totals.scope3)) < 1e-6

    def test_claimed_total_is_replaced(self):
        totals = EmissionsTotals.model_validate({"scope1": 1, "scope2": 2, "scope3": 3, "total": 99})
        assert totals.total == 6

    def test_non_numeric_scopes_become_zero(self):
        totals = EmissionsTotals.model_validate({"scope1": "abc", "scope2": None, "scope3": "4"})
        assert (totals.scope1, totals.scope2, totals.scope3, totals.total) == (0, 0, 4, 4)


# ---------------------------------------------------------------------------
# compute_emissions
# ---------------------------------------------------------------------------


class TestComputeEmissions:
    def test_tonnes_from_quantity_and_factor(self):
        result = compute_emissions({"naturalGas": 1000, "electricity": 10000})
        assert result.per_category["naturalGas"] == pytest.approx(5.3)
        assert result.per_category["electricity"] == pytest.approx(4.2)
        assert result.totals.scope1 == pytest.approx(5.3)
        assert result.totals.scope2 == pytest.approx(4.2)
        assert result.totals.scope3 == 0

    def test_only_supplied_keys_are_computed(self):
        result = compute_emissions({"diesel": 100})
        assert set(result.per_category) == {"diesel"}

    def test_unknown_keys_are_ignored(self):
        result = compute_emissions({"unicornFuel": 1000, "diesel": 1000})
        assert "unicornFuel" not in result.per_category
        assert result.totals.total == pytest.approx(2.68)

    def test_degraded_quantities_count_as_zero(self):
        result = compute_emissions({"diesel": "lots", "petrol": None, "naturalGas": float("nan")})
        assert result.totals.total == 0
        assert result.per_category == {"diesel": 0.0, "petrol": 0.0, "naturalGas": 0.0}

    def test_none_inputs(self):
        result = compute_emissions(None)
        assert result.per_category == {}
        assert result.totals.total == 0

    def test_override_wins_over_recomputation(self):
        result = compute_emissions({"diesel": 1000}, detailed_overrides={"diesel": 7.5})
        assert result.per_category["diesel"] == 7.5
        assert result.totals.scope1 == 7.5

    def test_override_without_raw_quantity(self):
        result = compute_emissions({}, detailed_overrides={"hotelStays": 1.25})
        assert result.per_category == {"hotelStays": 1.25}
        assert result.totals.scope3 == 1.25

    def test_negative_factors_can_make_scope3_negative(self):
        result = compute_emissions({"wasteRecycled": 100})
        assert result.totals.scope3 == pytest.approx(-15.0)
        assert result.totals.total == pytest.approx(-15.0)

    def test_caller_totals_kept_verbatim(self):
        result = compute_emissions(
            {"diesel": 1000},
            totals={"scope1": 100, "scope2": 50, "scope3": 50},
        )
        assert result.totals.scope1 == 100
        assert result.totals.total == 200
        assert result.per_category["diesel"] == pytest.approx(2.68)

    def test_mismatched_caller_total_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="carbonprospect.emissions.calculator"):
            result = compute_emissions(
                {}, totals={"scope1": 100, "scope2": 50, "scope3": 50, "total": 250}
            )
        assert result.totals.total == 200
        assert "disagrees" in caplog.text

    def test_injected_factor_table(self):
        table = MappingProxyType({
            "widgets": EmissionFactor(
                key="widgets", factor=2000, unit="kg CO2e/unit", reference="test",
                label="Widgets", activity_unit="units", category="industrial",
            )
        })
        result = compute_emissions({"widgets": 3, "diesel": 1000}, factors=table)
        assert result.per_category == {"widgets": 6.0}
        assert result.totals.scope1 == 6.0


# ---------------------------------------------------------------------------
# Scope attribution and breakdown rows
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "key, scope",
    [
        ("naturalGas", 1),
        ("refrigerantR410a", 1),
        ("cementProduction", 1),
        ("livestockCattle", 1),
        ("electricity", 2),
        ("dataCenter", 2),
        ("businessFlights", 3),
        ("laptops", 3),
        ("wasteComposted", 3),
    ],
)
def test_scope_for(key, scope):
    assert scope_for(key) == scope


def test_scope_for_unknown_key():
    assert scope_for("nope") is None


def test_every_factor_has_a_scope():
    assert {f.scope for f in EMISSION_FACTORS.values()} == {1, 2, 3}


def test_factor_table_is_read_only():
    with pytest.raises(TypeError):
        EMISSION_FACTORS["diesel"] = None  # type: ignore[index]


class TestActivityRows:
    def test_positive_quantities_only_in_table_order(self):
        raw = {"petrol": 10, "diesel": 100, "naturalGas": 0, "electricity": 500}
        result = compute_emissions(raw)
        rows = activity_rows(result.per_category, raw, scope=1)
        assert [r.key for r in rows] == ["diesel", "petrol"]
        assert rows[0].label == "Diesel Fuel"
        assert rows[0].activity_unit == "liters"
        assert rows[0].tonnes == pytest.approx(0.268)

    def test_override_tonnes_used_in_rows(self):
        raw = {"electricity": 1000}
        rows = activity_rows({"electricity": 9.99}, raw, scope=2)
        assert rows[0].tonnes == 9.99

    def test_currency_activity_flagged(self):
        raw = {"purchasedGoods": 5000}
        rows = activity_rows({}, raw, scope=3)
        assert rows[0].is_currency is True
        assert rows[0].tonnes == pytest.approx(2.5)

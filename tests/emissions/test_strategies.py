"""Tests for strategies.py: classification, normalization and per-scope aggregation."""
import pytest

from carbonprospect.emissions.calculator import EmissionsTotals
from carbonprospect.emissions.strategies import (
    AbsoluteStrategy,
    LegacyStrategy,
    PercentageStrategy,
    aggregate_reductions,
    classify_strategy,
    normalize_strategies,
    normalize_strategy,
)

TOTALS = EmissionsTotals(scope1=100, scope2=50, scope3=50)


# ---------------------------------------------------------------------------
# classify_strategy
# ---------------------------------------------------------------------------


class TestClassifyStrategy:
    def test_absolute(self):
        variant = classify_strategy({"name": "EV fleet", "reductionType": "absolute", "reductionTonnes": "12"})
        assert isinstance(variant, AbsoluteStrategy)
        assert variant.tonnes == 12.0

    def test_percentage(self):
        variant = classify_strategy({"name": "Solar", "reductionType": "percentage", "reductionPotential": 25})
        assert isinstance(variant, PercentageStrategy)
        assert variant.percent == 25.0

    def test_legacy_prefers_potential_reduction(self):
        variant = classify_strategy({"name": "Old", "potentialReduction": 40, "reductionPotential": 900})
        assert isinstance(variant, LegacyStrategy)
        assert variant.value == 40.0

    def test_legacy_zero_is_not_skipped(self):
        variant = classify_strategy({"name": "Old", "potentialReduction": 0, "reductionTonnes": 500})
        assert variant.value == 0.0

    def test_strategy_field_used_as_name(self):
        assert classify_strategy({"strategy": "LED retrofit"}).name == "LED retrofit"

    @pytest.mark.parametrize("raw", [{}, {"name": ""}, {"reductionType": "absolute"}, "Solar", None])
    def test_unnamed_records_dropped(self, raw):
        assert classify_strategy(raw) is None

    def test_defaults(self):
        variant = classify_strategy({"name": "X"})
        assert variant.scope == "Various"
        assert variant.timeframe == "TBD"
        assert variant.capex == 0
        assert variant.opex_savings == 0

    def test_implementation_cost_fallback_for_capex(self):
        assert classify_strategy({"name": "X", "implementationCost": 5000}).capex == 5000

    def test_negative_costs_clamped(self):
        variant = classify_strategy({"name": "X", "capex": -10, "opexSavings": -4})
        assert variant.capex == 0
        assert variant.opex_savings == 0


# ---------------------------------------------------------------------------
# normalize_strategy
# ---------------------------------------------------------------------------


class TestNormalizeStrategy:
    def test_percentage_resolves_tonnes(self):
        result = normalize_strategy(PercentageStrategy(name="Solar", percent=25), 200)
        assert result.absolute_reduction == pytest.approx(50)
        assert result.percentage_reduction == pytest.approx(25)
        assert result.source_kind == "percentage"

    def test_absolute_resolves_percent(self):
        result = normalize_strategy(AbsoluteStrategy(name="EV", tonnes=20), 200)
        assert result.absolute_reduction == 20
        assert result.percentage_reduction == pytest.approx(10)

    @pytest.mark.parametrize("total", [200, 1234.5, 0.75])
    @pytest.mark.parametrize("tonnes", [0, 20, 999])
    def test_absolute_round_trips_through_percent(self, tonnes, total):
        result = normalize_strategy(AbsoluteStrategy(name="EV", tonnes=tonnes), total)
        assert result.percentage_reduction / 100 * total == pytest.approx(result.absolute_reduction)

    def test_legacy_above_threshold_is_tonnes(self):
        result = normalize_strategy(LegacyStrategy(name="Big", value=500), 200)
        assert result.absolute_reduction == 500
        assert result.percentage_reduction == pytest.approx(250)

    def test_legacy_threshold_is_inclusive_percent(self):
        result = normalize_strategy(LegacyStrategy(name="Edge", value=100), 200)
        assert result.percentage_reduction == 100
        assert result.absolute_reduction == pytest.approx(200)

    @pytest.mark.parametrize(
        "variant",
        [
            AbsoluteStrategy(name="A", tonnes=10),
            PercentageStrategy(name="P", percent=10),
            LegacyStrategy(name="L", value=500),
        ],
    )
    @pytest.mark.parametrize("total", [0, -5])
    def test_non_positive_total_gives_zero(self, variant, total):
        result = normalize_strategy(variant, total)
        assert result.absolute_reduction == 0
        assert result.percentage_reduction == 0

    def test_payback(self):
        result = normalize_strategy(
            PercentageStrategy(name="Solar", percent=25, capex=120000, opex_savings=48000), 200
        )
        assert result.payback_years == pytest.approx(2.5)

    def test_payback_none_without_savings(self):
        assert normalize_strategy(PercentageStrategy(name="S", capex=10), 200).payback_years is None


def test_normalize_strategies_preserves_order_and_drops_unnamed():
    raw = [
        {"name": "B", "reductionType": "absolute", "reductionTonnes": 5},
        {"reductionType": "absolute", "reductionTonnes": 5},
        {"name": "A", "potentialReduction": 10},
    ]
    result = normalize_strategies(raw, 200)
    assert [s.name for s in result] == ["B", "A"]


def test_normalize_strategies_tolerates_non_list():
    assert normalize_strategies(None, 200) == []
    assert normalize_strategies({"name": "x"}, 200) == []


# ---------------------------------------------------------------------------
# aggregate_reductions
# ---------------------------------------------------------------------------


class TestAggregateReductions:
    def test_solar_example(self):
        strategies = normalize_strategies(
            [{"name": "Solar", "reductionType": "percentage", "reductionPotential": 25, "scope": "Scope 2"}],
            TOTALS.total,
        )
        by_scope, percentages = aggregate_reductions(strategies, TOTALS)
        assert by_scope.scope2 == pytest.approx(50)
        assert by_scope.total == pytest.approx(50)
        assert percentages.scope2 == pytest.approx(100)
        assert percentages.total == pytest.approx(25)
        assert percentages.scope1 == 0

    def test_various_scope_excluded(self):
        strategies = normalize_strategies(
            [{"name": "Mixed", "reductionType": "absolute", "reductionTonnes": 30}],
            TOTALS.total,
        )
        by_scope, percentages = aggregate_reductions(strategies, TOTALS)
        assert by_scope.total == 0
        assert percentages.total == 0

    def test_zero_scope_total_guarded(self):
        totals = EmissionsTotals(scope1=100, scope2=0, scope3=0)
        strategies = normalize_strategies(
            [{"name": "Grid", "reductionType": "absolute", "reductionTonnes": 10, "scope": "Scope 2"}],
            totals.total,
        )
        by_scope, percentages = aggregate_reductions(strategies, totals)
        assert by_scope.scope2 == 10
        assert percentages.scope2 == 0
        assert percentages.total == pytest.approx(10)

    def test_total_reduction_can_exceed_hundred_percent(self):
        strategies = normalize_strategies(
            [{"name": "Huge", "potentialReduction": 500, "scope": "Scope 1"}], TOTALS.total
        )
        _, percentages = aggregate_reductions(strategies, TOTALS)
        assert percentages.total == pytest.approx(250)
        assert percentages.scope1 == pytest.approx(500)

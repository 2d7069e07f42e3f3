"""Reduction Strategies & Projections section.

Layout, top to bottom:
    - "no strategies" note when the list is empty
    - strategy bar chart and projection line chart (side by side when both
      are available)
    - 5-year projection table, only when the projection chart is absent
    - strategy table
    - scenario comparison table (top five scenarios against the baseline)
"""

from __future__ import annotations

from reportlab.lib.units import mm
from reportlab.platypus import CondPageBreak, Spacer, Table, TableStyle

from report import theme
from report.formatting import change_vs_baseline, currency, payback, percent, tonnes
from report.models import ReportRecord
from report.sections.base import BaseSection, RenderContext, cell, grid_table, para

CHART_W = 90 * mm
MAX_SCENARIOS = 5
SCENARIO_STRATEGIES = 2


class StrategiesSection(BaseSection):
    section_id = "strategies"
    title = "5. REDUCTION STRATEGIES & PROJECTIONS"

    def flowables(self, report: ReportRecord, ctx: RenderContext) -> list:
        st = ctx.styles
        out: list = []

        if not report.strategies:
            out.append(para("No reduction strategies have been defined.", st["body"]))

        out += _charts(ctx)
        if "projection_line" not in ctx.embedded_charts:
            out += _projection_table(report, ctx)
        if report.strategies:
            out += _strategy_table(report, ctx)
        if report.scenarios:
            out += _scenario_table(report, ctx)
        return out


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


def _charts(ctx: RenderContext) -> list:
    bar = ctx.chart("strategy_bar", CHART_W, h_align="LEFT")
    line = ctx.chart("projection_line", CHART_W, h_align="LEFT")
    if bar is not None and line is not None:
        pair = Table([[bar, line]], colWidths=[theme.CONTENT_W / 2] * 2, hAlign="LEFT")
        pair.setStyle(TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), 0),
            ("RIGHTPADDING", (0, 0), (-1, -1), 0),
        ]))
        return [CondPageBreak(theme.SPACE["chart"]), pair, Spacer(1, 6 * mm)]

    out: list = []
    for image in (bar, line):
        if image is not None:
            out += [CondPageBreak(theme.SPACE["chart"]), image, Spacer(1, 6 * mm)]
    return out


def _projection_table(report: ReportRecord, ctx: RenderContext) -> list:
    if not report.five_year_projection:
        return []
    current = report.emissions.total
    rows = [
        [
            str(point.year),
            tonnes(point.emissions),
            tonnes(point.target),
            percent((current - point.emissions) / current * 100) if current > 0 else "0%",
        ]
        for point in report.five_year_projection
    ]
    return [
        CondPageBreak(theme.SPACE["projection_table"]),
        para("5-Year Emissions Projection", ctx.styles["subsection"]),
        grid_table(
            ["Year", "Projected Emissions (tCO2e)", "Target Pathway (tCO2e)", "Reduction vs Current (%)"],
            rows,
            [25 * mm, 55 * mm, 55 * mm, 45 * mm],
            align={0: "CENTER", 1: "RIGHT", 2: "RIGHT", 3: "CENTER"},
            font_size=8,
        ),
        Spacer(1, 8 * mm),
    ]


def _strategy_table(report: ReportRecord, ctx: RenderContext) -> list:
    st = ctx.styles
    rows = [
        [
            cell(s.name, st["cell"]),
            s.scope,
            tonnes(s.absolute_reduction),
            s.timeframe,
            currency(s.capex),
            currency(s.opex_savings),
            payback(s.payback_years),
        ]
        for s in report.strategies
    ]
    return [
        CondPageBreak(theme.SPACE["strategy_table"]),
        grid_table(
            ["Strategy", "Scope", "Reduction (tCO2e)", "Timeframe", "CAPEX", "Annual Savings", "Payback"],
            rows,
            [50 * mm, 20 * mm, 24 * mm, 20 * mm, 22 * mm, 24 * mm, 20 * mm],
            align={2: "RIGHT", 4: "RIGHT", 5: "RIGHT", 6: "CENTER"},
            font_size=8,
        ),
        Spacer(1, 8 * mm),
    ]


def _scenario_table(report: ReportRecord, ctx: RenderContext) -> list:
    st = ctx.styles
    baseline = report.emissions.total
    shown = report.scenarios[:MAX_SCENARIOS]
    rows = [
        [
            cell(s.name, st["cell"]),
            tonnes(s.emissions.total),
            change_vs_baseline(s.emissions.total, baseline),
            cell(", ".join(s.strategies[:SCENARIO_STRATEGIES]) or "N/A", st["cell"]),
        ]
        for s in shown
    ]
    out = [
        CondPageBreak(theme.SPACE["scenario_table"]),
        para("Scenario Analysis", st["subsection"]),
        para(
            "The following scenarios have been analyzed to understand potential emissions pathways:",
            st["body"],
        ),
        grid_table(
            ["Scenario Name", "Total Emissions (tCO2e)", "vs Baseline", "Key Strategies"],
            rows,
            [55 * mm, 40 * mm, 25 * mm, 60 * mm],
            align={1: "CENTER", 2: "CENTER"},
        ),
    ]
    hidden = len(report.scenarios) - len(shown)
    if hidden > 0:
        out += [
            Spacer(1, 3 * mm),
            para(f"... and {hidden} additional scenarios analyzed.", st["note"]),
        ]
    return out

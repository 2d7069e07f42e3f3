"""Emissions Summary section: scope table, scope pie chart and intensity box."""

from __future__ import annotations

from reportlab.lib.units import mm
from reportlab.platypus import CondPageBreak, Spacer

from report import theme
from report.formatting import share, tonnes
from report.models import ReportRecord
from report.sections.base import BaseSection, RenderContext, boxed, grid_table, para

SCOPE_ROWS = (
    ("scope1", "Scope 1 - Direct Emissions"),
    ("scope2", "Scope 2 - Indirect Emissions"),
    ("scope3", "Scope 3 - Value Chain Emissions"),
)


class EmissionsSummarySection(BaseSection):
    section_id = "emissions_summary"
    title = "3. EMISSIONS SUMMARY"

    def flowables(self, report: ReportRecord, ctx: RenderContext) -> list:
        st = ctx.styles
        totals = report.emissions
        rows = [
            [label, tonnes(getattr(totals, scope)), share(getattr(totals, scope), totals.total)]
            for scope, label in SCOPE_ROWS
        ]
        out = [
            grid_table(
                ["Emission Scope", "Emissions (tCO2e)", "% of Total"],
                rows,
                [60 * mm, 50 * mm, 30 * mm],
                footer=["TOTAL EMISSIONS", tonnes(totals.total), "100.0%"],
                align={1: "CENTER", 2: "CENTER"},
                font_size=10,
            ),
            Spacer(1, 8 * mm),
        ]

        pie = ctx.chart("scope_pie", 80 * mm)
        if pie is not None:
            out += [CondPageBreak(theme.SPACE["chart"]), pie, Spacer(1, 6 * mm)]

        out += [
            CondPageBreak(theme.SPACE["intensity_box"]),
            boxed(
                [
                    para("Carbon Intensity Metrics", st["subsection"]),
                    para(
                        f"Per Employee: {tonnes(report.intensity.per_employee)} tonnes CO2e/employee",
                        st["body"],
                    ),
                    para(
                        f"Per $M Revenue: {tonnes(report.intensity.per_revenue_million)} tonnes CO2e/$M",
                        st["body"],
                    ),
                ],
                background=theme.LIGHT_GRAY,
            ),
        ]
        return out

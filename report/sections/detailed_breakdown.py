"""Detailed Emissions Breakdown section.

One activity table per scope, listing every activity with a positive raw
quantity together with its factor and resulting tonnes.  The Scope 3
table only appears when Scope 3 emissions are positive.
"""

from __future__ import annotations

from reportlab.lib.units import mm
from reportlab.platypus import CondPageBreak, Spacer

from carbonprospect.emissions.calculator import ActivityRow, activity_rows
from report import theme
from report.formatting import currency, grouped, plain_number, tonnes
from report.models import ReportRecord
from report.sections.base import BaseSection, RenderContext, grid_table, para

COLUMN_WIDTHS = [50 * mm, 45 * mm, 50 * mm, 35 * mm]

SUBSECTIONS = (
    (1, "Scope 1 - Direct Emissions", "Source"),
    (2, "Scope 2 - Indirect Emissions (Energy)", "Source"),
    (3, "Scope 3 - Value Chain Emissions", "Category"),
)


def _activity_data(row: ActivityRow) -> str:
    if row.is_currency:
        return currency(row.quantity)
    return f"{grouped(row.quantity)} {row.activity_unit}".strip()


def _table_row(row: ActivityRow) -> list[str]:
    return [
        row.label,
        _activity_data(row),
        f"{plain_number(row.factor)} {row.factor_unit}",
        tonnes(row.tonnes),
    ]


class DetailedBreakdownSection(BaseSection):
    section_id = "detailed_breakdown"
    title = "4. DETAILED EMISSIONS BREAKDOWN"

    def flowables(self, report: ReportRecord, ctx: RenderContext) -> list:
        st = ctx.styles
        out: list = []
        for scope, heading, first_column in SUBSECTIONS:
            if scope == 3 and report.emissions.scope3 <= 0:
                continue
            if scope > 1:
                out.append(CondPageBreak(theme.SPACE["scope_table"]))
            out.append(para(heading, st["subsection"]))

            rows = activity_rows(
                report.per_category_emissions, report.raw_inputs, scope, ctx.factors
            )
            if rows:
                out += [
                    grid_table(
                        [first_column, "Activity Data", "Emission Factor", "Emissions (tCO2e)"],
                        [_table_row(r) for r in rows],
                        COLUMN_WIDTHS,
                        striped=False,
                        align={1: "CENTER", 2: "CENTER", 3: "CENTER"},
                    ),
                    Spacer(1, 8 * mm),
                ]

        out += [
            CondPageBreak(theme.SPACE["total_line"]),
            para(f"Total GHG Emissions: {tonnes(report.emissions.total)} tonnes CO2e", st["label"]),
        ]
        return out

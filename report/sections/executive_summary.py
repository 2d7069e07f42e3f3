"""Executive Summary section: headline total, target and standards."""

from __future__ import annotations

from reportlab.lib.units import mm
from reportlab.platypus import Spacer

from report import theme
from report.formatting import plain_number, tonnes
from report.models import ReportRecord
from report.sections.base import BaseSection, RenderContext, boxed, para

STATEMENT = (
    "This greenhouse gas emissions report has been prepared in accordance with the "
    "requirements of the GHG Protocol Corporate Standard, ISO 14064-1, and applicable "
    "regulatory requirements."
)


class ExecutiveSummarySection(BaseSection):
    section_id = "executive_summary"
    title = "EXECUTIVE SUMMARY"

    def flowables(self, report: ReportRecord, ctx: RenderContext) -> list:
        st = ctx.styles
        target_year = report.generated_on.year + 5
        lines = [
            para(STATEMENT, st["body"]),
            Spacer(1, 3 * mm),
            para(f"Total Emissions: {tonnes(report.emissions.total)} tonnes CO2e", st["body"]),
            para(
                f"Reduction Target: {plain_number(report.reduction_target)}% by {target_year}",
                st["body"],
            ),
            para(f"Reporting Standards: {', '.join(report.applicable_standards)}", st["body"]),
        ]
        return [boxed(lines, background=theme.SUMMARY_BG)]

"""Reporting Methodology & Boundaries section."""

from __future__ import annotations

from reportlab.lib.units import mm

from report.models import ReportRecord
from report.sections.base import BaseSection, RenderContext, key_value_table

OPERATIONAL_BOUNDARIES = "All Scope 1, 2, and material Scope 3 emissions"
GASES_INCLUDED = "Carbon dioxide, methane, nitrous oxide, HFCs, PFCs, SF6, NF3"


class MethodologySection(BaseSection):
    section_id = "methodology"
    title = "2. REPORTING METHODOLOGY & BOUNDARIES"

    def flowables(self, report: ReportRecord, ctx: RenderContext) -> list:
        rows = [
            ("Consolidation Approach", report.consolidation_approach),
            ("Organizational Boundaries", report.boundaries),
            ("Operational Boundaries", OPERATIONAL_BOUNDARIES),
            ("Base Year", str(report.baseline_year)),
            ("Reporting Period", f"January 1 - December 31, {report.reporting_period}"),
            ("GHG Gases Included", GASES_INCLUDED),
            ("Emission Factor Sources", report.emission_factor_source),
            ("Data Quality", report.data_quality),
            ("Exclusions", report.exclusions),
            ("Uncertainty Level", report.uncertainty_level),
        ]
        return [key_value_table(rows, ctx, key_width=60 * mm)]

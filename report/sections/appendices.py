"""Appendices: calculation methodology, emission factor tables, glossary, contact."""

from __future__ import annotations

from typing import Optional

from reportlab.lib.units import mm
from reportlab.platypus import CondPageBreak, Spacer, Table, TableStyle

from carbonprospect.emissions.factors import factors_for_scope
from report import theme
from report.builder import UNKNOWN_PREPARER
from report.formatting import plain_number
from report.models import ReportRecord
from report.sections.base import BaseSection, RenderContext, boxed, bullets, cell, grid_table, para

METHODOLOGY = (
    "Emissions calculated using: Activity Data × Emission Factor = CO2e Emissions",
    "Data sources: Primary data from utility bills, fuel receipts, and operational records",
    "Uncertainty estimates: ±10% for Scope 1 & 2, ±30% for Scope 3",
    "Exclusions: De minimis sources representing <1% of total emissions",
    "Base year recalculation policy: Recalculate when structural changes result in >5% change",
)

GLOSSARY = (
    "CO2e: Carbon dioxide equivalent",
    "GHG: Greenhouse Gas",
    "Scope 1: Direct emissions from owned or controlled sources",
    "Scope 2: Indirect emissions from purchased electricity, heat, steam, and cooling",
    "Scope 3: All other indirect emissions in the value chain",
    "tCO2e: Tonnes of carbon dioxide equivalent",
    "TCFD: Task Force on Climate-related Financial Disclosures",
    "SBTi: Science Based Targets initiative",
    "GWP: Global Warming Potential",
    "IPCC: Intergovernmental Panel on Climate Change",
)

CATEGORY_LABELS = {
    "stationary": "Stationary Combustion",
    "mobile": "Mobile Combustion",
    "refrigerant": "Refrigerants (Fugitive)",
    "industrial": "Industrial Processes",
    "agriculture": "Agriculture & Livestock",
    "purchased_energy": "Purchased Energy",
    "business_travel": "Business Travel",
    "commuting": "Employee Commuting",
    "waste": "Waste",
    "water": "Water",
    "purchased_goods": "Supply Chain",
    "it_equipment": "IT Equipment",
}

FACTOR_TABLES = (
    (1, "Scope 1 - Direct Emission Factors"),
    (2, "Scope 2 - Indirect Emission Factors"),
    (3, "Scope 3 - Value Chain Emission Factors"),
)

FACTOR_COLUMNS = [40 * mm, 20 * mm, 35 * mm, 85 * mm]

DEFAULT_CONTACT = "Sustainability Team"
DEFAULT_CONTACT_EMAIL = "sustainability@company.com"
DEFAULT_CONTACT_PHONE = "Not provided"


class AppendicesSection(BaseSection):
    section_id = "appendices"
    title = "APPENDICES"

    def flowables(self, report: ReportRecord, ctx: RenderContext) -> list:
        st = ctx.styles
        out: list = [
            para("Appendix A: Calculation Methodology", st["subsection"]),
            *bullets(METHODOLOGY, st["bullet"]),
            Spacer(1, 8 * mm),
            CondPageBreak(theme.SPACE["appendix"]),
            para("Appendix B: Emission Factors and References", st["subsection"]),
            para(
                "This appendix provides a comprehensive list of all emission factors used in "
                "this report, including their sources and references.",
                st["body"],
            ),
            Spacer(1, 4 * mm),
        ]
        for scope, heading in FACTOR_TABLES:
            table = factor_table(scope, ctx)
            if table is None:
                continue
            out += [
                CondPageBreak(theme.SPACE["appendix"]),
                para(heading, st["label"]),
                table,
                Spacer(1, 8 * mm),
            ]

        out += [
            CondPageBreak(theme.SPACE["appendix"]),
            para("Appendix C: Glossary of Terms", st["subsection"]),
            *bullets(GLOSSARY, st["bullet"]),
            Spacer(1, 8 * mm),
            CondPageBreak(theme.SPACE["contact_box"]),
            _contact_box(report, ctx),
        ]
        return out


def factor_table(scope: int, ctx: RenderContext) -> Optional[Table]:
    """Factor reference table for *scope*, with a shaded header row per category.

    Category rows are omitted when the scope has a single category.
    """
    st = ctx.styles
    factors = factors_for_scope(scope, ctx.factors)
    if not factors:
        return None

    groups: dict[str, list] = {}
    for factor in factors:
        groups.setdefault(factor.category, []).append(factor)
    with_headers = len(groups) > 1
    rows: list = []
    header_rows: list[int] = []
    for category, items in groups.items():
        if with_headers:
            header_rows.append(len(rows) + 1)
            rows.append([para(CATEGORY_LABELS.get(category, category), st["cell_bold"]), "", "", ""])
        for factor in items:
            rows.append([
                para(factor.label, st["cell"]),
                plain_number(factor.factor),
                para(factor.unit, st["cell"]),
                para(factor.reference, st["small"]),
            ])

    table = grid_table(
        ["Emission Source", "Factor", "Unit", "Reference"],
        rows,
        FACTOR_COLUMNS,
        align={1: "CENTER"},
    )
    table.setStyle(TableStyle([
        cmd
        for row in header_rows
        for cmd in (
            ("BACKGROUND", (0, row), (-1, row), theme.LIGHT_GRAY),
            ("SPAN", (0, row), (-1, row)),
        )
    ]))
    return table


def _contact_box(report: ReportRecord, ctx: RenderContext) -> Table:
    st = ctx.styles
    org = report.organization
    preparer = report.report_preparer if report.report_preparer != UNKNOWN_PREPARER else None
    lines = [
        para("For More Information Contact:", st["label"]),
        cell(org.contact_person or preparer or DEFAULT_CONTACT, st["body"]),
        cell(f"Email: {org.contact_email or DEFAULT_CONTACT_EMAIL}", st["body"]),
        cell(f"Phone: {org.contact_phone or DEFAULT_CONTACT_PHONE}", st["body"]),
    ]
    if org.website:
        lines.append(cell(f"Website: {org.website}", st["body"]))
    return boxed(lines, background=theme.LIGHT_GRAY)

"""Statement of Responsibility & Disclaimer section."""

from __future__ import annotations

from reportlab.lib.units import mm
from reportlab.platypus import CondPageBreak, Spacer, Table, TableStyle

from report import theme
from report.builder import UNKNOWN_ORGANIZATION
from report.models import ReportRecord
from report.sections.base import BaseSection, RenderContext, boxed, bullets, grid_table, para

def important_notes(report: ReportRecord) -> list[tuple[str, str]]:
    return [
        ("Standards Compliance", "ISO 14060 family of standards, Climate Active Carbon Neutral Standard"),
        ("GHG Gases Included", "CO2, CH4, N2O, HFCs, PFCs, SF6, NF3"),
        ("Emission Scopes", "Classified according to GHG Protocol (Scopes 1, 2, and 3)"),
        ("Uncertainty Level", report.uncertainty_level),
        ("Verification Required", "Independent third-party auditing required for regulatory compliance"),
    ]

COMPLIANCE_NOTICE = (
    "This report must be verified by an accredited third-party auditor before submission "
    "to regulatory authorities. Organizations are responsible for ensuring compliance with "
    "all applicable regulations."
)

SIGNATURE_LINE = "_______________________"


def disclaimer_points(platform_name: str) -> list[str]:
    return [
        "This report is provided for informational purposes and requires independent "
        "third-party verification.",
        f"{platform_name} is not liable for any errors, omissions, or use of this report.",
        "Emission factors are based on publicly available sources and may not reflect "
        "site-specific conditions.",
        "This document does not constitute legal, financial, or professional advice.",
    ]


class ResponsibilitySection(BaseSection):
    section_id = "responsibility"
    title = "7. STATEMENT OF RESPONSIBILITY & DISCLAIMER"

    def flowables(self, report: ReportRecord, ctx: RenderContext) -> list:
        st = ctx.styles
        company = report.company_name
        if company == UNKNOWN_ORGANIZATION:
            company = "the organization"
        statement = (
            f"The management of {company} is responsible for the preparation and fair "
            "presentation of this greenhouse gas emissions report in accordance with the "
            "GHG Protocol Corporate Accounting and Reporting Standard, ISO 14064-1, and "
            "applicable regulatory requirements."
        )

        notes = grid_table(
            ["Important Notes", "Details"],
            [[para(k, st["cell_bold"]), para(v, st["cell"])] for k, v in important_notes(report)],
            [50 * mm, theme.CONTENT_W - 50 * mm],
            striped=False,
            font_size=theme.BODY,
        )

        return [
            para(statement, st["body"]),
            Spacer(1, 6 * mm),
            notes,
            Spacer(1, 10 * mm),
            CondPageBreak(theme.SPACE["disclaimer"]),
            boxed(
                [para("Disclaimer", st["subsection"]),
                 *bullets(disclaimer_points(ctx.platform_name), st["bullet"])],
                background=theme.LIGHT_GRAY,
            ),
            Spacer(1, 6 * mm),
            CondPageBreak(theme.SPACE["compliance_notice"]),
            boxed(
                [para("Regulatory Compliance Notice", st["label"]),
                 para(COMPLIANCE_NOTICE, st["body"])],
                border=theme.BLACK,
            ),
            Spacer(1, 8 * mm),
            CondPageBreak(theme.SPACE["signature_boxes"]),
            _signature_boxes(ctx),
        ]


def _signature_box(heading: str, ctx: RenderContext) -> list:
    st = ctx.styles
    return [
        para(heading, st["label"]),
        Spacer(1, 12 * mm),
        para(f"Name: {SIGNATURE_LINE}", st["small"]),
        Spacer(1, 4 * mm),
        para(f"Date: {SIGNATURE_LINE}", st["small"]),
    ]


def _signature_boxes(ctx: RenderContext) -> Table:
    box_w = (theme.CONTENT_W - 20 * mm) / 2
    table = Table(
        [[_signature_box("Prepared by:", ctx), "", _signature_box("Approved by:", ctx)]],
        colWidths=[box_w, 20 * mm, box_w],
        rowHeights=[40 * mm],
        hAlign="LEFT",
    )
    table.setStyle(TableStyle([
        ("BOX", (0, 0), (0, 0), 0.5, theme.GRAY),
        ("BOX", (2, 0), (2, 0), 0.5, theme.GRAY),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("LEFTPADDING", (0, 0), (-1, -1), 6),
    ]))
    return table

"""Regulatory Compliance & Standards section."""

from __future__ import annotations

from reportlab.lib.units import mm
from reportlab.platypus import CondPageBreak, Spacer

from report import theme
from report.models import ReportingRequirement, ReportRecord
from report.sections.base import (
    BLOCK_TEXT_LIMIT,
    CELL_TEXT_LIMIT,
    BaseSection,
    RenderContext,
    boxed,
    bullets,
    clip,
    key_value_table,
    para,
)

NEXT_STEPS = "Engage accredited third-party verifier for independent assurance"
# Lists drawn inside a box are capped so the box fits on one page.
MAX_BOX_ITEMS = 8
BOX_ITEM_LIMIT = 120


def compliance_status(regulatory_group: int) -> str:
    if regulatory_group > 0:
        return (
            f"Your organization falls under Group {regulatory_group} "
            "mandatory reporting requirements."
        )
    return "Your organization does not currently meet mandatory reporting thresholds."


class ComplianceSection(BaseSection):
    section_id = "compliance"
    title = "6. REGULATORY COMPLIANCE & STANDARDS"

    def flowables(self, report: ReportRecord, ctx: RenderContext) -> list:
        st = ctx.styles
        status_box = boxed(
            [
                para("Applicable Reporting Standards", st["label"]),
                *bullets(_box_items(report.applicable_standards), st["bullet"]),
                Spacer(1, 3 * mm),
                para("Compliance Status", st["label"]),
                para(compliance_status(report.regulatory_group), st["body"]),
            ],
            background=theme.LIGHT_GRAY,
        )
        out = [
            status_box,
            Spacer(1, 8 * mm),
            para("Data Quality & Verification", st["label"]),
            key_value_table(
                [
                    ("Verification Status", report.verification_status),
                    ("Data Quality", report.data_quality),
                    ("Next Steps", NEXT_STEPS),
                ],
                ctx,
                key_width=50 * mm,
            ),
        ]

        if report.reporting_requirements:
            out += [
                Spacer(1, 8 * mm),
                CondPageBreak(theme.SPACE["requirement"]),
                para("Reporting Requirements & Legislation", st["subsection"]),
            ]
            for requirement in report.reporting_requirements:
                out += [
                    CondPageBreak(theme.SPACE["requirement"]),
                    _requirement_block(requirement, ctx),
                    Spacer(1, 4 * mm),
                ]
        return out


def _requirement_block(req: ReportingRequirement, ctx: RenderContext):
    st = ctx.styles
    content = [para(clip(req.heading, CELL_TEXT_LIMIT), st["label"])]
    if req.legislation:
        content += [
            para("Applicable Legislation:", st["cell_bold"]),
            para(clip(req.legislation, BLOCK_TEXT_LIMIT), st["note"]),
            Spacer(1, 2 * mm),
        ]
    if req.thresholds:
        content.append(para("Reporting Thresholds:", st["cell_bold"]))
        content += bullets(_box_items(f"{k}: {v}" for k, v in req.thresholds.items()), st["bullet"])
        content.append(Spacer(1, 2 * mm))
    if req.requirements:
        content.append(para("Requirements:", st["cell_bold"]))
        content += bullets(_box_items(req.requirements), st["bullet"])
        content.append(Spacer(1, 2 * mm))
    if req.extract:
        content.append(
            boxed(
                [
                    para("Legislative Extract:", st["cell_bold"]),
                    para(clip(req.extract, BLOCK_TEXT_LIMIT), st["note"]),
                ],
                background=theme.WHITE,
                border=theme.GRAY,
                width=theme.CONTENT_W - 16,
            )
        )
    return boxed(content, background=theme.LIGHT_GRAY)


def _box_items(items) -> list[str]:
    items = list(items)
    shown = [clip(item, BOX_ITEM_LIMIT) for item in items[:MAX_BOX_ITEMS]]
    if len(items) > MAX_BOX_ITEMS:
        shown.append(f"... and {len(items) - MAX_BOX_ITEMS} more")
    return shown

"""PDF renderer for ReportRecord.

Produces a paginated A4 PDF using ReportLab.  The title page is followed by
every section in ``report.sections.SECTIONS``, each starting on a new page;
adding a new section requires no changes here.

Usage::

    from report.builder import assemble_report
    from report.renderer import render

    document = render(assemble_report(emissions, strategies, org))
    Path(document.filename).write_bytes(document.content)

If the full document cannot be built, :func:`render` logs the failure and
returns a minimal fallback document instead, flagged with ``fallback=True``.
Only a failure of the fallback itself raises :class:`ReportRenderError`.
"""

from __future__ import annotations

import io
import logging
from datetime import date
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from reportlab.lib.units import mm
from reportlab.platypus import (
    BaseDocTemplate,
    Frame,
    NextPageTemplate,
    PageBreak,
    PageTemplate,
    Spacer,
)

from carbonprospect.config import get_settings
from carbonprospect.emissions.factors import EMISSION_FACTORS, EmissionFactor
from report import theme
from report.builder import UNKNOWN_ORGANIZATION
from report.formatting import filename_part, short_date
from report.models import ReportRecord
from report.sections import FALLBACK_SECTIONS, SECTIONS
from report.sections.base import BaseSection, RenderContext, para

__all__ = ["RenderedDocument", "ReportRenderError", "render", "report_filename"]

logger = logging.getLogger(__name__)

TAGLINE = "Comprehensive Carbon Management Platform"
DEFAULT_FILENAME_ORG = "Organization"

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ReportRenderError(Exception):
    """Neither the full document nor the fallback document could be built."""


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


class RenderedDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: bytes = Field(description="The PDF file.")
    filename: str
    page_count: int
    sections: list[str] = Field(description="Section ids in the order they were rendered.")
    embedded_charts: list[str] = Field(default_factory=list)
    skipped_charts: list[str] = Field(default_factory=list)
    fallback: bool = False


# ---------------------------------------------------------------------------
# Page templates
# ---------------------------------------------------------------------------


class _Doc(BaseDocTemplate):
    def __init__(self, buf: io.BytesIO, report: ReportRecord, platform_name: str):
        self._report = report
        self._platform = platform_name
        super().__init__(
            buf,
            pagesize=(theme.PAGE_W, theme.PAGE_H),
            leftMargin=theme.MARGIN_LEFT,
            rightMargin=theme.MARGIN_RIGHT,
            topMargin=theme.MARGIN_TOP,
            bottomMargin=theme.MARGIN_BOTTOM,
            title=f"Greenhouse Gas Emissions Report - {report.company_name}",
            author=platform_name,
            subject=report.report_id,
        )
        self._build_templates()

    def _build_templates(self):
        frame = Frame(
            theme.MARGIN_LEFT, theme.MARGIN_BOTTOM,
            theme.CONTENT_W, theme.CONTENT_H,
            leftPadding=0, rightPadding=0, topPadding=0, bottomPadding=0,
            id="body_frame", showBoundary=0,
        )
        self.addPageTemplates([
            PageTemplate(id="Cover", frames=[frame], onPage=self._draw_cover_chrome),
            PageTemplate(id="Body", frames=[frame], onPage=self._draw_body_chrome),
        ])

    def _draw_cover_chrome(self, canvas, doc):
        canvas.saveState()
        canvas.setFillColor(theme.PRIMARY)
        canvas.rect(0, theme.PAGE_H - theme.COVER_BAND_H, theme.PAGE_W, theme.COVER_BAND_H, fill=1, stroke=0)
        canvas.setFillColor(theme.WHITE)
        canvas.setFont("Helvetica-Bold", 14)
        canvas.drawString(10 * mm, theme.PAGE_H - 25 * mm, self._report.company_name)
        canvas.setFont("Helvetica-Bold", 24)
        canvas.drawCentredString(theme.PAGE_W / 2, theme.PAGE_H - 25 * mm, self._platform)
        canvas.setFont("Helvetica", 12)
        canvas.drawCentredString(theme.PAGE_W / 2, theme.PAGE_H - 35 * mm, TAGLINE)
        canvas.restoreState()
        self._draw_footer(canvas, doc)

    def _draw_body_chrome(self, canvas, doc):
        canvas.saveState()
        canvas.setFillColor(theme.PRIMARY)
        canvas.rect(0, theme.PAGE_H - theme.HEADER_BAND_H, theme.PAGE_W, theme.HEADER_BAND_H, fill=1, stroke=0)
        canvas.setFillColor(theme.WHITE)
        canvas.setFont("Helvetica-Bold", 12)
        canvas.drawString(10 * mm, theme.PAGE_H - 10 * mm, self._platform)
        canvas.setFont("Helvetica", theme.SMALL)
        canvas.drawRightString(theme.PAGE_W - 10 * mm, theme.PAGE_H - 10 * mm, TAGLINE)
        canvas.restoreState()
        self._draw_footer(canvas, doc)

    def _draw_footer(self, canvas, doc):
        canvas.saveState()
        canvas.setFillColor(theme.GRAY)
        canvas.setFont("Helvetica", theme.SMALL)
        y = 10 * mm
        canvas.drawCentredString(theme.PAGE_W / 2, y, f"Page {doc.page}")
        canvas.drawString(10 * mm, y, f"Report ID: {self._report.report_id}")
        canvas.drawRightString(theme.PAGE_W - 10 * mm, y, short_date(self._report.generated_on))
        canvas.restoreState()


# ---------------------------------------------------------------------------
# Story
# ---------------------------------------------------------------------------


def _title_page(report: ReportRecord, st: dict) -> list:
    return [
        NextPageTemplate("Body"),
        Spacer(1, 65 * mm),
        para("GREENHOUSE GAS", st["cover_title"]),
        para("EMISSIONS REPORT", st["cover_title"]),
        Spacer(1, 15 * mm),
        para(report.company_name, st["cover_company"]),
        Spacer(1, 20 * mm),
        para(f"Report ID: {report.report_id}", st["cover_meta"]),
        para(f"Reporting Period: {report.reporting_period}", st["cover_meta"]),
        para(f"Generated: {report.formatted_date}", st["cover_meta"]),
    ]


def _section_story(section: BaseSection, report: ReportRecord, ctx: RenderContext) -> list:
    return [
        PageBreak(),
        para(section.title, ctx.styles["section_heading"]),
        *section.flowables(report, ctx),
    ]


def _limited_data_page(st: dict) -> list:
    return [
        PageBreak(),
        para("Limited data available for report generation.", st["subsection"]),
        para("Please ensure all required data is provided.", st["subsection"]),
    ]


def _build(report: ReportRecord, story: list, platform_name: str) -> tuple[bytes, int]:
    buf = io.BytesIO()
    doc = _Doc(buf, report, platform_name)
    doc.build(story)
    return buf.getvalue(), doc.page


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def report_filename(company_name: Optional[str], today: date) -> str:
    """``Carbon_Emissions_Report_<org>_<YYYY-MM-DD>.pdf``."""
    org = ""
    if company_name and company_name != UNKNOWN_ORGANIZATION:
        org = filename_part(company_name)
    return f"Carbon_Emissions_Report_{org or DEFAULT_FILENAME_ORG}_{today.isoformat()}.pdf"


def render(
    report: ReportRecord,
    chart_images: Optional[Mapping[str, bytes]] = None,
    *,
    factors: Mapping[str, EmissionFactor] = EMISSION_FACTORS,
    platform_name: Optional[str] = None,
) -> RenderedDocument:
    """Render *report* to PDF.

    Args:
        report:  The assembled report.
        chart_images:  Chart id -> PNG/JPEG bytes.  Known ids are
            ``scope_pie``, ``strategy_bar`` and ``projection_line``.  Missing
            charts are left out; unreadable ones are skipped and reported in
            ``skipped_charts``.
        factors:  Emission factor table for the breakdown and appendix.
        platform_name:  Brand shown in the page chrome; defaults to the
            configured platform name.

    Raises:
        ReportRenderError: if even the fallback document fails to build.
    """
    platform = platform_name or get_settings().platform_name
    try:
        return _render_full(report, chart_images or {}, factors, platform)
    except Exception:
        logger.exception("Full render of %s failed; producing fallback document", report.report_id)

    try:
        return _render_fallback(report, factors, platform)
    except Exception as exc:
        raise ReportRenderError(f"Could not render report {report.report_id}") from exc


def _render_full(
    report: ReportRecord,
    chart_images: Mapping[str, bytes],
    factors: Mapping[str, EmissionFactor],
    platform_name: str,
) -> RenderedDocument:
    ctx = RenderContext(factors=factors, platform_name=platform_name, chart_images=chart_images)
    story = _title_page(report, ctx.styles)
    for section in SECTIONS:
        story += _section_story(section, report, ctx)

    content, pages = _build(report, story, platform_name)
    return RenderedDocument(
        content=content,
        filename=report_filename(report.company_name, report.generated_on),
        page_count=pages,
        sections=["title_page", *(s.section_id for s in SECTIONS)],
        embedded_charts=ctx.embedded_charts,
        skipped_charts=ctx.skipped_charts,
    )


def _render_fallback(
    report: ReportRecord,
    factors: Mapping[str, EmissionFactor],
    platform_name: str,
) -> RenderedDocument:
    """Title page, executive summary, the emissions summary when there is data."""
    ctx = RenderContext(factors=factors, platform_name=platform_name)
    story = _title_page(report, ctx.styles)
    rendered = ["title_page"]
    for section in FALLBACK_SECTIONS:
        if section.section_id == "emissions_summary" and not report.has_emissions_data:
            continue
        story += _section_story(section, report, ctx)
        rendered.append(section.section_id)

    if not report.has_emissions_data or report.company_name == UNKNOWN_ORGANIZATION:
        story += _limited_data_page(ctx.styles)
        rendered.append("limited_data")

    content, pages = _build(report, story, platform_name)
    return RenderedDocument(
        content=content,
        filename=report_filename(report.company_name, report.generated_on),
        page_count=pages,
        sections=rendered,
        fallback=True,
    )

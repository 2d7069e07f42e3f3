"""Abstract base class for report sections, plus the shared block builders.

Each section receives the assembled ReportRecord and a RenderContext and
returns the ReportLab flowables for its body.  The renderer adds the page
break and the section heading, so sections only emit content.

To add a new section:
    1. Subclass BaseSection.
    2. Set ``section_id`` and ``title``.
    3. Implement ``flowables()``.
    4. Add an instance to ``report/sections/__init__.py::SECTIONS``.

Every content block a section emits should be preceded by
``CondPageBreak(SPACE[...])`` so that a block never starts with less room
than it needs.
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Flowable, Image, Paragraph, Table, TableStyle

from carbonprospect.emissions.factors import EMISSION_FACTORS, EmissionFactor
from report import theme
from report.models import ReportRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Render context
# ---------------------------------------------------------------------------


@dataclass
class RenderContext:
    """Per-render state shared by every section of one document.

    ``embedded_charts`` and ``skipped_charts`` are filled in as sections ask
    for chart images, so they describe only the render they belong to.
    """

    styles: dict[str, ParagraphStyle] = field(default_factory=theme.styles)
    factors: Mapping[str, EmissionFactor] = field(default_factory=lambda: EMISSION_FACTORS)
    platform_name: str = "Carbon Prospect"
    chart_images: Mapping[str, bytes] = field(default_factory=dict)
    embedded_charts: list[str] = field(default_factory=list)
    skipped_charts: list[str] = field(default_factory=list)

    def chart(self, chart_id: str, width: float, h_align: str = "CENTER") -> Optional[Image]:
        """Return a scaled Image for *chart_id*, or None if it is missing or unreadable."""
        data = self.chart_images.get(chart_id)
        if not data:
            if chart_id in self.chart_images:
                logger.warning("Chart %s was supplied empty; skipping", chart_id)
                self.skipped_charts.append(chart_id)
            return None
        # Decode the whole image here; a truncated body only fails at build time.
        try:
            reader = ImageReader(io.BytesIO(data))
            img_w, img_h = reader.getSize()
            reader.getRGBData()
        except Exception as exc:
            logger.warning("Chart %s is not a readable image (%s); skipping", chart_id, exc)
            self.skipped_charts.append(chart_id)
            return None

        height = width * img_h / img_w
        if height > theme.CHART_MAX_H:
            width, height = width * theme.CHART_MAX_H / height, theme.CHART_MAX_H
        self.embedded_charts.append(chart_id)
        return Image(io.BytesIO(data), width=width, height=height, hAlign=h_align)


# ---------------------------------------------------------------------------
# Section contract
# ---------------------------------------------------------------------------


class BaseSection(ABC):
    """Contract that every report section must satisfy."""

    #: Stable snake_case identifier, reported in RenderedDocument.sections.
    section_id: str

    #: Display heading shown in the rendered PDF.
    title: str

    @abstractmethod
    def flowables(self, report: ReportRecord, ctx: RenderContext) -> list[Flowable]:
        """Build the section body.

        Args:
            report:  The assembled report.  Read only.
            ctx:     Styles, factor table and chart images for this render.

        Returns:
            Flowables in display order, without the section heading.
        """


# ---------------------------------------------------------------------------
# Block builders
# ---------------------------------------------------------------------------


# Table rows and boxes cannot split across pages, so free text placed in them
# is clipped to a length that always fits one frame.
CELL_TEXT_LIMIT = 300
BLOCK_TEXT_LIMIT = 600


def clip(text: Any, limit: int) -> str:
    s = str(text)
    return s if len(s) <= limit else s[: limit - 3].rstrip() + "..."


def para(text: Any, style: ParagraphStyle) -> Paragraph:
    """Paragraph of plain (escaped) text."""
    return Paragraph(escape(str(text)), style)


def cell(text: Any, style: ParagraphStyle) -> Paragraph:
    """Wrapped table-cell paragraph, clipped to CELL_TEXT_LIMIT characters."""
    return para(clip(text, CELL_TEXT_LIMIT), style)


def bullets(items: Iterable[Any], style: ParagraphStyle) -> list[Paragraph]:
    return [Paragraph(escape(str(item)), style, bulletText="•") for item in items]


def grid_table(
    header: Sequence[str],
    rows: Sequence[Sequence[Any]],
    col_widths: Sequence[float],
    *,
    striped: bool = True,
    footer: Optional[Sequence[str]] = None,
    align: Optional[Mapping[int, str]] = None,
    font_size: float = 9,
) -> Table:
    """Header-row table in the primary colour, optionally striped and footed."""
    data = [list(header), *[list(r) for r in rows]]
    if footer is not None:
        data.append(list(footer))
    table = Table(data, colWidths=list(col_widths), repeatRows=1, hAlign="CENTER")
    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), theme.PRIMARY),
        ("TEXTCOLOR", (0, 0), (-1, 0), theme.WHITE),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("ALIGN", (0, 0), (-1, 0), "CENTER"),
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), font_size),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ("LEFTPADDING", (0, 0), (-1, -1), 5),
        ("RIGHTPADDING", (0, 0), (-1, -1), 5),
    ]
    if striped:
        commands.append(("ROWBACKGROUNDS", (0, 1), (-1, -1), [theme.WHITE, theme.LIGHT_GRAY]))
    else:
        commands.append(("GRID", (0, 0), (-1, -1), 0.5, theme.GRAY))
    for col, how in (align or {}).items():
        commands.append(("ALIGN", (col, 1), (col, -1), how))
    if footer is not None:
        commands += [
            ("BACKGROUND", (0, -1), (-1, -1), theme.LIGHT_GRAY),
            ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, -1), (-1, -1), font_size + 1),
        ]
    table.setStyle(TableStyle(commands))
    return table


def key_value_table(
    rows: Sequence[tuple[str, Any]], ctx: RenderContext, key_width: float
) -> Table:
    """Two-column label/value table with wrapped values and no rules."""
    st = ctx.styles
    data = [[para(k, st["cell_bold"]), cell(v, st["cell"])] for k, v in rows]
    table = Table(data, colWidths=[key_width, theme.CONTENT_W - key_width], hAlign="LEFT")
    table.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
    ]))
    return table


def boxed(
    content: Sequence[Flowable],
    *,
    background: Any = None,
    border: Any = None,
    width: float = theme.CONTENT_W,
) -> Table:
    """Wrap *content* in a single-cell table drawn as a filled or outlined box."""
    table = Table([[list(content)]], colWidths=[width], hAlign="LEFT")
    commands = [
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
        ("LEFTPADDING", (0, 0), (-1, -1), 8),
        ("RIGHTPADDING", (0, 0), (-1, -1), 8),
    ]
    if background is not None:
        commands.append(("BACKGROUND", (0, 0), (-1, -1), background))
    if border is not None:
        commands.append(("BOX", (0, 0), (-1, -1), 0.5, border))
    table.setStyle(TableStyle(commands))
    return table


def cell_text(cell: Any) -> str:
    """Plain text of a table cell, whether a string or a Paragraph."""
    if isinstance(cell, Paragraph):
        return cell.getPlainText()
    if isinstance(cell, (list, tuple)):
        return " ".join(cell_text(c) for c in cell)
    return str(cell)

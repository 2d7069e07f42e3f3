"""Page geometry, palette and paragraph styles for the emissions report."""

from __future__ import annotations

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm

# ---------------------------------------------------------------------------
# Geometry (A4 portrait, millimetres)
# ---------------------------------------------------------------------------

PAGE_W, PAGE_H = A4
MARGIN_TOP = 25 * mm
MARGIN_BOTTOM = 35 * mm
MARGIN_LEFT = 15 * mm
MARGIN_RIGHT = 15 * mm
CONTENT_W = PAGE_W - MARGIN_LEFT - MARGIN_RIGHT   # 180 mm
CONTENT_H = PAGE_H - MARGIN_TOP - MARGIN_BOTTOM   # 237 mm

HEADER_BAND_H = 15 * mm
COVER_BAND_H = 50 * mm

# Space a block needs before it is placed; less than this left on the
# page moves the block to a new page.
SPACE = {
    "chart": 80 * mm,
    "intensity_box": 30 * mm,
    "scope_table": 40 * mm,
    "projection_table": 40 * mm,
    "strategy_table": 50 * mm,
    "scenario_table": 40 * mm,
    "requirement": 40 * mm,
    "appendix": 40 * mm,
    "total_line": 20 * mm,
    "disclaimer": 60 * mm,
    "compliance_notice": 30 * mm,
    "signature_boxes": 60 * mm,
    "contact_box": 30 * mm,
}

CHART_MAX_H = 120 * mm

# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------

PRIMARY    = colors.Color(34 / 255, 139 / 255, 34 / 255)     # forest green
SECONDARY  = colors.Color(59 / 255, 130 / 255, 246 / 255)    # blue
ACCENT     = colors.Color(239 / 255, 68 / 255, 68 / 255)     # red
GRAY       = colors.Color(107 / 255, 114 / 255, 128 / 255)
LIGHT_GRAY = colors.Color(243 / 255, 244 / 255, 246 / 255)
DARK_GRAY  = colors.Color(31 / 255, 41 / 255, 55 / 255)
SUMMARY_BG = colors.HexColor("#EBF3FE")   # SECONDARY mixed 90% with white
WHITE      = colors.white
BLACK      = colors.black

# ---------------------------------------------------------------------------
# Font sizes (pt)
# ---------------------------------------------------------------------------

TITLE = 20
SECTION_HEADER = 16
SUBSECTION = 12
BODY = 10
SMALL = 8


def styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()

    def s(name, **kw) -> ParagraphStyle:
        parent = kw.pop("parent", "Normal")
        return ParagraphStyle(name, parent=base[parent], **kw)

    return {
        "cover_title": s(
            "cover_title",
            fontSize=28,
            leading=36,
            fontName="Helvetica-Bold",
            alignment=TA_CENTER,
        ),
        "cover_company": s(
            "cover_company",
            fontSize=TITLE,
            leading=26,
            fontName="Helvetica",
            alignment=TA_CENTER,
        ),
        "cover_meta": s(
            "cover_meta",
            fontSize=14,
            leading=28,
            fontName="Helvetica",
            alignment=TA_CENTER,
        ),
        "section_heading": s(
            "section_heading",
            fontSize=SECTION_HEADER,
            leading=20,
            textColor=PRIMARY,
            fontName="Helvetica-Bold",
            spaceAfter=6 * mm,
        ),
        "subsection": s(
            "subsection",
            fontSize=SUBSECTION,
            leading=15,
            fontName="Helvetica-Bold",
            spaceBefore=2 * mm,
            spaceAfter=4 * mm,
        ),
        "label": s(
            "label",
            fontSize=BODY,
            leading=13,
            fontName="Helvetica-Bold",
            spaceAfter=2 * mm,
        ),
        "body": s(
            "body",
            fontSize=BODY,
            leading=14,
            fontName="Helvetica",
            spaceAfter=2 * mm,
        ),
        "cell": s(
            "cell",
            fontSize=9,
            leading=11,
            fontName="Helvetica",
        ),
        "cell_bold": s(
            "cell_bold",
            fontSize=9,
            leading=11,
            fontName="Helvetica-Bold",
        ),
        "small": s(
            "small",
            fontSize=SMALL,
            leading=10,
            fontName="Helvetica",
        ),
        "note": s(
            "note",
            fontSize=SMALL,
            leading=11,
            textColor=GRAY,
            fontName="Helvetica-Oblique",
            alignment=TA_LEFT,
        ),
        "bullet": s(
            "bullet",
            fontSize=BODY,
            leading=14,
            fontName="Helvetica",
            leftIndent=4 * mm,
            bulletIndent=0,
        ),
    }

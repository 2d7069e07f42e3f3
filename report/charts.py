"""Chart rasterizer: draws the report charts as PNG images.

The renderer never draws charts itself; it embeds whatever images it is
given.  This module produces the three images it knows how to place:

    scope_pie        -- share of each scope in total emissions
    strategy_bar     -- tonnes avoided per reduction strategy
    projection_line  -- projected emissions against the target pathway

Charts with nothing to show (no positive scope, no strategies) are left out
of the result, as is any chart that fails to draw; the renderer simply
omits them.
"""

from __future__ import annotations

import asyncio
import io
import logging
from typing import Callable, Optional

import matplotlib
matplotlib.use("Agg")  # non-interactive backend, safe for servers / CI
from matplotlib.figure import Figure

from report.models import ReportRecord

logger = logging.getLogger(__name__)

SCOPE_COLORS = ("#228B22", "#3B82F6", "#EF4444")
DPI = 150


def _label(text: str) -> str:
    # Plain text only; matplotlib would parse $...$ as mathtext.
    return text.replace("$", r"\$")


def _png(fig: Figure) -> bytes:
    buf = io.BytesIO()
    fig.tight_layout()
    fig.savefig(buf, format="png", dpi=DPI, bbox_inches="tight", facecolor="white")
    return buf.getvalue()


def scope_pie(report: ReportRecord) -> Optional[bytes]:
    """Pie of the positive scopes; ``None`` when no scope is positive."""
    totals = report.emissions
    slices = [
        (label, value, color)
        for label, value, color in zip(
            ("Scope 1", "Scope 2", "Scope 3"),
            (totals.scope1, totals.scope2, totals.scope3),
            SCOPE_COLORS,
        )
        if value > 0
    ]
    if not slices:
        return None

    labels, values, colors = zip(*slices)
    fig = Figure(figsize=(5, 5))
    ax = fig.subplots()
    ax.pie(values, labels=labels, colors=colors, autopct="%1.1f%%", startangle=90)
    ax.set_title("Emissions by Scope")
    ax.axis("equal")
    return _png(fig)


def strategy_bar(report: ReportRecord) -> Optional[bytes]:
    if not report.strategies:
        return None
    names = [_label(s.name) for s in report.strategies]
    tonnes = [s.absolute_reduction for s in report.strategies]

    fig = Figure(figsize=(6, 4))
    ax = fig.subplots()
    ax.barh(names, tonnes, color=SCOPE_COLORS[0])
    ax.invert_yaxis()
    ax.set_xlabel("Reduction (tCO2e)")
    ax.set_title("Reduction by Strategy")
    return _png(fig)


def projection_line(report: ReportRecord) -> Optional[bytes]:
    points = report.five_year_projection
    if not points:
        return None
    years = [p.year for p in points]

    fig = Figure(figsize=(6, 4))
    ax = fig.subplots()
    ax.plot(years, [p.emissions for p in points], "o-", color=SCOPE_COLORS[1], label="Projected")
    ax.plot(years, [p.target for p in points], "s--", color=SCOPE_COLORS[0], label="Target pathway")
    ax.set_xticks(years)
    ax.set_ylabel("tCO2e")
    ax.set_title("5-Year Emissions Projection")
    ax.legend(loc="upper right")
    return _png(fig)


CHARTS: dict[str, Callable[[ReportRecord], Optional[bytes]]] = {
    "scope_pie": scope_pie,
    "strategy_bar": strategy_bar,
    "projection_line": projection_line,
}


def _draw(chart_id: str, report: ReportRecord) -> Optional[bytes]:
    """Draw one chart; a chart that fails to draw is logged and left out."""
    try:
        return CHARTS[chart_id](report)
    except Exception:
        logger.exception("Chart %s failed to draw for %s; leaving it out", chart_id, report.report_id)
        return None


def rasterize_charts(report: ReportRecord) -> dict[str, bytes]:
    """Draw every chart that has data, keyed by chart id."""
    images = {}
    for chart_id in CHARTS:
        image = _draw(chart_id, report)
        if image is not None:
            images[chart_id] = image
    logger.debug("Rasterized charts %s for %s", sorted(images), report.report_id)
    return images


async def rasterize_charts_async(report: ReportRecord) -> dict[str, bytes]:
    """Draw the charts concurrently in worker threads.

    The result is keyed by chart id, so the embedding order is still decided
    by the renderer.
    """
    chart_ids = list(CHARTS)
    results = await asyncio.gather(
        *(asyncio.to_thread(_draw, chart_id, report) for chart_id in chart_ids)
    )
    return {
        chart_id: image
        for chart_id, image in zip(chart_ids, results)
        if image is not None
    }

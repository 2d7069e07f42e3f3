"""Tests for renderer.py: full documents, fallback documents and filenames.

PDF text is read back with pdfplumber.
"""
import io
from datetime import date

import pdfplumber
import pytest
from reportlab.platypus import PageBreak, Paragraph

from report.builder import assemble_report
from report.renderer import ReportRenderError, _section_story, render, report_filename
from report.sections.base import RenderContext
from report.sections.executive_summary import ExecutiveSummarySection
from report.sections.strategies import StrategiesSection


def _pages(content: bytes) -> list[str]:
    with pdfplumber.open(io.BytesIO(content)) as pdf:
        return [page.extract_text() or "" for page in pdf.pages]


def _boom(self, report, ctx):
    raise RuntimeError("section exploded")


# ---------------------------------------------------------------------------
# Full render
# ---------------------------------------------------------------------------


class TestFullRender:
    def test_pdf_bytes(self, report):
        document = render(report)
        assert document.content.startswith(b"%PDF")
        assert document.fallback is False
        assert document.filename == "Carbon_Emissions_Report_Acme_Pty_Ltd_2026-10-19.pdf"

    def test_sections_in_order(self, report):
        document = render(report)
        assert document.sections == [
            "title_page",
            "executive_summary",
            "organization_details",
            "methodology",
            "emissions_summary",
            "detailed_breakdown",
            "strategies",
            "compliance",
            "responsibility",
            "appendices",
        ]

    def test_page_count_matches_pdf(self, report):
        document = render(report)
        pages = _pages(document.content)
        assert document.page_count == len(pages)
        assert document.page_count >= 10

    def test_title_page(self, report):
        first = _pages(render(report).content)[0]
        assert "GREENHOUSE GAS" in first
        assert "EMISSIONS REPORT" in first
        assert "Report ID: REP-42-20261019" in first
        assert "Reporting Period: 2025" in first
        assert "Generated: October 19, 2026" in first

    def test_page_chrome(self, report):
        pages = _pages(render(report).content)
        assert "Page 2" in pages[1]
        assert "10/19/2026" in pages[1]
        assert "Comprehensive Carbon Management Platform" in pages[1]

    def test_each_section_starts_a_page(self, report):
        pages = _pages(render(report).content)
        assert pages[1].find("EXECUTIVE SUMMARY") >= 0
        assert any(p.find("1. ORGANIZATION DETAILS") >= 0 for p in pages[2:])
        assert "1. ORGANIZATION DETAILS" not in pages[1]

    def test_platform_name_override(self, report):
        pages = _pages(render(report, platform_name="GreenLedger").content)
        assert "GreenLedger" in pages[1]

    def test_section_story_opens_with_page_break_and_heading(self, report):
        story = _section_story(StrategiesSection(), report, RenderContext())
        assert isinstance(story[0], PageBreak)
        assert isinstance(story[1], Paragraph)
        assert story[1].getPlainText() == StrategiesSection.title

    def test_oversized_free_text_still_renders(self, emissions_data, context):
        strategies = [{"name": "Retrofit " * 2000, "reductionType": "absolute", "reductionTonnes": 5}]
        organization = {"companyName": "Acme", "registeredAddress": "Level 1 " * 3000}
        data = {
            **emissions_data,
            "reportingRequirements": [
                {
                    "scheme": "NGER",
                    "legislation": "Act " * 3000,
                    "requirements": ["Report " * 500] * 40,
                    "extract": "Extract " * 3000,
                }
            ],
        }
        record = assemble_report(data, strategies, organization, context=context)
        document = render(record)
        assert document.fallback is False

    def test_many_strategies_paginate(self, emissions_data, organization_info, context):
        strategies = [
            {"name": f"Initiative {i}", "reductionType": "absolute", "reductionTonnes": 1, "scope": "Scope 1"}
            for i in range(60)
        ]
        scenarios = [{"name": f"S{i}", "emissions": {"total": 100}} for i in range(12)]
        record = assemble_report(emissions_data, strategies, organization_info, scenarios, context)
        document = render(record)
        assert document.fallback is False
        assert document.page_count > 10


# ---------------------------------------------------------------------------
# Charts
# ---------------------------------------------------------------------------


class TestCharts:
    def test_all_charts_embedded(self, report, chart_images):
        document = render(report, chart_images)
        assert document.embedded_charts == ["scope_pie", "strategy_bar", "projection_line"]
        assert document.skipped_charts == []
        assert not any("Reduction vs Current" in p for p in _pages(document.content))

    def test_projection_table_when_chart_missing(self, report):
        document = render(report)
        assert document.embedded_charts == []
        assert any("Reduction vs Current" in p for p in _pages(document.content))

    def test_unreadable_and_empty_charts_skipped(self, report):
        document = render(report, {"scope_pie": b"definitely not a png", "strategy_bar": b""})
        assert document.fallback is False
        assert document.skipped_charts == ["scope_pie", "strategy_bar"]
        assert document.embedded_charts == []

    def test_truncated_chart_skipped(self, report, chart_images):
        png = chart_images["scope_pie"]
        document = render(report, {**chart_images, "scope_pie": png[: len(png) // 3]})
        assert document.fallback is False
        assert document.skipped_charts == ["scope_pie"]
        assert document.embedded_charts == ["strategy_bar", "projection_line"]


# ---------------------------------------------------------------------------
# Fallback
# ---------------------------------------------------------------------------


class TestFallback:
    def test_section_failure_gives_fallback(self, report, monkeypatch):
        monkeypatch.setattr(StrategiesSection, "flowables", _boom)
        document = render(report)
        assert document.fallback is True
        assert document.content.startswith(b"%PDF")
        assert document.sections == ["title_page", "executive_summary", "emissions_summary"]
        assert document.filename == "Carbon_Emissions_Report_Acme_Pty_Ltd_2026-10-19.pdf"

    def test_fallback_without_data(self, empty_report, monkeypatch):
        monkeypatch.setattr(StrategiesSection, "flowables", _boom)
        document = render(empty_report)
        assert document.fallback is True
        assert document.sections == ["title_page", "executive_summary", "limited_data"]
        text = "\n".join(_pages(document.content))
        assert "Limited data available for report generation." in text

    def test_fallback_failure_raises(self, report, monkeypatch):
        monkeypatch.setattr(ExecutiveSummarySection, "flowables", _boom)
        with pytest.raises(ReportRenderError):
            render(report)

    def test_failure_is_logged(self, report, monkeypatch, caplog):
        monkeypatch.setattr(StrategiesSection, "flowables", _boom)
        render(report)
        assert "producing fallback document" in caplog.text


# ---------------------------------------------------------------------------
# Filenames
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "company, expected",
    [
        ("Acme Pty Ltd", "Carbon_Emissions_Report_Acme_Pty_Ltd_2026-10-19.pdf"),
        ("Smith & Sons / Co.", "Carbon_Emissions_Report_Smith_Sons_Co._2026-10-19.pdf"),
        ("Unknown Organization", "Carbon_Emissions_Report_Organization_2026-10-19.pdf"),
        ("", "Carbon_Emissions_Report_Organization_2026-10-19.pdf"),
        (None, "Carbon_Emissions_Report_Organization_2026-10-19.pdf"),
        ("///", "Carbon_Emissions_Report_Organization_2026-10-19.pdf"),
    ],
)
def test_report_filename(company, expected):
    assert report_filename(company, date(2026, 10, 19)) == expected


# ---------------------------------------------------------------------------
# Degraded input
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("emissions_data", [{}, {"rawInputs": "garbage"}, {"emissions": None}])
def test_missing_emissions_still_renders(emissions_data, context):
    record = assemble_report(emissions_data, [], {}, context=context)
    document = render(record)
    assert document.content.startswith(b"%PDF")
    assert document.sections[:2] == ["title_page", "executive_summary"]
    assert document.filename == "Carbon_Emissions_Report_Organization_2026-10-19.pdf"

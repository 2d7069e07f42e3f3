"""Fixtures for section, renderer and chart tests."""
import pytest
from reportlab.platypus import Paragraph, Table

from report.charts import projection_line, scope_pie, strategy_bar
from report.sections.base import RenderContext, cell_text


def _texts(flowable) -> list[str]:
    if isinstance(flowable, Paragraph):
        return [flowable.getPlainText()]
    if isinstance(flowable, Table):
        return [t for row in flowable._cellvalues for cell in row for t in _texts(cell)]
    if isinstance(flowable, (list, tuple)):
        return [t for item in flowable for t in _texts(item)]
    if isinstance(flowable, str) and flowable:
        return [flowable]
    return []


@pytest.fixture
def story_text():
    """Every piece of text in a list of flowables, tables included."""
    return _texts


@pytest.fixture
def table_rows():
    """Rows of a Table as plain strings."""
    def rows(table: Table) -> list[list[str]]:
        return [[cell_text(cell) for cell in row] for row in table._cellvalues]
    return rows


@pytest.fixture
def ctx() -> RenderContext:
    return RenderContext()


@pytest.fixture
def chart_images(report) -> dict[str, bytes]:
    return {
        "scope_pie": scope_pie(report),
        "strategy_bar": strategy_bar(report),
        "projection_line": projection_line(report),
    }

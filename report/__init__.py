from report.builder import assemble_report
from report.charts import rasterize_charts, rasterize_charts_async
from report.delivery import InvalidRecipientError, email_report, validate_recipient
from report.models import EmissionsData, OrganizationInfo, ReportingContext, ReportRecord
from report.renderer import RenderedDocument, ReportRenderError, render, report_filename

__all__ = [
    "assemble_report",
    "render",
    "report_filename",
    "rasterize_charts",
    "rasterize_charts_async",
    "email_report",
    "validate_recipient",
    "InvalidRecipientError",
    "ReportRenderError",
    "RenderedDocument",
    "EmissionsData",
    "OrganizationInfo",
    "ReportingContext",
    "ReportRecord",
]

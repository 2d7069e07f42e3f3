"""Organization Details section."""

from __future__ import annotations

from reportlab.lib.units import mm

from report.formatting import count, currency
from report.models import ReportRecord
from report.sections.base import BaseSection, RenderContext, key_value_table

NA = "N/A"


class OrganizationSection(BaseSection):
    section_id = "organization_details"
    title = "1. ORGANIZATION DETAILS"

    def flowables(self, report: ReportRecord, ctx: RenderContext) -> list:
        org = report.organization
        rows = [
            ("Legal Entity Name", report.company_name),
            ("Business Registration Number", org.business_number or NA),
            ("Registered Address", org.registered_address or NA),
            ("Industry Sector", report.industry),
            ("Number of Employees", count(org.employee_count) if org.employee_count else NA),
            ("Number of Facilities", count(org.facility_count) if org.facility_count else NA),
            ("Fleet Size", f"{count(org.fleet_size)} vehicles" if org.fleet_size else NA),
            ("Annual Revenue", currency(org.annual_revenue) if org.annual_revenue else NA),
            ("Reporting Contact", org.contact_person or report.report_preparer),
            ("Contact Email", org.contact_email or NA),
            ("Contact Phone", org.contact_phone or NA),
        ]
        return [key_value_table(rows, ctx, key_width=70 * mm)]

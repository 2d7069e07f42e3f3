from report.sections.appendices import AppendicesSection
from report.sections.compliance import ComplianceSection
from report.sections.detailed_breakdown import DetailedBreakdownSection
from report.sections.emissions_summary import EmissionsSummarySection
from report.sections.executive_summary import ExecutiveSummarySection
from report.sections.methodology import MethodologySection
from report.sections.organization import OrganizationSection
from report.sections.responsibility import ResponsibilitySection
from report.sections.strategies import StrategiesSection

# Registry: add new sections here in the order they should appear in the report.
SECTIONS = [
    ExecutiveSummarySection(),
    OrganizationSection(),
    MethodologySection(),
    EmissionsSummarySection(),
    DetailedBreakdownSection(),
    StrategiesSection(),
    ComplianceSection(),
    ResponsibilitySection(),
    AppendicesSection(),
]

# Sections kept in the minimal document produced when a full render fails.
FALLBACK_SECTIONS = [ExecutiveSummarySection(), EmissionsSummarySection()]

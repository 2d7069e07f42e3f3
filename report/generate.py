"""Quick script to generate a sample emissions report PDF.

Usage:
    python -m report.generate
    python -m report.generate "Acme Manufacturing Pty Ltd"
    python -m report.generate Acme --no-charts
"""

import sys
from pathlib import Path

from report import assemble_report, rasterize_charts, render

company = next((a for a in sys.argv[1:] if not a.startswith("--")), "Acme Manufacturing Pty Ltd")
with_charts = "--no-charts" not in sys.argv

emissions_data = {
    "rawInputs": {
        "naturalGas": 12000,
        "diesel": 8500,
        "electricity": 420000,
        "businessFlights": 150000,
        "wasteGenerated": 40,
        "purchasedGoods": 250000,
    },
    "reductionTarget": 30,
    "location": "Australia",
}
strategies = [
    {"name": "Rooftop solar PV", "reductionType": "percentage", "reductionPotential": 15,
     "scope": "Scope 2", "timeframe": "1-2 years", "capex": 250000, "opexSavings": 60000},
    {"name": "Fleet electrification", "reductionType": "absolute", "reductionTonnes": 20,
     "scope": "Scope 1", "timeframe": "3-5 years", "capex": 900000, "opexSavings": 110000},
    {"strategy": "Supplier engagement programme", "potentialReduction": 8, "scope": "Scope 3"},
]
organization = {
    "companyName": company,
    "industryType": "Manufacturing",
    "location": "Australia",
    "employeeCount": 320,
    "annualRevenue": 120_000_000,
    "facilityCount": 3,
    "fleetSize": 24,
    "contactPerson": "Jordan Lee",
    "contactEmail": "sustainability@example.com",
}

print(f"Generating report for '{company}'...")
report = assemble_report(emissions_data, strategies, organization)
charts = rasterize_charts(report) if with_charts else {}
document = render(report, charts)

out = Path(__file__).parent / document.filename
out.write_bytes(document.content)
print(f"Written: {out} ({document.page_count} pages, charts: {', '.join(document.embedded_charts) or 'none'})")

"""Report generators for charge summaries."""

from service_charges.writers.service_report_generator import (
    ServiceReportData,
    ServiceReportGenerator,
    calculate_grand_total,
    format_window,
)

__all__ = [
    "ServiceReportData",
    "ServiceReportGenerator",
    "calculate_grand_total",
    "format_window",
]

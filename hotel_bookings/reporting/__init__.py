"""Reporting utilities for exporting the hotel bookings analysis."""

from .exporters import export_excel_report, build_pdf_report

__all__ = ["export_excel_report", "build_pdf_report"]

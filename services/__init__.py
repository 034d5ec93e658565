"""Vitara Services Module.

Services:
    ReportService: Reads lab reports into vitals, falling back to sample values.
"""
from services.report_service import ReportService, AcquisitionResult, get_report_service

__all__ = ["ReportService", "AcquisitionResult", "get_report_service"]

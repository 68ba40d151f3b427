"""Reporting module for gdprscan."""

from .generator import ReportGenerator, generate_report, render_report
from .grouping import compliance_status, group_by_severity
from .html_report import render_html_report
from .json_report import render_json_report
from .models import REPORT_FORMATS, ReportConfig
from .text_report import render_text_report

__all__ = [
    "REPORT_FORMATS",
    "ReportConfig",
    "ReportGenerator",
    "compliance_status",
    "generate_report",
    "group_by_severity",
    "render_html_report",
    "render_json_report",
    "render_report",
    "render_text_report",
]

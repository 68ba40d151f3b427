"""Report data models."""

from __future__ import annotations

from dataclasses import dataclass

REPORT_FORMATS = ("text", "html", "json")


@dataclass
class ReportConfig:
    """Configuration for report generation."""

    format: str = "text"
    include_suggestions: bool = True
    include_stats: bool = True

"""Report generator orchestration."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from gdprscan.config import get_project_db_path
from gdprscan.modules.history import HistoryManager

from .html_report import render_html_report
from .json_report import render_json_report
from .models import ReportConfig
from .text_report import render_text_report

RENDERERS = {
    "text": (render_text_report, "txt"),
    "html": (render_html_report, "html"),
    "json": (render_json_report, "json"),
}


def render_report(scan: dict[str, Any], config: ReportConfig | None = None) -> str:
    """Render a scan record in the configured format."""
    config = config or ReportConfig()
    if config.format not in RENDERERS:
        raise ValueError(f"Unsupported format: {config.format}")
    renderer, _ = RENDERERS[config.format]
    return renderer(scan, config)


class ReportGenerator:
    """Generates compliance reports for scans stored in a project."""

    def __init__(self, project_dir: Path):
        self.project_dir = project_dir
        db_path = get_project_db_path(project_dir)
        if db_path is None:
            raise ValueError("Project storage not found. Run 'gdprscan init' first.")

        self.db_path = db_path
        self.history = HistoryManager(self.db_path)
        self.report_dir = project_dir / "report"
        self.report_dir.mkdir(exist_ok=True)

    def close(self) -> None:
        self.history.close()

    def generate(self, scan_id: int, config: ReportConfig | None = None) -> Path:
        """Render one stored scan and write it under ``report/``."""
        config = config or ReportConfig()
        scan = self.history.get_scan(scan_id)
        if scan is None:
            raise ValueError(f"Scan not found: {scan_id}")

        content = render_report(scan, config)
        _, extension = RENDERERS[config.format]
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        report_file = self.report_dir / f"gdpr_report_{scan_id}_{stamp}.{extension}"
        report_file.write_text(content, encoding="utf-8")
        return report_file


def generate_report(project_dir: Path, scan_id: int, format: str = "text") -> Path:
    """Convenience function to generate a report for a stored scan."""
    generator = ReportGenerator(project_dir)
    try:
        return generator.generate(scan_id, ReportConfig(format=format))
    finally:
        generator.close()

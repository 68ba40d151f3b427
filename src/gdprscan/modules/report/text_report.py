"""Plain-text report rendering."""

from __future__ import annotations

from typing import Any

from .grouping import format_scan_time
from .models import ReportConfig


def render_text_report(scan: dict[str, Any], config: ReportConfig | None = None) -> str:
    """Render a stored scan as a plain-text compliance report."""
    config = config or ReportConfig(format="text")
    violations = scan.get("violations") or []
    suggestions = scan.get("suggestions") or []

    lines = [
        "GDPR Compliance Report",
        "======================",
        f"URL: {scan.get('url', '')}",
        f"Score: {scan.get('score', 0)}/100",
        f"Scanned: {format_scan_time(scan)}",
        "",
        "VIOLATIONS:",
    ]
    lines.extend(f"- [{v.get('severity', '')}] {v.get('description', '')}" for v in violations)

    if config.include_suggestions:
        lines.append("")
        lines.append("RECOMMENDATIONS:")
        lines.extend(f"- {suggestion}" for suggestion in suggestions)

    stats = scan.get("stats")
    if config.include_stats and stats:
        lines.append("")
        lines.append(f"Total Cookies: {stats.get('totalCookies', 0)}")
        lines.append(f"Rules Checked: {stats.get('rulesChecked', 0)}")

    lines.append("")
    lines.append("Generated by gdprscan")
    return "\n".join(lines)

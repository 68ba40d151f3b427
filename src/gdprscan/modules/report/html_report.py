"""HTML report rendering."""

from __future__ import annotations

from html import escape
from typing import Any

from .grouping import compliance_status, format_scan_time, score_band
from .models import ReportConfig

STATUS_ICONS = {
    "Compliant": "&#9989;",
    "Partially Compliant": "&#9888;&#65039;",
    "Non-Compliant": "&#10060;",
}

REPORT_STYLE = """
    body { font-family: -apple-system, sans-serif; max-width: 800px; margin: 0 auto; padding: 40px; }
    h1 { color: #333; border-bottom: 2px solid #667eea; padding-bottom: 10px; }
    h2 { color: #666; margin-top: 30px; }
    .score { font-size: 72px; font-weight: bold; text-align: center; margin: 30px 0; }
    .score.high { color: #16a34a; }
    .score.medium { color: #f59e0b; }
    .score.low { color: #dc2626; }
    .violation { background: #fee2e2; padding: 15px; margin: 10px 0; border-left: 4px solid #dc2626; }
    .violation.high { border-color: #dc2626; }
    .violation.medium { border-color: #f59e0b; }
    .violation.low { border-color: #6b7280; }
    .suggestion { background: #dcfce7; padding: 15px; margin: 10px 0; border-left: 4px solid #16a34a; }
    .stats { background: #f3f4f6; padding: 20px; margin: 20px 0; border-radius: 8px; }
    @media print { body { padding: 20px; } }
"""


def render_violation_html(violation: dict[str, Any]) -> str:
    """Render one violation block."""
    severity = escape(str(violation.get("severity", "")))
    html = (
        f'    <div class="violation {severity}">\n'
        f"      <strong>{escape(str(violation.get('id', '')))}:</strong> "
        f"{escape(str(violation.get('description', '')))}<br>\n"
    )
    if violation.get("suggestion"):
        html += f"      <em>Recommendation: {escape(str(violation['suggestion']))}</em>\n"
    html += "    </div>\n"
    return html


def render_html_report(scan: dict[str, Any], config: ReportConfig | None = None) -> str:
    """Render a stored scan as a printable HTML report."""
    config = config or ReportConfig(format="html")
    score = int(scan.get("score", 0))
    status = compliance_status(score)
    violations = scan.get("violations") or []
    suggestions = scan.get("suggestions") or []

    html = f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>GDPR Compliance Report</title>
  <style>{REPORT_STYLE}  </style>
</head>
<body>
  <h1>GDPR Compliance Report</h1>
  <p><strong>Website:</strong> {escape(str(scan.get("url", "")))}</p>
  <p><strong>Generated:</strong> {escape(format_scan_time(scan))}</p>

  <div class="score {score_band(score)}">{score}/100</div>

  <h2>Compliance Status</h2>
  <p>{STATUS_ICONS[status]} {status}</p>
"""

    if violations:
        html += f"\n  <h2>Violations Found ({len(violations)})</h2>\n"
        for violation in violations:
            html += render_violation_html(violation)

    if config.include_suggestions and suggestions:
        html += "\n  <h2>Recommendations</h2>\n"
        for index, suggestion in enumerate(suggestions, start=1):
            html += (
                f'    <div class="suggestion"><strong>{index}.</strong> '
                f"{escape(str(suggestion))}</div>\n"
            )

    stats = scan.get("stats")
    if config.include_stats and stats:
        html += f"""
  <div class="stats">
    <h3>Scan Statistics</h3>
    <p><strong>Total Cookies:</strong> {int(stats.get("totalCookies", 0))}</p>
    <p><strong>Rules Checked:</strong> {int(stats.get("rulesChecked", 0))}</p>
  </div>
"""

    html += """
  <p style="color: #999; text-align: center; margin-top: 50px;">Generated by gdprscan</p>
</body>
</html>
"""
    return html

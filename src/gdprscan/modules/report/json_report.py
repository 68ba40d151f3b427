"""JSON report rendering."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from .grouping import compliance_status, severity_counts
from .models import ReportConfig


def render_json_report(scan: dict[str, Any], config: ReportConfig | None = None) -> str:
    """Render a stored scan plus summary metadata as JSON."""
    config = config or ReportConfig(format="json")
    violations = scan.get("violations") or []
    score = int(scan.get("score", 0))

    report_data: dict[str, Any] = {
        "report_metadata": {
            "generated_at": datetime.now().isoformat(),
            "tool": "gdprscan",
        },
        "scan": {
            "id": scan.get("id"),
            "url": scan.get("url"),
            "score": score,
            "status": compliance_status(score),
            "created_at": scan.get("createdAt"),
        },
        "summary": {
            "total_violations": len(violations),
            **severity_counts(violations),
        },
        "violations": violations,
    }
    if config.include_suggestions:
        report_data["suggestions"] = list(scan.get("suggestions") or [])
    if config.include_stats and scan.get("stats"):
        report_data["stats"] = scan["stats"]
    return json.dumps(report_data, indent=2)

"""Helpers for grouping and summarizing stored violations."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

SEVERITY_ORDER = ["high", "medium", "low"]


def group_by_severity(violations: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    """Group violations by normalized severity."""
    grouped: dict[str, list[dict[str, Any]]] = {severity: [] for severity in SEVERITY_ORDER}
    for violation in violations:
        severity = str(violation.get("severity", "")).lower()
        if severity in grouped:
            grouped[severity].append(violation)
    return grouped


def severity_counts(violations: list[dict[str, Any]]) -> dict[str, int]:
    return {severity: len(items) for severity, items in group_by_severity(violations).items()}


def compliance_status(score: int) -> str:
    """Map a score onto the three compliance bands."""
    if score >= 80:
        return "Compliant"
    if score >= 60:
        return "Partially Compliant"
    return "Non-Compliant"


def score_band(score: int) -> str:
    """CSS class for the score: high is good, low is bad."""
    if score >= 80:
        return "high"
    if score >= 60:
        return "medium"
    return "low"


def scan_time(scan: dict[str, Any]) -> datetime | None:
    """When the scan ran: stored ``createdAt`` or the result's epoch ``timestamp``."""
    created_at = scan.get("createdAt")
    if created_at:
        try:
            return datetime.fromisoformat(str(created_at))
        except ValueError:
            return None
    timestamp = scan.get("timestamp")
    if isinstance(timestamp, (int, float)):
        return datetime.fromtimestamp(timestamp / 1000, tz=UTC)
    return None


def format_scan_time(scan: dict[str, Any]) -> str:
    moment = scan_time(scan)
    return moment.strftime("%Y-%m-%d %H:%M:%S %Z").strip() if moment else "unknown"

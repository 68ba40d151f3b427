"""Packaging of findings into a ScanResult."""

from __future__ import annotations

from collections.abc import Sequence

from gdprscan.modules.rules import Finding

from .models import ScanResult, ScanStats
from .scoring import calculate_score


def collect_suggestions(findings: Sequence[Finding]) -> tuple[str, ...]:
    """Suggestions in finding order; repeated text is kept."""
    return tuple(finding.suggestion for finding in findings if finding.suggestion is not None)


def assemble(
    url: str,
    timestamp_millis: int,
    findings: Sequence[Finding],
    stats: ScanStats,
) -> ScanResult:
    """Build the final result for one scan."""
    return ScanResult(
        url=url,
        timestamp_millis=timestamp_millis,
        score=calculate_score(findings),
        findings=tuple(findings),
        suggestions=collect_suggestions(findings),
        stats=stats,
    )

"""Compliance score calculation."""

from __future__ import annotations

from collections.abc import Iterable

from gdprscan.modules.rules import Finding

MAX_SCORE = 100


def calculate_score(findings: Iterable[Finding]) -> int:
    """Start from 100 and deduct each finding's severity weight, floored at 0."""
    deduction = sum(finding.severity.weight for finding in findings)
    return max(0, MAX_SCORE - deduction)

"""Data models shared by the rule catalog and the scan engine."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from gdprscan.modules.document import DocumentModel


class Severity(str, Enum):
    """Severity tiers a rule can be registered with."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def weight(self) -> int:
        """Score deduction for one finding of this severity."""
        return {Severity.HIGH: 15, Severity.MEDIUM: 10, Severity.LOW: 5}[self]


@dataclass(frozen=True)
class Issue:
    """What a predicate reports when the page is not compliant."""

    issue: str
    suggestion: str | None = None
    evidence: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScanContext:
    """Per-scan inputs shared by every predicate."""

    now: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def timestamp_millis(self) -> int:
        return int(self.now.timestamp() * 1000)


Predicate = Callable[[DocumentModel, ScanContext], Issue | None]


@dataclass(frozen=True)
class Rule:
    """A registered compliance check."""

    id: str
    description: str
    severity: Severity
    check: Predicate


@dataclass(frozen=True)
class Finding:
    """Outcome of one rule that flagged the page."""

    rule_id: str
    description: str
    severity: Severity
    suggestion: str | None = None
    evidence: tuple[str, ...] = ()

    @classmethod
    def from_issue(cls, rule: Rule, issue: Issue) -> "Finding":
        return cls(
            rule_id=rule.id,
            description=issue.issue,
            severity=rule.severity,
            suggestion=issue.suggestion,
            evidence=tuple(issue.evidence),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.rule_id,
            "description": self.description,
            "severity": self.severity.value,
            "suggestion": self.suggestion,
        }
        if self.evidence:
            data["evidence"] = list(self.evidence)
        return data

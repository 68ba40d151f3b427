"""Data models for scan results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gdprscan.modules.rules import Finding


@dataclass(frozen=True)
class ScanStats:
    """Counters reported alongside a scan."""

    total_cookies: int = 0
    rules_checked: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"totalCookies": self.total_cookies, "rulesChecked": self.rules_checked}


@dataclass(frozen=True)
class ScanResult:
    """Complete, immutable output of one scan."""

    url: str
    timestamp_millis: int
    score: int
    findings: tuple[Finding, ...] = ()
    suggestions: tuple[str, ...] = ()
    stats: ScanStats = field(default_factory=ScanStats)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the field names the history API expects."""
        return {
            "url": self.url,
            "timestamp": self.timestamp_millis,
            "score": self.score,
            "violations": [finding.to_dict() for finding in self.findings],
            "suggestions": list(self.suggestions),
            "stats": self.stats.to_dict(),
        }

"""Rule engine: runs the catalog against one document snapshot."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime

from gdprscan.errors import DocumentUnavailableError
from gdprscan.modules.document import DocumentModel
from gdprscan.modules.rules import Finding, Rule, RuleCatalog, ScanContext, default_catalog

from .assembler import assemble
from .models import ScanResult, ScanStats

logger = logging.getLogger(__name__)

DEFAULT_RULE_BUDGET_MS = 250.0


def _utc_now() -> datetime:
    return datetime.now(UTC)


class RuleEngine:
    """Evaluate every rule of a catalog, in order, exactly once per scan."""

    def __init__(
        self,
        catalog: RuleCatalog | None = None,
        rule_budget_ms: float = DEFAULT_RULE_BUDGET_MS,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.catalog = catalog if catalog is not None else default_catalog()
        self.rule_budget_ms = rule_budget_ms
        self.clock = clock

    def scan(self, document: DocumentModel, context: ScanContext | None = None) -> ScanResult:
        """Scan one snapshot and return the assembled result.

        Raises ``DocumentUnavailableError`` when the snapshot itself cannot be
        read; failures inside individual rules never abort the scan.
        """
        context = context or ScanContext(now=self.clock())
        try:
            url = document.get_current_url()
            total_cookies = len(document.get_cookies())
        except DocumentUnavailableError:
            raise
        except Exception as exc:
            raise DocumentUnavailableError(f"Document snapshot is not readable: {exc}") from exc

        findings = self.evaluate(document, context)
        stats = ScanStats(total_cookies=total_cookies, rules_checked=len(self.catalog))
        result = assemble(url, context.timestamp_millis, findings, stats)
        logger.info(
            "Scanned %s: score %d, %d findings over %d rules",
            url or "<unknown>",
            result.score,
            len(findings),
            stats.rules_checked,
        )
        return result

    def evaluate(self, document: DocumentModel, context: ScanContext) -> list[Finding]:
        """Run every rule and return findings in catalog order."""
        findings: list[Finding] = []
        for rule in self.catalog:
            finding = self._run_rule(rule, document, context)
            if finding is not None:
                findings.append(finding)
        return findings

    def _run_rule(self, rule: Rule, document: DocumentModel, context: ScanContext) -> Finding | None:
        started = time.perf_counter()
        try:
            issue = rule.check(document, context)
        except Exception as exc:
            logger.warning("Rule %s could not complete: %s", rule.id, exc, exc_info=True)
            return self._inaccessible_finding(rule, exc)
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            if elapsed_ms > self.rule_budget_ms:
                logger.warning(
                    "Rule %s took %.1f ms (budget %.1f ms)",
                    rule.id,
                    elapsed_ms,
                    self.rule_budget_ms,
                )

        if issue is None:
            return None
        return Finding.from_issue(rule, issue)

    @staticmethod
    def _inaccessible_finding(rule: Rule, exc: Exception) -> Finding:
        return Finding(
            rule_id=rule.id,
            description=f"{rule.description}: check not accessible or corrupted",
            severity=rule.severity,
            evidence=(f"{type(exc).__name__}: {exc}",),
        )


def scan_document(document: DocumentModel, catalog: RuleCatalog | None = None) -> ScanResult:
    """Convenience function to scan a document with a fresh engine."""
    return RuleEngine(catalog).scan(document)

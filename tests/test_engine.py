"""Tests for the rule engine, scoring and result assembly."""

import logging
import time
from datetime import UTC, datetime

import pytest

from gdprscan.errors import DocumentUnavailableError
from gdprscan.modules.document import HtmlDocument
from gdprscan.modules.rules import Finding, Issue, Rule, RuleCatalog, Severity
from gdprscan.modules.scanner import (
    RuleEngine,
    ScanStats,
    assemble,
    calculate_score,
    collect_suggestions,
    scan_document,
)

FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


def flag(text: str, suggestion: str | None = None):
    return lambda document, context: Issue(text, suggestion=suggestion)


def passes(document, context):
    return None


def explode(document, context):
    raise RuntimeError("storage access denied")


class BrokenDocument(HtmlDocument):
    def get_cookies(self):
        raise OSError("page went away")


@pytest.fixture
def engine() -> RuleEngine:
    return RuleEngine(clock=lambda: FIXED_NOW)


class TestScoring:
    """Test compliance score calculation."""

    def finding(self, severity: Severity) -> Finding:
        return Finding(rule_id=f"r-{severity.value}", description="x", severity=severity)

    def test_no_findings(self):
        assert calculate_score([]) == 100

    def test_weighted_deduction(self):
        findings = [
            self.finding(Severity.HIGH),
            self.finding(Severity.HIGH),
            self.finding(Severity.MEDIUM),
        ]
        assert calculate_score(findings) == 60

    def test_floor_at_zero(self):
        assert calculate_score([self.finding(Severity.HIGH)] * 10) == 0


class TestAssembly:
    """Test suggestion collection and result assembly."""

    def test_suggestions_keep_order_and_duplicates(self):
        findings = [
            Finding("a", "A", Severity.LOW, suggestion="Same advice"),
            Finding("b", "B", Severity.LOW),
            Finding("c", "C", Severity.LOW, suggestion="Same advice"),
        ]
        assert collect_suggestions(findings) == ("Same advice", "Same advice")

    def test_assemble_wire_format(self):
        findings = [Finding("cookie-wall", "Wall", Severity.HIGH, suggestion="Remove it", evidence=("x",))]
        result = assemble("https://a.example/", 123, findings, ScanStats(total_cookies=2, rules_checked=16))

        assert result.to_dict() == {
            "url": "https://a.example/",
            "timestamp": 123,
            "score": 85,
            "violations": [
                {
                    "id": "cookie-wall",
                    "description": "Wall",
                    "severity": "high",
                    "suggestion": "Remove it",
                    "evidence": ["x"],
                }
            ],
            "suggestions": ["Remove it"],
            "stats": {"totalCookies": 2, "rulesChecked": 16},
        }


class TestRuleEngine:
    """Test full scans through the engine."""

    def test_compliant_page(self, engine, compliant_document):
        result = engine.scan(compliant_document)

        assert result.score == 100
        assert result.findings == ()
        assert result.suggestions == ()
        assert result.url == "https://shop.example.com/"
        assert result.timestamp_millis == int(FIXED_NOW.timestamp() * 1000)
        assert result.stats == ScanStats(total_cookies=1, rules_checked=16)

    def test_bare_page_floors_score(self, engine, bare_document):
        result = engine.scan(bare_document)

        assert result.score == 0
        assert result.stats.rules_checked == 16
        assert [f.rule_id for f in result.findings] == [
            "cookie-consent",
            "privacy-link",
            "consent-storage",
            "data-subject-rights",
            "right-to-access",
            "right-to-portability",
            "international-transfer",
            "cookie-categories",
            "dpo-contact",
            "data-retention",
            "legal-basis",
        ]
        assert len(result.suggestions) == sum(1 for f in result.findings if f.suggestion)

    def test_findings_carry_rule_severity(self, engine, bare_document):
        result = engine.scan(bare_document)
        by_id = {f.rule_id: f for f in result.findings}
        assert by_id["cookie-consent"].severity is Severity.HIGH
        assert by_id["data-retention"].severity is Severity.LOW

    def test_custom_catalog_score(self, bare_document):
        catalog = RuleCatalog(
            [
                Rule("h1", "High one", Severity.HIGH, flag("first")),
                Rule("ok", "Passing", Severity.HIGH, passes),
                Rule("h2", "High two", Severity.HIGH, flag("second")),
                Rule("m1", "Medium", Severity.MEDIUM, flag("third")),
            ]
        )
        result = RuleEngine(catalog).scan(bare_document)

        assert result.score == 60
        assert [f.description for f in result.findings] == ["first", "second", "third"]
        assert result.stats.rules_checked == 4

    def test_duplicate_suggestions_kept(self, bare_document):
        catalog = RuleCatalog(
            [
                Rule("a", "A", Severity.LOW, flag("a", "Add a privacy page")),
                Rule("b", "B", Severity.LOW, flag("b", "Add a privacy page")),
            ]
        )
        result = RuleEngine(catalog).scan(bare_document)
        assert result.suggestions == ("Add a privacy page", "Add a privacy page")

    def test_failing_rule_is_isolated(self, bare_document, caplog):
        catalog = RuleCatalog(
            [
                Rule("before", "Before", Severity.LOW, flag("before")),
                Rule("broken", "Consent record readable", Severity.HIGH, explode),
                Rule("after", "After", Severity.LOW, flag("after")),
            ]
        )
        with caplog.at_level(logging.WARNING):
            result = RuleEngine(catalog).scan(bare_document)

        assert [f.rule_id for f in result.findings] == ["before", "broken", "after"]
        broken = result.findings[1]
        assert broken.description == "Consent record readable: check not accessible or corrupted"
        assert broken.severity is Severity.HIGH
        assert broken.evidence == ("RuntimeError: storage access denied",)
        assert result.score == 100 - 15 - 5 - 5
        assert "broken" in caplog.text

    def test_corrupt_consent_record(self, engine, compliant_document):
        doc = HtmlDocument(
            html=str(compliant_document.soup),
            url=compliant_document.get_current_url(),
            cookies=compliant_document.get_cookies(),
            local_entries={"cookie_consent": "{broken"},
        )
        result = engine.scan(doc)

        assert [f.rule_id for f in result.findings] == ["consent-storage"]
        assert result.findings[0].description == (
            "Cookie consent not stored/retrievable: check not accessible or corrupted"
        )
        assert result.score == 85

    def test_deterministic(self, engine, bare_document):
        assert engine.scan(bare_document) == engine.scan(bare_document)

    def test_unreadable_document(self, engine):
        with pytest.raises(DocumentUnavailableError, match="page went away"):
            engine.scan(BrokenDocument("<p>x</p>"))

    def test_slow_rule_logged(self, bare_document, caplog):
        def slow(document, context):
            time.sleep(0.02)
            return None

        catalog = RuleCatalog([Rule("slow", "Slow", Severity.LOW, slow)])
        with caplog.at_level(logging.WARNING):
            result = RuleEngine(catalog, rule_budget_ms=1).scan(bare_document)

        assert result.score == 100
        assert "Rule slow took" in caplog.text

    def test_scan_document_uses_default_catalog(self, compliant_document):
        assert scan_document(compliant_document).stats.rules_checked == 16

    def test_tracker_cookie_flagged_end_to_end(self, engine):
        doc = HtmlDocument("<body></body>", cookies=["_ga=GA1.2.1; max-age=99999999"])

        rule_ids = [f.rule_id for f in engine.scan(doc).findings]

        assert "third-party-cookies" in rule_ids
        assert "cookie-duration" in rule_ids
        assert doc.get_cookies() == ("_ga=GA1.2.1; max-age=99999999",)

    def test_short_first_party_cookie_not_flagged(self, engine):
        doc = HtmlDocument("<body></body>", cookies=["session=1; max-age=3600"])

        result = engine.scan(doc)
        rule_ids = [f.rule_id for f in result.findings]

        assert "third-party-cookies" not in rule_ids
        assert "cookie-duration" not in rule_ids
        assert result.stats.total_cookies == 1

"""Ordered registry of the compliance rules."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .consent import (
    check_cookie_categories,
    check_cookie_consent,
    check_cookie_policy_link,
    check_cookie_wall,
)
from .cookies import check_cookie_duration, check_third_party_cookies
from .disclosures import (
    check_data_retention,
    check_double_opt_in,
    check_international_transfer,
    check_legal_basis,
    check_right_to_access,
    check_right_to_portability,
)
from .footer import check_data_subject_rights, check_dpo_contact, check_privacy_link
from .models import Rule, Severity
from .storage import check_consent_storage


class RuleCatalog:
    """Fixed, ordered collection of rules with unique ids."""

    def __init__(self, rules: Iterable[Rule]):
        ordered: list[Rule] = []
        seen: set[str] = set()
        for rule in rules:
            if rule.id in seen:
                raise ValueError(f"Duplicate rule id: {rule.id}")
            seen.add(rule.id)
            ordered.append(rule)
        self._rules = tuple(ordered)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(rule.id for rule in self._rules)

    def get(self, rule_id: str) -> Rule | None:
        """Look up a rule by id."""
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        return None

    def extended(self, rules: Iterable[Rule]) -> "RuleCatalog":
        """Return a new catalog with ``rules`` appended after the current ones."""
        return RuleCatalog((*self._rules, *rules))


DEFAULT_RULES: tuple[Rule, ...] = (
    Rule(
        "cookie-consent",
        "Cookie consent banner missing or not compliant",
        Severity.HIGH,
        check_cookie_consent,
    ),
    Rule(
        "cookie-wall",
        "Cookie wall detected (blocks access without consent)",
        Severity.HIGH,
        check_cookie_wall,
    ),
    Rule(
        "cookie-duration",
        "Cookies stored for longer than necessary",
        Severity.MEDIUM,
        check_cookie_duration,
    ),
    Rule(
        "third-party-cookies",
        "Third-party cookies detected without proper consent",
        Severity.MEDIUM,
        check_third_party_cookies,
    ),
    Rule(
        "privacy-link",
        "Privacy policy link missing or hard to find",
        Severity.HIGH,
        check_privacy_link,
    ),
    Rule(
        "consent-storage",
        "Cookie consent not stored/retrievable",
        Severity.HIGH,
        check_consent_storage,
    ),
    Rule(
        "data-subject-rights",
        'No "right to be forgotten" or data export mechanism',
        Severity.MEDIUM,
        check_data_subject_rights,
    ),
    Rule(
        "right-to-access",
        "No mechanism for users to request access to their data",
        Severity.MEDIUM,
        check_right_to_access,
    ),
    Rule(
        "right-to-portability",
        "No mention of right to data portability",
        Severity.LOW,
        check_right_to_portability,
    ),
    Rule(
        "international-transfer",
        "No mention of international data transfer rights",
        Severity.LOW,
        check_international_transfer,
    ),
    Rule(
        "cookie-categories",
        "Cookies not categorized (necessary, analytics, marketing)",
        Severity.MEDIUM,
        check_cookie_categories,
    ),
    Rule(
        "dpo-contact",
        "No Data Protection Officer contact information",
        Severity.MEDIUM,
        check_dpo_contact,
    ),
    Rule(
        "data-retention",
        "No mention of data retention period",
        Severity.LOW,
        check_data_retention,
    ),
    Rule(
        "legal-basis",
        "No mention of legal basis for data processing",
        Severity.MEDIUM,
        check_legal_basis,
    ),
    Rule(
        "double-opt-in",
        "No double opt-in for email subscriptions",
        Severity.LOW,
        check_double_opt_in,
    ),
    Rule(
        "cookie-policy-link",
        "Cookie policy link not in consent banner",
        Severity.MEDIUM,
        check_cookie_policy_link,
    ),
)


def default_catalog() -> RuleCatalog:
    """Return the built-in catalog."""
    return RuleCatalog(DEFAULT_RULES)

"""Rule catalog for gdprscan - independent compliance predicates."""

from .catalog import DEFAULT_RULES, RuleCatalog, default_catalog
from .models import Finding, Issue, Rule, ScanContext, Severity

__all__ = [
    "DEFAULT_RULES",
    "Finding",
    "Issue",
    "Rule",
    "RuleCatalog",
    "ScanContext",
    "Severity",
    "default_catalog",
]

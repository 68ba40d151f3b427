"""Scanner module for gdprscan - rule engine, scoring and result assembly."""

from .assembler import assemble, collect_suggestions
from .engine import RuleEngine, scan_document
from .models import ScanResult, ScanStats
from .scoring import calculate_score

__all__ = [
    "RuleEngine",
    "ScanResult",
    "ScanStats",
    "assemble",
    "calculate_score",
    "collect_suggestions",
    "scan_document",
]

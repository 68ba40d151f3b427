"""Checks over the cookie jar."""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

from gdprscan.modules.document import DocumentModel

from .models import Issue, ScanContext

# 13 months expressed as 394 days; max-age is in seconds
MAX_COOKIE_AGE_DAYS = 394
MAX_COOKIE_AGE_SECONDS = MAX_COOKIE_AGE_DAYS * 24 * 60 * 60
MAX_COOKIE_MONTHS = 13

TRACKER_NAME_FRAGMENTS = ("_ga", "_gid", "fbp", "fbc", "tr", "_fbp", "_gcl")

MAX_AGE_PATTERN = re.compile(r"max-age=(\d+)", re.IGNORECASE)
EXPIRES_PATTERN = re.compile(r"expires=([^;]+)", re.IGNORECASE)


@dataclass(frozen=True)
class CookieInfo:
    """One parsed cookie string."""

    name: str
    value: str
    attributes: dict[str, str] = field(default_factory=dict)


def parse_cookie(raw: str) -> CookieInfo:
    """Split ``name=value; attr=x`` into name, value and lower-cased attributes."""
    parts = [part.strip() for part in raw.split(";")]
    name, _, value = parts[0].partition("=")
    attributes: dict[str, str] = {}
    for part in parts[1:]:
        if not part:
            continue
        key, _, attr_value = part.partition("=")
        attributes[key.strip().lower()] = attr_value.strip()
    return CookieInfo(name=name.strip(), value=value.strip(), attributes=attributes)


def add_months(moment: datetime, months: int) -> datetime:
    """Calendar-aware month addition, clamping the day to the target month."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def parse_cookie_date(value: str) -> datetime | None:
    """Parse an ``expires`` attribute; ``None`` when it is not a date."""
    value = value.strip()
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def is_long_lived(raw_cookie: str, now: datetime) -> bool:
    """True when max-age exceeds the threshold or expires is over 13 months out.

    max-age wins over expires when both are present.
    """
    max_age = MAX_AGE_PATTERN.search(raw_cookie)
    if max_age:
        return int(max_age.group(1)) > MAX_COOKIE_AGE_SECONDS

    expires = EXPIRES_PATTERN.search(raw_cookie)
    if expires:
        expires_at = parse_cookie_date(expires.group(1))
        if expires_at is None:
            return False
        return expires_at > add_months(now, MAX_COOKIE_MONTHS)
    return False


def check_cookie_duration(document: DocumentModel, context: ScanContext) -> Issue | None:
    """Flag cookies that outlive the 13 month ceiling."""
    long_lived = [
        parse_cookie(cookie).name
        for cookie in document.get_cookies()
        if is_long_lived(cookie, context.now)
    ]
    if long_lived:
        return Issue(
            f"Found {len(long_lived)} long-lived cookies",
            suggestion="Reduce cookie lifetime to 13 months maximum",
            evidence=tuple(long_lived),
        )
    return None


def check_third_party_cookies(document: DocumentModel, context: ScanContext) -> Issue | None:
    """Flag cookies named like well-known trackers."""
    trackers = []
    for cookie in document.get_cookies():
        name = parse_cookie(cookie).name.lower()
        if any(fragment in name for fragment in TRACKER_NAME_FRAGMENTS):
            trackers.append(name)

    if trackers:
        return Issue(
            f"Found {len(trackers)} third-party tracking cookies",
            suggestion="Third-party cookies require explicit, informed consent",
            evidence=tuple(trackers),
        )
    return None

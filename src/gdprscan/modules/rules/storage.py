"""Checks over the persisted consent record."""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from typing import Any

from gdprscan.modules.document import DocumentModel

from .models import Issue, ScanContext

CONSENT_KEY_HINTS = ("consent", "cookie", "gdpr")
CONSENT_MAX_AGE = timedelta(days=365)


def find_consent_key(entries) -> str | None:
    """Return the first storage key that looks like a consent record."""
    for key in entries:
        lowered = key.lower()
        if any(hint in lowered for hint in CONSENT_KEY_HINTS):
            return key
    return None


def parse_consent_timestamp(value: Any) -> datetime:
    """Parse epoch milliseconds or an ISO-8601 string.

    Raises ``ValueError`` for anything else.
    """
    if isinstance(value, bool):
        raise ValueError(f"Unsupported consent timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return datetime.fromtimestamp(int(text) / 1000, tz=UTC)
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed
    raise ValueError(f"Unsupported consent timestamp: {value!r}")


def check_consent_storage(document: DocumentModel, context: ScanContext) -> Issue | None:
    """A consent decision must be stored, complete and under a year old.

    A corrupt record raises; the engine reports it as inaccessible.
    """
    entries = document.get_local_entries()
    consent_key = find_consent_key(entries)
    if consent_key is None:
        return Issue("No consent found in localStorage")

    consent = json.loads(entries[consent_key])
    if not isinstance(consent, dict) or not consent.get("timestamp") or not consent.get("accepted"):
        return Issue("Consent not properly stored", evidence=(consent_key,))

    consent_date = parse_consent_timestamp(consent["timestamp"])
    if context.now - consent_date > CONSENT_MAX_AGE:
        return Issue(
            "Consent stored is expired (>1 year)",
            evidence=(consent_key, consent_date.isoformat()),
        )
    return None

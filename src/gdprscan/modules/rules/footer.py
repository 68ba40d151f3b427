"""Checks over the page footer: privacy link, data rights and DPO contact."""

from __future__ import annotations

import re

from gdprscan.modules.document import DocumentModel

from .models import Issue, ScanContext

DELETION_WORDS = ("delete", "forget")
EXPORT_WORDS = ("export", "download")
DPO_WORDS = ("dpo", "data protection", "protection officer", "privacy officer")
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


def find_footer(document: DocumentModel):
    """Return the first ``<footer>`` element, if any."""
    footers = document.query_elements("footer")
    return footers[0] if footers else None


def check_privacy_link(document: DocumentModel, context: ScanContext) -> Issue | None:
    """The footer must carry a visible privacy policy link."""
    footer = find_footer(document)
    if footer is None:
        return Issue("No footer found (privacy policy likely missing)")

    privacy_link = None
    for link in document.query_elements("a", footer):
        href = str(link.get("href") or "").lower()
        if "privacy" in document.get_text_content(link) or "privacy" in href:
            privacy_link = link

    if privacy_link is None:
        return Issue("Privacy policy link not found in footer")

    if document.get_computed_style(privacy_link).hidden:
        return Issue(
            "Privacy policy link is hidden",
            evidence=(str(privacy_link.get("href") or ""),),
        )
    return None


def check_data_subject_rights(document: DocumentModel, context: ScanContext) -> Issue | None:
    """The footer must offer both data deletion and data export."""
    footer = find_footer(document)
    if footer is None:
        return Issue("Cannot check data rights (no footer)")

    footer_text = document.get_text_content(footer)
    has_deletion = any(word in footer_text for word in DELETION_WORDS)
    has_export = any(word in footer_text for word in EXPORT_WORDS)
    if not has_deletion or not has_export:
        return Issue(
            "Missing data deletion/export options",
            suggestion='Add "Data Deletion Request" or "Download My Data" link',
        )
    return None


def check_dpo_contact(document: DocumentModel, context: ScanContext) -> Issue | None:
    """The footer must name a DPO or give a contact email."""
    footer = find_footer(document)
    if footer is None:
        return Issue("Cannot check DPO contact (no footer)")

    footer_text = document.get_text_content(footer)
    has_dpo = any(word in footer_text for word in DPO_WORDS)
    has_email = EMAIL_PATTERN.search(footer_text) is not None
    if not has_dpo and not has_email:
        return Issue(
            "No DPO contact information found",
            suggestion="Add Data Protection Officer email or contact form",
        )
    return None

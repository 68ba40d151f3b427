"""Checks for privacy disclosures in the page body."""

from __future__ import annotations

from gdprscan.modules.document import DocumentModel

from .models import Issue, ScanContext

ACCESS_REQUEST_PHRASES = (
    "access my data",
    "request my data",
    "data subject access request",
    "dsar",
)
PORTABILITY_PHRASES = ("portability", "portable", "export my data")
TRANSFER_PHRASES = ("transfer", "international")
RETENTION_PHRASES = ("retention", "how long", "keep data", "store data")
LEGAL_BASIS_PHRASES = (
    "legal basis",
    "lawful basis",
    "consent as legal",
    "legitimate interest",
)
OPT_IN_CONFIRMATION_PHRASES = ("confirm", "verify email", "double opt")


def body_mentions(document: DocumentModel, phrases: tuple[str, ...]) -> bool:
    """True when the body text contains any of ``phrases``."""
    body_text = document.get_text_content()
    return any(phrase in body_text for phrase in phrases)


def check_right_to_access(document: DocumentModel, context: ScanContext) -> Issue | None:
    if body_mentions(document, ACCESS_REQUEST_PHRASES):
        return None
    return Issue(
        "No mechanism for data access requests found",
        suggestion='Add "Request My Data" form or email contact',
    )


def check_right_to_portability(document: DocumentModel, context: ScanContext) -> Issue | None:
    if body_mentions(document, PORTABILITY_PHRASES):
        return None
    return Issue(
        "Right to data portability not mentioned",
        suggestion="Inform users of their right to receive their data in portable format",
    )


def check_international_transfer(document: DocumentModel, context: ScanContext) -> Issue | None:
    if body_mentions(document, TRANSFER_PHRASES):
        return None
    return Issue(
        "No mention of international data transfer rights",
        suggestion='Add "Your data may be transferred internationally" to privacy policy',
    )


def check_data_retention(document: DocumentModel, context: ScanContext) -> Issue | None:
    if body_mentions(document, RETENTION_PHRASES):
        return None
    return Issue(
        "No mention of data retention period",
        suggestion="State how long you retain personal data and the criteria used",
    )


def check_legal_basis(document: DocumentModel, context: ScanContext) -> Issue | None:
    if body_mentions(document, LEGAL_BASIS_PHRASES):
        return None
    return Issue(
        "No mention of legal basis for processing",
        suggestion=(
            "State legal basis for processing (consent, legitimate interest, contract, "
            "legal obligation)"
        ),
    )


def check_double_opt_in(document: DocumentModel, context: ScanContext) -> Issue | None:
    """Email sign-up forms should be backed by a confirmation step."""
    has_email_form = any(
        document.query_elements('input[type="email"]', form)
        for form in document.query_elements("form")
    )
    if not has_email_form or body_mentions(document, OPT_IN_CONFIRMATION_PHRASES):
        return None
    return Issue(
        "Email form may lack double opt-in verification",
        suggestion="Implement double opt-in for email marketing subscriptions",
    )

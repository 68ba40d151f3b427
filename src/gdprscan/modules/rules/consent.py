"""Checks against the cookie consent UI and cookie wall wording."""

from __future__ import annotations

from gdprscan.modules.document import DocumentModel

from .models import Issue, ScanContext

CONSENT_UI_SELECTOR = (
    '[class*="cookie"], [id*="cookie"], [aria-label*="cookie"], '
    '[class*="consent"], [id*="consent"]'
)

COOKIE_WALL_PHRASES = (
    "you must accept cookies to continue",
    "cookies are required to access this site",
    "accept cookies to proceed",
    "please accept cookies to continue",
)

COOKIE_CATEGORY_WORDS = ("necessary", "analytics", "marketing", "functional")
POLICY_LINK_PHRASES = ("more information", "learn more")


def _link_href(link) -> str:
    return str(link.get("href") or "").lower()


def check_cookie_consent(document: DocumentModel, context: ScanContext) -> Issue | None:
    """A consent banner must exist and offer both reject and necessary-only choices."""
    banners = document.query_elements(CONSENT_UI_SELECTOR)
    if not banners:
        return Issue("No cookie consent banner found")

    has_reject = False
    has_necessary_only = False
    for banner in banners:
        text = document.get_text_content(banner)
        if "reject" in text:
            has_reject = True
        if "necessary" in text or "essential only" in text:
            has_necessary_only = True

    if not has_reject or not has_necessary_only:
        return Issue('Cookie banner missing "Reject All" or "Necessary Only" options')
    return None


def check_cookie_wall(document: DocumentModel, context: ScanContext) -> Issue | None:
    """Flag wording that makes cookie acceptance a condition of access."""
    body_text = document.get_text_content()
    for phrase in COOKIE_WALL_PHRASES:
        if phrase in body_text:
            return Issue(
                "Cookie wall detected - illegal under GDPR",
                suggestion="Cookie walls violate GDPR. Consent must be freely given.",
                evidence=(phrase,),
            )
    return None


def check_cookie_categories(document: DocumentModel, context: ScanContext) -> Issue | None:
    """Require a cookie policy link and cookie category wording."""
    links = document.query_elements('a[href*="cookie"], a[href*="policy"]')
    has_cookie_policy = any(
        "cookie" in document.get_text_content(link) or "cookie" in _link_href(link)
        for link in links
    )
    if not has_cookie_policy:
        return Issue(
            "No cookie policy found",
            suggestion="Create a cookie policy page categorizing cookies",
        )

    body_text = document.get_text_content()
    if not any(word in body_text for word in COOKIE_CATEGORY_WORDS):
        return Issue(
            "Cookies not properly categorized",
            suggestion="Categorize cookies into: necessary, analytics, marketing, functional",
        )
    return None


def check_cookie_policy_link(document: DocumentModel, context: ScanContext) -> Issue | None:
    """A consent banner must link to the cookie policy."""
    banners = document.query_elements(CONSENT_UI_SELECTOR)
    if not banners:
        # Missing banner is reported by cookie-consent
        return None

    for banner in banners:
        for link in document.query_elements("a", banner):
            text = document.get_text_content(link)
            if "policy" in text or "policy" in _link_href(link):
                return None
            if any(phrase in text for phrase in POLICY_LINK_PHRASES):
                return None

    return Issue(
        "Cookie banner lacks link to cookie policy",
        suggestion='Add "Cookie Policy" link to consent banner',
    )

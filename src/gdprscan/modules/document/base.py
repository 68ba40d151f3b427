"""Read-only page view consumed by the rule catalog."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class StyleInfo:
    """Visibility-relevant computed style of one element."""

    display: str = "inline"
    visibility: str = "visible"

    @property
    def hidden(self) -> bool:
        return self.display == "none" or self.visibility == "hidden"


class DocumentModel(Protocol):
    """Capability contract every page adapter must provide.

    Implementations are snapshots: repeated calls during one scan return the
    same data and never touch the live page.
    """

    def get_text_content(self, scope: Any = None) -> str:
        """Return whitespace-normalized, case-folded text of ``scope`` (or the body)."""

    def query_elements(self, selector: str, scope: Any = None) -> Sequence[Any]:
        """Return elements matching a CSS selector, in document order."""

    def get_cookies(self) -> Sequence[str]:
        """Return raw cookie strings, attributes included."""

    def get_local_entries(self) -> Mapping[str, str]:
        """Return persisted client storage entries."""

    def get_computed_style(self, element: Any) -> StyleInfo:
        """Return the effective display/visibility of ``element``."""

    def get_current_url(self) -> str:
        """Return the URL the snapshot was taken from."""

"""Document module for gdprscan - read-only page snapshots."""

from .base import DocumentModel, StyleInfo
from .html_document import HtmlDocument
from .loader import document_from_mapping, document_from_response, fetch_document, load_snapshot

__all__ = [
    "DocumentModel",
    "HtmlDocument",
    "StyleInfo",
    "document_from_mapping",
    "document_from_response",
    "fetch_document",
    "load_snapshot",
]

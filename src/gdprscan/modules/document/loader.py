"""Acquire DocumentModel snapshots from files or live HTTP responses."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import yaml

from gdprscan.errors import DocumentUnavailableError
from gdprscan.tools.http import HTTPClient, HTTPResponse

from .html_document import HtmlDocument

logger = logging.getLogger(__name__)


def _coerce_cookies(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        # A single ``document.cookie`` style string
        return [part.strip() for part in raw.split(";") if part.strip()]
    if isinstance(raw, (list, tuple)):
        return [str(item) for item in raw]
    raise DocumentUnavailableError("Snapshot 'cookies' must be a list or a string")


def _coerce_local_entries(raw: Any) -> dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise DocumentUnavailableError("Snapshot 'local_storage' must be a mapping")
    entries = {}
    for key, value in raw.items():
        # Storage only holds strings; structured values were written as JSON
        entries[str(key)] = value if isinstance(value, str) else json.dumps(value)
    return entries


def document_from_mapping(data: dict[str, Any], base_dir: Path | None = None) -> HtmlDocument:
    """Build a document from a snapshot mapping."""
    html = data.get("html")
    html_file = data.get("html_file")
    if html is None and html_file:
        html_path = Path(html_file)
        if base_dir is not None and not html_path.is_absolute():
            html_path = base_dir / html_path
        try:
            html = html_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DocumentUnavailableError(f"Cannot read HTML file {html_path}: {exc}") from exc
    if html is None:
        raise DocumentUnavailableError("Snapshot has neither 'html' nor 'html_file'")

    return HtmlDocument(
        html=str(html),
        url=str(data.get("url", "")),
        cookies=_coerce_cookies(data.get("cookies")),
        local_entries=_coerce_local_entries(data.get("local_storage")),
    )


def load_snapshot(path: Path) -> HtmlDocument:
    """Load a YAML or JSON snapshot file into a document."""
    if not path.exists():
        raise DocumentUnavailableError(f"Snapshot not found: {path}")

    if path.suffix.lower() in {".html", ".htm"}:
        return HtmlDocument(html=path.read_text(encoding="utf-8"), url=path.resolve().as_uri())

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise DocumentUnavailableError(f"Snapshot {path} is not valid YAML/JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise DocumentUnavailableError(f"Snapshot at {path} is not a mapping")
    return document_from_mapping(data, base_dir=path.parent)


def document_from_response(response: HTTPResponse) -> HtmlDocument:
    """Wrap a fetched page; Set-Cookie headers become the cookie list."""
    cookies = list(response.set_cookies)
    if not cookies:
        cookies = [f"{name}={value}" for name, value in response.cookies.items()]
    return HtmlDocument(html=response.body, url=response.url, cookies=cookies)


async def fetch_document(url: str, timeout: float = 30.0) -> HtmlDocument:
    """Fetch ``url`` and return its snapshot."""
    try:
        async with HTTPClient(timeout=timeout) as client:
            response = await client.get(url)
    except httpx.HTTPError as exc:
        raise DocumentUnavailableError(f"Failed to fetch {url}: {exc}") from exc

    if not 200 <= response.status_code < 300:
        raise DocumentUnavailableError(f"Failed to fetch {url}: HTTP {response.status_code}")

    logger.debug("Fetched %s (%d bytes, %d cookies)", url, len(response.body), len(response.set_cookies))
    return document_from_response(response)

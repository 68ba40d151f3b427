"""Client for the scan history API."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from gdprscan.errors import BackendError

from .client import HTTPClient, HTTPResponse

logger = logging.getLogger(__name__)


class BackendClient:
    """Deliver scan results to a remote gdprscan API.

    Failures surface as ``BackendError`` and are never retried; the caller
    keeps its already computed result either way.
    """

    def __init__(self, api_url: str, timeout: float = 30.0, token: str | None = None):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.token = token

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @staticmethod
    def _decode(response: HTTPResponse) -> dict[str, Any]:
        if not 200 <= response.status_code < 300:
            raise BackendError(f"API error: {response.status_code}")
        try:
            return json.loads(response.body)
        except json.JSONDecodeError as exc:
            raise BackendError(f"API returned invalid JSON: {exc}") from exc

    async def save_scan(self, result: Any, user_id: int) -> int:
        """POST a scan result and return the stored scan id."""
        payload = dict(result.to_dict())
        payload["userId"] = user_id
        try:
            async with HTTPClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.api_url}/scan", json=payload, headers=self._headers()
                )
        except httpx.HTTPError as exc:
            raise BackendError(f"Failed to save scan: {exc}") from exc

        data = self._decode(response)
        scan_id = data.get("scanId")
        if scan_id is None:
            raise BackendError("API response missing scanId")
        logger.info("Scan for %s stored remotely as #%s", payload.get("url"), scan_id)
        return int(scan_id)

    async def get_history(self, user_id: int, limit: int | None = None) -> list[dict[str, Any]]:
        """Fetch a user's recent scans, newest first."""
        params: dict[str, Any] = {"userId": user_id}
        if limit is not None:
            params["limit"] = limit
        try:
            async with HTTPClient(timeout=self.timeout) as client:
                response = await client.get(
                    f"{self.api_url}/history", params=params, headers=self._headers()
                )
        except httpx.HTTPError as exc:
            raise BackendError(f"Failed to load history: {exc}") from exc

        return list(self._decode(response).get("scans", []))

    async def register_user(self, email: str) -> int:
        """Look up (or create) the remote user for ``email`` and return its id."""
        try:
            async with HTTPClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.api_url}/users", json={"email": email}, headers=self._headers()
                )
        except httpx.HTTPError as exc:
            raise BackendError(f"Failed to register user: {exc}") from exc

        user_id = self._decode(response).get("userId")
        if user_id is None:
            raise BackendError("API response missing userId")
        return int(user_id)

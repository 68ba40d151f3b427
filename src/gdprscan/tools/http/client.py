"""Async HTTP client used to capture pages."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

import httpx

DEFAULT_USER_AGENT = "gdprscan/0.1 (+compliance audit)"


@dataclass
class HTTPResponse:
    """Represents an HTTP response."""

    url: str
    status_code: int
    headers: dict[str, str]
    body: str
    cookies: dict[str, str]
    response_time: float
    set_cookies: list[str] = field(default_factory=list)
    content_type: str = ""


class HTTPClient:
    """Async HTTP client for page acquisition."""

    def __init__(
        self,
        timeout: float = 30.0,
        follow_redirects: bool = True,
        verify_ssl: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.timeout = timeout
        self.follow_redirects = follow_redirects
        self.verify_ssl = verify_ssl
        self.user_agent = user_agent
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=self.follow_redirects,
            verify=self.verify_ssl,
            headers={"User-Agent": self.user_agent},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> HTTPResponse:
        """Make an HTTP request."""
        if not self.client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        start = time.time()

        response = await self.client.request(
            method=method,
            url=url,
            headers=headers,
            params=params,
            json=json,
        )

        elapsed = time.time() - start

        return HTTPResponse(
            url=str(response.url),
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.text,
            cookies=dict(response.cookies),
            response_time=elapsed,
            set_cookies=response.headers.get_list("set-cookie"),
            content_type=response.headers.get("content-type", ""),
        )

    async def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> HTTPResponse:
        """Make a GET request."""
        return await self.request("GET", url, headers=headers, params=params)

    async def post(
        self,
        url: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> HTTPResponse:
        """Make a POST request with a JSON body."""
        return await self.request("POST", url, headers=headers, json=json)

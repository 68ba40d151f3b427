"""Tests for HTTP tools module."""

import json

import pytest
import respx
from httpx import ConnectError, Response

from gdprscan.errors import BackendError
from gdprscan.modules.rules import Finding, Severity
from gdprscan.modules.scanner import ScanStats, assemble
from gdprscan.tools.http import BackendClient, HTTPClient

API_URL = "https://api.example.com/api"


@pytest.fixture
def result():
    findings = [Finding("cookie-wall", "Wall", Severity.HIGH, suggestion="Remove the wall")]
    return assemble("https://shop.example.com/", 1768478400000, findings, ScanStats(1, 16))


class TestHTTPClient:
    """Test HTTPClient functionality."""

    @respx.mock
    async def test_get_request(self):
        """Test basic GET request."""
        respx.get("https://example.com/page").mock(return_value=Response(200, text="Hello World"))

        async with HTTPClient() as client:
            response = await client.get("https://example.com/page")

        assert response.status_code == 200
        assert response.body == "Hello World"
        assert response.url == "https://example.com/page"

    @respx.mock
    async def test_post_json(self):
        """Test POST request with a JSON body."""
        route = respx.post("https://example.com/api").mock(return_value=Response(201, text="Created"))

        async with HTTPClient() as client:
            response = await client.post("https://example.com/api", json={"key": "value"})

        assert response.status_code == 201
        assert json.loads(route.calls.last.request.content) == {"key": "value"}

    @respx.mock
    async def test_set_cookie_headers_kept_raw(self):
        """Test that every Set-Cookie header is preserved with its attributes."""
        respx.get("https://example.com/").mock(
            return_value=Response(
                200,
                text="OK",
                headers=[("Set-Cookie", "a=1; Max-Age=60"), ("Set-Cookie", "b=2; Path=/")],
            )
        )

        async with HTTPClient() as client:
            response = await client.get("https://example.com/")

        assert response.set_cookies == ["a=1; Max-Age=60", "b=2; Path=/"]

    async def test_requires_context_manager(self):
        with pytest.raises(RuntimeError):
            await HTTPClient().get("https://example.com/")


class TestBackendClient:
    """Test delivery to the history API."""

    @respx.mock
    async def test_save_scan(self, result):
        route = respx.post(f"{API_URL}/scan").mock(
            return_value=Response(200, json={"success": True, "scanId": 12, "message": "ok"})
        )

        scan_id = await BackendClient(API_URL, token="secret").save_scan(result, user_id=3)

        assert scan_id == 12
        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer secret"
        body = json.loads(request.content)
        assert body["userId"] == 3
        assert body["score"] == 85
        assert body["stats"] == {"totalCookies": 1, "rulesChecked": 16}
        assert body["violations"][0]["id"] == "cookie-wall"

    @respx.mock
    async def test_save_scan_server_error(self, result):
        respx.post(f"{API_URL}/scan").mock(
            return_value=Response(500, json={"success": False, "error": "db down"})
        )
        with pytest.raises(BackendError, match="500"):
            await BackendClient(API_URL).save_scan(result, user_id=3)

    @respx.mock
    async def test_save_scan_unreachable(self, result):
        respx.post(f"{API_URL}/scan").mock(side_effect=ConnectError("refused"))
        with pytest.raises(BackendError):
            await BackendClient(API_URL).save_scan(result, user_id=3)

    @respx.mock
    async def test_save_scan_missing_id(self, result):
        respx.post(f"{API_URL}/scan").mock(return_value=Response(200, json={"success": True}))
        with pytest.raises(BackendError, match="scanId"):
            await BackendClient(API_URL).save_scan(result, user_id=3)

    @respx.mock
    async def test_get_history(self):
        route = respx.get(f"{API_URL}/history").mock(
            return_value=Response(200, json={"scans": [{"id": 2}, {"id": 1}]})
        )

        scans = await BackendClient(API_URL + "/").get_history(3, limit=2)

        assert scans == [{"id": 2}, {"id": 1}]
        assert route.calls.last.request.url.params["userId"] == "3"
        assert route.calls.last.request.url.params["limit"] == "2"

    @respx.mock
    async def test_register_user(self):
        respx.post(f"{API_URL}/users").mock(
            return_value=Response(200, json={"success": True, "userId": 5, "tier": "free"})
        )
        assert await BackendClient(API_URL).register_user("dana@example.com") == 5

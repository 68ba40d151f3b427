"""Tests for the history HTTP API."""

from pathlib import Path

import pytest

from gdprscan.api import create_app


@pytest.fixture
def client(db_path: Path):
    app = create_app(db_path, history_limit=100)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def user_id(client) -> int:
    response = client.post("/api/users", json={"email": "dana@example.com"})
    return response.get_json()["userId"]


class TestHealth:
    """Test the health endpoint."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json()["status"] == "ok"


class TestUsers:
    """Test user registration."""

    def test_register_is_idempotent(self, client):
        first = client.post("/api/users", json={"email": "ops@example.com"}).get_json()
        second = client.post("/api/users", json={"email": "ops@example.com"}).get_json()

        assert first["success"] is True
        assert first["tier"] == "free"
        assert first["userId"] == second["userId"]

    def test_email_required(self, client):
        response = client.post("/api/users", json={})
        assert response.status_code == 400


class TestStoreScan:
    """Test POST /api/scan."""

    def test_store(self, client, user_id: int, sample_payload: dict):
        response = client.post("/api/scan", json={**sample_payload, "userId": user_id})

        body = response.get_json()
        assert response.status_code == 200
        assert body["success"] is True
        assert isinstance(body["scanId"], int)
        assert body["message"]

    @pytest.mark.parametrize("missing", ["url", "userId"])
    def test_missing_fields(self, client, user_id: int, sample_payload: dict, missing: str):
        payload = {**sample_payload, "userId": user_id}
        payload.pop(missing)

        response = client.post("/api/scan", json=payload)

        assert response.status_code == 400
        assert response.get_json()["success"] is False

    def test_unknown_user(self, client, sample_payload: dict):
        response = client.post("/api/scan", json={**sample_payload, "userId": 999})
        assert response.status_code == 400
        assert "No user" in response.get_json()["error"]


class TestHistory:
    """Test GET /api/history."""

    def test_newest_first(self, client, user_id: int, sample_payload: dict):
        for url in ("https://a.example/", "https://b.example/", "https://c.example/"):
            client.post("/api/scan", json={**sample_payload, "url": url, "userId": user_id})

        scans = client.get(f"/api/history?userId={user_id}&limit=2").get_json()["scans"]

        assert [scan["url"] for scan in scans] == ["https://c.example/", "https://b.example/"]
        assert scans[0]["violations"] == sample_payload["violations"]

    def test_user_required(self, client):
        assert client.get("/api/history").status_code == 400

    def test_empty_history(self, client, user_id: int):
        assert client.get(f"/api/history?userId={user_id}").get_json() == {"scans": []}


class TestExport:
    """Test POST /api/export and downloads."""

    def store(self, client, user_id: int, payload: dict) -> int:
        return client.post("/api/scan", json={**payload, "userId": user_id}).get_json()["scanId"]

    def test_export_text(self, client, user_id: int, sample_payload: dict):
        scan_id = self.store(client, user_id, sample_payload)

        body = client.post("/api/export", json={"scanId": scan_id, "userId": user_id}).get_json()

        assert body["success"] is True
        assert "Score: 75/100" in body["report"]
        assert "- [high] Cookie wall detected - illegal under GDPR" in body["report"]
        assert body["downloadUrl"].startswith(f"/api/download/{scan_id}")

    def test_export_other_users_scan(self, client, user_id: int, sample_payload: dict):
        scan_id = self.store(client, user_id, sample_payload)
        other = client.post("/api/users", json={"email": "eve@example.com"}).get_json()["userId"]

        response = client.post("/api/export", json={"scanId": scan_id, "userId": other})

        assert response.status_code == 404
        assert response.get_json() == {"error": "Scan not found"}

    def test_export_bad_format(self, client, user_id: int, sample_payload: dict):
        scan_id = self.store(client, user_id, sample_payload)
        response = client.post(
            "/api/export", json={"scanId": scan_id, "userId": user_id, "format": "pdf"}
        )
        assert response.status_code == 400

    def test_download(self, client, user_id: int, sample_payload: dict):
        scan_id = self.store(client, user_id, sample_payload)
        download_url = client.post(
            "/api/export", json={"scanId": scan_id, "userId": user_id, "format": "html"}
        ).get_json()["downloadUrl"]

        response = client.get(download_url)

        assert response.status_code == 200
        assert response.mimetype == "text/html"
        assert "attachment" in response.headers["Content-Disposition"]
        assert b"GDPR Compliance Report" in response.data

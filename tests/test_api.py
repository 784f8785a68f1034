"""Tests for the REST API, run against the mock provider."""

import pytest
from fastapi.testclient import TestClient

from lyricflow.api.routes import create_app


@pytest.fixture
def api() -> TestClient:
    return TestClient(create_app())


def generate(api, **overrides):
    body = {
        "text": "A high-energy sangeet song for my sister's wedding",
        "language": {"primary": "Telugu"},
        "settings": {"ceremony": "sangeet"},
        "use_mock": True,
    }
    body.update(overrides)
    response = api.post("/api/generate", json=body)
    assert response.status_code == 200
    return response.json()["job_id"]


class TestGenerateEndpoint:
    def test_mock_generation_completes(self, api):
        """Background tasks run before TestClient returns, so the job is already done."""
        job_id = generate(api)
        status = api.get(f"/api/status/{job_id}").json()

        assert status["status"] == "completed"
        assert [e["progress"] for e in status["events"]][-1] == 100
        assert status["events"][0]["agent"] == "IDLE"
        assert "[Chorus]" in status["result"]["lyrics"]
        assert status["result"]["stylePrompt"]
        assert status["result"]["compliance"]["verdict"] == "Safe"

    def test_camel_case_settings_accepted(self, api):
        job_id = generate(api, settings={"ceremony": "sangeet", "singerConfig": "Male Solo"})
        assert api.get(f"/api/status/{job_id}").json()["status"] == "completed"

    def test_bad_key_fails_with_code(self, api):
        job_id = generate(api, use_mock=False, api_key="not-a-key")
        status = api.get(f"/api/status/{job_id}").json()
        assert status["status"] == "failed"
        assert status["error_code"] == "MISSING_CREDENTIALS"
        assert status["events"] == []

    def test_short_request_fails_validation(self, api):
        job_id = generate(api, text="hey")
        status = api.get(f"/api/status/{job_id}").json()
        assert status["status"] == "failed"
        assert status["error_code"] == "CONFIGURATION"


class TestLookupEndpoints:
    def test_unknown_job_is_404(self, api):
        assert api.get("/api/status/does-not-exist").status_code == 404

    def test_scenarios_listed(self, api):
        categories = api.get("/api/scenarios").json()["categories"]
        wedding = next(c for c in categories if c["id"] == "wedding")
        sangeet = next(e for e in wedding["events"] if e["id"] == "sangeet")
        assert sangeet["defaultMood"] == "Energetic"

    def test_health(self, api):
        assert api.get("/api/health").json() == {"status": "ok"}

import pytest
from fastapi.testclient import TestClient

from api.main import app
from core.config import Settings, get_settings

client = TestClient(app)


@pytest.fixture
def settings(data_dir):
    configured = Settings(data_dir=str(data_dir))
    app.dependency_overrides[get_settings] = lambda: configured
    yield configured
    app.dependency_overrides.clear()


def test_stored_draft_readiness(settings):
    response = client.get("/cases/case-1/drafts/draft-1/readiness")
    assert response.status_code == 200
    assert response.json() == {"issues": [], "ignored": []}


def test_stored_draft_readiness_unknown_draft(settings):
    response = client.get("/cases/case-1/drafts/nope/readiness")
    assert response.status_code == 404


def test_stateless_analyze():
    payload = {
        "plain": "As held in Smith v Jones, the motion should be granted on [DATE].",
        "filing": {"service": {"enabled": True}, "ignoredIssueIds": ["caption:court_missing"]},
    }
    response = client.post("/readiness/analyze", json=payload)

    assert response.status_code == 200
    data = response.json()
    ids = {issue["id"] for issue in data["issues"]}
    assert "caption:court_missing" not in ids
    assert "service:recipients_missing" in ids
    assert any(i.startswith("bluebook_vdot:") for i in ids)
    assert data["ignored"] == ["caption:court_missing"]


def test_stateless_analyze_rejects_unknown_fields():
    response = client.post("/readiness/analyze", json={"bogus": True})
    assert response.status_code == 422


def test_stateless_analyze_accepts_camel_case_body():
    payload = {
        "draftTitle": "Motion",
        "plain": "Smith v Jones",
        "filing": {"ignoredIssueIds": []},
    }
    response = client.post("/readiness/analyze", json=payload)

    assert response.status_code == 200
    ids = {issue["id"] for issue in response.json()["issues"]}
    assert any(i.startswith("bluebook_vdot:") for i in ids)


def test_stateless_analyze_validation_error_envelope():
    response = client.post("/readiness/analyze", json={"bogus": True})
    assert response.status_code == 422
    body = response.json()
    assert list(body) == ["error"]
    assert "bogus" in body["error"]

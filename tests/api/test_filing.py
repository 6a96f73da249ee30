import pytest
from fastapi.testclient import TestClient

from api.main import app
from core.config import Settings, get_settings
from persistence.fs_store import FsCaseRepository

client = TestClient(app)


@pytest.fixture
def settings(data_dir):
    configured = Settings(data_dir=str(data_dir))
    app.dependency_overrides[get_settings] = lambda: configured
    yield configured
    app.dependency_overrides.clear()


def test_patch_filing_merges_sections(settings, data_dir):
    first = client.patch(
        "/cases/case-1/drafts/draft-1/filing",
        json={"service": {"enabled": True, "recipients": [{"name": "Acme", "method": "email"}]}},
    )
    assert first.status_code == 200

    second = client.patch(
        "/cases/case-1/drafts/draft-1/filing",
        json={"service": {"date": "May 2"}, "proposedOrder": {"enabled": True}},
    )
    body = second.json()
    assert body["service"]["enabled"] is True
    assert body["service"]["date"] == "May 2"
    assert body["service"]["recipients"] == [{"name": "Acme", "method": "email"}]
    assert body["proposedOrder"]["enabled"] is True

    stored = FsCaseRepository(data_dir).get_draft("case-1", "draft-1").filing_settings()
    assert stored.proposed_order_enabled


def test_patch_filing_unknown_draft(settings):
    response = client.patch("/cases/case-1/drafts/nope/filing", json={})
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_patch_filing_rejects_malformed_section(settings, data_dir):
    response = client.patch("/cases/case-1/drafts/draft-1/filing", json={"service": "yes"})

    assert response.status_code == 422
    assert response.json()["error"].startswith("Invalid filing settings:")
    stored = FsCaseRepository(data_dir).get_draft("case-1", "draft-1").filing_settings()
    assert not stored.service_enabled

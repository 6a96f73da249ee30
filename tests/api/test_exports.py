from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from api.main import app
from core.config import Settings, get_settings
from core.errors import DependencyMissingError
from services.exports import ExportedFile

client = TestClient(app)


@pytest.fixture
def settings(data_dir):
    configured = Settings(data_dir=str(data_dir))
    app.dependency_overrides[get_settings] = lambda: configured
    yield configured
    app.dependency_overrides.clear()


@patch("api.actions.exports.export_draft_pdf")
def test_export_pdf_headers(mock_export, settings):
    mock_export.return_value = ExportedFile(
        filename="draft-1.pdf", media_type="application/pdf", content=b"%PDF-1.7"
    )

    response = client.get("/cases/case-1/drafts/draft-1/export/pdf")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="draft-1.pdf"'
    assert response.content == b"%PDF-1.7"
    assert mock_export.call_args.kwargs["bates"] is None


@patch("api.actions.exports.export_draft_pdf")
def test_export_pdf_parses_bates_query(mock_export, settings):
    mock_export.return_value = ExportedFile("draft-1.pdf", "application/pdf", b"%PDF")

    client.get(
        "/cases/case-1/drafts/draft-1/export/pdf",
        params={"prefix": "DOE", "batesStart": "1", "batesWidth": "6"},
    )
    bates = mock_export.call_args.kwargs["bates"]
    assert (bates.prefix, bates.start, bates.width) == ("DOE", 1, 6)

    client.get(
        "/cases/case-1/drafts/draft-1/export/pdf",
        params={"prefix": "DOE", "batesStart": "0", "batesWidth": "6"},
    )
    assert mock_export.call_args.kwargs["bates"] is None


def test_export_pdf_unknown_draft_is_404(settings):
    response = client.get("/cases/case-1/drafts/nope/export/pdf")
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_export_pdf_bad_case_file_is_400(settings, data_dir):
    (data_dir / "cases" / "broken.json").write_text("{", encoding="utf-8")
    response = client.get("/cases/broken/drafts/d/export/pdf")
    assert response.status_code == 400
    assert "error" in response.json()


@patch("services.exports.require_fitz", side_effect=DependencyMissingError("Missing dependency: PyMuPDF"))
def test_export_pdf_missing_dependency_is_500(mock_require, settings):
    response = client.get("/cases/case-1/drafts/draft-1/export/pdf")
    assert response.status_code == 500
    assert response.json() == {"error": "Missing dependency: PyMuPDF"}


def test_export_docx(settings):
    response = client.get("/cases/case-1/drafts/draft-1/export/docx")
    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="draft-1.docx"'
    assert response.content[:2] == b"PK"


def test_export_requires_token_when_configured(data_dir):
    configured = Settings(data_dir=str(data_dir), api_tokens=["secret"])
    app.dependency_overrides[get_settings] = lambda: configured
    try:
        response = client.get("/cases/case-1/drafts/draft-1/export/docx")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

        wrong = client.get(
            "/cases/case-1/drafts/draft-1/export/docx",
            headers={"Authorization": "Bearer nope"},
        )
        assert wrong.status_code == 401

        ok = client.get(
            "/cases/case-1/drafts/draft-1/export/docx",
            headers={"Authorization": "Bearer secret"},
        )
        assert ok.status_code == 200
    finally:
        app.dependency_overrides.clear()


def test_export_pdf_with_unloadable_stamper_is_500(data_dir):
    configured = Settings(data_dir=str(data_dir), bates_stamper="no_such_module:stamp")
    app.dependency_overrides[get_settings] = lambda: configured
    try:
        response = client.get("/cases/case-1/drafts/draft-1/export/pdf")
        assert response.status_code == 500
        assert response.json() == {"error": "Bates stamper not available: no_such_module:stamp"}
    finally:
        app.dependency_overrides.clear()

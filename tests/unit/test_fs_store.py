import json

import pytest

from core.errors import UpstreamDataError
from persistence.fs_store import FsCaseRepository, FsSignatureStore
from schemas.filing import FilingSettings


def test_repository_reads_case_bundle(data_dir) -> None:
    repo = FsCaseRepository(data_dir)

    assert repo.get_case("case-1").title == "Doe v. Acme"
    assert repo.get_draft("case-1", "draft-1").display_title == "Motion to Compel"
    assert repo.get_draft("case-1", "missing") is None
    assert repo.get_intake("case-1").case_number == "24-CV-001"
    assert [p.name for p in repo.list_parties("case-1")] == ["Jane Doe", "Acme Corp"]
    assert repo.list_exhibits("case-1")[0].label == "Exhibit 1"
    assert repo.list_pinned("case-1") == []


def test_repository_missing_case(tmp_path) -> None:
    repo = FsCaseRepository(tmp_path)
    assert repo.get_case("nope") is None
    assert repo.get_draft("nope", "d") is None
    assert repo.list_parties("nope") == []


def test_repository_invalid_json_is_upstream_error(tmp_path) -> None:
    (tmp_path / "cases").mkdir()
    (tmp_path / "cases" / "bad.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(UpstreamDataError) as excinfo:
        FsCaseRepository(tmp_path).get_draft("bad", "d")
    assert excinfo.value.status_code == 400


def test_repository_schema_error_is_upstream_error(tmp_path) -> None:
    (tmp_path / "cases").mkdir()
    (tmp_path / "cases" / "bad.json").write_text(json.dumps({"drafts": []}), encoding="utf-8")
    with pytest.raises(UpstreamDataError):
        FsCaseRepository(tmp_path).get_case("bad")


def test_repository_rejects_path_like_case_ids(tmp_path) -> None:
    with pytest.raises(UpstreamDataError):
        FsCaseRepository(tmp_path).get_case("../etc")


def test_save_filing_settings_persists(data_dir) -> None:
    repo = FsCaseRepository(data_dir)
    settings = FilingSettings.model_validate({"proposedOrder": {"enabled": True, "title": "Order"}})

    repo.save_filing_settings("case-1", "draft-1", settings)

    reloaded = FsCaseRepository(data_dir).get_draft("case-1", "draft-1")
    assert reloaded.filing_settings().proposed_order.title == "Order"


def test_save_filing_settings_unknown_draft(data_dir) -> None:
    with pytest.raises(UpstreamDataError):
        FsCaseRepository(data_dir).save_filing_settings("case-1", "nope", FilingSettings())


def test_signature_store_download(tmp_path) -> None:
    target = tmp_path / "signatures" / "sigs" / "user" / "sig.png"
    target.parent.mkdir(parents=True)
    target.write_bytes(b"png-bytes")
    store = FsSignatureStore(tmp_path)

    assert store.download("sigs", "user/sig.png") == b"png-bytes"
    assert store.download("sigs", "user/missing.png") is None
    assert store.download("sigs", "../../cases/case-1.json") is None

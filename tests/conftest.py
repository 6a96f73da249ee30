# tests/conftest.py
import json

import pytest

from compiler.layout import LayoutOptions
from core.config import get_settings


def fake_measure(text: str, font: str, size: float) -> float:
    """Monospace stand-in for font metrics: every glyph is half an em wide."""
    return len(text) * size * 0.5


@pytest.fixture
def measure():
    return fake_measure


@pytest.fixture
def layout_options() -> LayoutOptions:
    return LayoutOptions()


@pytest.fixture(autouse=True)
def _clear_settings_cache(monkeypatch):
    # Keep a developer's .env/environment out of the assertions.
    for name in ("FILING_API_TOKENS", "FILING_DATA_DIR", "FILING_BATES_STAMPER"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _motion_doc(*paragraphs: str) -> dict:
    content = [
        {
            "type": "heading",
            "attrs": {"level": 2},
            "content": [{"type": "text", "text": "Motion to Compel"}],
        }
    ]
    for text in paragraphs or ("The plaintiff respectfully moves...",):
        content.append({"type": "paragraph", "content": [{"type": "text", "text": text}]})
    return {"type": "doc", "content": content}


@pytest.fixture
def case_bundle_payload() -> dict:
    return {
        "case": {"id": "case-1", "title": "Doe v. Acme"},
        "intake": {"venue": "Superior Court of California", "case_number": "24-CV-001"},
        "parties": [
            {"role": "plaintiff", "name": "Jane Doe"},
            {"role": "defendant", "name": "Acme Corp"},
        ],
        "exhibits": [{"label": "Exhibit 1", "sequence": 1, "title": "Lease"}],
        "pinned": [],
        "drafts": [
            {
                "id": "draft-1",
                "title": "Motion to Compel",
                "content": "The plaintiff respectfully moves...",
                "content_rich": _motion_doc(),
            }
        ],
    }


@pytest.fixture
def data_dir(tmp_path, case_bundle_payload):
    cases = tmp_path / "cases"
    cases.mkdir()
    (cases / "case-1.json").write_text(json.dumps(case_bundle_payload), encoding="utf-8")
    return tmp_path


@pytest.fixture
def motion_doc():
    """Factory for a heading + paragraphs editor tree."""
    return _motion_doc

"""Filesystem-backed case repository and signature store.

Layout under ``base_dir``::

    cases/<case_id>.json           one CaseBundle per case
    signatures/<bucket>/<path>     raw signature image bytes
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from core.errors import UpstreamDataError
from schemas.case import (
    CaseBundle,
    CaseExhibit,
    CaseIntake,
    CaseParty,
    CaseRecord,
    DraftRecord,
    PinnedAuthority,
)
from schemas.filing import FilingSettings

logger = logging.getLogger(__name__)


class FsCaseRepository:
    def __init__(self, base_dir: str | Path) -> None:
        self._base_dir = Path(base_dir)
        self._cases_dir = self._base_dir / "cases"

    @property
    def cases_dir(self) -> Path:
        return self._cases_dir

    def load_bundle(self, case_id: str) -> CaseBundle | None:
        path = self._case_path(case_id)
        if not path.is_file():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
            return CaseBundle.model_validate(payload)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise UpstreamDataError(str(exc)) from exc

    def save_bundle(self, bundle: CaseBundle) -> Path:
        path = self._case_path(bundle.case.id)
        path.parent.mkdir(parents=True, exist_ok=True)
        text = json.dumps(bundle.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2)
        path.write_text(text, encoding="utf-8")
        return path

    def get_case(self, case_id: str) -> CaseRecord | None:
        bundle = self.load_bundle(case_id)
        return bundle.case if bundle else None

    def get_draft(self, case_id: str, draft_id: str) -> DraftRecord | None:
        bundle = self.load_bundle(case_id)
        if bundle is None:
            return None
        return next((d for d in bundle.drafts if d.id == draft_id), None)

    def get_intake(self, case_id: str) -> CaseIntake | None:
        bundle = self.load_bundle(case_id)
        return bundle.intake if bundle else None

    def list_parties(self, case_id: str) -> list[CaseParty]:
        bundle = self.load_bundle(case_id)
        return list(bundle.parties) if bundle else []

    def list_exhibits(self, case_id: str) -> list[CaseExhibit]:
        bundle = self.load_bundle(case_id)
        return list(bundle.exhibits) if bundle else []

    def list_pinned(self, case_id: str) -> list[PinnedAuthority]:
        bundle = self.load_bundle(case_id)
        return list(bundle.pinned) if bundle else []

    def save_filing_settings(
        self, case_id: str, draft_id: str, settings: FilingSettings
    ) -> DraftRecord:
        bundle = self.load_bundle(case_id)
        if bundle is None:
            raise UpstreamDataError(f"Case not found: {case_id}")
        for index, draft in enumerate(bundle.drafts):
            if draft.id != draft_id:
                continue
            updated = draft.model_copy(update={"filing": settings})
            rich = updated.content_rich
            if isinstance(rich, dict) and isinstance(rich.get("attrs"), dict) and "filing" in rich["attrs"]:
                # Keep the editor-tree copy in sync; it takes precedence on read.
                attrs = {**rich["attrs"], "filing": settings.to_payload()}
                updated = updated.model_copy(update={"content_rich": {**rich, "attrs": attrs}})
            bundle.drafts[index] = updated
            self.save_bundle(bundle)
            logger.debug("Saved filing settings for %s/%s", case_id, draft_id)
            return updated
        raise UpstreamDataError(f"Draft not found: {draft_id}")

    def _case_path(self, case_id: str) -> Path:
        name = Path(case_id).name
        if not name or name != case_id:
            raise UpstreamDataError(f"Invalid case id: {case_id!r}")
        return self._cases_dir / f"{name}.json"


class FsSignatureStore:
    def __init__(self, base_dir: str | Path) -> None:
        self._root = (Path(base_dir) / "signatures").resolve()

    def download(self, bucket: str, path: str) -> bytes | None:
        target = (self._root / bucket / path).resolve()
        if not target.is_relative_to(self._root):
            logger.warning("Signature path escapes the store root: %s/%s", bucket, path)
            return None
        if not target.is_file():
            return None
        return target.read_bytes()


__all__ = ["FsCaseRepository", "FsSignatureStore"]

"""Persistence protocol contracts."""

from __future__ import annotations

from typing import Protocol

from schemas.case import (
    CaseExhibit,
    CaseIntake,
    CaseParty,
    CaseRecord,
    DraftRecord,
    PinnedAuthority,
)
from schemas.filing import FilingSettings


class CaseRepository(Protocol):
    def get_case(self, case_id: str) -> CaseRecord | None: ...

    def get_draft(self, case_id: str, draft_id: str) -> DraftRecord | None: ...

    def get_intake(self, case_id: str) -> CaseIntake | None: ...

    def list_parties(self, case_id: str) -> list[CaseParty]: ...

    def list_exhibits(self, case_id: str) -> list[CaseExhibit]: ...

    def list_pinned(self, case_id: str) -> list[PinnedAuthority]: ...

    def save_filing_settings(
        self, case_id: str, draft_id: str, settings: FilingSettings
    ) -> DraftRecord: ...


class SignatureStore(Protocol):
    def download(self, bucket: str, path: str) -> bytes | None: ...


__all__ = ["CaseRepository", "SignatureStore"]

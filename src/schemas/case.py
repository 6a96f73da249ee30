"""Case data owned by the surrounding case-management system.

These models only describe the shape handed to the compiler and analyzer;
their lifecycle lives elsewhere.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.filing import FilingSettings


class CaseParty(BaseModel):
    role: Optional[str] = None
    name: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class CaseExhibit(BaseModel):
    label: Optional[str] = None
    sequence: Optional[int] = None
    title: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class PinnedAuthority(BaseModel):
    citation: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class CaseIntake(BaseModel):
    venue: Optional[str] = None
    jurisdiction: Optional[str] = None
    forum: Optional[str] = None
    case_number: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class CaseRecord(BaseModel):
    id: str
    title: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class DraftRecord(BaseModel):
    """A stored draft: editor tree and/or plain text plus signature metadata."""

    id: str
    title: Optional[str] = None
    content: Optional[str] = None
    content_rich: Optional[dict[str, Any]] = None
    filing: Optional[FilingSettings] = None
    signature_bucket: Optional[str] = None
    signature_path: Optional[str] = None
    signature_name: Optional[str] = None
    signature_title: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @property
    def display_title(self) -> str:
        return (self.title or "").strip() or "Draft"

    def filing_settings(self) -> FilingSettings:
        """Settings stored on the editor tree win over the draft-level copy."""
        attrs = (self.content_rich or {}).get("attrs")
        if isinstance(attrs, dict) and isinstance(attrs.get("filing"), dict):
            return FilingSettings.model_validate(attrs["filing"])
        return self.filing or FilingSettings()


class CaseBundle(BaseModel):
    """One case as persisted by the filesystem store."""

    case: CaseRecord
    intake: CaseIntake = Field(default_factory=CaseIntake)
    parties: list[CaseParty] = Field(default_factory=list)
    exhibits: list[CaseExhibit] = Field(default_factory=list)
    pinned: list[PinnedAuthority] = Field(default_factory=list)
    drafts: list[DraftRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


__all__ = [
    "CaseBundle",
    "CaseExhibit",
    "CaseIntake",
    "CaseParty",
    "CaseRecord",
    "DraftRecord",
    "PinnedAuthority",
]

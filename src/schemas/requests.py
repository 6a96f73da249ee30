"""External request schemas."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from schemas.case import CaseExhibit, CaseIntake, CaseParty, PinnedAuthority
from schemas.filing import FilingSettings


class FilingReadinessInput(BaseModel):
    """Everything the readiness analyzer looks at for one draft.

    JSON bodies use camelCase (``draftTitle``); snake_case names are accepted
    as well.
    """

    draft_title: str = ""
    rich: Optional[Any] = None
    plain: Optional[str] = None
    intake: Optional[CaseIntake] = None
    parties: list[CaseParty] = Field(default_factory=list)
    exhibits: list[CaseExhibit] = Field(default_factory=list)
    pinned: list[PinnedAuthority] = Field(default_factory=list)
    filing: Optional[FilingSettings] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


__all__ = ["FilingReadinessInput"]

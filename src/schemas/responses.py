"""External response schemas."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

IssueSeverity = Literal["error", "warning"]


class FilingIssue(BaseModel):
    id: str
    severity: IssueSeverity
    title: str
    detail: Optional[str] = None
    hint: Optional[str] = None
    meta: Optional[dict[str, Any]] = None

    model_config = ConfigDict(extra="forbid")


class ReadinessResult(BaseModel):
    issues: list[FilingIssue] = Field(default_factory=list)
    ignored: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)


class HealthResponse(BaseModel):
    status: str
    version: str


__all__ = ["FilingIssue", "HealthResponse", "IssueSeverity", "ReadinessResult"]

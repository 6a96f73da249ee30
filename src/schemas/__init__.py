"""Schema package for external and internal contracts."""

from .case import CaseBundle, CaseExhibit, CaseIntake, CaseParty, DraftRecord, PinnedAuthority
from .filing import FilingSettings, merge_filing_settings
from .requests import FilingReadinessInput
from .responses import FilingIssue, ReadinessResult

__all__ = [
    "CaseBundle",
    "CaseExhibit",
    "CaseIntake",
    "CaseParty",
    "DraftRecord",
    "FilingIssue",
    "FilingReadinessInput",
    "FilingSettings",
    "PinnedAuthority",
    "ReadinessResult",
    "merge_filing_settings",
]

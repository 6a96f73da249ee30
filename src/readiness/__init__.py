"""Advisory readiness checks for a draft filing."""

from readiness.analyzer import analyze_filing_readiness
from readiness.bluebook import lint_citation
from readiness.detectors import (
    detect_citation_candidates,
    detect_exhibit_refs,
    detect_placeholders,
)

__all__ = [
    "analyze_filing_readiness",
    "detect_citation_candidates",
    "detect_exhibit_refs",
    "detect_placeholders",
    "lint_citation",
]

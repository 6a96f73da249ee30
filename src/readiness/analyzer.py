"""Filing readiness analysis.

``analyze_filing_readiness`` runs every detector over the draft text and case
metadata and returns advisory issues. Detectors never look at the ignore
list; ignored ids are subtracted once, at the end.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Sequence

from compiler.caption import pick_parties, resolve_court_name
from compiler.extract import extract_plain_text
from readiness.bluebook import lint_citation
from readiness.detectors import (
    authority_keys,
    detect_citation_candidates,
    detect_exhibit_refs,
    detect_placeholders,
    normalize_citation,
    unique,
    unresolved_exhibit_refs,
)
from schemas.case import CaseExhibit, CaseIntake, CaseParty, PinnedAuthority
from schemas.filing import FilingSettings
from schemas.requests import FilingReadinessInput
from schemas.responses import FilingIssue, ReadinessResult
from utils.hashing import content_issue_id
from utils.text import as_text

logger = logging.getLogger(__name__)

MAX_UNPINNED = 10


def extract_body_text(data: FilingReadinessInput) -> str:
    if isinstance(data.rich, (dict, list)):
        return extract_plain_text(data.rich)
    return as_text(data.plain)


def caption_issues(intake: CaseIntake | None, parties: Sequence[CaseParty]) -> List[FilingIssue]:
    issues: List[FilingIssue] = []
    plaintiffs, defendants = pick_parties(parties)
    if not resolve_court_name(intake):
        issues.append(
            FilingIssue(
                id="caption:court_missing",
                severity="warning",
                title="Caption is missing court/venue/jurisdiction",
                hint="Fill in Intake: Venue/Jurisdiction (or Forum) so the caption renders correctly.",
            )
        )
    if not plaintiffs:
        issues.append(
            FilingIssue(
                id="caption:plaintiff_missing",
                severity="warning",
                title="Caption is missing a Plaintiff/Petitioner party",
                hint="Add parties (Plaintiff/Petitioner) so exports can build a proper caption.",
            )
        )
    if not defendants:
        issues.append(
            FilingIssue(
                id="caption:defendant_missing",
                severity="warning",
                title="Caption is missing a Defendant/Respondent party",
                hint="Add parties (Defendant/Respondent) so exports can build a proper caption.",
            )
        )
    if not as_text(intake.case_number if intake else None).strip():
        issues.append(
            FilingIssue(
                id="caption:case_number_missing",
                severity="warning",
                title="Case number is missing (if assigned)",
                hint="If a case number has been assigned, add it in Intake so it appears on filings.",
            )
        )
    return issues


def placeholder_issues(text: str) -> List[FilingIssue]:
    placeholders = detect_placeholders(text)
    if not placeholders:
        return []
    return [
        FilingIssue(
            id=content_issue_id("placeholders", sorted(placeholders)),
            severity="warning",
            title="Draft still contains template placeholders",
            detail=_preview(placeholders, 10, ", "),
            hint="Replace placeholders like [DATE], [NAME], [COURT NAME] before filing.",
            meta={"placeholders": placeholders},
        )
    ]


def exhibit_issues(text: str, exhibits: Sequence[CaseExhibit]) -> List[FilingIssue]:
    refs = detect_exhibit_refs(text)
    if not refs:
        return []
    unknown = unresolved_exhibit_refs(refs, exhibits)
    if not unknown:
        return []
    return [
        FilingIssue(
            id=content_issue_id("exhibit_refs_unknown", sorted(unknown)),
            severity="warning",
            title="Some exhibit references may not match your exhibit list",
            detail=_preview(unknown, 8, ", "),
            hint="Check the Exhibits tab: ensure the exhibit labels match what you reference in the draft.",
            meta={"unknown": unknown, "exhibitRefs": refs},
        )
    ]


def citation_issues(candidates: Iterable[str]) -> List[FilingIssue]:
    issues: List[FilingIssue] = []
    for candidate in candidates:
        issues.extend(lint_citation(candidate))
    return issues


def pinned_authority_issues(
    candidates: Sequence[str], pinned: Sequence[PinnedAuthority]
) -> List[FilingIssue]:
    pinned_full = {
        normalize_citation(as_text(p.citation)) for p in pinned if as_text(p.citation).strip()
    }
    if not candidates or not pinned_full:
        return []
    pinned_keys: set[str] = set()
    for citation in pinned_full:
        pinned_keys |= authority_keys(citation)

    def is_pinned(candidate: str) -> bool:
        if authority_keys(candidate) & pinned_keys:
            return True
        normalized = normalize_citation(candidate)
        return any(key in normalized for key in pinned_full)

    not_pinned = [c for c in candidates if not is_pinned(c)][:MAX_UNPINNED]
    if not not_pinned:
        return []
    return [
        FilingIssue(
            id=content_issue_id("citations_not_pinned", sorted(not_pinned)),
            severity="warning",
            title="Some citation-like strings are not in pinned authority",
            detail="; ".join(not_pinned),
            hint="Optional: pin the authority you rely on so it's tracked with the case research.",
            meta={"citations": not_pinned},
        )
    ]


def service_issues(filing: FilingSettings) -> List[FilingIssue]:
    if not filing.service_enabled:
        return []
    service = filing.service
    issues: List[FilingIssue] = []
    if not any(as_text(r.name).strip() for r in service.recipients):
        issues.append(
            FilingIssue(
                id="service:recipients_missing",
                severity="error",
                title="Certificate of service enabled but recipients are missing",
                hint="Add at least one recipient (name and method) for service.",
            )
        )
    has_method = any(as_text(r.method).strip() for r in service.recipients) or bool(
        as_text(service.method_default).strip()
    )
    if not has_method:
        issues.append(
            FilingIssue(
                id="service:method_missing",
                severity="error",
                title="Certificate of service enabled but service method is missing",
                hint=(
                    "Choose a service method (certified mail, email, e-filing provider, "
                    "process server, publication, other)."
                ),
            )
        )
    if not as_text(service.date).strip():
        issues.append(
            FilingIssue(
                id="service:date_missing",
                severity="warning",
                title="Certificate of service is missing a date",
                hint="Add the date of service (freeform is ok).",
            )
        )
    return issues


def notary_issues(filing: FilingSettings) -> List[FilingIssue]:
    if not filing.notary_enabled:
        return []
    notary = filing.notary
    issues: List[FilingIssue] = []
    if not as_text(notary.type).strip():
        issues.append(
            FilingIssue(
                id="notary:type_missing",
                severity="error",
                title="Notary block enabled but type is missing",
                hint="Choose whether you need a jurat or an acknowledgment.",
            )
        )
    if not as_text(notary.state).strip() or not as_text(notary.county).strip():
        issues.append(
            FilingIssue(
                id="notary:venue_missing",
                severity="warning",
                title="Notary block missing state/county",
                hint="Fill the notary state and county so the block is complete.",
            )
        )
    return issues


def proposed_order_issues(filing: FilingSettings) -> List[FilingIssue]:
    if not filing.proposed_order_enabled:
        return []
    if as_text(filing.proposed_order.title).strip():
        return []
    return [
        FilingIssue(
            id="order:title_missing",
            severity="warning",
            title="Proposed order enabled but title is missing",
            hint="Set the proposed order title (e.g., “Proposed Order Granting Motion…”).",
        )
    ]


FilingDetector = Callable[[FilingSettings], List[FilingIssue]]
FILING_DETECTORS: Sequence[FilingDetector] = (
    service_issues,
    notary_issues,
    proposed_order_issues,
)


def analyze_filing_readiness(data: FilingReadinessInput) -> ReadinessResult:
    filing = data.filing or FilingSettings()
    text = extract_body_text(data)
    candidates = detect_citation_candidates(text)

    issues: List[FilingIssue] = []
    issues.extend(caption_issues(data.intake, data.parties))
    issues.extend(placeholder_issues(text))
    issues.extend(exhibit_issues(text, data.exhibits))
    issues.extend(citation_issues(candidates))
    issues.extend(pinned_authority_issues(candidates, data.pinned))
    for detector in FILING_DETECTORS:
        issues.extend(detector(filing))

    ignored = unique(filing.ignored_issue_ids)
    ignored_set = set(ignored)
    visible = [issue for issue in issues if issue.id not in ignored_set]
    logger.debug(
        "Readiness: %d issue(s), %d hidden by ignore list", len(visible), len(issues) - len(visible)
    )
    return ReadinessResult(issues=visible, ignored=ignored)


def _preview(values: Sequence[str], limit: int, sep: str) -> str:
    head = sep.join(values[:limit])
    return head + ("…" if len(values) > limit else "")


__all__ = [
    "analyze_filing_readiness",
    "caption_issues",
    "citation_issues",
    "exhibit_issues",
    "extract_body_text",
    "notary_issues",
    "pinned_authority_issues",
    "placeholder_issues",
    "proposed_order_issues",
    "service_issues",
]

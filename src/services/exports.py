"""Draft export and readiness services shared by the CLI and API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError

from compiler.bates import BatesOptions, BatesStamper, apply_bates
from compiler.builder import compile_filing_pdf, draft_blocks
from compiler.docx_writer import DOCX_MEDIA_TYPE, build_docx
from compiler.layout import LayoutOptions
from compiler.pdf_writer import require_fitz
from compiler.sections import SignatureImage, decode_signature_image
from core.errors import InvalidInputError, NotFoundError, describe_validation_errors
from persistence.contracts import CaseRepository, SignatureStore
from readiness.analyzer import analyze_filing_readiness
from schemas.case import CaseExhibit, CaseIntake, CaseParty, DraftRecord, PinnedAuthority
from schemas.filing import FilingSettings, merge_filing_settings
from schemas.requests import FilingReadinessInput
from schemas.responses import ReadinessResult

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    media_type: str
    content: bytes

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


@dataclass
class _DraftContext:
    draft: DraftRecord
    intake: CaseIntake | None
    parties: list[CaseParty]


def export_draft_pdf(
    case_id: str,
    draft_id: str,
    *,
    repository: CaseRepository,
    signatures: SignatureStore | None = None,
    options: LayoutOptions | None = None,
    bates: BatesOptions | None = None,
    stamper: BatesStamper | None = None,
) -> ExportedFile:
    context = _load_draft_context(repository, case_id, draft_id)
    require_fitz()

    signature = fetch_signature(context.draft, signatures)
    pdf_bytes = compile_filing_pdf(
        context.draft,
        intake=context.intake,
        parties=context.parties,
        signature=signature,
        options=options,
    )
    pdf_bytes = apply_bates(pdf_bytes, bates, stamper)
    logger.info("Exported %s/%s as PDF (%d bytes)", case_id, draft_id, len(pdf_bytes))
    return ExportedFile(
        filename=f"{context.draft.id}.pdf",
        media_type=PDF_MEDIA_TYPE,
        content=pdf_bytes,
    )


def export_draft_docx(
    case_id: str,
    draft_id: str,
    *,
    repository: CaseRepository,
    signatures: SignatureStore | None = None,
) -> ExportedFile:
    context = _load_draft_context(repository, case_id, draft_id)
    draft = context.draft
    content = build_docx(
        draft.display_title,
        draft_blocks(draft),
        intake=context.intake,
        parties=context.parties,
        signature_name=draft.signature_name,
        signature_title=draft.signature_title,
        signature_image=fetch_signature(draft, signatures),
    )
    logger.info("Exported %s/%s as DOCX (%d bytes)", case_id, draft_id, len(content))
    return ExportedFile(filename=f"{draft.id}.docx", media_type=DOCX_MEDIA_TYPE, content=content)


def readiness_input_for_draft(
    draft: DraftRecord,
    *,
    intake: CaseIntake | None,
    parties: list[CaseParty],
    exhibits: list[CaseExhibit],
    pinned: list[PinnedAuthority],
) -> FilingReadinessInput:
    return FilingReadinessInput(
        draft_title=draft.display_title,
        rich=draft.content_rich,
        plain=draft.content,
        intake=intake,
        parties=parties,
        exhibits=exhibits,
        pinned=pinned,
        filing=draft.filing_settings(),
    )


def analyze_draft_readiness(
    case_id: str,
    draft_id: str,
    *,
    repository: CaseRepository,
) -> ReadinessResult:
    context = _load_draft_context(repository, case_id, draft_id)
    data = readiness_input_for_draft(
        context.draft,
        intake=context.intake,
        parties=context.parties,
        exhibits=repository.list_exhibits(case_id),
        pinned=repository.list_pinned(case_id),
    )
    return analyze_filing_readiness(data)


def update_filing_settings(
    case_id: str,
    draft_id: str,
    patch: FilingSettings | Mapping[str, Any],
    *,
    repository: CaseRepository,
) -> FilingSettings:
    draft = repository.get_draft(case_id, draft_id)
    if draft is None:
        raise NotFoundError("Not found")
    current = draft.filing_settings()
    try:
        merged = merge_filing_settings(current, patch)
    except ValidationError as exc:
        raise InvalidInputError(
            f"Invalid filing settings: {describe_validation_errors(exc.errors())}"
        ) from exc
    repository.save_filing_settings(case_id, draft_id, merged)
    return merged


def fetch_signature(
    draft: DraftRecord, signatures: SignatureStore | None
) -> SignatureImage | None:
    """Download and decode the stored signature; any failure yields ``None``."""
    if signatures is None or not (draft.signature_bucket and draft.signature_path):
        return None
    try:
        data = signatures.download(draft.signature_bucket, draft.signature_path)
    except OSError as exc:
        logger.warning("Signature download failed for draft %s: %s", draft.id, exc)
        return None
    return decode_signature_image(data)


def _load_draft_context(repository: CaseRepository, case_id: str, draft_id: str) -> _DraftContext:
    draft = repository.get_draft(case_id, draft_id)
    intake = repository.get_intake(case_id)
    parties = repository.list_parties(case_id)
    if draft is None:
        raise NotFoundError("Not found")
    return _DraftContext(draft=draft, intake=intake, parties=parties)


__all__ = [
    "ExportedFile",
    "PDF_MEDIA_TYPE",
    "analyze_draft_readiness",
    "export_draft_docx",
    "export_draft_pdf",
    "fetch_signature",
    "readiness_input_for_draft",
    "update_filing_settings",
]

"""Assemble a complete filing: caption, body, signature and optional sections."""

from __future__ import annotations

import logging
from typing import Iterable

from compiler.caption import render_caption, render_title
from compiler.extract import extract_blocks, plain_to_blocks
from compiler.layout import LaidOutDocument, LayoutEngine, LayoutOptions, Measure
from compiler.pdf_writer import fitz_measure, render_pdf, require_fitz
from compiler.sections import (
    SignatureImage,
    render_certificate_of_service,
    render_footer,
    render_notary,
    render_proposed_order,
    render_signature,
)
from schemas.case import CaseIntake, CaseParty, DraftRecord
from schemas.internal.document import Block

logger = logging.getLogger(__name__)


def draft_blocks(draft: DraftRecord) -> list[Block]:
    """Prefer the editor tree; fall back to splitting the stored plain text."""
    if isinstance(draft.content_rich, dict):
        return extract_blocks(draft.content_rich)
    return plain_to_blocks(draft.content)


def layout_filing(
    draft: DraftRecord,
    *,
    intake: CaseIntake | None,
    parties: Iterable[CaseParty],
    measure: Measure,
    signature: SignatureImage | None = None,
    options: LayoutOptions | None = None,
) -> LaidOutDocument:
    """Run every section renderer in filing order and return the laid-out pages."""
    engine = LayoutEngine(options or LayoutOptions(), measure)
    filing = draft.filing_settings()

    render_caption(engine, intake, parties)
    render_title(engine, draft.display_title)
    engine.layout_blocks(draft_blocks(draft))
    render_signature(
        engine,
        name=draft.signature_name,
        title=draft.signature_title,
        image=signature,
    )

    if filing.service_enabled or filing.notary_enabled:
        engine.move_down(engine.line_height / 2)
        engine.ensure_space(engine.line_height * 10)
    if filing.service_enabled:
        render_certificate_of_service(engine, filing.service)
    if filing.notary_enabled:
        render_notary(engine, filing.notary)
    if filing.proposed_order_enabled:
        render_proposed_order(engine, filing.proposed_order)

    render_footer(engine)
    document = engine.finish()
    logger.debug("Draft %s laid out on %d page(s)", draft.id, document.page_count)
    return document


def compile_filing_pdf(
    draft: DraftRecord,
    *,
    intake: CaseIntake | None,
    parties: Iterable[CaseParty],
    signature: SignatureImage | None = None,
    options: LayoutOptions | None = None,
) -> bytes:
    require_fitz()
    document = layout_filing(
        draft,
        intake=intake,
        parties=parties,
        measure=fitz_measure,
        signature=signature,
        options=options,
    )
    return render_pdf(document)


__all__ = ["compile_filing_pdf", "draft_blocks", "layout_filing"]

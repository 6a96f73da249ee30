"""Editable Word export of a draft."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Iterable, Sequence

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_LINE_SPACING
from docx.shared import Inches, Pt

from compiler.caption import caption_court_name, caption_party_lines, case_number_line
from compiler.sections import SignatureImage, fit_within
from schemas.case import CaseIntake, CaseParty
from schemas.internal.document import Block, HeadingBlock, ListItemBlock
from utils.text import as_text

if TYPE_CHECKING:
    from docx.document import Document as DocxDocument

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def build_docx(
    title: str,
    blocks: Sequence[Block],
    *,
    intake: CaseIntake | None = None,
    parties: Iterable[CaseParty] = (),
    signature_name: str | None = None,
    signature_title: str | None = None,
    signature_image: SignatureImage | None = None,
) -> bytes:
    doc = Document()
    _apply_court_format(doc)

    _add_caption(doc, intake, list(parties))

    heading = doc.add_paragraph()
    heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
    heading.add_run((title or "Draft").upper()).bold = True

    for block in blocks:
        _add_block(doc, block)

    _add_signature(doc, signature_name, signature_title, signature_image)

    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def _apply_court_format(doc: "DocxDocument") -> None:
    section = doc.sections[0]
    section.page_width = Inches(8.5)
    section.page_height = Inches(11)
    for side in ("top_margin", "bottom_margin", "left_margin", "right_margin"):
        setattr(section, side, Inches(1))

    style = doc.styles["Normal"]
    style.font.name = "Times New Roman"
    style.font.size = Pt(12)
    style.paragraph_format.line_spacing_rule = WD_LINE_SPACING.DOUBLE


def _add_caption(doc: "DocxDocument", intake: CaseIntake | None, parties: list[CaseParty]) -> None:
    court = doc.add_paragraph()
    court.alignment = WD_ALIGN_PARAGRAPH.CENTER
    court.add_run(caption_court_name(intake)).bold = True

    table = doc.add_table(rows=1, cols=2)
    left, right = table.rows[0].cells
    left.text = "\n".join(caption_party_lines(parties))
    right.text = case_number_line(intake)


def _add_block(doc: "DocxDocument", block: Block) -> None:
    if isinstance(block, HeadingBlock):
        p = doc.add_paragraph()
        p.add_run(block.text).bold = True
        return

    if isinstance(block, ListItemBlock):
        p = doc.add_paragraph(f"{block.marker}{block.text}")
        p.paragraph_format.left_indent = Pt(18)
        p.paragraph_format.first_line_indent = Pt(-18)
        return

    p = doc.add_paragraph(" ".join(part.strip() for part in block.text.split("\n") if part.strip()))
    p.paragraph_format.first_line_indent = Inches(0.5)


def _add_signature(
    doc: "DocxDocument",
    name: str | None,
    title: str | None,
    image: SignatureImage | None,
) -> None:
    doc.add_paragraph("Dated: ____________________")
    doc.add_paragraph("Respectfully submitted,")

    if image is not None:
        width, _ = fit_within(image.width, image.height, 240, 72)
        doc.add_picture(io.BytesIO(image.data), width=Pt(width))
    else:
        doc.add_paragraph("______________________________")

    doc.add_paragraph(as_text(name).strip() or "[NAME]")
    signer_title = as_text(title).strip()
    if signer_title:
        doc.add_paragraph(signer_title)


__all__ = ["DOCX_MEDIA_TYPE", "build_docx"]

"""Court-filing document compiler."""

from __future__ import annotations

from compiler.builder import compile_filing_pdf, draft_blocks, layout_filing
from compiler.extract import extract_blocks, extract_plain_text, plain_to_blocks
from compiler.layout import LaidOutDocument, LayoutEngine, LayoutOptions, PageGeometry

__all__ = [
    "LaidOutDocument",
    "LayoutEngine",
    "LayoutOptions",
    "PageGeometry",
    "compile_filing_pdf",
    "draft_blocks",
    "extract_blocks",
    "extract_plain_text",
    "layout_filing",
    "plain_to_blocks",
]

"""Serialize laid-out pages to PDF bytes with PyMuPDF."""

from __future__ import annotations

from compiler.layout import ImageOp, LaidOutDocument, LineOp, TextOp
from core.errors import DependencyMissingError

try:
    import fitz  # PyMuPDF

    FITZ_AVAILABLE = True
except ImportError:
    fitz = None
    FITZ_AVAILABLE = False


def require_fitz() -> None:
    if not FITZ_AVAILABLE:
        raise DependencyMissingError("Missing dependency: PyMuPDF")


def fitz_measure(text: str, font: str, size: float) -> float:
    """Width of ``text`` in points for a base-14 font alias."""
    require_fitz()
    return fitz.get_text_length(text, fontname=font, fontsize=size)


def render_pdf(document: LaidOutDocument) -> bytes:
    """Draw every page's operations and return the serialized PDF."""
    require_fitz()
    geometry = document.geometry
    height = geometry.height

    pdf = fitz.open()
    try:
        for laid_out in document.pages:
            page = pdf.new_page(width=geometry.width, height=height)
            # Layout coordinates are bottom-up; PyMuPDF's are top-down.
            for op in laid_out.ops:
                if isinstance(op, TextOp):
                    page.insert_text(
                        fitz.Point(op.x, height - op.y),
                        op.text,
                        fontname=op.font,
                        fontsize=op.size,
                    )
                elif isinstance(op, LineOp):
                    page.draw_line(
                        fitz.Point(op.x0, height - op.y0),
                        fitz.Point(op.x1, height - op.y1),
                        color=(0, 0, 0),
                        width=op.thickness,
                    )
                elif isinstance(op, ImageOp):
                    rect = fitz.Rect(op.x, height - op.y - op.height, op.x + op.width, height - op.y)
                    page.insert_image(rect, stream=op.data, keep_proportion=True)
        return pdf.tobytes(garbage=3, deflate=True)
    finally:
        pdf.close()


__all__ = ["FITZ_AVAILABLE", "fitz_measure", "render_pdf", "require_fitz"]

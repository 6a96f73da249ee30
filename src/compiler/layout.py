"""Page layout engine for court-formatted filings.

Blocks are placed top-down on fixed-size pages using a caller-supplied
``measure(text, font, size)`` function. Coordinates follow PDF conventions:
the origin is the bottom-left corner and ``y`` grows upward, so the cursor
walks *down* from ``height - margin_top`` toward ``margin_bottom``.

The engine emits plain draw operations (:class:`TextOp`, :class:`LineOp`,
:class:`ImageOp`) grouped per page; turning them into bytes is the PDF
writer's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, List, Tuple, Union

from core.config import Settings
from core.errors import LayoutConfigError
from schemas.internal.document import Block, HeadingBlock, ListItemBlock, ParagraphBlock

logger = logging.getLogger(__name__)

Measure = Callable[[str, str, float], float]

# PDF base-14 font aliases understood by PyMuPDF.
BODY_FONT = "tiro"
BOLD_FONT = "tibo"
FOOTER_FONT = "helv"


@dataclass(frozen=True)
class PageGeometry:
    width: float = 612.0
    height: float = 792.0
    margin_top: float = 72.0
    margin_bottom: float = 72.0
    margin_left: float = 72.0
    margin_right: float = 72.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise LayoutConfigError(
                f"Page size must be positive, got {self.width}x{self.height}"
            )
        margins = (self.margin_top, self.margin_bottom, self.margin_left, self.margin_right)
        if any(margin < 0 for margin in margins):
            raise LayoutConfigError("Page margins must not be negative")
        if self.content_width <= 0 or self.top <= self.margin_bottom:
            raise LayoutConfigError("Page margins leave no printable area")

    @property
    def content_width(self) -> float:
        return self.width - self.margin_left - self.margin_right

    @property
    def top(self) -> float:
        return self.height - self.margin_top


@dataclass(frozen=True)
class LayoutOptions:
    geometry: PageGeometry = field(default_factory=PageGeometry)
    body_font_size: float = 12.0
    title_font_size: float = 14.0
    first_line_indent: float = 36.0
    list_indent: float = 18.0
    footer_font_size: float = 9.0
    footer_baseline: float = 36.0
    signature_max_width: float = 240.0
    signature_max_height: float = 72.0

    @property
    def line_height(self) -> float:
        # Court filings are double spaced.
        return self.body_font_size * 2

    @classmethod
    def from_settings(cls, settings: Settings) -> "LayoutOptions":
        geometry = PageGeometry(
            width=settings.page_width,
            height=settings.page_height,
            margin_top=settings.margin_top,
            margin_bottom=settings.margin_bottom,
            margin_left=settings.margin_left,
            margin_right=settings.margin_right,
        )
        return cls(
            geometry=geometry,
            body_font_size=settings.body_font_size,
            title_font_size=settings.title_font_size,
            first_line_indent=settings.first_line_indent,
            list_indent=settings.list_indent,
            footer_font_size=settings.footer_font_size,
            footer_baseline=settings.footer_baseline,
            signature_max_width=settings.signature_max_width,
            signature_max_height=settings.signature_max_height,
        )


@dataclass(frozen=True)
class LayoutCursor:
    page: int
    x: float
    y: float


@dataclass(frozen=True)
class TextOp:
    text: str
    x: float
    y: float  # baseline
    font: str
    size: float


@dataclass(frozen=True)
class LineOp:
    x0: float
    y0: float
    x1: float
    y1: float
    thickness: float = 1.0


@dataclass(frozen=True)
class ImageOp:
    x: float
    y: float  # bottom edge
    width: float
    height: float
    data: bytes = field(repr=False)


DrawOp = Union[TextOp, LineOp, ImageOp]


@dataclass
class LaidOutPage:
    index: int
    ops: List[DrawOp] = field(default_factory=list)

    def texts(self) -> list[str]:
        return [op.text for op in self.ops if isinstance(op, TextOp)]


@dataclass
class LaidOutDocument:
    geometry: PageGeometry
    pages: List[LaidOutPage]

    @property
    def page_count(self) -> int:
        return len(self.pages)


def break_if_needed(
    cursor: LayoutCursor, geometry: PageGeometry, needed: float
) -> Tuple[LayoutCursor, bool]:
    """Page-break transition: move to the next page top when ``needed`` won't fit."""
    if cursor.y - needed < geometry.margin_bottom:
        return LayoutCursor(page=cursor.page + 1, x=geometry.margin_left, y=geometry.top), True
    return cursor, False


def wrap_words(
    text: str,
    measure: Measure,
    font: str,
    size: float,
    max_width: float,
    first_line_width: float | None = None,
) -> list[str]:
    """Greedy word wrap.

    ``first_line_width`` narrows only the first line (paragraph indent). A word
    wider than the available width is emitted alone on its own line.
    """
    lines: list[str] = []
    line = ""
    available = max_width if first_line_width is None else first_line_width
    for word in text.split():
        candidate = f"{line} {word}" if line else word
        if line and measure(candidate, font, size) > available:
            lines.append(line)
            line = word
            available = max_width
        else:
            line = candidate
    if line:
        lines.append(line)
    return lines


class LayoutEngine:
    """Mutable layout state for a single compile pass."""

    def __init__(self, options: LayoutOptions, measure: Measure) -> None:
        self.options = options
        self.geometry = options.geometry
        self.measure = measure
        self.pages: list[LaidOutPage] = [LaidOutPage(index=0)]
        self.cursor = LayoutCursor(page=0, x=self.geometry.margin_left, y=self.geometry.top)

    @property
    def line_height(self) -> float:
        return self.options.line_height

    @property
    def page(self) -> LaidOutPage:
        return self.pages[self.cursor.page]

    def new_page(self) -> None:
        self.cursor = LayoutCursor(
            page=self.cursor.page + 1, x=self.geometry.margin_left, y=self.geometry.top
        )
        self._sync_pages()

    def ensure_space(self, needed: float) -> None:
        self.cursor, broke = break_if_needed(self.cursor, self.geometry, needed)
        if broke:
            self._sync_pages()

    def move_down(self, amount: float) -> None:
        self.cursor = replace(self.cursor, y=self.cursor.y - amount)

    def text_width(self, text: str, font: str = BODY_FONT, size: float | None = None) -> float:
        return self.measure(text, font, size or self.options.body_font_size)

    def draw_text(self, text: str, x: float, *, font: str = BODY_FONT, size: float | None = None) -> None:
        """Draw ``text`` with its top at the cursor; the cursor does not move."""
        size = size or self.options.body_font_size
        self.page.ops.append(TextOp(text=text, x=x, y=self.cursor.y - size, font=font, size=size))

    def centered_x(self, text: str, font: str, size: float) -> float:
        width = self.measure(text, font, size)
        return max(self.geometry.margin_left, (self.geometry.width - width) / 2)

    def draw_centered(self, text: str, *, font: str = BOLD_FONT, size: float | None = None) -> None:
        size = size or self.options.body_font_size
        self.draw_text(text, self.centered_x(text, font, size), font=font, size=size)

    def text_line(
        self, text: str, x: float | None = None, *, font: str = BODY_FONT, size: float | None = None
    ) -> None:
        """Draw one line, breaking the page first if it would cross the bottom margin."""
        self.ensure_space(self.line_height)
        self.draw_text(text, self.geometry.margin_left if x is None else x, font=font, size=size)
        self.move_down(self.line_height)

    def draw_rule(self, x0: float, x1: float, *, offset: float = 0.0, thickness: float = 1.0) -> None:
        y = self.cursor.y - offset
        self.page.ops.append(LineOp(x0=x0, y0=y, x1=x1, y1=y, thickness=thickness))

    def draw_image(self, data: bytes, width: float, height: float, x: float | None = None) -> None:
        left = self.geometry.margin_left if x is None else x
        self.page.ops.append(
            ImageOp(x=left, y=self.cursor.y - height, width=width, height=height, data=data)
        )

    def wrap(
        self,
        text: str,
        *,
        font: str = BODY_FONT,
        size: float | None = None,
        width: float | None = None,
        first_line_width: float | None = None,
    ) -> list[str]:
        return wrap_words(
            text,
            self.measure,
            font,
            size or self.options.body_font_size,
            self.geometry.content_width if width is None else width,
            first_line_width,
        )

    def paragraph(self, text: str, *, indent_first: bool = True) -> int:
        """Lay out a body paragraph; returns the number of lines drawn."""
        lh = self.line_height
        # Single embedded line breaks read as one flowing paragraph.
        flowing = " ".join(part.strip() for part in text.split("\n") if part.strip())
        if not flowing:
            self.move_down(lh)
            return 0

        indent = self.options.first_line_indent if indent_first else 0.0
        lines = self.wrap(flowing, first_line_width=self.geometry.content_width - indent)
        for i, line in enumerate(lines):
            x = self.geometry.margin_left + (indent if i == 0 else 0.0)
            self.text_line(line, x)
        self.move_down(lh / 2)
        return len(lines)

    def heading(self, block: HeadingBlock) -> int:
        lh = self.line_height
        if not block.text:
            self.move_down(lh)
            return 0
        # Keep a heading with at least one following line.
        self.ensure_space(lh * 2)
        self.move_down(lh / 2)
        lines = self.wrap(block.text, font=BOLD_FONT)
        for line in lines:
            self.text_line(line, font=BOLD_FONT)
        self.move_down(lh / 2)
        return len(lines)

    def list_item(self, block: ListItemBlock) -> int:
        lh = self.line_height
        left = self.geometry.margin_left
        text_x = left + self.options.list_indent
        lines = self.wrap(block.text, width=self.geometry.content_width - self.options.list_indent)

        self.ensure_space(lh)
        self.draw_text(block.marker, left)
        if lines:
            self.draw_text(lines[0], text_x)
        self.move_down(lh)
        for line in lines[1:]:
            self.text_line(line, text_x)
        self.move_down(lh / 2)
        return len(lines)

    def layout_block(self, block: Block) -> int:
        if isinstance(block, HeadingBlock):
            return self.heading(block)
        if isinstance(block, ListItemBlock):
            return self.list_item(block)
        if isinstance(block, ParagraphBlock):
            return self.paragraph(block.text)
        raise TypeError(f"Unsupported block type: {type(block).__name__}")

    def layout_blocks(self, blocks: Iterable[Block]) -> int:
        return sum(self.layout_block(block) for block in blocks)

    def finish(self) -> LaidOutDocument:
        logger.debug("Layout produced %d page(s)", len(self.pages))
        return LaidOutDocument(geometry=self.geometry, pages=list(self.pages))

    def _sync_pages(self) -> None:
        while len(self.pages) <= self.cursor.page:
            self.pages.append(LaidOutPage(index=len(self.pages)))


__all__ = [
    "BODY_FONT",
    "BOLD_FONT",
    "DrawOp",
    "FOOTER_FONT",
    "ImageOp",
    "LaidOutDocument",
    "LaidOutPage",
    "LayoutCursor",
    "LayoutEngine",
    "LayoutOptions",
    "LineOp",
    "Measure",
    "PageGeometry",
    "TextOp",
    "break_if_needed",
    "wrap_words",
]

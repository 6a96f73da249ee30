"""Internal contracts passed between the compiler stages."""

from .document import Block, HeadingBlock, ListItemBlock, ParagraphBlock

__all__ = ["Block", "HeadingBlock", "ListItemBlock", "ParagraphBlock"]

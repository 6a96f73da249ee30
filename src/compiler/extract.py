"""Flatten editor document trees into typed blocks and plain text.

The editor hands over a generic JSON tree (``doc`` -> ``heading`` /
``paragraph`` / ``bulletList`` / ``orderedList`` -> ``listItem`` -> ``text`` /
``hardBreak``). This module is the only place that has to cope with unknown or
malformed node shapes; everything downstream sees the closed ``Block`` union.
"""

from __future__ import annotations

import re
from typing import Any, List

from schemas.internal.document import Block, HeadingBlock, ListItemBlock, ParagraphBlock
from utils.text import as_text, collapse_blank_lines, normalize_block, normalize_whitespace

_LIST_TYPES = {"bulletList", "orderedList"}
_PARAGRAPH_SPLIT = re.compile(r"\n{2,}")

# One group per top-level construct: a single heading/paragraph, or every item
# of one list. Plain-text rendering needs the list boundaries.
BlockGroup = List[Block]


def text_from_node(node: Any) -> str:
    """Concatenate the inline text under ``node``; hard breaks become newlines."""
    if node is None:
        return ""
    if isinstance(node, str):
        return node
    if isinstance(node, list):
        return "".join(text_from_node(child) for child in node)
    if not isinstance(node, dict):
        return ""
    node_type = node.get("type")
    if node_type == "text":
        return as_text(node.get("text"))
    if node_type == "hardBreak":
        return "\n"
    return "".join(text_from_node(child) for child in _children(node))


def flatten_groups(doc: Any) -> list[BlockGroup]:
    groups: list[BlockGroup] = []
    _walk(doc, groups)
    return groups


def extract_blocks(doc: Any) -> list[Block]:
    """Return layout blocks; never empty."""
    blocks: list[Block] = []
    for group in flatten_groups(doc):
        for block in group:
            if isinstance(block, HeadingBlock) and not block.text:
                continue
            blocks.append(block)
    if not blocks:
        blocks.append(ParagraphBlock(text=""))
    return blocks


def extract_plain_text(doc: Any) -> str:
    """Plain text with blank lines between paragraphs, headings and lists."""
    lines: list[str] = []
    for group in flatten_groups(doc):
        for block in group:
            if isinstance(block, ListItemBlock):
                prefix = f"{block.index}. " if block.ordered else "- "
                lines.append(f"{prefix}{block.text}".strip())
            else:
                lines.append(block.text)
        lines.append("")
    return collapse_blank_lines("\n".join(lines))


def plain_to_blocks(text: Any) -> list[Block]:
    """Split stored plain text on blank lines into paragraph blocks."""
    raw = normalize_block(as_text(text))
    blocks: list[Block] = [
        ParagraphBlock(text=part.strip()) for part in _PARAGRAPH_SPLIT.split(raw)
    ]
    return blocks or [ParagraphBlock(text="")]


def _walk(node: Any, groups: list[BlockGroup]) -> None:
    if isinstance(node, list):
        for child in node:
            _walk(child, groups)
        return
    if not isinstance(node, dict):
        return

    node_type = node.get("type")
    if node_type == "heading":
        text = normalize_whitespace(text_from_node(node))
        groups.append([HeadingBlock(level=_heading_level(node), text=text)])
        return
    if node_type == "paragraph":
        # Blank paragraphs are kept; they render as vertical spacing.
        groups.append([ParagraphBlock(text=normalize_whitespace(text_from_node(node)))])
        return
    if node_type in _LIST_TYPES:
        ordered = node_type == "orderedList"
        items: BlockGroup = []
        for child in _children(node):
            if not isinstance(child, dict) or child.get("type") != "listItem":
                continue
            items.append(
                ListItemBlock(
                    ordered=ordered,
                    index=len(items) + 1,
                    text=normalize_whitespace(text_from_node(child)),
                )
            )
        if items:
            groups.append(items)
        return

    for child in _children(node):
        _walk(child, groups)


def _children(node: dict) -> list:
    content = node.get("content")
    return content if isinstance(content, list) else []


def _heading_level(node: dict) -> int:
    attrs = node.get("attrs")
    raw = attrs.get("level") if isinstance(attrs, dict) else None
    try:
        level = int(raw) if raw is not None else 2
    except (TypeError, ValueError):
        return 2
    return level if level >= 1 else 2


__all__ = [
    "extract_blocks",
    "extract_plain_text",
    "flatten_groups",
    "plain_to_blocks",
    "text_from_node",
]

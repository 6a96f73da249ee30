"""Text normalization helpers."""

from __future__ import annotations

import re
from typing import Any, Callable, Iterable, TypeVar

_TRAILING_WS = re.compile(r"[ \t]+\n")
_LEADING_WS = re.compile(r"\n[ \t]+")
_RUN_WS = re.compile(r"[ \t]{2,}")
_BLANK_RUNS = re.compile(r"\n{3,}")

T = TypeVar("T")


def as_text(value: Any) -> str:
    """Coerce ``None`` and non-strings to text without the ``"None"`` surprise."""
    if value is None:
        return ""
    return str(value).replace("\r", "")


def normalize_whitespace(text: Any) -> str:
    """Collapse interior runs of spaces/tabs and trim every line edge.

    Single embedded line breaks survive.
    """
    cleaned = as_text(text)
    cleaned = _TRAILING_WS.sub("\n", cleaned)
    cleaned = _LEADING_WS.sub("\n", cleaned)
    cleaned = _RUN_WS.sub(" ", cleaned)
    return cleaned.strip()


def collapse_blank_lines(text: str) -> str:
    return _BLANK_RUNS.sub("\n\n", text).strip()


def normalize_block(text: str) -> str:
    """Normalize whitespace while preserving line breaks."""

    cleaned = text.replace("\r\n", "\n").replace("\x0c", "\n")
    cleaned = "\n".join(line.rstrip() for line in cleaned.splitlines())
    return cleaned.strip()


def join_names(names: Iterable[Any]) -> str:
    clean = [as_text(name).strip() for name in names]
    return ", ".join(name for name in clean if name)


def first_non_empty(source: T, accessors: Iterable[Callable[[T], Any]]) -> str:
    """Evaluate accessors in priority order and return the first non-empty result."""
    for accessor in accessors:
        value = as_text(accessor(source)).strip()
        if value:
            return value
    return ""


__all__ = [
    "as_text",
    "collapse_blank_lines",
    "first_non_empty",
    "join_names",
    "normalize_block",
    "normalize_whitespace",
]

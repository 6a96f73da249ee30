"""Pattern detectors over extracted draft text.

All detectors are pure: text in, de-duplicated matches out, in first-seen
order.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from schemas.case import CaseExhibit
from utils.text import as_text

MAX_PLACEHOLDERS = 25
MAX_EXHIBIT_REFS = 50
MAX_CITATIONS = 50

PLACEHOLDER_PATTERN = re.compile(r"\[[A-Z0-9 _-]{2,}\]")

EXHIBIT_PATTERNS: Sequence[re.Pattern[str]] = (
    re.compile(r"\bExhibit\s+(\d+)\b", re.IGNORECASE),
    re.compile(r"\bEx\.\s*(\d+)\b", re.IGNORECASE),
    re.compile(r"\bEX-(\d{3,})\b", re.IGNORECASE),
    re.compile(r"\bC-(\d{3,})\b", re.IGNORECASE),
)

REPORTER = (
    r"(?:U\.S\.|S\.\s?Ct\.|L\.\s?Ed\.\s?2d|F\.(?:\d+d|\d+th|\s?Supp\.?(?:\s?\d+d)?)"
    r"|P\.(?:2d|3d)|So\.(?:2d|3d))"
)
YEAR_PARENTHETICAL = r"\([^)]*\b(?:18|19|20)\d{2}\b[^)]*\)"
REPORTER_CITE = rf"\d+\s+{REPORTER}\s+\d+(?:,\s*\d+)?"
# Introductory signals and sentence openers are not part of a party name.
_SIGNALS = r"(?:See|Cf|But|Also|Accord|Compare|Contra|In|Under|As|The)\b"
_PARTY_WORD = rf"(?!{_SIGNALS})[A-Z][A-Za-z'&.\-]*"
_PARTY_NAME = rf"{_PARTY_WORD}(?:\s+{_PARTY_WORD}){{0,4}}"

CITATION_PATTERNS: Sequence[re.Pattern[str]] = (
    # Case name, optionally followed by a reporter cite and parenthetical.
    re.compile(
        rf"\b{_PARTY_NAME}\s+v\.?\s+{_PARTY_NAME}"
        rf"(?:,\s*{REPORTER_CITE}(?:\s*\([^)]*\))?)?"
    ),
    re.compile(rf"\b{REPORTER_CITE}\s*{YEAR_PARENTHETICAL}"),
    re.compile(rf"\b{REPORTER_CITE}\b"),
    re.compile(r"\b\d{4}\s+WL\s+\d+\b(?:\s*\([^)]*\))?"),
    re.compile(r"\b\d{4}\s+(?:U\.S\.\s+Dist\.\s+)?LEXIS\s+\d+\b(?:\s*\([^)]*\))?"),
    re.compile(r"\b[A-Z][A-Za-z.&\s]{2,}\s+§\s*\d[\w.\-()]*"),
)
# Reporter, Westlaw and Lexis cites; what pinned authority is matched on.
AUTHORITY_PATTERNS: Sequence[re.Pattern[str]] = CITATION_PATTERNS[1:5]

_DIGITS = re.compile(r"\d+")
_SPACES = re.compile(r"\s+")


def unique(values: Iterable[str], limit: int | None = None) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        seen.setdefault(value, None)
    result = list(seen)
    return result if limit is None else result[:limit]


def detect_placeholders(text: str) -> list[str]:
    """Bracketed all-caps template tokens like ``[DATE]`` or ``[COURT NAME]``."""
    return unique(PLACEHOLDER_PATTERN.findall(text), MAX_PLACEHOLDERS)


def detect_exhibit_refs(text: str) -> list[str]:
    refs: list[str] = []
    for pattern in EXHIBIT_PATTERNS:
        refs.extend(match.group(0) for match in pattern.finditer(text))
    return unique(refs, MAX_EXHIBIT_REFS)


def normalize_citation(text: str) -> str:
    return _SPACES.sub(" ", text).strip().lower()


def detect_citation_candidates(text: str) -> list[str]:
    """Reporter-, database- and statute-like strings.

    A candidate fully contained in a longer candidate is dropped so a single
    citation is not linted twice.
    """
    found: list[str] = []
    for pattern in CITATION_PATTERNS:
        found.extend(match.group(0).strip() for match in pattern.finditer(text))
    candidates = unique(c for c in found if c)
    kept = [
        c for c in candidates if not any(c != other and c in other for other in candidates)
    ]
    return kept[:MAX_CITATIONS]


def authority_keys(citation: str) -> set[str]:
    """Normalized forms of ``citation``: the whole string plus every reporter,
    Westlaw or Lexis cite inside it."""
    keys = {normalize_citation(citation)}
    for pattern in AUTHORITY_PATTERNS:
        keys.update(normalize_citation(m.group(0)) for m in pattern.finditer(citation))
    keys.discard("")
    return keys


def exhibit_key(label: str) -> str:
    """Canonical ``exhibit N`` key; leading zeros are ignored."""
    digits = _DIGITS.search(label)
    if digits is None:
        return label.strip().lower()
    return f"exhibit {int(digits.group(0))}"


def known_exhibit_keys(exhibits: Iterable[CaseExhibit]) -> set[str]:
    keys: set[str] = set()
    for exhibit in exhibits:
        label = as_text(exhibit.label).strip()
        if label:
            keys.add(label.lower())
            keys.add(exhibit_key(label))
        if exhibit.sequence is not None:
            keys.add(f"exhibit {exhibit.sequence}")
    return keys


def unresolved_exhibit_refs(refs: Iterable[str], exhibits: Iterable[CaseExhibit]) -> list[str]:
    known = known_exhibit_keys(exhibits)
    return [ref for ref in refs if ref.lower() not in known and exhibit_key(ref) not in known]


__all__ = [
    "AUTHORITY_PATTERNS",
    "CITATION_PATTERNS",
    "EXHIBIT_PATTERNS",
    "PLACEHOLDER_PATTERN",
    "REPORTER",
    "authority_keys",
    "detect_citation_candidates",
    "detect_exhibit_refs",
    "detect_placeholders",
    "exhibit_key",
    "known_exhibit_keys",
    "normalize_citation",
    "unique",
    "unresolved_exhibit_refs",
]

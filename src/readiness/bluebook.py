"""Bluebook-style lint for citation candidates.

These are rough pattern checks, not a citation parser. They over- and
under-flag; every finding is a warning.
"""

from __future__ import annotations

import re

from readiness.detectors import REPORTER, YEAR_PARENTHETICAL
from schemas.responses import FilingIssue
from utils.hashing import content_issue_id

BARE_V = re.compile(r"\bv\s", re.IGNORECASE)
DOTTED_V = re.compile(r"\bv\.", re.IGNORECASE)
HAS_YEAR_PARENTHETICAL = re.compile(YEAR_PARENTHETICAL)
CASE_REPORTER = re.compile(
    r"(?<![A-Za-z])(?:U\.S\.|S\.\s?Ct\.|L\.\s?Ed\.|F\.|P\.|So\.)|\bWL\b|\bLEXIS\b"
)
FIRST_PAGE = re.compile(rf"\b\d+\s+{REPORTER}\s+\d+")
PINCITE = re.compile(rf"{REPORTER}\s+\d+,\s*\d+")


def looks_like_case(cite: str) -> bool:
    return "§" not in cite and CASE_REPORTER.search(cite) is not None


def lint_citation(cite: str) -> list[FilingIssue]:
    """Run the three independent checks on one candidate."""
    c = cite.strip()
    if not c:
        return []

    issues: list[FilingIssue] = []
    meta = {"cite": c}

    if BARE_V.search(c) and not DOTTED_V.search(c):
        issues.append(
            FilingIssue(
                id=content_issue_id("bluebook_vdot", c),
                severity="warning",
                title="Possible Bluebook issue: use “v.” in case names",
                detail=f"Citation contains “v” without a period: “{c}”",
                hint="Bluebook typically uses “v.” (with period) in case names.",
                meta=meta,
            )
        )

    case_like = looks_like_case(c)
    if case_like and not HAS_YEAR_PARENTHETICAL.search(c):
        issues.append(
            FilingIssue(
                id=content_issue_id("bluebook_parenthetical", c),
                severity="warning",
                title="Possible Bluebook issue: missing court/year parenthetical",
                detail=f"Citation may be missing a “(Court Year)” parenthetical: “{c}”",
                hint="Most case citations include a parenthetical with the court (if needed) and year.",
                meta=meta,
            )
        )

    if case_like and FIRST_PAGE.search(c) and not PINCITE.search(c):
        issues.append(
            FilingIssue(
                id=content_issue_id("bluebook_pincite", c),
                severity="warning",
                title="Possible Bluebook issue: missing pincite",
                detail=(
                    "Consider adding a pincite (specific page) if you are quoting or "
                    f"relying on a particular proposition: “{c}”"
                ),
                hint="Example: “123 F.3d 456, 460 (5th Cir. 2020)” when citing a specific page.",
                meta=meta,
            )
        )

    return issues


__all__ = ["lint_citation", "looks_like_case"]

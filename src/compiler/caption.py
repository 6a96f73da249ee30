"""Caption block: court name, party columns and case number."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence

from compiler.layout import BODY_FONT, BOLD_FONT, LayoutEngine
from schemas.case import CaseIntake, CaseParty
from utils.text import as_text, first_non_empty, join_names

PLAINTIFF_ROLES = frozenset({"plaintiff", "petitioner"})
DEFENDANT_ROLES = frozenset({"defendant", "respondent"})

PLAINTIFF_PLACEHOLDER = "[PLAINTIFF]"
DEFENDANT_PLACEHOLDER = "[DEFENDANT]"
DEFAULT_COURT = "COURT"

CAPTION_RIGHT_COLUMN = 180.0
CAPTION_GUTTER = 18.0


def _forum_label(intake: CaseIntake) -> str:
    forum = as_text(intake.forum).strip()
    return f"{forum} FORUM" if forum else ""


# Court name precedence, highest first.
COURT_NAME_SOURCES: Sequence[Callable[[CaseIntake], Any]] = (
    lambda intake: intake.venue,
    lambda intake: intake.jurisdiction,
    _forum_label,
)


def resolve_court_name(intake: CaseIntake | None) -> str:
    """First non-empty of venue, jurisdiction, "<forum> FORUM"; "" if none."""
    return first_non_empty(intake or CaseIntake(), COURT_NAME_SOURCES)


def caption_court_name(intake: CaseIntake | None) -> str:
    return (resolve_court_name(intake) or DEFAULT_COURT).upper()


def pick_parties(parties: Iterable[CaseParty]) -> tuple[list[str], list[str]]:
    """Split party names into (plaintiff-side, defendant-side) by role."""
    plaintiffs: list[str] = []
    defendants: list[str] = []
    for party in parties:
        role = as_text(party.role).strip().lower()
        name = as_text(party.name).strip()
        if not name:
            continue
        if role in PLAINTIFF_ROLES:
            plaintiffs.append(name)
        elif role in DEFENDANT_ROLES:
            defendants.append(name)
    return plaintiffs, defendants


def caption_party_lines(parties: Iterable[CaseParty]) -> list[str]:
    plaintiffs, defendants = pick_parties(parties)
    plaintiff_line = join_names(plaintiffs) or PLAINTIFF_PLACEHOLDER
    defendant_line = join_names(defendants) or DEFENDANT_PLACEHOLDER
    return [f"{plaintiff_line},", "Plaintiff,", "v.", f"{defendant_line},", "Defendant."]


def case_number_line(intake: CaseIntake | None) -> str:
    case_number = as_text(intake.case_number if intake else None).strip()
    return f"Case No.: {case_number}" if case_number else ""


def render_caption(
    engine: LayoutEngine,
    intake: CaseIntake | None,
    parties: Iterable[CaseParty],
) -> None:
    geometry = engine.geometry
    lh = engine.line_height

    engine.ensure_space(lh * 6)
    engine.draw_centered(caption_court_name(intake), font=BOLD_FONT)
    engine.move_down(lh)

    left_width = geometry.content_width - CAPTION_RIGHT_COLUMN - CAPTION_GUTTER
    right_x = geometry.margin_left + left_width + CAPTION_GUTTER

    left_lines: list[str] = []
    for line in caption_party_lines(parties):
        left_lines.extend(engine.wrap(line, width=left_width))
    right_lines: list[str] = []
    number_line = case_number_line(intake)
    if number_line:
        right_lines.extend(engine.wrap(number_line, width=CAPTION_RIGHT_COLUMN))

    rows = max(len(left_lines), len(right_lines), 1)
    engine.ensure_space(lh * (rows + 2))
    for i in range(rows):
        if i < len(left_lines):
            engine.draw_text(left_lines[i], geometry.margin_left, font=BODY_FONT)
        if i < len(right_lines):
            engine.draw_text(right_lines[i], right_x, font=BODY_FONT)
        engine.move_down(lh)
    engine.move_down(lh / 2)

    engine.draw_rule(geometry.margin_left, geometry.width - geometry.margin_right)
    engine.move_down(lh)


def render_title(engine: LayoutEngine, title: str) -> None:
    size = engine.options.title_font_size
    engine.ensure_space(engine.line_height)
    engine.draw_centered((title or "Draft").upper(), font=BOLD_FONT, size=size)
    engine.move_down(engine.line_height)


__all__ = [
    "COURT_NAME_SOURCES",
    "DEFENDANT_PLACEHOLDER",
    "PLAINTIFF_PLACEHOLDER",
    "caption_court_name",
    "caption_party_lines",
    "case_number_line",
    "pick_parties",
    "render_caption",
    "render_title",
    "resolve_court_name",
]

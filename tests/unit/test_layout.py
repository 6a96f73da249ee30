import pytest

from compiler.layout import (
    LayoutCursor,
    LayoutEngine,
    LayoutOptions,
    PageGeometry,
    TextOp,
    break_if_needed,
    wrap_words,
)
from core.config import Settings
from core.errors import LayoutConfigError
from schemas.internal.document import HeadingBlock, ListItemBlock, ParagraphBlock


def fake_measure(text: str, font: str, size: float) -> float:
    return len(text) * size * 0.5


LOREM = (
    "Plaintiff served the requests on March 1 and Defendant has not responded, "
    "produced documents, or sought an extension despite repeated meet and confer "
    "letters sent by certified mail and email over the following six weeks."
)


def test_wrap_words_lines_fit_width() -> None:
    text = " ".join([LOREM] * 5)
    for width in (60.0, 120.0, 250.0, 468.0):
        lines = wrap_words(text, fake_measure, "tiro", 12, width)
        assert " ".join(lines) == " ".join(text.split())
        for line in lines:
            fits = fake_measure(line, "tiro", 12) <= width
            assert fits or " " not in line


def test_wrap_words_keeps_unbreakable_token_alone() -> None:
    token = "x" * 200
    lines = wrap_words(f"short {token} tail", fake_measure, "tiro", 12, 100.0)
    assert lines == ["short", token, "tail"]


def test_wrap_words_first_line_width_narrows_only_first_line() -> None:
    lines = wrap_words("aa bb cc dd ee", fake_measure, "tiro", 10, 30.0, first_line_width=15.0)
    # 5pt per glyph: 15pt fits "aa", 30pt fits "bb cc".
    assert lines == ["aa", "bb cc", "dd ee"]


def test_break_if_needed_transitions_to_next_page() -> None:
    geometry = PageGeometry()
    cursor = LayoutCursor(page=0, x=72, y=100)

    same, broke = break_if_needed(cursor, geometry, 24)
    assert not broke and same == cursor

    moved, broke = break_if_needed(cursor, geometry, 40)
    assert broke
    assert moved == LayoutCursor(page=1, x=geometry.margin_left, y=geometry.top)


def test_page_geometry_rejects_non_positive_sizes() -> None:
    with pytest.raises(LayoutConfigError):
        PageGeometry(width=0)
    with pytest.raises(LayoutConfigError):
        PageGeometry(height=-10)
    with pytest.raises(ValueError):
        PageGeometry(width=100, margin_left=60, margin_right=60)


def _count_text_lines(engine: LayoutEngine) -> int:
    return sum(len(page.texts()) for page in engine.pages)


def test_pagination_is_exhaustive() -> None:
    blocks = []
    for i in range(40):
        blocks.append(HeadingBlock(text=f"Section {i}"))
        blocks.append(ParagraphBlock(text=LOREM * (1 + i % 3)))

    paged = LayoutEngine(LayoutOptions(), fake_measure)
    paged_lines = paged.layout_blocks(blocks)

    tall = LayoutOptions(geometry=PageGeometry(height=10_000_000))
    single = LayoutEngine(tall, fake_measure)
    single_lines = single.layout_blocks(blocks)

    assert len(paged.pages) > 1
    assert len(single.pages) == 1
    assert paged_lines == single_lines
    assert _count_text_lines(paged) == _count_text_lines(single) == single_lines


def test_text_never_crosses_bottom_margin() -> None:
    engine = LayoutEngine(LayoutOptions(), fake_measure)
    engine.layout_blocks([ParagraphBlock(text=LOREM * 6) for _ in range(10)])
    bottom = engine.geometry.margin_bottom - engine.options.body_font_size
    for page in engine.pages:
        for op in page.ops:
            if isinstance(op, TextOp):
                assert op.y >= bottom


def test_paragraph_indents_first_line_only() -> None:
    engine = LayoutEngine(LayoutOptions(), fake_measure)
    engine.paragraph(LOREM)
    xs = [op.x for op in engine.pages[0].ops]
    assert xs[0] == 72 + 36
    assert all(x == 72 for x in xs[1:])


def test_paragraph_joins_single_line_breaks() -> None:
    engine = LayoutEngine(LayoutOptions(), fake_measure)
    assert engine.paragraph("one\ntwo") == 1
    assert engine.pages[0].texts() == ["one two"]


def test_blank_paragraph_only_adds_space() -> None:
    engine = LayoutEngine(LayoutOptions(), fake_measure)
    start = engine.cursor.y
    assert engine.paragraph("   ") == 0
    assert engine.pages[0].ops == []
    assert engine.cursor.y == start - engine.line_height


def test_list_item_marker_and_hanging_indent() -> None:
    engine = LayoutEngine(LayoutOptions(), fake_measure)
    engine.list_item(ListItemBlock(ordered=True, index=3, text=LOREM))
    ops = engine.pages[0].ops
    assert ops[0].text == "3. " and ops[0].x == 72
    assert all(op.x == 72 + 18 for op in ops[1:])


def test_heading_keeps_with_next_line() -> None:
    engine = LayoutEngine(LayoutOptions(), fake_measure)
    # Leave room for exactly one line.
    engine.move_down(engine.cursor.y - engine.geometry.margin_bottom - engine.line_height)
    engine.heading(HeadingBlock(text="Argument"))
    assert len(engine.pages) == 2
    assert engine.pages[1].texts() == ["Argument"]


def test_layout_options_from_settings() -> None:
    settings = Settings(page_width=600, margin_left=50, body_font_size=11)
    options = LayoutOptions.from_settings(settings)
    assert options.geometry.width == 600
    assert options.geometry.margin_left == 50
    assert options.line_height == 22

import pytest

from bookpress.models import Chapter
from bookpress.pdf.pdf_measure import line_step
from bookpress.pdf.pdf_pagination import (
    PaginatorState,
    add_spacer,
    begin_body,
    chapter_start_pages,
    finish_chapter,
    paginate_chapter,
    paginate_chapters,
    place_line,
    start_chapter,
)
from bookpress.pdf.pdf_types import LineSpan, Page, Side

from .conftest import CountingProgress
from .test_line_breaker import WORDS

STEP = 13  # floor(12pt fake line height + 1.8pt separation)


def _chapter(header, *paragraphs):
    return Chapter(header=header, body="\n".join(paragraphs))


def test_line_step_floors_height_plus_separation(geometry, measurer):
    assert line_step(measurer=measurer, geometry=geometry) == STEP


def test_start_chapter_places_header_on_right_page(geometry):
    state = start_chapter(PaginatorState(), header="One", geometry=geometry)
    assert state.page_count == 0
    assert state.side is Side.RIGHT
    assert state.on_header_page
    (record,) = state.lines
    assert record.text == "One"
    assert record.font_size == geometry.chapter_header_font_size
    assert record.x == pytest.approx(geometry.page_divider + geometry.inside_margin_x)
    assert record.y == pytest.approx(geometry.content_margin_top)


def test_start_chapter_pads_to_an_odd_page(geometry):
    state = PaginatorState(pages=(Page(lines=(), side=Side.RIGHT),))
    state = start_chapter(state, header="Two", geometry=geometry)
    assert state.page_count == 2
    assert state.pages[1].is_empty
    assert state.pages[1].side is Side.LEFT
    assert state.side is Side.RIGHT


def test_begin_body_starts_lower_on_header_page(geometry):
    state = begin_body(start_chapter(PaginatorState(), header="One", geometry=geometry), geometry=geometry)
    assert state.cursor_y == pytest.approx(geometry.new_chapter_top)
    assert not state.on_header_page
    state = begin_body(state, geometry=geometry)
    assert state.cursor_y == pytest.approx(geometry.content_margin_top)


def test_place_line_positions_by_side_and_indent(geometry):
    right = PaginatorState(cursor_y=100.0, side=Side.RIGHT)
    state = place_line(right, span=LineSpan("Hello", indented=True), geometry=geometry, step=STEP)
    record = state.lines[-1]
    assert record.x == pytest.approx(geometry.page_divider + geometry.inside_margin_x + geometry.tab_size)
    assert record.y == pytest.approx(100.0)
    assert record.indented
    assert state.cursor_y == pytest.approx(100.0 + STEP)

    left = PaginatorState(cursor_y=100.0, side=Side.LEFT)
    span = LineSpan("Quote", inset=geometry.tab_size)
    record = place_line(left, span=span, geometry=geometry, step=STEP).lines[-1]
    assert record.x == pytest.approx(geometry.outside_margin_x + geometry.tab_size)
    assert record.font_size == geometry.content_font_size


def test_body_page_holds_38_lines_then_turns(geometry):
    # 72pt top, 576pt bottom: the 39th line would start at 566 and end at 579.
    state = PaginatorState(cursor_y=geometry.content_margin_top, side=Side.LEFT)
    for idx in range(37):
        state = place_line(state, span=LineSpan(f"line {idx}"), geometry=geometry, step=STEP)
    assert state.page_count == 0
    assert state.cursor_y == pytest.approx(72 + 37 * STEP)
    state = place_line(state, span=LineSpan("line 37"), geometry=geometry, step=STEP)
    assert state.page_count == 1
    assert len(state.pages[0].lines) == 38
    assert state.pages[0].lines[-1].y == pytest.approx(72 + 37 * STEP)
    assert state.pages[0].side is Side.LEFT
    assert state.side is Side.RIGHT
    assert state.lines == ()
    assert state.cursor_y == pytest.approx(geometry.content_margin_top)


def test_add_spacer_moves_cursor_three_steps(geometry):
    state = add_spacer(PaginatorState(cursor_y=100.0), geometry=geometry, step=STEP)
    assert state.cursor_y == pytest.approx(100.0 + 3 * STEP)
    assert state.lines == ()


def test_spacer_near_bottom_turns_the_page(geometry):
    state = PaginatorState(cursor_y=geometry.content_bottom - 2 * STEP, side=Side.RIGHT)
    state = add_spacer(state, geometry=geometry, step=STEP)
    assert state.page_count == 1
    assert state.side is Side.LEFT


def test_finish_chapter_seals_even_an_empty_page():
    state = finish_chapter(PaginatorState())
    assert state.page_count == 1
    assert state.pages[0].is_empty


def test_short_chapter_is_one_page(geometry, measurer):
    pages = paginate_chapters(
        [Chapter(header="Title", body="\nShort para.\n")], geometry=geometry, measurer=measurer
    )
    assert len(pages) == 1
    header, body = pages[0].lines
    assert header.text == "Title"
    assert header.font_size == geometry.chapter_header_font_size
    assert body.text == "Short para."
    assert body.font_size == geometry.content_font_size
    assert body.y > header.y
    assert body.y == pytest.approx(geometry.new_chapter_top)
    assert pages[0].is_chapter_opening(geometry.content_font_size)


def test_long_paragraph_marks_only_first_record_indented(geometry, measurer):
    pages = paginate_chapters([_chapter("One", WORDS)], geometry=geometry, measurer=measurer)
    body = [line for line in pages[0].lines if line.font_size == geometry.content_font_size]
    assert len(body) >= 4
    assert body[0].indented
    assert not any(line.indented for line in body[1:])


def test_mid_break_adds_three_steps_without_records(geometry, measurer):
    pages = paginate_chapters(
        [_chapter("One", "Before.", "<MID_BREAK>", "After.")], geometry=geometry, measurer=measurer
    )
    texts = [line.text for line in pages[0].lines]
    assert texts == ["One", "Before.", "After."]
    before, after = pages[0].lines[1:]
    assert after.y - before.y == pytest.approx(4 * STEP)


def test_block_line_is_inset_and_unindented(geometry, measurer):
    pages = paginate_chapters(
        [_chapter("One", "<BLOCK_LINE>A quotation.")], geometry=geometry, measurer=measurer
    )
    record = pages[0].lines[1]
    assert record.text == "A quotation."
    assert not record.indented
    assert record.x == pytest.approx(geometry.content_left_x(left_page=False) + geometry.tab_size)


def test_exactly_full_header_page_leaves_an_empty_page(geometry, measurer):
    # A header page fits 24 body lines between the 252pt chapter start and 576pt.
    chapter = _chapter("One", *[f"Line {idx}." for idx in range(24)])
    pages = paginate_chapters([chapter], geometry=geometry, measurer=measurer)
    assert len(pages) == 2
    assert len(pages[0].lines) == 25
    assert pages[0].lines[-1].text == "Line 23."
    assert pages[0].side is Side.RIGHT
    assert pages[1].is_empty
    assert pages[1].side is Side.LEFT


def test_one_line_short_of_full_header_page_stays_on_one_page(geometry, measurer):
    chapter = _chapter("One", *[f"Line {idx}." for idx in range(23)])
    pages = paginate_chapters([chapter], geometry=geometry, measurer=measurer)
    assert len(pages) == 1
    assert len(pages[0].lines) == 24


def test_multi_line_header_gets_one_record_per_line(geometry):
    state = start_chapter(PaginatorState(), header="Book One\nThe Start", geometry=geometry)
    first, second = state.lines
    assert (first.text, second.text) == ("Book One", "The Start")
    assert first.font_size == second.font_size == geometry.chapter_header_font_size
    assert first.x == pytest.approx(second.x)
    assert second.y == pytest.approx(first.y + geometry.chapter_header_font_size)


def test_body_starts_below_a_header_taller_than_the_chapter_margin(geometry):
    header = "\n".join(f"Part {idx}" for idx in range(7))
    state = begin_body(start_chapter(PaginatorState(), header=header, geometry=geometry), geometry=geometry)
    # Seven 32pt lines from 72pt end at 296pt, below the 252pt chapter start.
    assert state.cursor_y == pytest.approx(72 + 7 * 32)


def test_every_chapter_opens_on_an_odd_page(geometry, measurer):
    chapters = [
        _chapter("One", *[WORDS] * 3),
        _chapter("Two", "Short."),
        _chapter("Three", *[WORDS] * 8),
        _chapter("Four", *[WORDS] * 5),
    ]
    pages = paginate_chapters(chapters, geometry=geometry, measurer=measurer)
    starts = chapter_start_pages(pages, content_font_size=geometry.content_font_size)
    assert len(starts) == 4
    assert all(number % 2 == 1 for number in starts)


def test_sides_alternate_with_page_numbers(geometry, measurer):
    chapters = [_chapter("One", *[WORDS] * 9), _chapter("Two", *[WORDS] * 4)]
    pages = paginate_chapters(chapters, geometry=geometry, measurer=measurer)
    assert len(pages) > 4
    for idx, page in enumerate(pages):
        assert page.side is Side.for_number(idx + 1)
        left = page.side is Side.LEFT
        for line in page.lines:
            assert (line.x < geometry.page_divider) == left


def test_sealed_pages_fit_the_content_block(geometry, measurer):
    chapters = [_chapter("One", *[WORDS] * 12, "<MID_BREAK>", *[WORDS] * 3)]
    pages = paginate_chapters(chapters, geometry=geometry, measurer=measurer)
    for page in pages[:-1]:
        body = [line for line in page.lines if line.font_size == geometry.content_font_size]
        assert len(body) * STEP <= geometry.content_block_height
        assert all(line.y + STEP <= geometry.content_bottom for line in body)


def test_paginate_chapter_continues_from_given_state(geometry, measurer):
    first = paginate_chapter(
        PaginatorState(), chapter=_chapter("One", "A."), geometry=geometry, measurer=measurer, step=STEP
    )
    second = paginate_chapter(
        first, chapter=_chapter("Two", "B."), geometry=geometry, measurer=measurer, step=STEP
    )
    assert first.page_count == 1
    assert second.page_count == 3
    assert second.pages[1].is_empty
    assert second.pages[2].lines[0].text == "Two"


def test_progress_advances_once_per_chapter(geometry, measurer):
    progress = CountingProgress()
    paginate_chapters(
        [_chapter("One", "A."), _chapter("Two", "B.")],
        geometry=geometry,
        measurer=measurer,
        progress=progress,
    )
    assert progress.count == 2

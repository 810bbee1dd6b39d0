"""Page flow: place wrapped lines onto pages and seal pages in order.

Pagination is a fold over chapters. Every transition takes a
``PaginatorState`` and returns a new one, so a state can be inspected or
replayed at any step.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Protocol, Sequence, Tuple

from pyphen import Pyphen

from ..chapters import parse_paragraphs
from ..models import Chapter
from .pdf_constants import DEBUG_PAGINATION, MID_BREAK_STEPS
from .pdf_measure import TextMeasurer, line_step
from .pdf_settings import PageGeometry
from .pdf_text_lines import break_paragraph
from .pdf_types import LineRecord, LineSpan, Page, Side


class _ProgressTracker(Protocol):
    """Protocol for chapter pagination progress updates."""

    def update(self, n: int | float = 1) -> object:
        """Advance the progress tracker by ``n``."""


@dataclass(slots=True, frozen=True)
class PaginatorState:
    """Snapshot of the page flow between transitions.

    Args:
        pages: Sealed pages in document order.
        lines: Lines on the page being filled.
        cursor_y: Top offset where the next line goes.
        side: Side of the page being filled.
        on_header_page: True between a chapter header and its first body line.
    """

    pages: Tuple[Page, ...] = ()
    lines: Tuple[LineRecord, ...] = ()
    cursor_y: float = 0.0
    side: Side = Side.RIGHT
    on_header_page: bool = False

    @property
    def page_count(self) -> int:
        """Return the number of sealed pages."""
        return len(self.pages)


def _debug(*, msg: str) -> None:
    """Log pagination debug output when enabled.

    Args:
        msg: Message to print.
    Returns:
        None.
    """

    if DEBUG_PAGINATION:
        print(msg)


def seal_page(state: PaginatorState) -> PaginatorState:
    """Push the page being filled onto the sealed pages, even when empty.

    Args:
        state: Current state.
    Returns:
        State with an empty current page.
    """

    page = Page(lines=state.lines, side=state.side)
    _debug(msg=f"sealed page {state.page_count + 1} ({state.side.value}, {len(page.lines)} lines)")
    return replace(state, pages=state.pages + (page,), lines=())


def start_chapter(state: PaginatorState, *, header: str, geometry: PageGeometry) -> PaginatorState:
    """Open a chapter on a recto page and place its header lines.

    Args:
        state: State after the previous chapter finished.
        header: Chapter header text; each line becomes its own record.
        geometry: Page geometry.
    Returns:
        State positioned on the chapter's header page, with the cursor
        below the last header line.
    """

    if state.lines:
        state = seal_page(state)
    if state.page_count % 2 == 1:
        _debug(msg=f"padding before chapter {header!r} at page {state.page_count + 1}")
        state = replace(state, side=Side.LEFT)
        state = seal_page(state)
    texts = [line.strip() for line in header.splitlines() if line.strip()] or [""]
    size = geometry.chapter_header_font_size
    records = tuple(
        LineRecord(
            text=text,
            x=geometry.content_left_x(left_page=False),
            y=geometry.content_margin_top + idx * size,
            font_size=size,
        )
        for idx, text in enumerate(texts)
    )
    return replace(
        state,
        lines=records,
        side=Side.RIGHT,
        on_header_page=True,
        cursor_y=geometry.content_margin_top + len(records) * size,
    )


def begin_body(state: PaginatorState, *, geometry: PageGeometry) -> PaginatorState:
    """Move the cursor to where body text starts.

    Args:
        state: State after ``start_chapter``.
        geometry: Page geometry.
    Returns:
        State with the cursor at the chapter start on a header page (pushed
        down past a header taller than that), or at the top of the content
        block otherwise.
    """

    if state.on_header_page:
        top = max(geometry.new_chapter_top, state.cursor_y)
    else:
        top = geometry.content_margin_top
    return replace(state, cursor_y=top, on_header_page=False)


def _overflow(state: PaginatorState, *, geometry: PageGeometry, step: float) -> PaginatorState:
    """Seal the page and turn over when the next line would pass the bottom.

    Args:
        state: Current state.
        geometry: Page geometry.
        step: Vertical advance per line.
    Returns:
        Unchanged state, or a state on a fresh page of the other side.
    """

    if state.cursor_y + step <= geometry.content_bottom:
        return state
    state = seal_page(state)
    return replace(state, cursor_y=geometry.content_margin_top, side=state.side.flipped())


def place_line(
    state: PaginatorState, *, span: LineSpan, geometry: PageGeometry, step: float
) -> PaginatorState:
    """Place one wrapped line at the cursor.

    Args:
        state: Current state.
        span: Line to place.
        geometry: Page geometry.
        step: Vertical advance per line.
    Returns:
        State after the line, possibly on a new page.
    """

    x = geometry.content_left_x(left_page=state.side is Side.LEFT) + span.inset
    if span.indented:
        x += geometry.tab_size
    record = LineRecord(
        text=span.text,
        x=x,
        y=state.cursor_y,
        font_size=geometry.content_font_size,
        indented=span.indented,
    )
    state = replace(state, lines=state.lines + (record,), cursor_y=state.cursor_y + step)
    return _overflow(state, geometry=geometry, step=step)


def add_spacer(
    state: PaginatorState,
    *,
    geometry: PageGeometry,
    step: float,
    steps: int = MID_BREAK_STEPS,
) -> PaginatorState:
    """Advance the cursor without placing text.

    Args:
        state: Current state.
        geometry: Page geometry.
        step: Vertical advance per line.
        steps: Number of line steps to skip.
    Returns:
        State after the gap, possibly on a new page.
    """

    state = replace(state, cursor_y=state.cursor_y + step * steps)
    return _overflow(state, geometry=geometry, step=step)


def finish_chapter(state: PaginatorState) -> PaginatorState:
    """Seal the last page of a chapter."""

    return seal_page(state)


def paginate_chapter(
    state: PaginatorState,
    *,
    chapter: Chapter,
    geometry: PageGeometry,
    measurer: TextMeasurer,
    step: float,
    hyphenator: Pyphen | None = None,
) -> PaginatorState:
    """Lay out one chapter after the pages already in ``state``.

    Args:
        state: State after the previous chapter.
        chapter: Chapter to lay out.
        geometry: Page geometry.
        measurer: Text measurer for the body font.
        step: Vertical advance per line.
        hyphenator: Optional Pyphen dictionary for overlong words.
    Returns:
        State with every page of the chapter sealed.
    """

    state = start_chapter(state, header=chapter.header, geometry=geometry)
    state = begin_body(state, geometry=geometry)
    for paragraph in parse_paragraphs(chapter.body):
        if paragraph.is_spacer:
            state = add_spacer(state, geometry=geometry, step=step)
            continue
        spans = break_paragraph(
            paragraph,
            geometry=geometry,
            measurer=measurer,
            hyphenator=hyphenator,
        )
        for span in spans:
            state = place_line(state, span=span, geometry=geometry, step=step)
    return finish_chapter(state)


def paginate_chapters(
    chapters: Iterable[Chapter],
    *,
    geometry: PageGeometry,
    measurer: TextMeasurer,
    hyphenator: Pyphen | None = None,
    progress: _ProgressTracker | None = None,
) -> List[Page]:
    """Paginate chapters in order into a flat list of sealed pages.

    Args:
        chapters: Chapters in reading order.
        geometry: Page geometry.
        measurer: Text measurer for the body font.
        hyphenator: Optional Pyphen dictionary for overlong words.
        progress: Optional tracker advanced once per chapter.
    Returns:
        Sealed pages; page ``i`` (0-based) is document page ``i + 1``.
    """

    step = line_step(measurer=measurer, geometry=geometry)
    state = PaginatorState()
    for chapter in chapters:
        state = paginate_chapter(
            state,
            chapter=chapter,
            geometry=geometry,
            measurer=measurer,
            step=step,
            hyphenator=hyphenator,
        )
        if progress is not None:
            progress.update(1)
    return list(state.pages)


def chapter_start_pages(pages: Sequence[Page], *, content_font_size: float) -> List[int]:
    """Return 1-based numbers of pages that open a chapter.

    Args:
        pages: Sealed pages.
        content_font_size: Body text font size in points.
    Returns:
        Page numbers in ascending order.
    """

    return [
        idx + 1
        for idx, page in enumerate(pages)
        if page.is_chapter_opening(content_font_size)
    ]

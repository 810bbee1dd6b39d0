"""Break paragraph text into lines that fit the content block."""

from __future__ import annotations

from typing import List, Tuple

from pyphen import Pyphen

from ..models import Paragraph, ParagraphKind
from .pdf_measure import TextMeasurer
from .pdf_settings import PageGeometry
from .pdf_types import LineSpan


def _breaks_at(text: str, index: int) -> bool:
    """Return True when a line may end just before ``index``.

    Example:
        >>> _breaks_at("ab cd", 2), _breaks_at("ab cd", 1), _breaks_at("ab", 2)
        (True, False, True)
    """

    return index >= len(text) or text[index].isspace()


def _next_word_end(text: str, index: int) -> int:
    """Return the end of the word at or after ``index``.

    Example:
        >>> _next_word_end("ab cd ef", 2)
        5
    """

    pos = index
    while pos < len(text) and text[pos].isspace():
        pos += 1
    while pos < len(text) and not text[pos].isspace():
        pos += 1
    return pos


def _estimate_chars(*, text: str, measured: float, width: float) -> int:
    """Estimate how many characters fill ``width`` by proportional scaling.

    Args:
        text: Whole paragraph text.
        measured: Measured width of the whole paragraph.
        width: Target line width.
    Returns:
        Approximate character count, at least one.
    """

    if measured <= 0:
        return len(text)
    return max(1, int(len(text) / (measured / width)))


def _split_long_word(
    *,
    text: str,
    start: int,
    width: float,
    font_size: float,
    measurer: TextMeasurer,
    hyphenator: Pyphen | None,
) -> Tuple[str, int]:
    """Split a word that cannot fit on a line by itself.

    Args:
        text: Paragraph text.
        start: Scan position; may point at whitespace before the word.
        width: Target line width.
        font_size: Font size for measurement.
        measurer: Text measurer.
        hyphenator: Optional Pyphen dictionary for syllable breaks.
    Returns:
        Tuple of (line text, characters consumed from ``start``).
    """

    word_start = start
    while word_start < len(text) and text[word_start].isspace():
        word_start += 1
    word = text[word_start:_next_word_end(text, word_start)]
    lead = word_start - start
    # Compound words break after their own hyphens first.
    own = [idx + 1 for idx, char in enumerate(word[:-1]) if char == "-" and idx > 0]
    for pos in reversed(own):
        if measurer.width_of(word[:pos], font_size) <= width:
            return word[:pos], lead + pos
    if hyphenator is not None:
        head = word.split("-", 1)[0] or word
        for pos in reversed(hyphenator.positions(head)):
            piece = f"{head[:pos]}-"
            if measurer.width_of(piece, font_size) <= width:
                return piece, lead + pos
    count = max(1, len(word) - 1)
    while count > 1 and measurer.width_of(word[:count], font_size) > width:
        count -= 1
    return word[:count], lead + count


def _next_line(
    *,
    text: str,
    start: int,
    estimate: int,
    width: float,
    font_size: float,
    measurer: TextMeasurer,
    hyphenator: Pyphen | None,
) -> Tuple[str, int]:
    """Return the next line starting at ``start`` and its untrimmed length.

    The estimate is first extended word by word while the candidate still
    fits, then shrunk a character at a time until it ends at whitespace and
    fits ``width``.

    Args:
        text: Paragraph text.
        start: Scan position.
        estimate: Estimated characters per line.
        width: Target line width.
        font_size: Font size for measurement.
        measurer: Text measurer.
        hyphenator: Optional Pyphen dictionary for overlong words.
    Returns:
        Tuple of (trimmed line text, characters consumed from ``start``).
    """

    end = min(len(text), start + estimate)
    while end < len(text):
        candidate_end = _next_word_end(text, end)
        if measurer.width_of(text[start:candidate_end].strip(), font_size) > width:
            break
        end = candidate_end
    while end > start and not (
        _breaks_at(text, end)
        and measurer.width_of(text[start:end].strip(), font_size) <= width
    ):
        end -= 1
    line = text[start:end].strip()
    if not line:
        return _split_long_word(
            text=text,
            start=start,
            width=width,
            font_size=font_size,
            measurer=measurer,
            hyphenator=hyphenator,
        )
    return line, end - start


def break_paragraph(
    paragraph: Paragraph,
    *,
    geometry: PageGeometry,
    measurer: TextMeasurer,
    hyphenator: Pyphen | None = None,
) -> List[LineSpan]:
    """Wrap a paragraph into lines for the content block.

    Args:
        paragraph: Paragraph to wrap.
        geometry: Page geometry with content widths.
        measurer: Text measurer for the body font.
        hyphenator: Optional Pyphen dictionary used only for words wider than
            a whole line.
    Returns:
        LineSpans in reading order; empty for mid-break spacers.
    """

    if paragraph.is_spacer or not paragraph.text.strip():
        return []
    text = paragraph.text
    font_size = geometry.content_font_size
    if paragraph.kind is ParagraphKind.BLOCK_LINE:
        indented = False
        inset = geometry.tab_size
        first_width = main_width = geometry.block_line_width
    else:
        indented = True
        inset = 0.0
        first_width = geometry.tabbed_content_block_width
        main_width = geometry.content_block_width

    measured = measurer.width_of(text, font_size)
    if measured <= first_width:
        return [LineSpan(text=text.strip(), indented=indented, inset=inset)]

    spans: List[LineSpan] = []
    pos = 0
    while text[pos:].strip():
        width = first_width if indented else main_width
        line, consumed = _next_line(
            text=text,
            start=pos,
            estimate=_estimate_chars(text=text, measured=measured, width=width),
            width=width,
            font_size=font_size,
            measurer=measurer,
            hyphenator=hyphenator,
        )
        spans.append(LineSpan(text=line, indented=indented, inset=inset))
        pos += consumed
        indented = False
    return spans

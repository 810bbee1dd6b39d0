"""Impose logical pages onto duplex sheets, four pages per signature.

Each sheet is printed in two passes and folded once::

    side A              side B
    +-----+-----+       +-----+-----+
    |  4  |  1  |       |  2  |  3  |
    +-----+-----+       +-----+-----+
"""

from __future__ import annotations

from typing import Iterator, Sequence

from .pdf_types import Page, PageSlot, Sheet, SheetSide, Side

PAGES_PER_SIGNATURE = 4


def _slot(pages: Sequence[Page], *, index: int, side: Side) -> PageSlot:
    """Return the slot for a 0-based page index, empty past the end.

    Args:
        pages: Sealed pages.
        index: 0-based page index.
        side: Half of the sheet side the page prints on.
    Returns:
        PageSlot numbered ``index + 1``.
    """

    page = pages[index] if index < len(pages) else None
    return PageSlot(page=page, number=index + 1, side=side)


def signature_count(page_count: int) -> int:
    """Return how many sheets ``page_count`` pages need.

    Example:
        >>> signature_count(0), signature_count(4), signature_count(5)
        (0, 1, 2)
    """

    return -(-page_count // PAGES_PER_SIGNATURE)


def compose(pages: Sequence[Page]) -> Iterator[Sheet]:
    """Yield one sheet per four pages in printing order.

    Args:
        pages: Sealed pages in document order.
    Returns:
        Iterator of Sheets; slots beyond the last page hold ``page=None``.

    Example:
        >>> sheets = list(compose([Page(), Page(), Page()]))
        >>> [slot.number for side in sheets[0].sides() for slot in side.slots()]
        [4, 1, 2, 3]
        >>> sheets[0].side_a.left.page is None
        True
    """

    for index in range(signature_count(len(pages))):
        base = index * PAGES_PER_SIGNATURE
        yield Sheet(
            index=index,
            side_a=SheetSide(
                left=_slot(pages, index=base + 3, side=Side.LEFT),
                right=_slot(pages, index=base, side=Side.RIGHT),
            ),
            side_b=SheetSide(
                left=_slot(pages, index=base + 1, side=Side.LEFT),
                right=_slot(pages, index=base + 2, side=Side.RIGHT),
            ),
        )

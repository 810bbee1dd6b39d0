"""Data structures for line flow, pages, and signature imposition."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Side(Enum):
    """Which half of an open spread a logical page occupies."""

    LEFT = "left"
    RIGHT = "right"

    def flipped(self) -> "Side":
        """Return the opposite side."""
        return Side.RIGHT if self is Side.LEFT else Side.LEFT

    @classmethod
    def for_number(cls, number: int) -> "Side":
        """Return the side a 1-based page number lands on; odd pages are recto.

        Example:
            >>> Side.for_number(1), Side.for_number(4)
            (<Side.RIGHT: 'right'>, <Side.LEFT: 'left'>)
        """

        return cls.RIGHT if number % 2 == 1 else cls.LEFT


@dataclass(slots=True, frozen=True)
class LineSpan:
    """A wrapped line of paragraph text before it is placed on a page.

    Args:
        text: Trimmed line text.
        indented: Whether the line starts a paragraph and takes the tab.
        inset: Extra x offset in points (block lines are inset one tab).
    """

    text: str
    indented: bool = False
    inset: float = 0.0


@dataclass(slots=True, frozen=True)
class LineRecord:
    """A line placed on a page.

    Args:
        text: Text to draw.
        x: Offset from the left edge of the sheet in points.
        y: Offset from the top edge of the sheet in points.
        font_size: Font size in points.
        indented: Whether the line is a tab-indented paragraph opener.
    """

    text: str
    x: float
    y: float
    font_size: float
    indented: bool = False


@dataclass(slots=True, frozen=True)
class Page:
    """A sealed logical page."""

    lines: Tuple[LineRecord, ...] = ()
    side: Side = Side.RIGHT

    @property
    def is_empty(self) -> bool:
        """Return True for blank pages such as chapter padding."""
        return not self.lines

    def is_chapter_opening(self, content_font_size: float) -> bool:
        """Return True when the page holds a chapter header line.

        Args:
            content_font_size: Body text font size in points.
        Returns:
            True when any line is larger than body text.
        """

        return any(line.font_size > content_font_size for line in self.lines)


@dataclass(slots=True, frozen=True)
class PageSlot:
    """A logical page position on one side of a printed sheet.

    Args:
        page: Page to draw, or None past the end of the document.
        number: 1-based page number within the document.
        side: Half of the sheet the page occupies.
    """

    page: Page | None
    number: int
    side: Side

    def draws_furniture(self, content_font_size: float) -> bool:
        """Return True when the running header and page number belong here.

        Args:
            content_font_size: Body text font size in points.
        Returns:
            False for absent, blank, or chapter-opening pages.
        """

        if self.page is None or self.page.is_empty:
            return False
        return not self.page.is_chapter_opening(content_font_size)


@dataclass(slots=True, frozen=True)
class SheetSide:
    """Two logical pages printed side by side on one pass."""

    left: PageSlot
    right: PageSlot

    def slots(self) -> Tuple[PageSlot, PageSlot]:
        """Return the slots in drawing order (left first)."""
        return self.left, self.right


@dataclass(slots=True, frozen=True)
class Sheet:
    """One duplex sheet carrying a four-page signature.

    Args:
        index: 0-based signature index.
        side_a: First printer pass holding pages (4, 1).
        side_b: Second printer pass holding pages (2, 3).
    """

    index: int
    side_a: SheetSide
    side_b: SheetSide

    def sides(self) -> Tuple[SheetSide, SheetSide]:
        """Return both sides in printing order."""
        return self.side_a, self.side_b

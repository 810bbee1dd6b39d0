"""
Typed containers for chapter source text.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ParagraphKind(Enum):
    """How a paragraph participates in the text flow."""

    TEXT = "text"
    MID_BREAK = "mid_break"
    BLOCK_LINE = "block_line"


@dataclass(slots=True, frozen=True)
class Paragraph:
    """One newline-delimited segment of a chapter body.

    Attributes:
        text: Paragraph text with any directive marker removed.
        kind: Directive classification; ``MID_BREAK`` paragraphs carry no text.
    """

    text: str
    kind: ParagraphKind = ParagraphKind.TEXT

    @property
    def is_spacer(self) -> bool:
        """Return True when the paragraph only inserts vertical space."""
        return self.kind is ParagraphKind.MID_BREAK


@dataclass(slots=True)
class Chapter:
    """Chapter header and raw body split from a chapter source file."""

    header: str
    body: str
    source: Path | None = None

    def label(self) -> str:
        """Return a short description for progress and error output.

        Example:
            >>> Chapter(header="One", body="", source=Path("book-1.txt")).label()
            'book-1.txt'
        """

        return self.source.name if self.source is not None else self.header

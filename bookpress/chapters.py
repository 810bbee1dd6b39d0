"""
Helpers that turn chapter text files into typed chapter objects.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List

from .cleaning import normalize_whitespace
from .errors import ChapterFormatError
from .models import Chapter, Paragraph, ParagraphKind
from .pdf.pdf_constants import BLOCK_LINE_MARKER, HEADER_SENTINEL, MID_BREAK_MARKER


def chapter_paths(title: str, count: int, directory: Path | str = ".") -> List[Path]:
    """Return the ``{title}-{n}.txt`` paths for chapters 1..count.

    Args:
        title: Book title used as the file name prefix.
        count: Number of chapters.
        directory: Folder containing the chapter files.
    Returns:
        Paths in reading order.

    Example:
        >>> [p.name for p in chapter_paths("moby", 2)]
        ['moby-1.txt', 'moby-2.txt']
    """

    if count < 1:
        raise ChapterFormatError(f"Chapter count must be at least 1, got {count}")
    root = Path(directory)
    return [root / f"{title}-{idx}.txt" for idx in range(1, count + 1)]


def split_chapter(raw: str, source: Path | None = None) -> Chapter:
    """Split chapter text into header and body at the header sentinel.

    Args:
        raw: Full chapter text.
        source: Optional file the text came from, used in error messages.
    Returns:
        Chapter with the stripped header and the untouched body.

    Example:
        >>> split_chapter("One\\n<END_HEADER>\\nIt began.\\n").header
        'One'
    """

    header, sentinel, body = raw.partition(HEADER_SENTINEL)
    if not sentinel:
        where = source or "chapter text"
        raise ChapterFormatError(f"{where} has no {HEADER_SENTINEL} marker")
    return Chapter(header=header.strip(), body=body, source=source)


def load_chapter(path: Path) -> Chapter:
    """Read and split a single chapter file."""

    try:
        raw = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ChapterFormatError(f"Cannot read chapter {path}: {exc}") from exc
    return split_chapter(raw, source=Path(path))


def load_chapters(paths: Iterable[Path]) -> Iterator[Chapter]:
    """Yield chapters in the given order, reading each file lazily."""

    for path in paths:
        yield load_chapter(path)


def parse_paragraph(line: str) -> Paragraph | None:
    """Classify one body line, returning None for blank lines.

    Example:
        >>> parse_paragraph("<BLOCK_LINE>Quoted words.")
        Paragraph(text='Quoted words.', kind=<ParagraphKind.BLOCK_LINE: 'block_line'>)
    """

    text = normalize_whitespace(line)
    if not text:
        return None
    if MID_BREAK_MARKER in text:
        return Paragraph(text="", kind=ParagraphKind.MID_BREAK)
    if BLOCK_LINE_MARKER in text:
        stripped = normalize_whitespace(text.replace(BLOCK_LINE_MARKER, "", 1))
        return Paragraph(text=stripped, kind=ParagraphKind.BLOCK_LINE)
    return Paragraph(text=text)


def parse_paragraphs(body: str) -> List[Paragraph]:
    """Split a chapter body into paragraphs, one per non-blank line.

    Example:
        >>> [p.text for p in parse_paragraphs("First.\\n\\n  Second.\\n")]
        ['First.', 'Second.']
    """

    paragraphs: List[Paragraph] = []
    for line in body.splitlines():
        paragraph = parse_paragraph(line)
        if paragraph is not None:
            paragraphs.append(paragraph)
    return paragraphs

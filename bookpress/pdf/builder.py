"""PDF generation for a book of chapter text files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from pyphen import Pyphen
from reportlab.pdfgen.canvas import Canvas
from tqdm import tqdm

from ..chapters import load_chapters
from ..models import Chapter
from .pdf_measure import ReportlabMeasurer
from .pdf_pagination import paginate_chapters
from .pdf_render import RenderContext, render_sheets
from .pdf_settings import BookSettings, PageGeometry, compute_geometry, register_font
from .pdf_signatures import compose
from .pdf_types import Page

__all__ = [
    "BookSettings",
    "build_book",
    "paginate_files",
]


@dataclass(slots=True)
class _FontSetup:
    """Font artifacts needed for layout and drawing.

    Args:
        geometry: Validated page geometry.
        measurer: Measurer bound to the registered font.
        hyphenator: Pyphen dictionary, or None when hyphenation is off.
    """

    geometry: PageGeometry
    measurer: ReportlabMeasurer
    hyphenator: Pyphen | None


def _prepare_fonts(*, settings: BookSettings) -> _FontSetup:
    """Validate geometry and register the body font.

    Args:
        settings: Layout settings.
    Returns:
        _FontSetup for pagination and rendering.
    """

    geometry = compute_geometry(settings)
    font_name = register_font(settings.font_path)
    hyphenator = Pyphen(lang="en_US") if settings.hyphenate_overflow else None
    return _FontSetup(
        geometry=geometry,
        measurer=ReportlabMeasurer(font_name),
        hyphenator=hyphenator,
    )


def _labelled(chapters: Iterable[Chapter], progress: tqdm | None) -> Iterator[Chapter]:
    """Show each chapter's label on the progress bar as it is paginated."""

    for chapter in chapters:
        if progress is not None:
            progress.set_postfix_str(chapter.label())
        yield chapter


def _paginate(*, paths: Sequence[Path], font_setup: _FontSetup) -> List[Page]:
    """Load and paginate chapter files with a progress bar.

    Args:
        paths: Chapter files in reading order.
        font_setup: Geometry and measurement setup.
    Returns:
        Sealed pages.
    """

    progress = tqdm(total=len(paths), desc="Paginating chapters", unit="chapter") if paths else None
    try:
        return paginate_chapters(
            _labelled(load_chapters(paths), progress),
            geometry=font_setup.geometry,
            measurer=font_setup.measurer,
            hyphenator=font_setup.hyphenator,
            progress=progress,
        )
    finally:
        if progress is not None:
            progress.close()


def paginate_files(*, paths: Sequence[Path], settings: BookSettings | None = None) -> List[Page]:
    """Paginate chapter files without drawing anything.

    Args:
        paths: Chapter files in reading order.
        settings: Optional settings override.
    Returns:
        Sealed pages.
    """

    font_setup = _prepare_fonts(settings=settings or BookSettings())
    return _paginate(paths=paths, font_setup=font_setup)


def build_book(
    *,
    paths: Sequence[Path],
    settings: BookSettings | None = None,
    output_path: Path | None = None,
) -> List[Page]:
    """Paginate chapter files and write the imposed PDF.

    Args:
        paths: Chapter files in reading order.
        settings: Optional settings override.
        output_path: Destination; defaults to ``settings.output_path()``.
    Returns:
        The sealed pages that were rendered.

    Example:
        >>> build_book(
        ...     paths=chapter_paths("novel", 3),
        ...     output_path=Path("output/novel.pdf"),
        ... )  # doctest: +SKIP
    """

    resolved = settings or BookSettings()
    font_setup = _prepare_fonts(settings=resolved)
    pages = _paginate(paths=paths, font_setup=font_setup)
    target = output_path or resolved.output_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    geometry = font_setup.geometry
    canvas = Canvas(str(target), pagesize=(geometry.page_width, geometry.page_height))
    ctx = RenderContext(geometry=geometry, settings=resolved, measurer=font_setup.measurer)
    render_sheets(canvas, ctx, sheets=compose(pages))
    canvas.save()
    return pages

"""Configuration, derived page geometry, and fonts for PDF generation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from reportlab.lib.pagesizes import landscape, portrait
from reportlab.lib.units import inch
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from ..errors import ConfigError
from .pdf_constants import DEFAULT_FONT_NAME, PAPER_SIZES

_INCH_FIELDS = (
    "header_margin_x",
    "header_margin_y",
    "content_margin_top",
    "content_margin_bottom",
    "outside_margin_x",
    "inside_margin_x",
    "tab_size",
    "content_margin_on_new_chapter",
    "separation_between_lines",
)
_FONT_SIZE_FIELDS = ("header_font_size", "chapter_header_font_size", "content_font_size")


@dataclass(slots=True)
class BookSettings:
    """User-facing layout options; lengths are inches, font sizes are points.

    Example:
        >>> settings = BookSettings()
        >>> settings.content_margin_top > settings.header_margin_y
        True
    """

    output: str = "output.pdf"
    header_left: str | None = None
    header_right: str | None = None
    header_margin_x: float = 0.5
    header_margin_y: float = 0.5
    content_margin_top: float = 1.0
    content_margin_bottom: float = 0.5
    outside_margin_x: float = 0.5
    inside_margin_x: float = 0.75
    tab_size: float = 0.3
    content_margin_on_new_chapter: float = 3.5
    separation_between_lines: float = 0.025
    header_font_size: float = 12.0
    chapter_header_font_size: float = 32.0
    content_font_size: float = 12.0
    show_content_margins: bool = False
    paper_size: str = "letter"
    landscape: bool = True
    font_path: Path | None = None
    hyphenate_overflow: bool = True

    def output_path(self) -> Path:
        """Return the output file, adding a ``.pdf`` suffix when missing.

        Example:
            >>> BookSettings(output="novel").output_path().name
            'novel.pdf'
        """

        path = Path(self.output)
        if path.suffix.lower() != ".pdf":
            path = path.with_name(path.name + ".pdf")
        return path


@dataclass(slots=True, frozen=True)
class PageGeometry:
    """Page-box measurements in points, derived once from ``BookSettings``.

    The physical sheet side is split at ``page_divider`` into a left and a
    right logical page. ``y`` values count down from the top of the sheet.
    """

    page_width: float
    page_height: float
    page_divider: float
    header_margin_x: float
    header_margin_y: float
    content_margin_top: float
    content_margin_bottom: float
    outside_margin_x: float
    inside_margin_x: float
    tab_size: float
    new_chapter_top: float
    line_separation: float
    content_block_width: float
    content_block_height: float
    tabbed_content_block_width: float
    block_line_width: float
    header_center_left_x: float
    header_center_right_x: float
    header_font_size: float
    chapter_header_font_size: float
    content_font_size: float

    @property
    def content_bottom(self) -> float:
        """Return the lowest y a line may start above.

        Returns:
            Offset from the top of the sheet in points.
        """

        return self.content_block_height + self.content_margin_top

    def content_left_x(self, *, left_page: bool) -> float:
        """Return the x where un-indented text starts on a logical page.

        Args:
            left_page: True for the verso (left) half of the sheet.
        Returns:
            X offset in points.
        """

        if left_page:
            return self.outside_margin_x
        return self.page_divider + self.inside_margin_x


def _check_settings(settings: BookSettings) -> None:
    """Reject settings that cannot describe a page.

    Args:
        settings: Options to validate.
    Returns:
        None.
    """

    for name in _INCH_FIELDS:
        if getattr(settings, name) < 0:
            raise ConfigError(f"{name} must be >= 0, got {getattr(settings, name)}")
    for name in _FONT_SIZE_FIELDS:
        if getattr(settings, name) <= 0:
            raise ConfigError(f"{name} must be > 0, got {getattr(settings, name)}")
    if settings.paper_size.lower() not in PAPER_SIZES:
        known = ", ".join(sorted(PAPER_SIZES))
        raise ConfigError(f"Unknown paper size {settings.paper_size!r}; expected one of {known}")
    if settings.content_margin_top <= settings.header_margin_y:
        raise ConfigError(
            "content_margin_top must be greater than header_margin_y "
            f"({settings.content_margin_top} <= {settings.header_margin_y})"
        )


def _check_geometry(geometry: PageGeometry) -> None:
    """Reject derived boxes that leave no room for text.

    Args:
        geometry: Derived geometry.
    Returns:
        None.
    """

    for name in (
        "content_block_width",
        "content_block_height",
        "tabbed_content_block_width",
        "block_line_width",
    ):
        value = getattr(geometry, name)
        if value <= 0:
            raise ConfigError(f"{name} must be positive, margins leave {value:.2f}pt")
    if geometry.new_chapter_top >= geometry.content_bottom:
        raise ConfigError(
            "content_margin_on_new_chapter starts below the content block "
            f"({geometry.new_chapter_top:.2f}pt >= {geometry.content_bottom:.2f}pt)"
        )
    header_bottom = geometry.content_margin_top + geometry.chapter_header_font_size
    if geometry.new_chapter_top < header_bottom:
        raise ConfigError(
            "content_margin_on_new_chapter starts inside the chapter header "
            f"({geometry.new_chapter_top:.2f}pt < {header_bottom:.2f}pt)"
        )


def compute_geometry(settings: BookSettings) -> PageGeometry:
    """Derive page geometry from settings.

    Args:
        settings: Margins, sizes, and paper options.
    Returns:
        Frozen ``PageGeometry`` in points.

    Example:
        >>> geometry = compute_geometry(BookSettings())
        >>> geometry.page_divider
        396.0
        >>> round(geometry.content_block_width, 2)
        306.0
    """

    _check_settings(settings)
    paper = PAPER_SIZES[settings.paper_size.lower()]
    page_width, page_height = landscape(paper) if settings.landscape else portrait(paper)
    divider = page_width / 2
    outside = settings.outside_margin_x * inch
    inside = settings.inside_margin_x * inch
    tab = settings.tab_size * inch
    width = divider - outside - inside
    geometry = PageGeometry(
        page_width=page_width,
        page_height=page_height,
        page_divider=divider,
        header_margin_x=settings.header_margin_x * inch,
        header_margin_y=settings.header_margin_y * inch,
        content_margin_top=settings.content_margin_top * inch,
        content_margin_bottom=settings.content_margin_bottom * inch,
        outside_margin_x=outside,
        inside_margin_x=inside,
        tab_size=tab,
        new_chapter_top=settings.content_margin_on_new_chapter * inch,
        line_separation=settings.separation_between_lines * inch,
        content_block_width=width,
        content_block_height=page_height
        - (settings.content_margin_top + settings.content_margin_bottom) * inch,
        tabbed_content_block_width=width - tab,
        block_line_width=width - 2 * tab,
        header_center_left_x=outside + width / 2,
        header_center_right_x=divider + inside + width / 2,
        header_font_size=settings.header_font_size,
        chapter_header_font_size=settings.chapter_header_font_size,
        content_font_size=settings.content_font_size,
    )
    _check_geometry(geometry)
    return geometry


def register_font(font_path: Path | None) -> str:
    """Register a TrueType font and return its name.

    Args:
        font_path: Path to a ``.ttf`` file; None selects the built-in face.
    Returns:
        Registered font name usable with ReportLab canvases and metrics.

    Example:
        >>> register_font(None)
        'Times-Roman'
    """

    if font_path is None:
        return DEFAULT_FONT_NAME
    path = Path(font_path)
    name = path.stem
    if name in pdfmetrics.getRegisteredFontNames():
        return name
    if not path.exists():
        raise ConfigError(f"Font file not found: {path}")
    try:
        pdfmetrics.registerFont(TTFont(name, str(path)))
    except TTFError as exc:
        raise ConfigError(f"Cannot load font {path}: {exc}") from exc
    return name


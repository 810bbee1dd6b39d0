"""
Command-line entry point: paginate ``{title}-{n}.txt`` files into a PDF.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from .chapters import chapter_paths
from .errors import BookpressError
from .pdf.builder import build_book
from .pdf.pdf_settings import BookSettings

# (option strings, settings field, help); all take a float.
_NUMERIC_OPTIONS = (
    (("--header-margin-x", "-hmx"), "header_margin_x", "Page number inset from the outer edge (in)."),
    (("--header-margin-y", "-hmy"), "header_margin_y", "Running header offset from the top (in)."),
    (("--content-margin-top", "-cmt"), "content_margin_top", "Body text top margin (in); must exceed --header-margin-y."),
    (("--content-margin-bottom", "-cmb"), "content_margin_bottom", "Body text bottom margin (in)."),
    (("--outside-margin-x", "-omx"), "outside_margin_x", "Margin on the outer edge of each page (in)."),
    (("--inside-margin-x", "-imx"), "inside_margin_x", "Margin toward the fold of each page (in)."),
    (("--tab-size", "-ts"), "tab_size", "Paragraph indent (in)."),
    (("--content-margin-on-new-chapter", "-cmonnc"), "content_margin_on_new_chapter", "Where body text starts on a chapter's first page (in)."),
    (("--separation-between-lines", "-sbl"), "separation_between_lines", "Extra space between lines (in)."),
    (("--header-font-size", "-hfs"), "header_font_size", "Font size of page numbers and running headers (pt)."),
    (("--chapter-header-font-size", "-chfs"), "chapter_header_font_size", "Font size of chapter titles (pt)."),
    (("--font-size", "-fs"), "content_font_size", "Font size of body text (pt)."),
)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return CLI arguments for the book builder."""

    defaults = BookSettings()
    parser = argparse.ArgumentParser(
        description="Lay out chapter text files into a duplex signature PDF."
    )
    parser.add_argument("--title", "-t", required=True, help="Chapter file prefix: files are TITLE-1.txt..TITLE-N.txt.")
    parser.add_argument("--num-chapters", "-nc", type=int, required=True, help="Number of chapter files.")
    parser.add_argument("--directory", "-d", type=Path, default=Path("."), help="Folder holding the chapter files.")
    parser.add_argument("--output", "-fn", default=defaults.output, help="Output PDF; '.pdf' is appended when missing.")
    parser.add_argument("--font", "-f", type=Path, default=None, help="TrueType font file for all text.")
    parser.add_argument("--header-left", "-hl", default=None, help="Running header on left pages.")
    parser.add_argument("--header-right", "-hr", default=None, help="Running header on right pages.")
    for flags, field_name, help_text in _NUMERIC_OPTIONS:
        parser.add_argument(
            *flags,
            dest=field_name,
            type=float,
            default=getattr(defaults, field_name),
            help=help_text,
        )
    parser.add_argument(
        "--show-content-margins",
        "-scm",
        action="store_true",
        help="Outline the content blocks and the sheet's center line.",
    )
    parser.add_argument("--paper", choices=("letter", "a4"), default=defaults.paper_size, help="Paper size.")
    parser.add_argument("--portrait", action="store_true", help="Print on portrait sheets instead of landscape.")
    parser.add_argument(
        "--no-hyphenate",
        action="store_true",
        help="Hard-break words wider than a line instead of hyphenating them.",
    )
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> BookSettings:
    """Build BookSettings from parsed arguments.

    Args:
        args: Parsed CLI namespace.
    Returns:
        BookSettings with every option applied.
    """

    numeric = {field_name: getattr(args, field_name) for _, field_name, _ in _NUMERIC_OPTIONS}
    return BookSettings(
        output=args.output,
        header_left=args.header_left,
        header_right=args.header_right,
        show_content_margins=args.show_content_margins,
        paper_size=args.paper,
        landscape=not args.portrait,
        font_path=args.font,
        hyphenate_overflow=not args.no_hyphenate,
        **numeric,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the builder and return a process exit code.

    Example:
        >>> main(["-t", "novel", "-nc", "3", "-fn", "novel"])  # doctest: +SKIP
        0
    """

    args = _parse_args(argv)
    settings = settings_from_args(args)
    try:
        paths = chapter_paths(args.title, args.num_chapters, args.directory)
        pages = build_book(paths=paths, settings=settings)
    except BookpressError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(f"Wrote {len(pages)} pages to {settings.output_path()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Shared constants for chapter parsing and PDF layout."""

from __future__ import annotations

import os

from reportlab.lib.pagesizes import A4, letter

HEADER_SENTINEL = "<END_HEADER>"
MID_BREAK_MARKER = "<MID_BREAK>"
BLOCK_LINE_MARKER = "<BLOCK_LINE>"
MID_BREAK_STEPS = 3
LINE_HEIGHT_SAMPLE = "height"
DEFAULT_FONT_NAME = "Times-Roman"
PAPER_SIZES = {
    "letter": letter,
    "a4": A4,
}
DEBUG_PAGINATION = os.getenv("DEBUG_PAGINATION", "0") not in {
    "",
    "0",
    "false",
    "False",
}

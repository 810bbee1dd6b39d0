"""Text measurement boundary between layout and font metrics."""

from __future__ import annotations

import math
from typing import Protocol

from reportlab.pdfbase import pdfmetrics

from ..errors import MeasurementError
from .pdf_constants import LINE_HEIGHT_SAMPLE
from .pdf_settings import PageGeometry


class TextMeasurer(Protocol):
    """Protocol for sizing strings at a font size."""

    def width_of(self, text: str, font_size: float) -> float:
        """Return the advance width of ``text`` in points."""

    def height_of(self, sample: str, font_size: float) -> float:
        """Return the line height used for ``sample`` in points."""


class ReportlabMeasurer:
    """Measure text with ReportLab font metrics.

    Args:
        font_name: Name of a registered or built-in ReportLab font.

    Example:
        >>> measurer = ReportlabMeasurer("Times-Roman")
        >>> measurer.width_of("", 12)
        0.0
    """

    def __init__(self, font_name: str) -> None:
        self.font_name = font_name

    def width_of(self, text: str, font_size: float) -> float:
        try:
            return float(pdfmetrics.stringWidth(text, self.font_name, font_size))
        except Exception as exc:
            raise MeasurementError(
                f"Cannot measure {text[:20]!r} with {self.font_name}: {exc}"
            ) from exc

    def height_of(self, sample: str, font_size: float) -> float:
        # Metrics are per font, so the sample only has to be encodable.
        self.width_of(sample, font_size)
        try:
            ascent, descent = pdfmetrics.getAscentDescent(self.font_name, font_size)
        except Exception as exc:
            raise MeasurementError(f"No metrics for font {self.font_name}: {exc}") from exc
        return float(ascent - descent)

    def ascent(self, font_size: float) -> float:
        """Return the distance from the top of a line to its baseline."""

        try:
            ascent, _ = pdfmetrics.getAscentDescent(self.font_name, font_size)
        except Exception as exc:
            raise MeasurementError(f"No metrics for font {self.font_name}: {exc}") from exc
        return float(ascent)


def line_step(*, measurer: TextMeasurer, geometry: PageGeometry) -> int:
    """Return the vertical advance between consecutive body lines.

    Args:
        measurer: Text measurer.
        geometry: Page geometry supplying font size and separation.
    Returns:
        Line height plus separation, floored to whole points.
    """

    height = measurer.height_of(LINE_HEIGHT_SAMPLE, geometry.content_font_size)
    step = math.floor(height + geometry.line_separation)
    if step <= 0:
        raise MeasurementError(f"Line step must be positive, measured {step}")
    return step

"""Lay out chapter text files into duplex-printable book signatures."""

from .errors import BookpressError, ChapterFormatError, ConfigError, MeasurementError

__all__ = [
    "BookpressError",
    "ChapterFormatError",
    "ConfigError",
    "MeasurementError",
]

"""
Exceptions raised while validating, loading, and laying out a book.
"""


class BookpressError(Exception):
    """Base class for every error raised by the layout pipeline."""


class ConfigError(BookpressError):
    """Margins, sizes, or fonts describe a page that cannot hold content."""


class ChapterFormatError(BookpressError):
    """A chapter file is missing, unreadable, or lacks its header sentinel."""


class MeasurementError(BookpressError):
    """The text measurer could not size a string."""

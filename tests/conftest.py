from pathlib import Path

import pytest

from bookpress.pdf.pdf_settings import BookSettings, compute_geometry


class FakeMeasurer:
    """Monospace measurer: every character is ``char_width`` ems wide."""

    def __init__(self, char_width: float = 0.5) -> None:
        self.char_width = char_width

    def width_of(self, text: str, font_size: float) -> float:
        return len(text) * font_size * self.char_width

    def height_of(self, sample: str, font_size: float) -> float:
        return float(font_size)


class CountingProgress:
    def __init__(self) -> None:
        self.count = 0

    def update(self, n=1):
        self.count += n


@pytest.fixture
def settings():
    return BookSettings()


@pytest.fixture
def geometry(settings):
    return compute_geometry(settings)


@pytest.fixture
def measurer():
    return FakeMeasurer()


@pytest.fixture
def write_chapter(tmp_path):
    def write(name: str, header: str, body: str) -> Path:
        path = tmp_path / name
        path.write_text(f"{header}\n<END_HEADER>\n{body}", encoding="utf-8")
        return path

    return write

import pytest

from bookpress.chapters import chapter_paths
from bookpress.cli import main
from bookpress.errors import ChapterFormatError, ConfigError
from bookpress.pdf.builder import build_book, paginate_files
from bookpress.pdf.pdf_settings import BookSettings

from .test_line_breaker import WORDS


@pytest.fixture
def novel(write_chapter, tmp_path):
    write_chapter("novel-1.txt", "Chapter One", "\n".join([WORDS] * 6 + ["<MID_BREAK>", WORDS]))
    write_chapter("novel-2.txt", "Chapter Two", "<BLOCK_LINE>" + WORDS + "\nShort ending.\n")
    return chapter_paths("novel", 2, tmp_path)


def test_build_book_writes_pdf(novel, tmp_path):
    output = tmp_path / "out" / "novel.pdf"
    settings = BookSettings(header_left="Novel", header_right="Author", show_content_margins=True)
    pages = build_book(paths=novel, settings=settings, output_path=output)
    assert output.read_bytes().startswith(b"%PDF")
    openings = [idx + 1 for idx, page in enumerate(pages) if page.is_chapter_opening(12.0)]
    assert len(openings) == 2
    assert all(number % 2 == 1 for number in openings)


def test_paginate_files_matches_build(novel, tmp_path):
    settings = BookSettings()
    paged = paginate_files(paths=novel, settings=settings)
    built = build_book(paths=novel, settings=settings, output_path=tmp_path / "b.pdf")
    assert paged == built


def test_bad_configuration_fails_before_reading_chapters(tmp_path):
    settings = BookSettings(content_margin_top=0.25)
    with pytest.raises(ConfigError):
        build_book(paths=[tmp_path / "missing-1.txt"], settings=settings, output_path=tmp_path / "x.pdf")


def test_missing_chapter_file_fails(novel, tmp_path):
    with pytest.raises(ChapterFormatError):
        build_book(paths=[*novel, tmp_path / "novel-3.txt"], output_path=tmp_path / "x.pdf")


def test_cli_builds_from_title_and_count(novel, tmp_path, capsys):
    output = tmp_path / "cli-book"
    code = main(
        ["-t", "novel", "-nc", "2", "-d", str(tmp_path), "-fn", str(output), "-hl", "Left", "-fs", "11"]
    )
    assert code == 0
    assert (tmp_path / "cli-book.pdf").exists()
    assert "cli-book.pdf" in capsys.readouterr().out


def test_cli_reports_missing_chapters(novel, tmp_path, capsys):
    code = main(["-t", "novel", "-nc", "3", "-d", str(tmp_path), "-fn", str(tmp_path / "x")])
    assert code == 1
    assert "novel-3.txt" in capsys.readouterr().err


def test_cli_reports_bad_margins(novel, tmp_path, capsys):
    code = main(["-t", "novel", "-nc", "2", "-d", str(tmp_path), "-cmt", "0.2", "-fn", str(tmp_path / "x")])
    assert code == 1
    assert "content_margin_top" in capsys.readouterr().err


class _RecordingBar:
    def __init__(self, **kwargs):
        self.postfixes = []
        self.count = 0
        self.closed = False
        _RecordingBar.last = self

    def set_postfix_str(self, text):
        self.postfixes.append(text)

    def update(self, n=1):
        self.count += n

    def close(self):
        self.closed = True


def test_progress_bar_shows_each_chapter_file(novel, monkeypatch):
    monkeypatch.setattr("bookpress.pdf.builder.tqdm", _RecordingBar)
    paginate_files(paths=novel)
    bar = _RecordingBar.last
    assert bar.postfixes == ["novel-1.txt", "novel-2.txt"]
    assert bar.count == 2
    assert bar.closed

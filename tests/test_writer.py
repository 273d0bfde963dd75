"""Tests for the page-separated text output."""

import os
from unittest.mock import patch

import pytest

from pageflow import Document, Page, TextWriter, DestinationUnwritable, render_document
from pageflow.writer import write_files_atomically

_real_replace = os.replace


def _two_page_document():
    return Document(pages=(
        Page(number=1, lines=("first line", "second line")),
        Page(number=2, lines=("last",)),
    ))


def test_render_single_page():
    document = Document(pages=(Page(number=1, lines=("a", "b")),))

    assert render_document(document) == "--- Page 1 --- \na\nb\n\n"


def test_render_every_page_ends_with_blank_line():
    text = render_document(_two_page_document())

    assert text == (
        "--- Page 1 --- \n"
        "first line\n"
        "second line\n"
        "\n"
        "--- Page 2 --- \n"
        "last\n"
        "\n"
    )


def test_render_empty_document():
    assert render_document(Document()) == ""


def test_save_writes_exact_bytes(tmp_path):
    target = tmp_path / "result.txt"
    TextWriter().save(_two_page_document(), target)

    assert target.read_bytes() == render_document(_two_page_document()).encode("utf-8")


def test_save_empty_document_creates_empty_file(tmp_path):
    target = tmp_path / "result.txt"
    TextWriter().save(Document(), target)

    assert target.exists()
    assert target.read_bytes() == b""


def test_save_replaces_existing_file(tmp_path):
    target = tmp_path / "result.txt"
    target.write_text("old content that is much longer than the new one\n" * 10)

    TextWriter().save(Document(pages=(Page(number=1, lines=("new",)),)), target)

    assert target.read_text() == "--- Page 1 --- \nnew\n\n"


def test_save_to_missing_directory(tmp_path):
    target = tmp_path / "no" / "such" / "dir" / "result.txt"

    with pytest.raises(DestinationUnwritable) as excinfo:
        TextWriter().save(_two_page_document(), target)

    assert isinstance(excinfo.value, OSError)
    assert not target.exists()


def test_failed_save_keeps_original_and_cleans_up(tmp_path):
    """A failure at the final rename leaves the old file and no temp files."""
    target = tmp_path / "result.txt"
    target.write_text("original")

    with patch("pageflow.writer.os.replace", side_effect=PermissionError(13, "Permission denied")):
        with pytest.raises(DestinationUnwritable, match="Permission denied"):
            TextWriter().save(_two_page_document(), target)

    assert target.read_text() == "original"
    assert os.listdir(tmp_path) == ["result.txt"]


def test_files_written_together(tmp_path):
    first = tmp_path / "a.txt"
    second = tmp_path / "b.pdf"

    write_files_atomically([(first, "text"), (second, b"%PDF-data")])

    assert first.read_text() == "text"
    assert second.read_bytes() == b"%PDF-data"


def test_unwritable_second_file_leaves_first_untouched(tmp_path):
    first = tmp_path / "a.txt"
    first.write_text("old a")

    with pytest.raises(DestinationUnwritable, match="b.txt"):
        write_files_atomically([(first, "new a"), (tmp_path / "missing" / "b.txt", "new b")])

    assert first.read_text() == "old a"
    assert os.listdir(tmp_path) == ["a.txt"]


def test_failed_second_replace_restores_first(tmp_path):
    """When the second rename fails, the first target gets its old content back."""
    existing = tmp_path / "a.txt"
    existing.write_text("old a")
    created = tmp_path / "b.txt"
    failing = tmp_path / "c.txt"

    def replace(src, dst):
        if os.fspath(dst) == str(failing):
            raise PermissionError(13, "Permission denied")
        _real_replace(src, dst)

    with patch("pageflow.writer.os.replace", side_effect=replace):
        with pytest.raises(DestinationUnwritable, match="c.txt"):
            write_files_atomically([(existing, "new a"), (created, "new b"), (failing, "new c")])

    assert existing.read_text() == "old a"
    assert not created.exists()
    assert not failing.exists()
    assert os.listdir(tmp_path) == ["a.txt"]


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_saved_file_follows_umask(tmp_path):
    target = tmp_path / "result.txt"
    old_umask = os.umask(0o022)
    try:
        TextWriter().save(Document(pages=(Page(number=1, lines=("a",)),)), target)
    finally:
        os.umask(old_umask)

    assert target.stat().st_mode & 0o777 == 0o644

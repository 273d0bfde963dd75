"""Tests for reading source text."""

import pytest

from pageflow import SourceUnavailable, read_lines


def test_reads_lines_without_endings(tmp_path):
    source = tmp_path / "document.txt"
    source.write_bytes(b"one two\r\nthree\n\nfour")

    assert list(read_lines(source)) == ["one two", "three", "", "four"]


def test_empty_file(tmp_path):
    source = tmp_path / "document.txt"
    source.write_bytes(b"")

    assert list(read_lines(source)) == []


def test_undecodable_bytes_are_replaced(tmp_path):
    source = tmp_path / "document.txt"
    source.write_bytes(b"caf\xe9 ok\n")

    assert list(read_lines(source)) == ["caf\ufffd ok"]


def test_missing_file(tmp_path):
    with pytest.raises(SourceUnavailable) as excinfo:
        list(read_lines(tmp_path / "missing.txt"))

    assert isinstance(excinfo.value, OSError)
    assert "missing.txt" in str(excinfo.value)


def test_directory_is_not_a_source(tmp_path):
    with pytest.raises(SourceUnavailable):
        list(read_lines(tmp_path))


def test_lines_are_read_lazily(tmp_path):
    source = tmp_path / "document.txt"
    source.write_text("first\nsecond\n")

    lines = read_lines(source)
    assert next(lines) == "first"
    lines.close()

"""Tests for pico.fileio -- loading lines and writing bytes."""

from __future__ import annotations

from pathlib import Path

from pico.document import Document
from pico.fileio import read_lines, write_bytes


class TestReadLines:
    def test_strips_line_endings(self, tmp_path: Path) -> None:
        path = tmp_path / "f.txt"
        path.write_bytes(b"abc\ndef\r\nghi\n")
        assert read_lines(path) == ["abc", "def", "ghi"]

    def test_last_line_without_newline(self, tmp_path: Path) -> None:
        path = tmp_path / "f.txt"
        path.write_bytes(b"abc\ndef")
        assert read_lines(path) == ["abc", "def"]

    def test_blank_lines_kept(self, tmp_path: Path) -> None:
        path = tmp_path / "f.txt"
        path.write_bytes(b"\n\nx\n")
        assert read_lines(path) == ["", "", "x"]

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "f.txt"
        path.write_bytes(b"")
        assert read_lines(path) == []

    def test_form_feed_is_not_a_line_break(self, tmp_path: Path) -> None:
        path = tmp_path / "f.txt"
        path.write_bytes(b"a\x0cb\n")
        assert read_lines(path) == ["a\x0cb"]


class TestRoundTrip:
    def test_load_then_flatten_reproduces_bytes(self, tmp_path: Path) -> None:
        original = b"caf\xe9\n\tindented\n\xff\xfe\n"
        src = tmp_path / "in.bin"
        src.write_bytes(original)
        doc = Document.from_lines(read_lines(src))

        dst = tmp_path / "out.bin"
        assert write_bytes(dst, doc.flatten()) == len(original)
        assert dst.read_bytes() == original

    def test_write_replaces_content(self, tmp_path: Path) -> None:
        path = tmp_path / "f.txt"
        path.write_bytes(b"a much longer previous content\n")
        write_bytes(path, b"short\n")
        assert path.read_bytes() == b"short\n"

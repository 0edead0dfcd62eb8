"""Tests for pico.document -- rows, mutations and the dirty counter."""

from __future__ import annotations

import pytest

from pico.document import Document, Row


def make_doc(*lines: str) -> Document:
    return Document.from_lines(list(lines))


# ---------------------------------------------------------------------------
# Row
# ---------------------------------------------------------------------------


class TestRow:
    def test_render_tracks_chars(self) -> None:
        row = Row("a\tb")
        assert row.render == "a       b"
        row.chars = "\t"
        assert row.render == " " * 8

    def test_sizes(self) -> None:
        row = Row("a\tb")
        assert row.size == 3
        assert len(row) == 3
        assert row.render_size == 9

    def test_column_mapping(self) -> None:
        row = Row("a\tb")
        assert row.rendered_col(2) == 8
        assert row.logical_col(5) == 1

    def test_custom_tab_stop(self) -> None:
        assert Row("\tx", tab_stop=2).render == "  x"


# ---------------------------------------------------------------------------
# Row operations
# ---------------------------------------------------------------------------


class TestFromLines:
    def test_loads_in_order(self) -> None:
        doc = make_doc("abc", "def")
        assert doc.lines() == ["abc", "def"]
        assert doc.row_count == 2

    def test_starts_clean(self) -> None:
        assert make_doc("abc").dirty == 0

    def test_empty(self) -> None:
        doc = make_doc()
        assert doc.row_count == 0
        assert doc.flatten() == b""


class TestInsertDeleteRow:
    def test_insert_shifts_later_rows(self) -> None:
        doc = make_doc("a", "c")
        doc.insert_row(1, "b")
        assert doc.lines() == ["a", "b", "c"]
        assert doc.dirty == 1

    def test_insert_at_end(self) -> None:
        doc = make_doc("a")
        doc.insert_row(1, "b")
        assert doc.lines() == ["a", "b"]

    @pytest.mark.parametrize("at", [-1, 3])
    def test_insert_out_of_range_is_ignored(self, at: int) -> None:
        doc = make_doc("a", "b")
        doc.insert_row(at, "x")
        assert doc.lines() == ["a", "b"]
        assert doc.dirty == 0

    def test_inserted_row_is_rendered(self) -> None:
        doc = make_doc()
        doc.insert_row(0, "\tx")
        assert doc[0].render == " " * 8 + "x"

    def test_delete_shifts_later_rows(self) -> None:
        doc = make_doc("a", "b", "c")
        doc.delete_row(1)
        assert doc.lines() == ["a", "c"]
        assert doc.dirty == 1

    @pytest.mark.parametrize("at", [-1, 2])
    def test_delete_out_of_range_is_ignored(self, at: int) -> None:
        doc = make_doc("a", "b")
        doc.delete_row(at)
        assert doc.lines() == ["a", "b"]
        assert doc.dirty == 0

    def test_row_at_virtual_row(self) -> None:
        doc = make_doc("a")
        assert doc.row_at(0) is doc[0]
        assert doc.row_at(1) is None
        assert doc.row_size(1) == 0


class TestCharEdits:
    def test_insert_char_middle(self) -> None:
        doc = make_doc("ac")
        doc.insert_char(0, 1, "b")
        assert doc[0].chars == "abc"
        assert doc.dirty == 1

    def test_insert_char_past_end_clamps(self) -> None:
        doc = make_doc("ab")
        doc.insert_char(0, 10, "c")
        assert doc[0].chars == "abc"

    def test_insert_tab_updates_render(self) -> None:
        doc = make_doc("ab")
        doc.insert_char(0, 1, "\t")
        assert doc[0].render == "a       b"

    def test_delete_char(self) -> None:
        doc = make_doc("abc")
        doc.delete_char(0, 1)
        assert doc[0].chars == "ac"
        assert doc.dirty == 1

    @pytest.mark.parametrize("col", [-1, 3, 9])
    def test_delete_char_out_of_range_is_ignored(self, col: int) -> None:
        doc = make_doc("abc")
        doc.delete_char(0, col)
        assert doc[0].chars == "abc"
        assert doc.dirty == 0

    def test_length_is_net_inserts_minus_deletes(self) -> None:
        doc = make_doc("")
        for i, ch in enumerate("hello\tworld"):
            doc.insert_char(0, i, ch)
        doc.delete_char(0, 0)
        doc.delete_char(0, 4)
        doc.delete_char(0, 0)
        assert doc[0].size == 11 - 3
        assert len(doc[0].render) >= doc[0].size

    def test_append_content(self) -> None:
        doc = make_doc("ab", "cd")
        doc.append_content(0, "\tcd")
        assert doc[0].chars == "ab\tcd"
        assert doc[0].render == "ab      cd"
        assert doc.dirty == 1


class TestSplitJoin:
    @pytest.mark.parametrize("col", range(0, 7))
    def test_split_then_join_restores_row(self, col: int) -> None:
        doc = make_doc("ab\tcde")
        tail = doc.truncate_row(0, col)
        doc.insert_row(1, tail)
        assert doc.lines() == ["ab\tcde"[:col], "ab\tcde"[col:]]

        doc.append_content(0, doc[1].chars)
        doc.delete_row(1)
        assert doc.lines() == ["ab\tcde"]
        assert doc[0].render == "ab      cde"

    def test_truncate_clamps_column(self) -> None:
        doc = make_doc("abc")
        assert doc.truncate_row(0, 10) == ""
        assert doc[0].chars == "abc"


class TestFlatten:
    def test_one_newline_per_row(self) -> None:
        assert make_doc("abc", "", "d").flatten() == b"abc\n\nd\n"

    def test_preserves_tabs(self) -> None:
        assert make_doc("a\tb").flatten() == b"a\tb\n"

    def test_surrogate_escaped_bytes_round_trip(self) -> None:
        raw = b"caf\xe9"
        doc = make_doc(raw.decode("utf-8", errors="surrogateescape"))
        assert doc.flatten() == raw + b"\n"

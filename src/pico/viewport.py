"""Cursor movement and scroll bookkeeping.

The cursor lives in raw coordinates (row index, character index). The
viewport scrolls in rendered coordinates, so horizontal scrolling follows
what is visible on screen rather than the character count.
"""

from __future__ import annotations

from dataclasses import dataclass

from pico.document import Document
from pico.keys import Key


@dataclass
class Cursor:
    row: int = 0
    col: int = 0


@dataclass
class Viewport:
    """Scroll offsets over a fixed-size text area."""

    screen_rows: int
    screen_cols: int
    row_offset: int = 0
    col_offset: int = 0
    rendered_col: int = 0

    def scroll(self, document: Document, cursor: Cursor) -> None:
        """Shift the offsets just enough to bring the cursor into view.

        Idempotent when the cursor is already visible.
        """
        row = document.row_at(cursor.row)
        self.rendered_col = cursor.col if row is None else row.rendered_col(cursor.col)

        if cursor.row < self.row_offset:
            self.row_offset = cursor.row
        if cursor.row >= self.row_offset + self.screen_rows:
            self.row_offset = cursor.row - self.screen_rows + 1

        if self.rendered_col < self.col_offset:
            self.col_offset = self.rendered_col
        if self.rendered_col >= self.col_offset + self.screen_cols:
            self.col_offset = self.rendered_col - self.screen_cols + 1

    def cursor_position(self, cursor: Cursor) -> tuple[int, int]:
        """Screen (row, col) of the cursor, zero-based."""
        return cursor.row - self.row_offset, self.rendered_col - self.col_offset


def move_cursor(document: Document, cursor: Cursor, direction: str) -> None:
    """Move one step in *direction* (one of the arrow keys)."""
    row = document.row_at(cursor.row)

    if direction == Key.left:
        if cursor.col != 0:
            cursor.col -= 1
        elif cursor.row > 0:
            cursor.row -= 1
            # One past the end; the clamp below pulls it back.
            cursor.col = document.row_size(cursor.row) + 1
    elif direction == Key.right:
        if row is not None and cursor.col < row.size:
            cursor.col += 1
        elif row is not None and cursor.col == row.size:
            cursor.row += 1
            cursor.col = 0
    elif direction == Key.up:
        if cursor.row > 0:
            cursor.row -= 1
    elif direction == Key.down:
        if cursor.row < document.row_count:
            cursor.row += 1

    cursor.col = min(cursor.col, document.row_size(cursor.row))

"""In-memory line buffer.

A ``Document`` owns an ordered list of ``Row`` objects. Every mutation goes
through the document so the dirty counter stays accurate, and every change
to a row's raw text rebuilds its render before returning.
"""

from __future__ import annotations

import logging

from pico.render import DEFAULT_TAB_STOP, expand_tabs, logical_to_rendered, rendered_to_logical

logger = logging.getLogger(__name__)


class Row:
    """One line of text: raw characters plus the tab-expanded render."""

    __slots__ = ("_chars", "_render", "tab_stop")

    def __init__(self, chars: str = "", tab_stop: int = DEFAULT_TAB_STOP) -> None:
        self.tab_stop = tab_stop
        self._chars = ""
        self._render = ""
        self.chars = chars

    @property
    def chars(self) -> str:
        return self._chars

    @chars.setter
    def chars(self, value: str) -> None:
        self._chars = value
        self._render = expand_tabs(value, self.tab_stop)

    @property
    def render(self) -> str:
        return self._render

    @property
    def size(self) -> int:
        return len(self._chars)

    @property
    def render_size(self) -> int:
        return len(self._render)

    def rendered_col(self, col: int) -> int:
        return logical_to_rendered(self._chars, col, self.tab_stop)

    def logical_col(self, rcol: int) -> int:
        return rendered_to_logical(self._chars, rcol, self.tab_stop)

    def __len__(self) -> int:
        return len(self._chars)

    def __repr__(self) -> str:
        return f"Row({self._chars!r})"


class Document:
    """Ordered, mutable sequence of rows with a mutation counter.

    Row indices are positional: inserting or deleting a row shifts every
    later index. ``dirty`` counts mutations since the last load or save.
    """

    def __init__(self, *, tab_stop: int = DEFAULT_TAB_STOP) -> None:
        self.tab_stop = tab_stop
        self.rows: list[Row] = []
        self.dirty: int = 0

    @classmethod
    def from_lines(cls, lines: list[str], *, tab_stop: int = DEFAULT_TAB_STOP) -> Document:
        """Build a clean document holding *lines* in order."""
        doc = cls(tab_stop=tab_stop)
        for line in lines:
            doc.insert_row(doc.row_count, line)
        doc.dirty = 0
        return doc

    # -- queries -----------------------------------------------------------

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    def row_at(self, index: int) -> Row | None:
        """The row at *index*, or ``None`` for the virtual row past the end."""
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def row_size(self, index: int) -> int:
        row = self.row_at(index)
        return 0 if row is None else row.size

    def lines(self) -> list[str]:
        return [row.chars for row in self.rows]

    # -- row operations ----------------------------------------------------

    def insert_row(self, at: int, content: str = "") -> None:
        if at < 0 or at > len(self.rows):
            logger.debug("insert_row ignored: index %d outside [0, %d]", at, len(self.rows))
            return
        self.rows.insert(at, Row(content, self.tab_stop))
        self.dirty += 1

    def delete_row(self, at: int) -> None:
        if at < 0 or at >= len(self.rows):
            logger.debug("delete_row ignored: index %d outside [0, %d)", at, len(self.rows))
            return
        del self.rows[at]
        self.dirty += 1

    def insert_char(self, index: int, col: int, ch: str) -> None:
        row = self.rows[index]
        if col < 0 or col > row.size:
            col = row.size
        row.chars = row.chars[:col] + ch + row.chars[col:]
        self.dirty += 1

    def delete_char(self, index: int, col: int) -> None:
        """Remove the character at raw index *col*; no-op when out of range."""
        row = self.rows[index]
        if col < 0 or col >= row.size:
            return
        row.chars = row.chars[:col] + row.chars[col + 1 :]
        self.dirty += 1

    def append_content(self, index: int, content: str) -> None:
        row = self.rows[index]
        row.chars = row.chars + content
        self.dirty += 1

    def truncate_row(self, index: int, col: int) -> str:
        """Cut row *index* at *col*, returning the removed tail."""
        row = self.rows[index]
        col = max(0, min(col, row.size))
        tail = row.chars[col:]
        row.chars = row.chars[:col]
        self.dirty += 1
        return tail

    # -- serialisation -----------------------------------------------------

    def flatten(self) -> bytes:
        """Every row followed by a single ``\\n``, encoded back to bytes."""
        text = "".join(row.chars + "\n" for row in self.rows)
        return text.encode("utf-8", errors="surrogateescape")

"""Tab-aware projection between raw and rendered columns.

A row is stored raw; what reaches the screen is its *render*, with each tab
expanded to spaces up to the next multiple of the tab stop. These helpers
convert between the two coordinate systems. They are deliberately not exact
inverses: every rendered column covered by a tab maps back to the tab's raw
index.
"""

from __future__ import annotations

DEFAULT_TAB_STOP = 8


def _advance(width: int, ch: str, tab_stop: int) -> int:
    if ch == "\t":
        return width + tab_stop - (width % tab_stop)
    return width + 1


def expand_tabs(text: str, tab_stop: int = DEFAULT_TAB_STOP) -> str:
    """Return *text* with every tab replaced by spaces to the next tab stop."""
    parts: list[str] = []
    width = 0
    for ch in text:
        if ch == "\t":
            pad = tab_stop - (width % tab_stop)
            parts.append(" " * pad)
            width += pad
        else:
            parts.append(ch)
            width += 1
    return "".join(parts)


def logical_to_rendered(text: str, col: int, tab_stop: int = DEFAULT_TAB_STOP) -> int:
    """Rendered column of raw index *col* in *text*.

    Columns past the end of the row are treated as the end of the row.
    """
    width = 0
    for ch in text[: max(col, 0)]:
        width = _advance(width, ch, tab_stop)
    return width


def rendered_to_logical(text: str, rcol: int, tab_stop: int = DEFAULT_TAB_STOP) -> int:
    """Raw index whose rendered span contains rendered column *rcol*.

    Returns ``len(text)`` when *rcol* lies beyond the rendered row.
    """
    width = 0
    for index, ch in enumerate(text):
        width = _advance(width, ch, tab_stop)
        if width > rcol:
            return index
    return len(text)

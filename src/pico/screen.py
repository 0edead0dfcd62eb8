"""Frame composition.

Builds the full byte-for-byte frame for one refresh: the visible slice of
every row, filler lines, the status bar, the message bar and the final
cursor placement. The whole frame is written to the terminal in one call.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from pico import __version__

if TYPE_CHECKING:
    from pico.editor import Editor
    from pico.terminal import Terminal

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CURSOR_HOME = "\x1b[H"
_CLEAR_TO_EOL = "\x1b[K"
_REVERSE_VIDEO = "\x1b[7m"
_RESET_ATTRS = "\x1b[m"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_CURSOR_TO_FMT = "\x1b[{};{}H"

WELCOME_FMT = "Pico editor -- version {}"
STATUS_NAME_WIDTH = 20


def _is_blank(editor: Editor) -> bool:
    doc = editor.document
    return editor.filename is None and not doc.dirty and doc.lines() in ([], [""])


def _welcome_line(width: int) -> str:
    welcome = WELCOME_FMT.format(__version__)[:width]
    padding = (width - len(welcome)) // 2
    if padding:
        return "~" + " " * (padding - 1) + welcome
    return welcome


def draw_rows(editor: Editor) -> list[str]:
    """The text area, one string per screen row, without line endings."""
    doc = editor.document
    view = editor.viewport
    lines: list[str] = []
    welcome_row = (2 * view.screen_rows) // 3

    for y in range(view.screen_rows):
        index = y + view.row_offset
        if index < doc.row_count:
            render = doc[index].render
            lines.append(render[view.col_offset : view.col_offset + view.screen_cols])
        elif y == welcome_row and _is_blank(editor):
            lines.append(_welcome_line(view.screen_cols))
        else:
            lines.append("~")
    return lines


def draw_status_bar(editor: Editor) -> str:
    doc = editor.document
    width = editor.viewport.screen_cols
    modified = "[modified]" if doc.dirty else ""
    left = f"{editor.display_name[:STATUS_NAME_WIDTH]} - {doc.row_count} lines {modified}"
    percent = 0 if doc.row_count == 0 else 100 * (editor.cursor.row + 1) // doc.row_count
    right = f"{editor.cursor.row + 1}/{doc.row_count} [{percent}%]"

    left = left[:width]
    gap = width - len(left)
    if gap >= len(right):
        bar = left + " " * (gap - len(right)) + right
    else:
        bar = left + " " * gap
    return _REVERSE_VIDEO + bar + _RESET_ATTRS


def draw_message_bar(editor: Editor, now: float) -> str:
    text = editor.status.visible_text(now, editor.settings.message_timeout)
    return _CLEAR_TO_EOL + text[: editor.viewport.screen_cols]


def compose_frame(editor: Editor, now: float | None = None) -> str:
    """Render *editor* into one frame string. Scroll offsets must be current."""
    if now is None:
        now = time.time()
    parts = [_HIDE_CURSOR, _CURSOR_HOME]
    for line in draw_rows(editor):
        parts.append(line + _CLEAR_TO_EOL + "\r\n")
    parts.append(draw_status_bar(editor) + "\r\n")
    parts.append(draw_message_bar(editor, now))

    screen_row, screen_col = editor.viewport.cursor_position(editor.cursor)
    parts.append(_CURSOR_TO_FMT.format(screen_row + 1, screen_col + 1))
    parts.append(_SHOW_CURSOR)
    return "".join(parts)


def refresh_screen(editor: Editor, terminal: Terminal) -> None:
    editor.scroll()
    terminal.write(compose_frame(editor))


def clear_screen(terminal: Terminal) -> None:
    terminal.write(_CLEAR_SCREEN)

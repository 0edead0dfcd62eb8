"""Edit engine: turns key events into document and cursor changes.

``Editor`` is the whole session: the document, cursor, viewport, status
message, and an optional modal prompt. It has two modes. In normal mode
keys edit the document; while a prompt is open every key goes to the
prompt instead.
"""

from __future__ import annotations

import logging

from pico.document import Document
from pico.fileio import read_lines, write_bytes
from pico.keys import ARROW_KEYS, Key, KeyEvent
from pico.prompt import Prompt, StatusMessage
from pico.settings import Settings
from pico.viewport import Cursor, Viewport, move_cursor

logger = logging.getLogger(__name__)

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"
SEARCH_PROMPT = "Search: {} (ESC to cancel)"
SAVE_AS_PROMPT = "Save as: {} (ESC to cancel)"


class Editor:
    """One editing session over a single document.

    Holds the document, the cursor, the viewport and the status message.
    While ``prompt`` is set every key goes to the prompt instead of the
    document. ``running`` turns false once the user has quit.
    """

    def __init__(
        self,
        screen_rows: int,
        screen_cols: int,
        *,
        settings: Settings | None = None,
        document: Document | None = None,
        filename: str | None = None,
    ) -> None:
        self.settings = settings or Settings()
        if document is None:
            document = Document(tab_stop=self.settings.tab_stop)
            document.insert_row(0, "")
            document.dirty = 0
        self.document = document
        self.filename = filename
        self.cursor = Cursor()
        self.viewport = Viewport(screen_rows=screen_rows, screen_cols=screen_cols)
        self.status = StatusMessage()
        self.prompt: Prompt | None = None
        self.quit_countdown = self.settings.quit_times
        self.running = True

    @classmethod
    def open(
        cls,
        filename: str,
        screen_rows: int,
        screen_cols: int,
        *,
        settings: Settings | None = None,
    ) -> Editor:
        """Load *filename* into a new editor. ``OSError`` propagates."""
        settings = settings or Settings()
        document = Document.from_lines(read_lines(filename), tab_stop=settings.tab_stop)
        logger.info("Opened %s (%d rows)", filename, document.row_count)
        return cls(screen_rows, screen_cols, settings=settings, document=document, filename=filename)

    # -- status / prompt ---------------------------------------------------

    def set_status_message(self, text: str) -> None:
        self.status.set(text)

    def start_prompt(self, prompt: Prompt) -> None:
        self.prompt = prompt
        self.set_status_message(prompt.text)

    def _feed_prompt(self, event: KeyEvent) -> None:
        prompt = self.prompt
        assert prompt is not None
        finished, result = prompt.feed(event)
        if not finished:
            self.set_status_message(prompt.text)
            return
        self.prompt = None
        self.set_status_message("")
        prompt.on_done(result)

    # -- key dispatch ------------------------------------------------------

    def process_key(self, event: KeyEvent) -> None:
        """Apply one decoded key, then bring the cursor back into view."""
        if event.name == Key.idle:
            return
        if self.prompt is not None:
            self._feed_prompt(event)
            self.scroll()
            return

        if event.is_ctrl("q"):
            self._quit()
            return

        if event.is_char and event.code in (ord("\r"), ord("\n")):
            self.insert_newline()
        elif event.is_ctrl("s"):
            self.save()
        elif event.is_ctrl("f"):
            self.find()
        elif event.name in (Key.page_up, Key.page_down):
            self._page(event.name)
        elif event.name == Key.home:
            self.cursor.col = 0
        elif event.name == Key.end:
            self.cursor.col = self.document.row_size(self.cursor.row)
        elif event.name == Key.delete:
            move_cursor(self.document, self.cursor, Key.right)
            self.delete_char()
        elif event.is_ctrl("h") or (event.is_char and event.code == 127):
            self.delete_char()
        elif event.name in ARROW_KEYS:
            move_cursor(self.document, self.cursor, event.name)
        elif event.is_ctrl("l") or event.name == Key.escape:
            pass
        elif event.is_char:
            self.insert_char(event.text)

        self.quit_countdown = self.settings.quit_times
        self.scroll()

    def scroll(self) -> None:
        self.viewport.scroll(self.document, self.cursor)

    def _quit(self) -> None:
        if self.document.dirty:
            self.quit_countdown -= 1
            if self.quit_countdown > 0:
                times = "time" if self.quit_countdown == 1 else "times"
                self.set_status_message(
                    "File has unsaved changes. "
                    f"Press Ctrl-Q {self.quit_countdown} more {times} to quit."
                )
                return
        self.running = False

    def _page(self, key: str) -> None:
        screen_rows = self.viewport.screen_rows
        if key == Key.page_up:
            self.cursor.row = self.viewport.row_offset
            step = Key.up
        else:
            self.cursor.row = min(self.viewport.row_offset + screen_rows - 1, self.document.row_count)
            step = Key.down
        for _ in range(screen_rows):
            move_cursor(self.document, self.cursor, step)

    # -- editing -----------------------------------------------------------

    def insert_char(self, ch: str) -> None:
        if self.cursor.row == self.document.row_count:
            self.document.insert_row(self.document.row_count, "")
        self.document.insert_char(self.cursor.row, self.cursor.col, ch)
        self.cursor.col += 1

    def insert_newline(self) -> None:
        if self.cursor.col == 0:
            self.document.insert_row(self.cursor.row, "")
        else:
            tail = self.document.truncate_row(self.cursor.row, self.cursor.col)
            self.document.insert_row(self.cursor.row + 1, tail)
        self.cursor.row += 1
        self.cursor.col = 0

    def delete_char(self) -> None:
        cursor = self.cursor
        if cursor.row == self.document.row_count:
            return
        if cursor.row == 0 and cursor.col == 0:
            return

        if cursor.col > 0:
            self.document.delete_char(cursor.row, cursor.col - 1)
            cursor.col -= 1
        else:
            previous = cursor.row - 1
            cursor.col = self.document.row_size(previous)
            self.document.append_content(previous, self.document[cursor.row].chars)
            self.document.delete_row(cursor.row)
            cursor.row = previous

    # -- search ------------------------------------------------------------

    def find(self) -> None:
        self.start_prompt(Prompt(SEARCH_PROMPT, on_done=lambda _query: None, on_key=self._find_callback))

    def _find_callback(self, query: str, event: KeyEvent) -> None:
        if event.name == Key.escape or (event.is_char and event.code == ord("\r")):
            return
        for index in range(self.cursor.row + 1, self.document.row_count):
            row = self.document[index]
            match = row.render.find(query)
            if match != -1:
                self.cursor.row = index
                self.cursor.col = row.logical_col(match)
                # Forces the next scroll to put the match at the top.
                self.viewport.row_offset = self.document.row_count
                break

    # -- saving ------------------------------------------------------------

    def save(self) -> None:
        if self.filename is None:
            self.start_prompt(Prompt(SAVE_AS_PROMPT, on_done=self._save_as))
            return
        self._write()

    def _save_as(self, filename: str | None) -> None:
        if filename is None:
            self.set_status_message("Save aborted")
            return
        self.filename = filename
        self._write()

    def _write(self) -> None:
        assert self.filename is not None
        data = self.document.flatten()
        try:
            written = write_bytes(self.filename, data)
        except OSError as e:
            logger.warning("Saving %s failed: %s", self.filename, e)
            self.set_status_message(f"Can't save! I/O error: {e.strerror or e}")
            return
        self.document.dirty = 0
        self.set_status_message(f"{written} bytes written to disk")

    @property
    def display_name(self) -> str:
        return self.filename or "[No Name]"

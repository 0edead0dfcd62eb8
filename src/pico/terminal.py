"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal`` that
puts the controlling terminal into raw mode, reads single bytes with a
deadline, writes frames, and reports the window size.
"""

from __future__ import annotations

import errno
import logging
import os
import re
import select
import sys
import termios
import tty
from typing import Protocol

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_CURSOR_BOTTOM_RIGHT = "\x1b[999C\x1b[999B"
_QUERY_CURSOR_POSITION = "\x1b[6n"

_CURSOR_REPORT_RE = re.compile(r"^\x1b\[(\d+);(\d+)$")


class TerminalError(Exception):
    """An unrecoverable terminal failure; the editor cannot continue."""


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def read_byte(self, timeout: float) -> int | None: ...

    def write(self, data: str) -> None: ...

    def get_window_size(self) -> tuple[int, int]: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal backed by the process's stdin and stdout."""

    def __init__(self, stdin_fd: int | None = None, stdout_fd: int | None = None) -> None:
        self._stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self._stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
        self._original_termios: list | None = None

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Save the current terminal attributes and switch to raw mode."""
        try:
            self._original_termios = termios.tcgetattr(self._stdin_fd)
            tty.setraw(self._stdin_fd, termios.TCSAFLUSH)
        except termios.error as e:
            raise TerminalError(f"cannot enable raw mode: {e}") from e
        logger.debug("Raw mode enabled on fd %d", self._stdin_fd)

    def stop(self) -> None:
        """Restore the attributes saved by :meth:`start`."""
        if self._original_termios is None:
            return
        try:
            termios.tcsetattr(self._stdin_fd, termios.TCSAFLUSH, self._original_termios)
        except termios.error as e:
            raise TerminalError(f"cannot restore terminal: {e}") from e
        finally:
            self._original_termios = None
        logger.debug("Terminal attributes restored")

    # -- input --------------------------------------------------------------

    def read_byte(self, timeout: float) -> int | None:
        """Return one byte from stdin, or ``None`` if *timeout* expires first."""
        try:
            ready, _, _ = select.select([self._stdin_fd], [], [], timeout)
            if not ready:
                return None
            data = os.read(self._stdin_fd, 1)
        except InterruptedError:
            return None
        except OSError as e:
            if e.errno == errno.EAGAIN:
                return None
            raise TerminalError(f"read: {e}") from e
        if not data:
            # Readable with nothing to read: the input side hung up.
            raise TerminalError("read: EOF")
        return data[0]

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        payload = data.encode("utf-8", errors="surrogateescape")
        try:
            while payload:
                written = os.write(self._stdout_fd, payload)
                payload = payload[written:]
        except OSError as e:
            raise TerminalError(f"write: {e}") from e

    # -- window size --------------------------------------------------------

    def get_window_size(self) -> tuple[int, int]:
        """Return ``(rows, columns)`` of the terminal window."""
        try:
            size = os.get_terminal_size(self._stdout_fd)
            if size.columns > 0:
                return size.lines, size.columns
        except OSError:
            pass
        logger.debug("Window size ioctl unavailable, asking the terminal")
        self.write(_CURSOR_BOTTOM_RIGHT)
        return self._get_cursor_position()

    def _get_cursor_position(self) -> tuple[int, int]:
        self.write(_QUERY_CURSOR_POSITION)
        response = ""
        while len(response) < 31:
            byte = self.read_byte(1.0)
            if byte is None or byte == ord("R"):
                break
            response += chr(byte)
        return parse_cursor_report(response)


def parse_cursor_report(response: str) -> tuple[int, int]:
    """Parse ``ESC [ rows ; cols`` (the trailing ``R`` already consumed)."""
    match = _CURSOR_REPORT_RE.match(response)
    if match is None:
        raise TerminalError(f"cannot determine window size (got {response!r})")
    return int(match.group(1)), int(match.group(2))

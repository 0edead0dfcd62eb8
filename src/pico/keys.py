"""Keyboard input decoding for the editor.

Turns the raw byte stream coming from a terminal in raw mode into logical
``KeyEvent`` values: plain bytes pass through as character events and the
handful of legacy escape sequences the editor understands (arrows, Home,
End, Delete, Page Up/Down) are resolved to named keys.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

ESC = 0x1B
BACKSPACE = 127

# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants."""

    char = "char"
    idle = "idle"
    escape = "escape"
    delete = "delete"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"


ARROW_KEYS: frozenset[str] = frozenset({Key.up, Key.down, Key.left, Key.right})


def ctrl_key(letter: str) -> int:
    """Return the byte a terminal sends for ``ctrl+<letter>``."""
    return ord(letter) & 0x1F


# ---------------------------------------------------------------------------
# Key event
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyEvent:
    """One decoded keypress.

    ``name`` is ``Key.char`` for ordinary bytes, in which case ``code``
    holds the byte value (control characters and 127 included). For named
    keys ``code`` is 0.
    """

    name: str
    code: int = 0

    @classmethod
    def from_byte(cls, code: int) -> KeyEvent:
        return cls(Key.char, code)

    @property
    def is_char(self) -> bool:
        return self.name == Key.char

    def is_ctrl(self, letter: str) -> bool:
        return self.is_char and self.code == ctrl_key(letter)

    def is_control(self) -> bool:
        """True for bytes 0-31 and 127."""
        return self.is_char and (self.code < 32 or self.code == BACKSPACE)

    @property
    def text(self) -> str:
        """The character this event inserts.

        Bytes above 0x7F become lone surrogates so that they encode back to
        the same byte with ``surrogateescape``.
        """
        return bytes([self.code]).decode("utf-8", errors="surrogateescape")


IDLE = KeyEvent(Key.idle)
ESCAPE = KeyEvent(Key.escape)

# ---------------------------------------------------------------------------
# Escape sequence tables
# ---------------------------------------------------------------------------

# ESC [ <digit> ~
TILDE_SEQUENCES: dict[str, str] = {
    "1": Key.home,
    "3": Key.delete,
    "4": Key.end,
    "5": Key.page_up,
    "6": Key.page_down,
    "7": Key.home,
    "8": Key.end,
}

# ESC [ <letter>
CSI_SEQUENCES: dict[str, str] = {
    "A": Key.up,
    "B": Key.down,
    "C": Key.right,
    "D": Key.left,
    "H": Key.home,
    "F": Key.end,
}

# ESC O <letter>
SS3_SEQUENCES: dict[str, str] = {
    "H": Key.home,
    "F": Key.end,
}


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------


class ByteSource(Protocol):
    """Anything that can hand out single input bytes with a deadline."""

    def read_byte(self, timeout: float) -> int | None:
        """Return the next byte, or ``None`` if none arrived in *timeout* seconds."""
        ...


class KeyDecoder:
    """Reads from a :class:`ByteSource` until one key event is resolved.

    ``idle_timeout`` bounds the wait for the first byte of a key; when it
    expires :data:`IDLE` is returned so the caller can redraw.
    ``escape_timeout`` bounds each wait for the remaining bytes of an escape
    sequence. A sequence that stalls is dropped and reported as a bare
    :data:`ESCAPE`; nothing is carried over to the next call.
    """

    def __init__(
        self,
        source: ByteSource,
        *,
        idle_timeout: float = 1.0,
        escape_timeout: float = 0.1,
    ) -> None:
        self._source = source
        self._idle_timeout = idle_timeout
        self._escape_timeout = escape_timeout

    def decode(self) -> KeyEvent:
        first = self._source.read_byte(self._idle_timeout)
        if first is None:
            return IDLE
        if first != ESC:
            return KeyEvent.from_byte(first)
        return self._decode_escape()

    def _next(self) -> str | None:
        byte = self._source.read_byte(self._escape_timeout)
        return None if byte is None else chr(byte)

    def _decode_escape(self) -> KeyEvent:
        introducer = self._next()
        if introducer is None:
            return ESCAPE
        final = self._next()
        if final is None:
            return ESCAPE

        name: str | None = None
        if introducer == "[":
            if "0" <= final <= "9":
                terminator = self._next()
                if terminator is None:
                    return ESCAPE
                if terminator == "~":
                    name = TILDE_SEQUENCES.get(final)
            else:
                name = CSI_SEQUENCES.get(final)
        elif introducer == "O":
            name = SS3_SEQUENCES.get(final)

        if name is None:
            logger.debug("Unmatched escape sequence: ESC %r %r", introducer, final)
            return ESCAPE
        return KeyEvent(name)

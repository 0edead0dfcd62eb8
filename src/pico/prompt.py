"""Status-line message and modal prompt state."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from pico.keys import BACKSPACE, Key, KeyEvent


@dataclass
class StatusMessage:
    """Text shown on the message bar, with the time it was set."""

    text: str = ""
    timestamp: float = 0.0

    def set(self, text: str, now: float | None = None) -> None:
        self.text = text
        self.timestamp = time.time() if now is None else now

    def clear(self) -> None:
        self.set("")

    def visible_text(self, now: float, timeout: float) -> str:
        """The message, or ``""`` once it is older than *timeout* seconds."""
        if self.text and now - self.timestamp < timeout:
            return self.text
        return ""


@dataclass
class Prompt:
    """An in-progress prompt on the message bar.

    ``template`` holds one ``{}`` placeholder for the typed input.
    ``on_key`` runs after every keystroke, including the Enter or Escape
    that ends the prompt. ``on_done`` receives the submitted text, or
    ``None`` when the prompt was cancelled.
    """

    template: str
    on_done: Callable[[str | None], None]
    on_key: Callable[[str, KeyEvent], None] | None = None
    buffer: str = field(default="")

    @property
    def text(self) -> str:
        return self.template.format(self.buffer)

    def feed(self, event: KeyEvent) -> tuple[bool, str | None]:
        """Apply one key. Returns ``(finished, result)``."""
        finished = False
        result: str | None = None

        if event.name == Key.delete or event.is_ctrl("h") or (event.is_char and event.code == BACKSPACE):
            self.buffer = self.buffer[:-1]
        elif event.name == Key.escape:
            finished = True
        elif event.is_char and event.code == ord("\r"):
            if self.buffer:
                finished = True
                result = self.buffer
        elif event.is_char and not event.is_control() and event.code < 128:
            self.buffer += chr(event.code)

        if self.on_key is not None:
            self.on_key(self.buffer, event)
        return finished, result

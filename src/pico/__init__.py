"""pico: a small terminal text editor."""

__version__ = "0.0.1"

from pico.document import Document, Row
from pico.editor import Editor
from pico.keys import Key, KeyDecoder, KeyEvent
from pico.settings import Settings, load_settings

__all__ = [
    "Document",
    "Editor",
    "Key",
    "KeyDecoder",
    "KeyEvent",
    "Row",
    "Settings",
    "load_settings",
]

"""Reading files into lines and writing flattened buffers back out."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def read_lines(path: str | Path) -> list[str]:
    """Return the lines of *path* with trailing ``\\r``/``\\n`` removed.

    Bytes that are not valid UTF-8 survive as surrogate escapes so the file
    can be written back unchanged.
    """
    data = Path(path).read_bytes()
    text = data.decode("utf-8", errors="surrogateescape")
    pieces = text.split("\n")
    if pieces[-1] == "":
        pieces.pop()
    lines = [piece.rstrip("\r") for piece in pieces]
    logger.debug("Loaded %d lines from %s", len(lines), path)
    return lines


def write_bytes(path: str | Path, data: bytes) -> int:
    """Write *data* to *path*, replacing any previous content."""
    Path(path).write_bytes(data)
    logger.debug("Wrote %d bytes to %s", len(data), path)
    return len(data)

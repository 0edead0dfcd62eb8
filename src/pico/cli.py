"""CLI entry point for the pico editor."""

from __future__ import annotations

import argparse
import contextlib
import logging
import os
import sys

from pico.editor import HELP_MESSAGE, Editor
from pico.keys import KeyDecoder
from pico.screen import clear_screen, refresh_screen
from pico.settings import Settings, load_settings
from pico.terminal import ProcessTerminal, Terminal, TerminalError

logger = logging.getLogger(__name__)

# Rows taken by the status bar and the message bar.
RESERVED_ROWS = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pico",
        description="Minimal terminal text editor",
    )
    parser.add_argument("filename", nargs="?", help="File to open")
    return parser.parse_args(argv)


def setup_logging() -> None:
    """Log to the file named by ``PICO_LOG``; the terminal owns stdout."""
    log_path = os.environ.get("PICO_LOG", "")
    if not log_path:
        logging.getLogger("pico").addHandler(logging.NullHandler())
        return
    level_name = os.environ.get("PICO_LOG_LEVEL", "info").upper()
    logging.basicConfig(
        filename=log_path,
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_editor(
    terminal: Terminal,
    settings: Settings,
    filename: str | None = None,
) -> Editor:
    rows, columns = terminal.get_window_size()
    screen_rows = rows - RESERVED_ROWS
    if screen_rows < 1 or columns < 1:
        raise TerminalError(f"terminal too small ({rows}x{columns})")
    if filename is None:
        editor = Editor(screen_rows, columns, settings=settings)
    else:
        editor = Editor.open(filename, screen_rows, columns, settings=settings)
    editor.set_status_message(HELP_MESSAGE)
    return editor


def run(editor: Editor, terminal: Terminal) -> None:
    """Main loop: draw, read one key, apply it, until the editor quits."""
    decoder = KeyDecoder(
        terminal,
        idle_timeout=editor.settings.read_timeout,
        escape_timeout=editor.settings.escape_timeout,
    )
    while editor.running:
        refresh_screen(editor, terminal)
        editor.process_key(decoder.decode())
    clear_screen(terminal)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging()
    settings = load_settings()

    terminal = ProcessTerminal()
    try:
        terminal.start()
        try:
            editor = create_editor(terminal, settings, args.filename)
            run(editor, terminal)
        finally:
            terminal.stop()
    except TerminalError as e:
        _die(terminal, str(e))
    except OSError as e:
        name = e.filename if e.filename is not None else args.filename
        _die(terminal, f"{name}: {e.strerror or e}")


def _die(terminal: Terminal, message: str) -> None:
    logger.error("Fatal: %s", message)
    with contextlib.suppress(TerminalError):
        clear_screen(terminal)
    print(f"pico: {message}", file=sys.stderr)
    sys.exit(1)


if __name__ == "__main__":
    main()

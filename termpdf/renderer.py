# renderer.py
import curses
import logging
import os
from typing import Dict, NamedTuple, Optional, Tuple, Union

from .config import CHROME_ROWS, THEMES
from .layout import cell_width
from .view import ViewModel

logger = logging.getLogger(__name__)

COLORS: Dict[str, int] = {
    "default": -1,
    "black": curses.COLOR_BLACK,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
}

SPECIAL_KEYS: Dict[int, str] = {
    curses.KEY_LEFT: "Left",
    curses.KEY_RIGHT: "Right",
    curses.KEY_UP: "Up",
    curses.KEY_DOWN: "Down",
    curses.KEY_HOME: "Home",
    curses.KEY_END: "End",
    curses.KEY_PPAGE: "PageUp",
    curses.KEY_NPAGE: "PageDown",
    curses.KEY_BACKSPACE: "Backspace",
    curses.KEY_ENTER: "Enter",
}

CONTROL_CHARS: Dict[str, str] = {
    "\n": "Enter",
    "\r": "Enter",
    "\x1b": "Esc",
    "\x7f": "Backspace",
    "\x08": "Backspace",
}


class Resize(NamedTuple):
    width: int
    height: int


def body_size(rows: int, cols: int) -> Tuple[int, int]:
    """Page-text viewport (width, height) left once header, footer and status rows are taken."""
    return max(cols, 1), max(rows - CHROME_ROWS, 1)


def translate_key(key: Union[str, int]) -> Optional[str]:
    """Maps a curses key code or character to its logical key name, or None if it has none."""
    if isinstance(key, int):
        return SPECIAL_KEYS.get(key)
    if key in CONTROL_CHARS:
        return CONTROL_CHARS[key]
    if key.isprintable():
        return key
    return None


class TerminalRenderer:
    """
    Draws view models on a curses screen and turns terminal input into events.
    The screen itself is owned by curses.wrapper, which restores the terminal on exit.
    """
    def __init__(self, stdscr, theme: str):
        self.stdscr = stdscr
        self.attrs: Dict[str, int] = {}
        try:
            curses.curs_set(0)
        except curses.error:
            # Terminal cannot hide the cursor
            pass
        self.stdscr.keypad(True)
        self._setup_colors(THEMES[theme])

    def _setup_colors(self, theme: Dict[str, Tuple[str, str]]):
        if not curses.has_colors():
            self.attrs = {role: curses.A_NORMAL for role in theme}
            self.attrs["highlight"] = curses.A_REVERSE
            self.attrs["current"] = curses.A_REVERSE | curses.A_BOLD
            return

        curses.start_color()
        curses.use_default_colors()
        for pair_id, (role, (fg, bg)) in enumerate(theme.items(), start=1):
            curses.init_pair(pair_id, COLORS[fg], COLORS[bg])
            self.attrs[role] = curses.color_pair(pair_id)
        self.attrs["header"] |= curses.A_BOLD
        self.attrs["current"] |= curses.A_BOLD

    def body_size(self) -> Tuple[int, int]:
        rows, cols = self.stdscr.getmaxyx()
        return body_size(rows, cols)

    def read_event(self) -> Union[str, Resize, None]:
        """Blocks for the next key press; returns a key name, a Resize, or None for unmapped keys."""
        try:
            key = self.stdscr.get_wch()
        except curses.error:
            return None
        if key == curses.KEY_RESIZE:
            curses.update_lines_cols()
            return Resize(*self.body_size())
        name = translate_key(key)
        if name is None:
            logger.debug("Ignoring unmapped key %r", key)
        return name

    def _put(self, y: int, x: int, text: str, attr: int):
        rows, cols = self.stdscr.getmaxyx()
        if y >= rows or x >= cols:
            return
        try:
            self.stdscr.addnstr(y, x, text, cols - x, attr)
        except curses.error:
            # Writing into the bottom-right cell moves the cursor off screen
            pass

    def draw(self, view_model: ViewModel):
        rows, cols = self.stdscr.getmaxyx()
        self.stdscr.erase()

        header_attr = self.attrs["header_input"] if view_model.input_active else self.attrs["header"]
        self._put(0, 0, view_model.header.ljust(cols), header_attr)

        for y, line in enumerate(view_model.body, start=1):
            if y >= rows - 2:
                break
            self._put(y, 0, line.text, self.attrs["content"])
            for span in line.highlights:
                attr = self.attrs["current"] if span.current else self.attrs["highlight"]
                self._put(y, cell_width(line.text[:span.start]), line.text[span.start:span.end], attr)

        self._put(rows - 2, 0, view_model.footer, self.attrs["footer"])
        self._put(rows - 1, 0, view_model.status, self.attrs["status"])
        self.stdscr.refresh()


def prepare_terminal():
    """Shortens the Esc delay so a lone Esc key is not held back waiting for an escape sequence."""
    os.environ.setdefault("ESCDELAY", "25")

# app.py
import curses
import logging
from typing import Callable, Dict, Optional

from .config import CASE_SENSITIVE_SEARCH, DEFAULT_THEME
from .pdf_model import PageStore, load_page_texts
from .renderer import Resize, TerminalRenderer, prepare_terminal
from .search import Direction, MatchLocation, SearchIndex
from .view import ViewModel, ViewModelBuilder
from .view_state import Normal, PageJump, Search, ViewState

logger = logging.getLogger(__name__)


class InputController:
    """
    Finite-state machine turning key presses into view-state changes.

    Each input mode has a table of key name -> handler. Keys missing from the
    table fall through to the mode's character handler (digits for page jump,
    printable characters for search) or are ignored.
    """
    def __init__(self, pages: PageStore, case_sensitive: bool = CASE_SENSITIVE_SEARCH):
        self.pages = pages
        self.state = ViewState(pages)
        self.search = SearchIndex(case_sensitive)
        self.running = True

        self._transitions: Dict[type, Dict[str, Callable[[], None]]] = {
            Normal: {
                "Left": self.state.prev_page,
                "p": self.state.prev_page,
                "Right": self.state.next_page,
                "n": self.state.next_page,
                "Up": lambda: self.state.scroll(-1),
                "k": lambda: self.state.scroll(-1),
                "Down": lambda: self.state.scroll(1),
                "j": lambda: self.state.scroll(1),
                "PageUp": lambda: self.state.scroll(-self.state.viewport_height),
                "PageDown": lambda: self.state.scroll(self.state.viewport_height),
                "Home": self.state.goto_first,
                "End": self.state.goto_last,
                "g": self._start_page_jump,
                "/": self._start_search,
                "F": lambda: self._cycle(Direction.FORWARD),
                "B": lambda: self._cycle(Direction.BACKWARD),
                "c": self._clear_search,
                "q": self._quit,
                "Esc": self._quit,
            },
            PageJump: {
                "Enter": self._submit_page_jump,
                "Esc": self._cancel_input,
                "Backspace": self._backspace,
            },
            Search: {
                "Enter": self._submit_search,
                "Esc": self._cancel_input,
                "Backspace": self._backspace,
            },
        }

    @property
    def mode(self):
        return self.state.mode

    def handle_key(self, key: str) -> bool:
        """Runs one transition for `key`; returns False once the session should end."""
        handler = self._transitions[type(self.state.mode)].get(key)
        if handler is not None:
            self.state.status_message = ""
            handler()
        elif len(key) == 1:
            self._type_char(key)
        return self.running

    def resize(self, width: int, height: int):
        self.state.resize(width, height)

    # --- Normal mode ---

    def _start_page_jump(self):
        self.state.mode = PageJump()

    def _start_search(self):
        self.state.mode = Search()

    def _cycle(self, direction: Direction):
        match = self.search.advance(direction)
        if match is None:
            self.state.status_message = "No matches" if self.search.active else "No active search"
            return
        self._show_match(match)

    def _show_match(self, match: MatchLocation):
        self.state.goto_page(match.page)
        self.state.scroll_to_line(match.line)
        self.state.status_message = (
            f"Match {self.search.cursor + 1} of {self.search.match_count()} for '{self.search.query}'"
        )

    def _clear_search(self):
        if self.search.active:
            self.search = self.search.rebuild("", self.pages)
            self.state.status_message = "Search cleared"

    def _quit(self):
        self.running = False

    # --- Page jump and search modes ---

    def _type_char(self, char: str):
        mode = self.state.mode
        if isinstance(mode, PageJump) and char.isdecimal():
            self.state.mode = PageJump(mode.buffer + char)
        elif isinstance(mode, Search) and char.isprintable():
            self.state.mode = Search(mode.buffer + char)

    def _backspace(self):
        mode = self.state.mode
        self.state.mode = type(mode)(mode.buffer[:-1])

    def _cancel_input(self):
        self.state.mode = Normal()

    def _submit_page_jump(self):
        buffer = self.state.mode.buffer
        self.state.mode = Normal()
        if not buffer:
            self.state.status_message = "Invalid page number"
            return

        page_num = int(buffer)
        if 1 <= page_num <= self.pages.page_count():
            self.state.goto_page(page_num - 1)
            self.state.status_message = f"Jumped to page {page_num}"
        else:
            self.state.status_message = f"Invalid page number: {page_num}"

    def _submit_search(self):
        query = self.state.mode.buffer
        self.state.mode = Normal()
        self.search = self.search.rebuild(query, self.pages)
        if not query:
            self.state.status_message = "Search query is empty"
            return

        match = self.search.current_match()
        if match is None:
            self.state.status_message = f"No matches found for '{query}'"
        else:
            self._show_match(match)


class PdfApplication:
    """
    A viewer session for one document.
    Loading happens in the constructor, so a DocumentError surfaces before the terminal is touched.
    """
    def __init__(self, path: str, case_sensitive: bool = CASE_SENSITIVE_SEARCH,
                 theme: str = DEFAULT_THEME, start_page: Optional[int] = None):
        self.path = path
        self.theme = theme
        self.pages = PageStore(load_page_texts(path))
        self.controller = InputController(self.pages, case_sensitive)
        self.builder = ViewModelBuilder(self.pages)
        if start_page is not None:
            self.controller.state.goto_page(start_page - 1)

    def view_model(self) -> ViewModel:
        return self.builder.build(self.controller.state, self.controller.search)

    def run(self):
        prepare_terminal()
        curses.wrapper(self._session)

    def _session(self, stdscr):
        self.main_loop(TerminalRenderer(stdscr, self.theme))

    def main_loop(self, renderer):
        """Draws, blocks for one event, dispatches it; repeats until the controller stops running."""
        self.controller.resize(*renderer.body_size())
        logger.info("Viewing %s (%d pages)", self.path, self.pages.page_count())

        while self.controller.running:
            renderer.draw(self.view_model())
            event = renderer.read_event()
            if isinstance(event, Resize):
                self.controller.resize(event.width, event.height)
            elif event is not None:
                self.controller.handle_key(event)

        logger.info("Session ended on page %d", self.controller.state.current_page + 1)

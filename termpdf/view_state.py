# view_state.py
from dataclasses import dataclass
from typing import Tuple, Union

from .config import DEFAULT_VIEWPORT
from .layout import first_row_of_line, max_scroll, wrapped_line_count
from .pdf_model import Page, PageStore


@dataclass(frozen=True)
class Normal:
    pass


@dataclass(frozen=True)
class PageJump:
    buffer: str = ""


@dataclass(frozen=True)
class Search:
    buffer: str = ""


InputMode = Union[Normal, PageJump, Search]


class ViewState:
    """
    Current page, scroll offset and input mode of a viewer session.
    The viewport is the area available to page text, in character cells.
    """
    def __init__(self, pages: PageStore, viewport: Tuple[int, int] = DEFAULT_VIEWPORT):
        self.pages = pages
        self.current_page = 0
        self.scroll_offset = 0
        self.mode: InputMode = Normal()
        self.status_message = ""
        self.viewport_width, self.viewport_height = viewport

    def current_lines(self) -> Page:
        if not self.pages.page_count():
            return ()
        return self.pages.page(self.current_page)

    def resize(self, width: int, height: int):
        self.viewport_width = max(width, 1)
        self.viewport_height = max(height, 1)

    def max_scroll(self) -> int:
        rows = wrapped_line_count(self.current_lines(), self.viewport_width)
        return max_scroll(rows, self.viewport_height)

    def goto_page(self, n: int):
        count = self.pages.page_count()
        if count == 0:
            return
        self.current_page = min(max(n, 0), count - 1)
        self.scroll_offset = 0

    def next_page(self):
        if self.current_page < self.pages.page_count() - 1:
            self.goto_page(self.current_page + 1)

    def prev_page(self):
        if self.current_page > 0:
            self.goto_page(self.current_page - 1)

    def goto_first(self):
        self.goto_page(0)

    def goto_last(self):
        self.goto_page(self.pages.page_count() - 1)

    def scroll(self, delta: int):
        # The stored offset may exceed the limit after scroll_to_line or a resize
        limit = self.max_scroll()
        self.scroll_offset = min(max(min(self.scroll_offset, limit) + delta, 0), limit)

    def scroll_to_line(self, line: int):
        """
        Puts the first display row of source line `line` at the top.
        Not clamped here; the view model clamps against the viewport of the frame being drawn.
        """
        self.scroll_offset = first_row_of_line(self.current_lines(), line, self.viewport_width)

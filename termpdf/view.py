# view.py
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .layout import max_scroll, wrap_page
from .pdf_model import PageStore
from .search import MatchLocation, SearchIndex
from .view_state import Normal, PageJump, Search, ViewState

NORMAL_HELP = "g (goto page) | / (search) | ←/→ (pages) | ↑/↓ (scroll) | Home/End | q/Esc (quit)"
NORMAL_SEARCH_HELP = (
    "g (goto page) | / (search) | F/B (next/prev match) | c (clear search) | "
    "←/→ (pages) | ↑/↓ (scroll) | Home/End | q/Esc (quit)"
)
INPUT_HELP = "Enter (submit) | Esc (cancel) | Backspace (delete)"


@dataclass(frozen=True)
class HighlightSpan:
    start: int
    end: int
    current: bool = False


@dataclass(frozen=True)
class DisplayLine:
    text: str
    highlights: Tuple[HighlightSpan, ...] = ()


@dataclass(frozen=True)
class ViewModel:
    header: str
    body: Tuple[DisplayLine, ...]
    footer: str
    status: str
    input_active: bool = False


class ViewModelBuilder:
    """
    Projects the page store, view state and search index into one frame.
    Building never mutates any of its inputs; the scroll offset is clamped for
    the frame only.
    """
    def __init__(self, pages: PageStore):
        self.pages = pages

    def build(self, state: ViewState, search: SearchIndex,
              width: Optional[int] = None, height: Optional[int] = None) -> ViewModel:
        width = state.viewport_width if width is None else width
        height = state.viewport_height if height is None else height
        return ViewModel(
            header=self.header(state, search),
            body=self.body(state, search, width, height),
            footer=self.footer(state, search),
            status=state.status_message,
            input_active=not isinstance(state.mode, Normal),
        )

    def header(self, state: ViewState, search: SearchIndex) -> str:
        count = self.pages.page_count()
        mode = state.mode
        if isinstance(mode, PageJump):
            return f"Enter page number (1-{count}): {mode.buffer}"
        if isinstance(mode, Search):
            return f"Search: {mode.buffer}"

        current = state.current_page + 1 if count else 0
        text = f"Page {current} of {count}"
        if search.active:
            if search.matches:
                text += f" | Match {search.cursor + 1}/{search.match_count()}"
            else:
                text += " | No matches"
        return text

    def footer(self, state: ViewState, search: SearchIndex) -> str:
        if not isinstance(state.mode, Normal):
            return INPUT_HELP
        return NORMAL_SEARCH_HELP if search.active else NORMAL_HELP

    def body(self, state: ViewState, search: SearchIndex, width: int, height: int) -> Tuple[DisplayLine, ...]:
        if not self.pages.page_count():
            return ()

        lines = self.pages.page(state.current_page)
        rows = wrap_page(lines, width)
        offset = min(state.scroll_offset, max_scroll(len(rows), height))

        by_line: Dict[int, List[MatchLocation]] = defaultdict(list)
        for match in search.matches_on_page(state.current_page):
            by_line[match.line].append(match)
        current = search.current_match()

        display = []
        for line_no, start, end in rows[offset:offset + max(height, 1)]:
            spans = []
            for match in by_line.get(line_no, ()):
                lo, hi = max(match.offset, start), min(match.end, end)
                if lo < hi:
                    spans.append(HighlightSpan(lo - start, hi - start, match == current))
            display.append(DisplayLine(lines[line_no][start:end], tuple(spans)))
        return tuple(display)

# search.py
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

from .config import CASE_SENSITIVE_SEARCH
from .pdf_model import PageStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class MatchLocation:
    """One occurrence of the query; ordering is document reading order."""
    page: int
    line: int
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


class Direction(Enum):
    FORWARD = 1
    BACKWARD = -1


def find_occurrences(line: str, query: str, case_sensitive: bool) -> Iterator[Tuple[int, int]]:
    """Yields (offset, length) of every non-overlapping literal occurrence, left to right."""
    if not query:
        return
    flags = 0 if case_sensitive else re.IGNORECASE
    for m in re.finditer(re.escape(query), line, flags):
        yield m.start(), m.end() - m.start()


class SearchIndex:
    """
    The match locations of a query across the whole document, plus a cursor.
    An index is never updated in place: a new query means a new index from rebuild().
    """
    def __init__(self, case_sensitive: bool = CASE_SENSITIVE_SEARCH):
        self.case_sensitive = case_sensitive
        self.query = ""
        self.matches: Tuple[MatchLocation, ...] = ()
        self.cursor: Optional[int] = None
        self._by_page: Dict[int, Tuple[MatchLocation, ...]] = {}

    def rebuild(self, query: str, pages: PageStore) -> "SearchIndex":
        """Scans every line of every page for `query` and returns a fresh index."""
        index = SearchIndex(self.case_sensitive)
        index.query = query

        matches = []
        by_page: Dict[int, list] = {}
        for page_no, lines in enumerate(pages):
            for line_no, line in enumerate(lines):
                for offset, length in find_occurrences(line, query, self.case_sensitive):
                    match = MatchLocation(page_no, line_no, offset, length)
                    matches.append(match)
                    by_page.setdefault(page_no, []).append(match)

        index.matches = tuple(matches)
        index._by_page = {page: tuple(found) for page, found in by_page.items()}
        index.cursor = 0 if matches else None
        logger.debug("Search for %r found %d matches", query, len(matches))
        return index

    @property
    def active(self) -> bool:
        return bool(self.query)

    def match_count(self) -> int:
        return len(self.matches)

    def current_match(self) -> Optional[MatchLocation]:
        if self.cursor is None:
            return None
        return self.matches[self.cursor]

    def advance(self, direction: Direction) -> Optional[MatchLocation]:
        """Moves the cursor one match forward or backward, wrapping around at either end."""
        if not self.matches:
            return None
        self.cursor = (self.cursor + direction.value) % len(self.matches)
        return self.matches[self.cursor]

    def matches_on_page(self, page: int) -> Tuple[MatchLocation, ...]:
        return self._by_page.get(page, ())

# layout.py
import unicodedata
from typing import List, Sequence, Tuple

# (line index, start offset, end offset) of one display row within a page
Row = Tuple[int, int, int]


def char_width(ch: str) -> int:
    """Terminal cells taken by one character: 2 for wide East Asian, 0 for combining marks."""
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def cell_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)


def _fit(line: str, start: int, width: int) -> int:
    """End offset of the longest run from `start` that fits in `width` cells; at least one character."""
    used = 0
    end = start
    while end < len(line) and used + char_width(line[end]) <= width:
        used += char_width(line[end])
        end += 1
    return max(end, start + 1)


def wrap_line(line: str, width: int) -> List[Tuple[int, int]]:
    """
    Greedy, whitespace-preferring wrap of a single line, measured in terminal cells.

    Returns (start, end) offsets into `line` for every display row. A row
    breaks at the last whitespace that still fits; a word wider than the
    viewport is cut hard. The whitespace at a break point belongs to no row,
    and an empty line still occupies one row.
    """
    width = max(width, 1)
    n = len(line)
    if cell_width(line) <= width:
        return [(0, n)]

    segments = []
    start = 0
    while start < n:
        limit = _fit(line, start, width)
        if limit >= n:
            segments.append((start, n))
            break

        brk = next((i for i in range(limit, start, -1) if line[i].isspace()), None)
        end = limit if brk is None else brk
        while end > start and line[end - 1].isspace():
            end -= 1
        if end == start:
            end = limit

        segments.append((start, end))
        start = end
        while start < n and line[start].isspace():
            start += 1
    return segments


def wrap_page(lines: Sequence[str], width: int) -> List[Row]:
    rows = []
    for index, line in enumerate(lines):
        rows.extend((index, start, end) for start, end in wrap_line(line, width))
    return rows


def wrapped_line_count(lines: Sequence[str], width: int) -> int:
    return sum(len(wrap_line(line, width)) for line in lines)


def first_row_of_line(lines: Sequence[str], line_index: int, width: int) -> int:
    """Display row on which source line `line_index` starts."""
    return wrapped_line_count(lines[:line_index], width)


def max_scroll(row_count: int, height: int) -> int:
    return max(0, row_count - max(height, 1))

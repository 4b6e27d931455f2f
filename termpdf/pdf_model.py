# pdf_model.py
import logging
import os
from typing import List, Sequence, Tuple

import fitz  # PyMuPDF

from .config import FORM_FEED, LINES_PER_PAGE
from .errors import DocumentError, PageOutOfRange

logger = logging.getLogger(__name__)

Page = Tuple[str, ...]


class PageStore:
    """
    Immutable, ordered collection of page texts.
    Each page is held as a tuple of lines; the page count is fixed at construction.
    """
    def __init__(self, page_texts: Sequence[str]):
        self._pages: Tuple[Page, ...] = tuple(tuple(text.splitlines()) for text in page_texts)

    def page_count(self) -> int:
        return len(self._pages)

    def page(self, index: int) -> Page:
        """Returns the lines of a page, raising PageOutOfRange for a bad index."""
        if not 0 <= index < len(self._pages):
            raise PageOutOfRange(index, len(self._pages))
        return self._pages[index]

    def line_count(self, index: int) -> int:
        return len(self.page(index))

    def __len__(self):
        return len(self._pages)

    def __iter__(self):
        return iter(self._pages)


def format_page_text(text: str) -> str:
    """Strips every line and drops the blank ones."""
    lines = (line.strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)


def split_into_pages(text: str, lines_per_page: int = LINES_PER_PAGE) -> List[str]:
    """
    Splits plain text into pages.
    Form feeds mark page breaks when present, otherwise the text is chunked
    into pages of `lines_per_page` lines. Pages left empty are dropped.
    """
    if FORM_FEED in text:
        pages = [format_page_text(chunk) for chunk in text.split(FORM_FEED)]
        return [page for page in pages if page]

    lines = text.splitlines()
    pages = []
    for start in range(0, len(lines), lines_per_page):
        page = format_page_text("\n".join(lines[start:start + lines_per_page]))
        if page:
            pages.append(page)
    return pages


def _extract_pdf(path: str) -> List[str]:
    try:
        doc = fitz.open(path)
    except (RuntimeError, OSError, ValueError) as e:
        raise DocumentError(path, f"could not open document ({e})") from e

    try:
        return [format_page_text(doc.load_page(i).get_text()) for i in range(doc.page_count)]
    except (RuntimeError, ValueError) as e:
        raise DocumentError(path, f"could not extract text ({e})") from e
    finally:
        doc.close()


def _extract_plain_text(path: str) -> List[str]:
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return split_into_pages(f.read())
    except OSError as e:
        raise DocumentError(path, f"could not read file ({e})") from e


def load_page_texts(path: str) -> List[str]:
    """
    Extracts the text of every page of the document at `path`.
    PDFs (and anything else PyMuPDF opens) keep one entry per page, empty
    pages included; .txt files are split on form feeds.
    Raises DocumentError when the file is missing, unreadable or has no text at all.
    """
    if not os.path.isfile(path):
        raise DocumentError(path, "no such file")

    if path.lower().endswith(".txt"):
        pages = _extract_plain_text(path)
    else:
        pages = _extract_pdf(path)

    if not any(pages):
        raise DocumentError(
            path,
            "could not extract text; the document might be image-based or use an unsupported encoding",
        )

    logger.info("Loaded %d pages from %s", len(pages), path)
    return pages

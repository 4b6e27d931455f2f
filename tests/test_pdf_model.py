"""
Tests for page storage and text extraction
"""

import fitz
import pytest

from termpdf.errors import DocumentError, PageOutOfRange
from termpdf.pdf_model import PageStore, format_page_text, load_page_texts, split_into_pages


def make_pdf(path, page_texts):
    doc = fitz.open()
    for text in page_texts:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    doc.save(str(path))
    doc.close()


class TestPageStore:
    def test_counts(self, three_pages):
        assert three_pages.page_count() == 3
        assert three_pages.line_count(0) == 2
        assert three_pages.line_count(1) == 6

    def test_page_returns_lines(self, three_pages):
        assert three_pages.page(1)[4] == "hello world"

    def test_page_out_of_range(self, three_pages):
        with pytest.raises(PageOutOfRange):
            three_pages.page(3)
        with pytest.raises(IndexError):
            three_pages.page(-1)

    def test_empty_document_is_valid(self, empty_store):
        assert empty_store.page_count() == 0
        with pytest.raises(PageOutOfRange):
            empty_store.page(0)

    def test_pages_are_immutable(self, three_pages):
        assert isinstance(three_pages.page(0), tuple)


def test_format_page_text_strips_and_drops_blank_lines():
    assert format_page_text("  a  \n\n   \n b\n") == "a\nb"


def test_split_on_form_feeds_drops_empty_pages():
    text = "first\npage\x0c\x0c  second  \x0c\n"
    assert split_into_pages(text) == ["first\npage", "second"]


def test_split_without_form_feeds_chunks_lines():
    text = "\n".join(f"line {i}" for i in range(7))
    pages = split_into_pages(text, lines_per_page=3)
    assert len(pages) == 3
    assert pages[2] == "line 6"


def test_load_pdf_keeps_one_entry_per_page(tmp_path):
    path = tmp_path / "doc.pdf"
    make_pdf(path, ["Hello PDF", "", "Last page"])

    pages = load_page_texts(str(path))

    assert len(pages) == 3
    assert pages[0] == "Hello PDF"
    assert pages[1] == ""
    assert pages[2] == "Last page"


def test_load_text_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("alpha\x0cbeta\n", encoding="utf-8")
    assert load_page_texts(str(path)) == ["alpha", "beta"]


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(DocumentError):
        load_page_texts(str(tmp_path / "missing.pdf"))


def test_corrupt_pdf_is_fatal(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"this is not a pdf at all")
    with pytest.raises(DocumentError):
        load_page_texts(str(path))


def test_pdf_without_text_is_fatal(tmp_path):
    path = tmp_path / "scanned.pdf"
    make_pdf(path, ["", ""])
    with pytest.raises(DocumentError, match="image-based"):
        load_page_texts(str(path))

import pytest

from termpdf.pdf_model import PageStore


@pytest.fixture
def three_pages():
    """Three pages; the second holds "hello world" on its fifth line."""
    return PageStore([
        "Title page\nby nobody",
        "one\ntwo\nthree\nfour\nhello world\nsix",
        "the end",
    ])


@pytest.fixture
def ten_pages():
    return PageStore([f"page {i} text\ncat and dog" for i in range(1, 11)])


@pytest.fixture
def empty_store():
    return PageStore([])

# errors.py


class TermPdfError(Exception):
    """Base class for all errors raised by termpdf."""


class DocumentError(TermPdfError):
    """The document could not be opened or holds no extractable text."""

    def __init__(self, path, reason):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class PageOutOfRange(TermPdfError, IndexError):
    def __init__(self, index, page_count):
        super().__init__(f"page index {index} out of range (document has {page_count} pages)")
        self.index = index
        self.page_count = page_count

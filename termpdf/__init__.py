"""Terminal reader for the text of PDF documents."""

__version__ = "0.1.0"

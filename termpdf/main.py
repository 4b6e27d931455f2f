# main.py
import argparse
import logging
import sys

from .app import PdfApplication
from .config import CASE_SENSITIVE_SEARCH, DEFAULT_THEME, LOG_FORMAT, THEMES
from .errors import DocumentError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termpdf",
        description="Read the text of a PDF in the terminal: page, scroll, jump and search.",
    )
    parser.add_argument("file", help="Path to the PDF (or .txt) file to read")
    parser.add_argument("--case-sensitive", action="store_true", default=CASE_SENSITIVE_SEARCH,
                        help="Match case when searching")
    parser.add_argument("--theme", choices=sorted(THEMES), default=DEFAULT_THEME, help="Color theme")
    parser.add_argument("--page", type=int, help="Page to open at (1-based)")
    parser.add_argument("--log-file", help="Write a log to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def setup_logging(log_file=None, verbose=False):
    level = logging.DEBUG if verbose else logging.INFO
    if log_file:
        logging.basicConfig(filename=log_file, level=level, format=LOG_FORMAT)
    else:
        # The screen belongs to curses while the viewer runs; stay quiet on stderr
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)


def main(argv=None) -> int:
    """Command line entry point for the terminal PDF reader."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.verbose)

    try:
        app = PdfApplication(args.file, case_sensitive=args.case_sensitive,
                             theme=args.theme, start_page=args.page)
    except DocumentError as e:
        logger.debug("Failed to open %s", args.file, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())

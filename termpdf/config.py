# config.py

from typing import Dict, Tuple

# --- Theme Configuration ---
# Color names map onto curses.COLOR_* constants in the renderer.
# Each role is a (foreground, background) pair; "default" keeps the terminal's own color.
THEMES: Dict[str, Dict[str, Tuple[str, str]]] = {
    "dark": {
        "header": ("cyan", "default"),
        "header_input": ("yellow", "default"),
        "content": ("white", "default"),
        "highlight": ("black", "yellow"),
        "current": ("black", "cyan"),
        "footer": ("yellow", "default"),
        "status": ("green", "default"),
    },
    "light": {
        "header": ("blue", "default"),
        "header_input": ("magenta", "default"),
        "content": ("black", "default"),
        "highlight": ("black", "yellow"),
        "current": ("white", "blue"),
        "footer": ("blue", "default"),
        "status": ("green", "default"),
    },
}

DEFAULT_THEME: str = "dark"

# --- Application Constants ---
# Search ignores case unless --case-sensitive is given
CASE_SENSITIVE_SEARCH: bool = False

# Page size used for plain text documents that carry no form feeds
LINES_PER_PAGE: int = 50

FORM_FEED: str = "\x0c"

# Viewport assumed until the terminal reports its real size (width, height)
DEFAULT_VIEWPORT: Tuple[int, int] = (80, 24)

# Rows taken by header, footer and status line around the page body
CHROME_ROWS: int = 3

LOG_FORMAT: str = "%(asctime)s - %(levelname)s - %(message)s"

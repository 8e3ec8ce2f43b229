"""Terminal styling for CLI status messages, using ANSI escape codes.

Charts themselves are plain text; only the messages around them are
styled, and only when stderr is a terminal.
"""

import sys

# Detect whether stderr supports color
_COLOR = hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def _esc(code: str) -> str:
    return f"\033[{code}m" if _COLOR else ""


RESET = _esc("0")
GREEN = _esc("32")
BOLD_RED = _esc("1;31")


def error(msg: str) -> str:
    return f"  {BOLD_RED}error:{RESET} {msg}"


def success(msg: str) -> str:
    return f"  {GREEN}{msg}{RESET}"

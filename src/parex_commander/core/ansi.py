"""ANSI escape sequences for cursor movement and region clearing."""

from __future__ import annotations

ESC: str = "\x1b"
CLEAR_DOWN: str = ESC + "[J"
CLEAR_LINE: str = ESC + "[2K"
CLEAR_SCREEN: str = ESC + "[2J"
CURSOR_HOME: str = ESC + "[H"
CURSOR_START: str = "\r"


def cursor_up_and_start(lines: int = 1) -> str:
    """Move the cursor *lines* rows up and to the first column."""
    return f"{ESC}[{lines}A{CURSOR_START}"

"""256-color ANSI text helpers."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["RESET", "Color", "bg", "fg", "set_color"]

RESET = "\x1b[0m"


class Color(IntEnum):
    """Indexes into the 256-color terminal palette."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7
    GREY = 8
    BRIGHT_RED = 9
    BRIGHT_GREEN = 10
    BRIGHT_YELLOW = 11
    BRIGHT_BLUE = 12
    BRIGHT_MAGENTA = 13
    BRIGHT_CYAN = 14
    BRIGHT_WHITE = 15
    ORANGE = 208
    PINK = 218
    PURPLE = 93


def fg(text: object, color: int) -> str:
    return f"\x1b[38;5;{int(color)}m{text}{RESET}"


def bg(text: object, color: int) -> str:
    return f"\x1b[48;5;{int(color)}m{text}{RESET}"


def set_color(text: object, fg_color: int, bg_color: int) -> str:
    """Apply foreground and background at once, with a single reset."""
    return f"\x1b[38;5;{int(fg_color)}m\x1b[48;5;{int(bg_color)}m{text}{RESET}"

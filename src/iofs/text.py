"""Small string and sequence helpers.

ASCII character classification, case-insensitive comparison, element search
over sequences and a fuzzy subsequence matcher used for name filtering.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

T = TypeVar("T")

WHITESPACE = (" ", "\n", "\r", "\t")


def _char(value: str | int) -> str:
    return chr(value) if isinstance(value, int) else value


def is_upper(value: str | int) -> bool:
    """Check for an ASCII uppercase letter (accepts a char or a byte value)."""
    return "A" <= _char(value) <= "Z"


def is_lower(value: str | int) -> bool:
    """Check for an ASCII lowercase letter (accepts a char or a byte value)."""
    return "a" <= _char(value) <= "z"


def is_letter(value: str | int) -> bool:
    """Check for an ASCII letter."""
    return is_upper(value) or is_lower(value)


def is_number(value: str | int) -> bool:
    """Check for an ASCII decimal digit."""
    return "0" <= _char(value) <= "9"


def is_whitespace(value: str | int) -> bool:
    return _char(value) in WHITESPACE


def to_upper(value: str | int) -> str:
    ch = _char(value)
    return chr(ord(ch) - 32) if is_lower(ch) else ch


def to_lower(value: str | int) -> str:
    ch = _char(value)
    return chr(ord(ch) + 32) if is_upper(ch) else ch


def eq_ignore_case(a: str, b: str) -> bool:
    """Compare two characters, folding ASCII letters only."""
    if is_letter(a):
        return to_lower(a) == to_lower(b)
    return a == b


def range_at(value: Any, start: Any, end: Any) -> bool:
    """Check ``start <= value <= end``."""
    return start <= value <= end


def contained_in(value: T, pats: Iterable[T]) -> bool:
    return any(item == value for item in pats)


def find(seq: Sequence[T], x: T) -> int | None:
    """Index of the first element equal to ``x``."""
    for pos, item in enumerate(seq):
        if item == x:
            return pos
    return None


def find_all(seq: Sequence[T], x: T) -> list[int] | None:
    """Indexes of every element equal to ``x``, or None when there are none."""
    found = [pos for pos, item in enumerate(seq) if item == x]
    return found or None


def find_last(seq: Sequence[T], x: T) -> int | None:
    """Index of the last element equal to ``x``."""
    for pos in range(len(seq) - 1, -1, -1):
        if seq[pos] == x:
            return pos
    return None


def find_slice(seq: Sequence[T], needle: Sequence[T]) -> tuple[int, int] | None:
    """Locate the first occurrence of ``needle`` inside ``seq``.

    Args:
        seq: Sequence to search.
        needle: Contiguous run to look for.

    Returns:
        Inclusive ``(start, end)`` indexes of the match, or None.
    """
    if not seq or not needle or len(needle) > len(seq):
        return None
    width = len(needle)
    for start in range(len(seq) - width + 1):
        if list(seq[start : start + width]) == list(needle):
            return start, start + width - 1
    return None


def count(seq: Iterable[T], x: T) -> int:
    return sum(1 for item in seq if item == x)


def last_eq(seq: Sequence[T], x: T) -> bool:
    """Check whether the final element equals ``x``."""
    return bool(seq) and seq[-1] == x


def match_with(needle: str, haystack: str) -> list[int] | None:
    """Fuzzy-match ``haystack`` as an ordered subsequence of ``needle``.

    Characters of ``needle`` are walked in order; every time one matches the
    next pending character of ``haystack`` (ignoring ASCII case) the
    haystack index is recorded.

    Args:
        needle: The text being scanned.
        haystack: The pattern whose characters are looked for in order.

    Returns:
        Matched haystack indexes, or None when nothing matched.

    Example:
        >>> match_with("Report.txt", "rpt")
        [0, 1, 2]
    """
    positions: list[int] = []
    mine = 0
    other = 0
    while mine < len(needle) and other < len(haystack):
        if eq_ignore_case(needle[mine], haystack[other]):
            positions.append(other)
            other += 1
        mine += 1
    return positions or None


def concat(first: object, *others: object) -> str:
    """Render every argument with ``str()`` and join them."""
    return "".join(str(item) for item in (first, *others))

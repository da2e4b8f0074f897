"""Number-base detection and numeric text trimming."""

from __future__ import annotations

from enum import Enum

from iofs.text import is_whitespace

__all__ = ["NumberSystem", "del_zero", "trim", "trim_zero"]


class NumberSystem(Enum):
    """Base of a numeric literal, selected by its two-character prefix."""

    BINARY = 2
    OCTAL = 8
    DECIMAL = 10
    HEXADECIMAL = 16

    @classmethod
    def from_marker(cls, marker: str) -> NumberSystem:
        """Map a prefix letter (``x``, ``o``, ``b``, any case) to a base."""
        lowered = marker.lower()
        if lowered == "x":
            return cls.HEXADECIMAL
        if lowered == "o":
            return cls.OCTAL
        if lowered == "b":
            return cls.BINARY
        return cls.DECIMAL

    @classmethod
    def detect(cls, text: str | bytes) -> NumberSystem:
        """Detect the base of a literal such as ``0x1F`` or ``0b101``.

        Args:
            text: Literal text or raw bytes, already trimmed.

        Returns:
            The detected base; anything without a ``0x``/``0o``/``0b``
            prefix is decimal.
        """
        if isinstance(text, (bytes, bytearray)):
            text = text.decode("latin-1")
        if len(text) < 2 or text[0] != "0":
            return cls.DECIMAL
        return cls.from_marker(text[1])

    @property
    def prefix(self) -> str:
        return {
            NumberSystem.BINARY: "0b",
            NumberSystem.OCTAL: "0o",
            NumberSystem.DECIMAL: "",
            NumberSystem.HEXADECIMAL: "0x",
        }[self]


def trim(buf: str) -> str:
    """Strip spaces, tabs, CR and LF from both ends."""
    start = 0
    end = len(buf)
    while end > start and is_whitespace(buf[end - 1]):
        end -= 1
    while start < end and is_whitespace(buf[start]):
        start += 1
    return buf[start:end]


def del_zero(text: str) -> str:
    """Remove redundant zeros from a numeric literal.

    Leading zeros of the integer part (after a ``-`` sign or a base prefix)
    are dropped down to one digit. For decimals with a fraction, trailing
    zeros are dropped down to one fractional digit, and a bare trailing dot
    gets a ``0`` appended.

    Example:
        >>> del_zero("-007.500")
        '-7.5'
        >>> del_zero("0x00FF")
        '0xFF'
    """
    if len(text) < 2:
        return text
    chars = list(text)
    start = 0
    if NumberSystem.detect(text) is NumberSystem.DECIMAL:
        if chars[0] == "-":
            start = 1
        if "." in chars:
            dot = chars.index(".")
            length = dot
            while dot + 2 < len(chars) and chars[-1] == "0":
                chars.pop()
        else:
            length = len(chars)
    else:
        start = 2
        length = len(chars)
    while length > start + 1 and chars[start] == "0":
        del chars[start]
        length -= 1
    if chars and chars[-1] == ".":
        chars.append("0")
    return "".join(chars)


def trim_zero(text: str) -> str:
    """Trim surrounding whitespace, then redundant zeros."""
    return del_zero(trim(text))

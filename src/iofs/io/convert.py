"""Typed conversion of raw byte buffers.

Every "read something and give it back as a value" path in iofs (console
input, typed file reads) funnels through :func:`convert_buffer`. The target
is a type key: ``str``, ``bytes``, ``int``, ``float``, or one of the
fixed-width descriptors exported here (``I8`` ... ``U128``, ``F32``,
``F64``).
"""

from __future__ import annotations

import math
import re
import struct
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from iofs.errors import EmptyError, InvalidError
from iofs.io.number import NumberSystem, trim

__all__ = [
    "F32",
    "F64",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "ISIZE",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "USIZE",
    "FloatWidth",
    "IntWidth",
    "convert_buffer",
    "register_converter",
]

Buffer = bytes | bytearray | memoryview
Converter = Callable[[bytes], Any]

_DECIMAL = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)

_CONVERTERS: dict[Any, Converter] = {}


@dataclass(frozen=True)
class IntWidth:
    """A fixed-width integer target."""

    name: str
    bits: int
    signed: bool

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class FloatWidth:
    """A floating point target; ``bits`` of 32 rounds to single precision."""

    name: str
    bits: int


I8 = IntWidth("i8", 8, True)
I16 = IntWidth("i16", 16, True)
I32 = IntWidth("i32", 32, True)
I64 = IntWidth("i64", 64, True)
I128 = IntWidth("i128", 128, True)
ISIZE = IntWidth("isize", struct.calcsize("P") * 8, True)
U8 = IntWidth("u8", 8, False)
U16 = IntWidth("u16", 16, False)
U32 = IntWidth("u32", 32, False)
U64 = IntWidth("u64", 64, False)
U128 = IntWidth("u128", 128, False)
USIZE = IntWidth("usize", struct.calcsize("P") * 8, False)
F32 = FloatWidth("f32", 32)
F64 = FloatWidth("f64", 64)


def register_converter(target: Any) -> Callable[[Converter], Converter]:
    """Register the converter used for ``target``.

    Args:
        target: Type key passed to :func:`convert_buffer`.

    Returns:
        Decorator storing the converter and returning it unchanged.
    """

    def decorator(func: Converter) -> Converter:
        _CONVERTERS[target] = func
        return func

    return decorator


def convert_buffer(buf: Buffer | str, target: Any = str) -> Any:
    """Convert a raw buffer into a value of the requested type.

    Args:
        buf: Bytes to convert. A ``str`` is encoded as UTF-8 first.
        target: Type key; defaults to ``str``.

    Returns:
        The converted value.

    Raises:
        EmptyError: Nothing to convert (numeric targets only).
        InvalidError: The content does not parse as ``target``.
        TypeError: No converter is registered for ``target``.

    Example:
        >>> convert_buffer(b"0x1F", int)
        31
    """
    converter = _CONVERTERS.get(target)
    if converter is None:
        raise TypeError(f"No buffer converter registered for {target!r}")
    if isinstance(buf, str):
        buf = buf.encode("utf-8")
    return converter(bytes(buf))


def _decode(buf: bytes) -> str:
    try:
        return buf.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidError(f"Buffer is not valid UTF-8: {e}") from e


@register_converter(str)
def _to_str(buf: bytes) -> str:
    return _decode(buf)


@register_converter(bytes)
def _to_bytes(buf: bytes) -> bytes:
    return buf


def _accumulate(digits: str, system: NumberSystem) -> int:
    if not digits:
        raise InvalidError(f"Missing digits after '{system.prefix}'")
    number = 0
    for ch in digits:
        if not ch.isascii():
            raise InvalidError(f"Invalid digit {ch!r}")
        try:
            digit = int(ch, system.value)
        except ValueError as e:
            raise InvalidError(f"Invalid base-{system.value} digit {ch!r}") from e
        number = number * system.value + digit
    return number


def parse_int(buf: bytes, width: IntWidth | None = None) -> int:
    """Parse a decimal, ``0x``, ``0o`` or ``0b`` integer literal.

    Negative numbers are only accepted in plain decimal form.

    Args:
        buf: Raw bytes of the literal; surrounding whitespace is ignored.
        width: Optional fixed width the value must fit.

    Returns:
        The parsed integer.

    Raises:
        EmptyError: The buffer is blank.
        InvalidError: Bad syntax, bad digit, or out of range for ``width``.
    """
    text = trim(_decode(buf))
    if not text:
        raise EmptyError()

    system = NumberSystem.detect(text)
    if text[0] == "-" or system is NumberSystem.DECIMAL:
        if not _DECIMAL.fullmatch(text):
            raise InvalidError(f"Invalid integer literal {text!r}")
        if width is not None and not width.signed and text[0] == "-":
            raise InvalidError(f"Negative value {text!r} for {width.name}")
        number = int(text)
    else:
        number = _accumulate(text[2:], system)

    if width is not None and not width.contains(number):
        raise InvalidError(f"{text!r} is out of range for {width.name}")
    return number


def parse_float(buf: bytes, width: FloatWidth | None = None) -> float:
    """Parse a floating point literal (``inf`` and ``nan`` included).

    For ``F32`` the value is rounded to single precision; magnitudes
    beyond its range become signed infinity.
    """
    text = trim(_decode(buf))
    if not text:
        raise EmptyError()
    if not _FLOAT.fullmatch(text):
        raise InvalidError(f"Invalid float literal {text!r}")
    value = float(text)
    if width is not None and width.bits == 32:
        try:
            value = struct.unpack("f", struct.pack("f", value))[0]
        except OverflowError:
            # Beyond single precision saturates to infinity
            value = math.copysign(math.inf, value)
    return value


register_converter(int)(parse_int)
register_converter(float)(parse_float)

for _width in (I8, I16, I32, I64, I128, ISIZE, U8, U16, U32, U64, U128, USIZE):
    register_converter(_width)(lambda buf, _w=_width: parse_int(buf, _w))

for _fwidth in (F32, F64):
    register_converter(_fwidth)(lambda buf, _w=_fwidth: parse_float(buf, _w))

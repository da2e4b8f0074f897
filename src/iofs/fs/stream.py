"""Line iteration and write payload encoding."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import BinaryIO

__all__ = ["Lines", "StreamState", "encode_payload", "strip_line_end"]


class StreamState(Enum):
    """Open mode of a file handle."""

    NONE = "none"
    READING = "reading"
    WRITING = "writing"


def strip_line_end(buf: bytes, delimiter: bytes = b"\n") -> bytes:
    """Drop a trailing delimiter and, for newlines, a preceding CR."""
    if buf.endswith(delimiter):
        buf = buf[: -len(delimiter)]
        if delimiter == b"\n" and buf.endswith(b"\r"):
            buf = buf[:-1]
    return buf


def encode_payload(contents: object) -> bytes:
    """Render a write payload as bytes.

    Bytes-like values are written as-is, strings as UTF-8 and anything else
    (numbers, single characters) through ``str()``.
    """
    if isinstance(contents, (bytes, bytearray, memoryview)):
        return bytes(contents)
    if isinstance(contents, str):
        return contents.encode("utf-8")
    return str(contents).encode("utf-8")


class Lines(Iterator[str]):
    """Iterate the lines of a binary reader as text.

    Line endings (``\\n`` or ``\\r\\n``) are stripped. The reader is closed
    once exhausted or when the iterator is used as a context manager.
    """

    def __init__(self, reader: BinaryIO) -> None:
        self._reader = reader

    def __iter__(self) -> Lines:
        return self

    def __next__(self) -> str:
        line = self._reader.readline()
        if not line:
            self.close()
            raise StopIteration
        try:
            return strip_line_end(line).decode("utf-8")
        except UnicodeDecodeError:
            self.close()
            raise

    def __enter__(self) -> Lines:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._reader.close()

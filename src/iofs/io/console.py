"""Line-oriented console input and colored console output."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from typing import Any, BinaryIO, TextIO

from iofs import color
from iofs.errors import ConvertError, ConvertIOError
from iofs.fs.stream import strip_line_end
from iofs.io.convert import convert_buffer

__all__ = ["Console", "colorize"]

logger = logging.getLogger(__name__)

HIDE_CURSOR = "\x1b[?;25;l"
SHOW_CURSOR = "\x1b[?;25;h"


def colorize(contents: object, fg: int | None = None, bg: int | None = None) -> str:
    """Wrap text in 256-color foreground, then background, sequences."""
    text = str(contents)
    if fg is not None:
        text = color.fg(text, fg)
    if bg is not None:
        text = color.bg(text, bg)
    return text


class Console:
    """Standard input reader with typed parsing, plus terminal output helpers.

    Streams are injectable so the console can be driven from tests.
    """

    def __init__(self, stdin: BinaryIO | None = None, stdout: TextIO | None = None) -> None:
        """Initialize the console.

        Args:
            stdin: Binary input stream. Defaults to ``sys.stdin.buffer``.
            stdout: Text output stream. Defaults to ``sys.stdout``.
        """
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout

    # --- Input ---

    def read_until(self, delimiter: bytes = b"\n") -> bytes:
        """Read up to ``delimiter``; the delimiter and a preceding CR are dropped."""
        if delimiter == b"\n":
            buf = self.stdin.readline()
        else:
            chunks = bytearray()
            while True:
                byte = self.stdin.read(1)
                if not byte:
                    break
                chunks += byte
                if byte == delimiter:
                    break
            buf = bytes(chunks)
        if delimiter != b"\n" and buf.endswith(delimiter):
            buf = buf[:-1]
            if buf.endswith(b"\r"):
                buf = buf[:-1]
            return buf
        return strip_line_end(buf, delimiter)

    def input(self, target: Any = str, prompt: str | None = None) -> Any:
        """Optionally print a prompt, then read one line as ``target``.

        Raises:
            ConvertError: Empty or invalid input, or a failed read.
        """
        if prompt is not None:
            self.stdout.write(prompt)
            self.stdout.flush()
        try:
            buf = self.read_until(b"\n")
        except OSError as e:
            raise ConvertIOError(e) from e
        return convert_buffer(buf, target)

    def read_line_as(self, target: Any = str) -> Any:
        return self.input(target)

    def read_int(self) -> int:
        """Read an integer line; -1 if it does not parse."""
        try:
            return self.input(int)
        except ConvertError as e:
            logger.debug("Console integer read failed: %s", e)
            return -1

    def read_float(self) -> float:
        """Read a float line; 0.0 if it does not parse."""
        try:
            return self.input(float)
        except ConvertError as e:
            logger.debug("Console float read failed: %s", e)
            return 0.0

    # --- Output ---

    def print(self, contents: object, fg: int | None = None, bg: int | None = None) -> None:
        self.stdout.write(colorize(contents, fg, bg))
        self.stdout.flush()

    def println(self, contents: object, fg: int | None = None, bg: int | None = None) -> None:
        self.stdout.write(colorize(contents, fg, bg) + "\n")
        self.stdout.flush()

    def clear(self) -> int:
        """Clear the terminal with the platform command.

        Returns:
            Exit code of the clear command.
        """
        if os.name == "nt":
            command = ["cmd", "/C", "cls"]
        else:
            command = ["sh", "-c", "clear"]
        return subprocess.run(command, check=False).returncode

    def _emit(self, sequence: str) -> None:
        self.stdout.write(sequence)
        self.stdout.flush()

    def hide_cursor(self) -> None:
        self._emit(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._emit(SHOW_CURSOR)

    def set_cursor_position(self, x: int, y: int) -> None:
        """Move the cursor to zero-based column ``x``, row ``y``."""
        self._emit(f"\x1b[{y + 1};{x + 1}H")

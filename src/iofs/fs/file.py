"""File handles with buffered read/write streams."""

from __future__ import annotations

import copy
import errno
import logging
import os
import shutil
from typing import Any, BinaryIO

from iofs.errors import ConvertIOError, EmptyError
from iofs.fs import mime
from iofs.fs.builder import ROOT_MARKER, PathBuilder
from iofs.fs.entry import Attributes, Entry
from iofs.fs.pathstr import PathInput
from iofs.fs.stream import Lines, StreamState, encode_payload, strip_line_end
from iofs.io.convert import convert_buffer

__all__ = ["COMPARE_CHUNK_SIZE", "FileHandle", "read_first_line"]

logger = logging.getLogger(__name__)

# Window size used when comparing file contents
COMPARE_CHUNK_SIZE = 131_072


def _as_delimiter(delimiter: bytes | str | int) -> bytes:
    if isinstance(delimiter, int):
        return bytes([delimiter])
    if isinstance(delimiter, str):
        delimiter = delimiter.encode("utf-8")
    if len(delimiter) != 1:
        raise ValueError(f"Delimiter must be a single byte, got {delimiter!r}")
    return delimiter


def _read_until(reader: BinaryIO, delimiter: bytes) -> bytes:
    if delimiter == b"\n":
        return reader.readline()
    buf = bytearray()
    while True:
        chunk = reader.read(1)
        if not chunk:
            break
        buf += chunk
        if chunk == delimiter:
            break
    return bytes(buf)


class FileHandle(Entry):
    """A handle to one file path plus an optional read or write stream.

    Opening a handle does not touch the disk. Reading requires
    :meth:`start_reading`, writing requires :meth:`start_writing` (or
    :meth:`overwrite`); the two stream states are mutually exclusive.

    A handle carries no lock: do not use one handle's stream from two
    threads at once.
    """

    def __init__(self, path: PathBuilder) -> None:
        super().__init__(path)
        self._state = StreamState.NONE
        self._stream: BinaryIO | None = None

    @classmethod
    def open_or_create(cls, path: PathInput, cwd: PathInput | None = None) -> FileHandle:
        """Open a file, creating it (and its parent directories) if missing.

        Args:
            path: File path.
            cwd: Directory relative paths resolve against.

        Returns:
            Handle with no stream started.

        Raises:
            OSError: If the file exists but cannot be opened, or creation fails.
        """
        builder = PathBuilder(path, cwd)
        try:
            with open(builder, "rb"):
                pass
        except FileNotFoundError:
            parent = builder.parent()
            if parent != ROOT_MARKER:
                os.makedirs(parent, exist_ok=True)
            with open(builder, "wb"):
                pass
            logger.debug("Created %s", builder)
        return cls(builder)

    def __copy__(self) -> FileHandle:
        return type(self)(self._path.clone())

    def clone(self) -> FileHandle:
        """Copy of the handle without the stream."""
        return copy.copy(self)

    def __enter__(self) -> FileHandle:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def state(self) -> StreamState:
        return self._state

    def close(self) -> None:
        """Close any open stream and return to the ``NONE`` state."""
        if self._stream is not None:
            self._stream.close()
        self._stream = None
        self._state = StreamState.NONE

    def _release(self) -> None:
        self.close()

    def exists(self) -> bool:
        return os.path.isfile(self._path)

    def attributes(self) -> Attributes:
        return Attributes.FILE if self.exists() else Attributes.NONE

    def size_bytes(self) -> int:
        try:
            st = os.stat(self._path)
        except OSError:
            return 0
        return st.st_size

    def content_type(self) -> str:
        return mime.content_type(self.extension())

    def to_entry(self):
        from iofs.fs.filedir import EntryHandle

        return EntryHandle(self.clone())

    # --- Stream state ---

    def _stream_error(self, reading: bool) -> OSError:
        if self.exists():
            call = "start_reading()" if reading else "start_writing()"
            return PermissionError(
                errno.EACCES, f"Maybe you should call this function '{call}'.", self.full_name()
            )
        return FileNotFoundError(
            errno.ENOENT, "The specified file cannot be found!", self.full_name()
        )

    def _reader(self) -> BinaryIO:
        if self._state is not StreamState.READING or self._stream is None:
            raise self._stream_error(reading=True)
        return self._stream

    def _writer(self) -> BinaryIO:
        if self._state is not StreamState.WRITING or self._stream is None:
            raise self._stream_error(reading=False)
        return self._stream

    def start_reading(self) -> None:
        """Open a buffered reader at the start of the file."""
        stream = open(self._path, "rb")
        self.close()
        self._stream = stream
        self._state = StreamState.READING

    def start_writing(self) -> None:
        """Open the file for appending.

        If the append open fails, the file is opened plainly instead; the
        original error is only logged and later writes will fail.
        """
        try:
            stream = open(self._path, "ab")
        except OSError as e:
            logger.debug("Append open failed for %s, falling back: %s", self._path, e)
            stream = open(self._path, "rb")
        self.close()
        self._stream = stream
        self._state = StreamState.WRITING

    # --- Reading ---

    def read_exact(self, size: int) -> bytes:
        """Read exactly ``size`` bytes.

        Raises:
            PermissionError: If reading was not started.
            FileNotFoundError: If the file is missing.
            EOFError: If the stream ends first.
        """
        data = self._reader().read(size)
        if len(data) < size:
            raise EOFError(f"Expected {size} bytes, got {len(data)}")
        return data

    def read_to_bytes(self) -> bytes:
        return self._reader().read()

    def read_to_string(self) -> str:
        return self.read_to_bytes().decode("utf-8")

    def read_to_any(self, target: Any = str) -> Any:
        """Read the rest of the stream and convert it to ``target``."""
        try:
            buf = self.read_to_bytes()
        except OSError as e:
            raise ConvertIOError(e) from e
        return convert_buffer(buf, target)

    def read_until(self, delimiter: bytes | str | int, target: Any = str) -> Any:
        """Read up to and including ``delimiter``, strip it and convert.

        For a newline delimiter a preceding carriage return is stripped as
        well.

        Args:
            delimiter: A single byte.
            target: Conversion target passed to ``convert_buffer``.

        Raises:
            EmptyError: The stream is exhausted.
            ConvertIOError: Reading was not started, or the read failed.
            InvalidError: The data does not convert to ``target``.
        """
        delim = _as_delimiter(delimiter)
        try:
            buf = _read_until(self._reader(), delim)
        except OSError as e:
            raise ConvertIOError(e) from e
        if not buf:
            raise EmptyError("End of stream")
        return convert_buffer(strip_line_end(buf, delim), target)

    def read_line(self, target: Any = str) -> Any:
        return self.read_until(b"\n", target)

    def lines(self) -> Lines:
        """Iterate the whole file line by line from a fresh reader.

        Raises:
            ConvertIOError: Reading was not started, or the file cannot be opened.
        """
        try:
            self._reader()
            return Lines(open(self._path, "rb"))
        except OSError as e:
            raise ConvertIOError(e) from e

    # --- Writing ---

    def write(self, contents: object) -> None:
        writer = self._writer()
        writer.write(encode_payload(contents))
        writer.flush()

    def writeln(self, contents: object) -> None:
        """Write ``contents`` followed by a single ``\\n``."""
        writer = self._writer()
        writer.write(encode_payload(contents) + b"\n")
        writer.flush()

    def overwrite(self, contents: object) -> None:
        """Replace the file content and leave the handle writing."""
        self.close()
        stream = open(self._path, "wb")
        stream.write(encode_payload(contents))
        stream.flush()
        self._stream = stream
        self._state = StreamState.WRITING

    # --- Whole-file operations ---

    def copy_new(self, path: PathInput) -> None:
        """Copy the file to ``path``.

        Raises:
            FileExistsError: If ``path`` already exists.
        """
        target = PathBuilder(path)
        if target.exists():
            raise FileExistsError(errno.EEXIST, "The file already exists!", target.full_name())
        shutil.copy(self._path, target)
        logger.debug("Copied %s -> %s", self._path, target)

    def move_new(self, path: PathInput) -> None:
        """Move the file to ``path`` by copy-then-delete.

        Not atomic: an interruption can leave both files present.

        Raises:
            FileExistsError: If ``path`` already exists.
        """
        target = PathBuilder(path)
        self.copy_new(target)
        self.close()
        os.remove(self._path)
        self._repoint(target)

    def delete(self) -> None:
        self.close()
        os.remove(self._path)
        logger.debug("Deleted %s", self._path)

    def content_equal(self, other: FileHandle, chunk_size: int = COMPARE_CHUNK_SIZE) -> bool:
        """Compare sizes, then bytes in fixed windows.

        Any OS error during the comparison counts as "not equal".
        """
        try:
            size = os.stat(self._path).st_size
            if size != os.stat(other._path).st_size:
                return False
            with open(self._path, "rb") as mine, open(other._path, "rb") as theirs:
                for _ in range(size // chunk_size):
                    if mine.read(chunk_size) != theirs.read(chunk_size):
                        return False
                return mine.read() == theirs.read()
        except OSError as e:
            logger.debug("Comparison of %s and %s failed: %s", self._path, other._path, e)
            return False


def read_first_line(path: PathInput) -> str:
    """Return the first line of a file with surrounding whitespace trimmed."""
    with open(path, "rb") as f:
        return f.readline().decode("utf-8").strip()

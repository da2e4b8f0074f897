"""Protocol definitions for the handle capabilities.

FileHandle, DirectoryHandle and EntryHandle all satisfy these protocols
structurally (duck typing). Code that only needs a capability, such as the
CLI reporting helpers, should be typed against the protocol instead of a
concrete handle.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from iofs.fs.entry import Attributes
    from iofs.fs.pathstr import PathInput
    from iofs.fs.stream import Lines


@runtime_checkable
class FileSystemEntry(Protocol):
    """Capabilities common to files and directories."""

    def full_name(self) -> str:
        """Return the normalized absolute path."""
        ...

    def name(self) -> str:
        """Return the final path segment."""
        ...

    def extension(self) -> str:
        """Return the extension including its dot, or an empty string."""
        ...

    def exists(self) -> bool:
        """Check that the entry exists with the expected kind."""
        ...

    def attributes(self) -> Attributes:
        """Return the current on-disk kind."""
        ...

    def size_bytes(self) -> int:
        """Return the size in bytes (recursive for directories).

        Returns:
            Size in bytes, 0 when missing.
        """
        ...

    def modified(self) -> datetime:
        """Return the last modification time.

        Raises:
            FileNotFoundError: If the entry does not exist.
        """
        ...

    def copy_new(self, path: PathInput) -> None:
        """Copy the entry to exactly ``path``.

        Args:
            path: Destination path.
        """
        ...

    def move_new(self, path: PathInput) -> None:
        """Move the entry to exactly ``path``.

        Args:
            path: Destination path.
        """
        ...

    def delete(self) -> None:
        """Remove the entry from disk."""
        ...


@runtime_checkable
class ReadStream(Protocol):
    """A source of buffered, line-oriented reads."""

    def start_reading(self) -> None:
        """Open the stream for reading."""
        ...

    def read_exact(self, size: int) -> bytes:
        """Read exactly ``size`` bytes."""
        ...

    def read_to_bytes(self) -> bytes:
        """Read the rest of the stream."""
        ...

    def read_to_string(self) -> str:
        """Read the rest of the stream as UTF-8 text."""
        ...

    def read_to_any(self, target: Any = str) -> Any:
        """Read the rest of the stream converted to ``target``."""
        ...

    def read_until(self, delimiter: bytes | str | int, target: Any = str) -> Any:
        """Read up to a delimiter and convert to ``target``."""
        ...

    def read_line(self, target: Any = str) -> Any:
        """Read one line and convert to ``target``."""
        ...

    def lines(self) -> Lines:
        """Iterate every line of the source."""
        ...


@runtime_checkable
class WriteStream(Protocol):
    """A sink for appended or replaced content."""

    def start_writing(self) -> None:
        """Open the stream for appending."""
        ...

    def write(self, contents: object) -> None:
        """Write ``contents``."""
        ...

    def writeln(self, contents: object) -> None:
        """Write ``contents`` and a newline."""
        ...

    def overwrite(self, contents: object) -> None:
        """Replace everything with ``contents``."""
        ...

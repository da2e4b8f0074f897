"""Capabilities shared by file and directory handles."""

from __future__ import annotations

import logging
import os
import shutil
import stat
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from iofs.fs.builder import PathBuilder
from iofs.fs.pathstr import PathInput

if TYPE_CHECKING:
    from iofs.fs.directory import DirectoryHandle

__all__ = ["Attributes", "Entry", "check_not_nested", "is_within", "remove_existing"]

logger = logging.getLogger(__name__)


class Attributes(Enum):
    """On-disk kind of an entry.

    ``NONE`` marks absence and never compares equal, not even to itself.
    """

    FILE = 0
    DIRECTORY = 1
    NONE = -1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Attributes):
            return NotImplemented
        return self.value != -1 and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def to_int(self) -> int:
        return self.value


def remove_existing(path: PathInput) -> None:
    """Delete whatever is at ``path``: a whole tree or a single file."""
    try:
        st = os.stat(path)
    except FileNotFoundError:
        return
    if stat.S_ISDIR(st.st_mode):
        shutil.rmtree(path)
    else:
        os.remove(path)


def is_within(path: str, root: str) -> bool:
    """Check whether ``path`` is ``root`` or lies below it."""
    return path == root or path.startswith(f"{root.rstrip('/')}/")


def check_not_nested(source: str, target: str) -> None:
    """Refuse a transfer between a path and its own descendant or ancestor.

    Raises:
        ValueError: If ``target`` lies inside ``source``, or ``source``
            inside ``target``.
    """
    if is_within(target, source):
        raise ValueError(f"Cannot copy {source} into itself ({target})")
    if is_within(source, target):
        raise ValueError(f"Cannot replace {target}: it contains {source}")


class Entry(ABC):
    """Base class for handles that reference one filesystem path.

    Subclasses decide how to test existence, copy, move and measure
    themselves; naming, renaming and metadata are shared here.
    """

    _path: PathBuilder

    @classmethod
    def open(cls, path: PathInput, cwd: PathInput | None = None):
        """Create a handle lazily; the filesystem is not touched."""
        return cls(PathBuilder(path, cwd))

    @classmethod
    def unchecked(cls, path: PathInput):
        """Create a handle for an already-normalized path."""
        return cls(PathBuilder.unchecked(path))

    def __init__(self, path: PathBuilder) -> None:
        self._path = path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path.full_name()!r})"

    def __fspath__(self) -> str:
        return self._path.full_name()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry) or type(other) is not type(self):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._path))

    @property
    def path(self) -> PathBuilder:
        return self._path

    def full_name(self) -> str:
        return self._path.full_name()

    def name(self) -> str:
        return self._path.name()

    def ext_name(self) -> str:
        """Return the name without the extension.

        Example:
            >>> FileHandle.open("/tmp/foo.txt").ext_name()
            'foo'
        """
        return self._path.ext_name()

    def extension(self) -> str:
        return self._path.extension()

    def parent_str(self) -> str:
        return self._path.parent()

    def parent(self) -> DirectoryHandle:
        from iofs.fs.directory import DirectoryHandle

        return DirectoryHandle.open(self.parent_str())

    def is_hidden(self) -> bool:
        return self._path.is_hidden()

    def extension_match(self, needles: Iterable[str]) -> bool:
        extension = self.extension()
        return any(pat == extension for pat in needles)

    def extension_match_ignore_case(self, needles: Iterable[str]) -> bool:
        extension = self.extension().lower()
        return any(pat.lower() == extension for pat in needles)

    @abstractmethod
    def exists(self) -> bool:
        """Check that the path exists with this handle's kind."""

    @abstractmethod
    def attributes(self):
        """Return the ``Attributes`` tag of the path as it is now."""

    @abstractmethod
    def size_bytes(self) -> int:
        """Size in bytes; 0 when the path is missing."""

    @abstractmethod
    def copy_new(self, path: PathInput) -> None:
        """Copy to exactly ``path``."""

    @abstractmethod
    def move_new(self, path: PathInput) -> None:
        """Move to exactly ``path`` and point the handle there."""

    @abstractmethod
    def delete(self) -> None:
        """Remove the entry from disk."""

    def _release(self) -> None:
        """Drop OS resources tied to the current path."""

    def _repoint(self, path: PathBuilder) -> None:
        self._release()
        self._path = path

    def _rename_on_disk(self, target: PathBuilder) -> None:
        self._release()
        os.rename(self._path, target)
        logger.debug("Renamed %s -> %s", self._path, target)
        self._path = target

    def rename(self, new_stem: str) -> None:
        """Rename on disk, keeping the extension.

        Args:
            new_stem: New name without extension.

        Raises:
            OSError: If the OS rename fails.
        """
        target = self._path.clone()
        target.rename(new_stem)
        self._rename_on_disk(target)

    def set_extension(self, extension: str) -> None:
        """Change the extension on disk."""
        target = self._path.clone()
        target.set_extension(extension)
        self._rename_on_disk(target)

    def copy_to(self, directory: PathInput) -> None:
        """Copy into ``directory`` under the same name."""
        self.copy_new(f"{os.fspath(directory)}/{self.name()}")

    def move_to(self, directory: PathInput) -> None:
        """Move into ``directory`` under the same name."""
        self.move_new(f"{os.fspath(directory)}/{self.name()}")

    def cover_new(self, path: PathInput, is_move: bool) -> None:
        """Copy or move to ``path``, replacing anything already there.

        Args:
            path: Destination path.
            is_move: Move instead of copy.

        Raises:
            ValueError: If one path lies inside the other; nothing is removed.
        """
        target = PathBuilder(path)
        if target == self._path:
            return
        check_not_nested(self.full_name(), target.full_name())
        remove_existing(target)
        if is_move:
            self.move_new(target)
        else:
            self.copy_new(target)

    def cover_to(self, directory: PathInput, is_move: bool) -> None:
        self.cover_new(f"{os.fspath(directory)}/{self.name()}", is_move)

    def metadata(self) -> os.stat_result:
        return os.stat(self._path)

    def modified(self) -> datetime:
        """Last modification time.

        Raises:
            FileNotFoundError: If the entry does not exist.
        """
        if not self.exists():
            raise FileNotFoundError(f"The file or directory is not found: {self.full_name()}")
        return datetime.fromtimestamp(self.metadata().st_mtime)

    def _timestamp(self, field: str) -> float:
        if not self.exists():
            return 0.0
        try:
            return float(getattr(self.metadata(), field))
        except OSError:
            return 0.0

    def last_access_time(self) -> float:
        return self._timestamp("st_atime")

    def last_write_time(self) -> float:
        return self._timestamp("st_mtime")

    def creation_time(self) -> float:
        """Birth time where the platform records it, else the ctime."""
        if not self.exists():
            return 0.0
        try:
            st = self.metadata()
        except OSError:
            return 0.0
        return float(getattr(st, "st_birthtime", st.st_ctime))

    def size_kb(self) -> int:
        return self.size_bytes() // 1024

    def size_mb(self) -> int:
        return self.size_kb() // 1024

    def is_read_only(self) -> bool:
        """True when no write permission bit is set."""
        try:
            mode = self.metadata().st_mode
        except OSError:
            return False
        return not mode & (stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH)

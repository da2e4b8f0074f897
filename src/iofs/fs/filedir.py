"""EntryHandle: a path that may be a file or a directory."""

from __future__ import annotations

import os
import stat
from datetime import datetime

from iofs.fs.builder import PathBuilder
from iofs.fs.directory import DirectoryHandle
from iofs.fs.entry import Attributes
from iofs.fs.file import FileHandle
from iofs.fs.pathstr import PathInput

__all__ = ["EntryHandle"]


class EntryHandle:
    """Either a :class:`FileHandle` or a :class:`DirectoryHandle`.

    The kind is resolved once, from OS metadata, when the handle is opened.
    Every capability call is forwarded to the wrapped handle.
    """

    __slots__ = ("_inner",)

    def __init__(self, inner: FileHandle | DirectoryHandle) -> None:
        self._inner = inner

    @classmethod
    def open(cls, path: PathInput, cwd: PathInput | None = None) -> EntryHandle:
        """Open an existing file or directory.

        Raises:
            FileNotFoundError: If nothing exists at ``path``.
        """
        return cls._resolve(PathBuilder(path, cwd))

    @classmethod
    def unchecked(cls, path: PathInput) -> EntryHandle:
        return cls._resolve(PathBuilder.unchecked(path))

    @classmethod
    def _resolve(cls, builder: PathBuilder) -> EntryHandle:
        mode = os.stat(builder).st_mode
        if stat.S_ISDIR(mode):
            return cls(DirectoryHandle(builder))
        return cls(FileHandle(builder))

    def __repr__(self) -> str:
        return f"EntryHandle({self._inner!r})"

    def __fspath__(self) -> str:
        return self._inner.full_name()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntryHandle):
            return NotImplemented
        return self._inner == other._inner

    def __hash__(self) -> int:
        return hash(self._inner)

    @property
    def kind(self) -> Attributes:
        """Kind resolved at open time."""
        if isinstance(self._inner, DirectoryHandle):
            return Attributes.DIRECTORY
        return Attributes.FILE

    @property
    def inner(self) -> FileHandle | DirectoryHandle:
        return self._inner

    @property
    def path(self) -> PathBuilder:
        return self._inner.path

    def full_name(self) -> str:
        return self._inner.full_name()

    def name(self) -> str:
        return self._inner.name()

    def ext_name(self) -> str:
        return self._inner.ext_name()

    def extension(self) -> str:
        return self._inner.extension()

    def exists(self) -> bool:
        return self._inner.exists()

    def attributes(self) -> Attributes:
        return self._inner.attributes()

    def size_bytes(self) -> int:
        return self._inner.size_bytes()

    def modified(self) -> datetime:
        return self._inner.modified()

    def copy_new(self, path: PathInput) -> None:
        self._inner.copy_new(path)

    def copy_to(self, directory: PathInput) -> None:
        self._inner.copy_to(directory)

    def move_new(self, path: PathInput) -> None:
        self._inner.move_new(path)

    def move_to(self, directory: PathInput) -> None:
        self._inner.move_to(directory)

    def rename(self, new_stem: str) -> None:
        self._inner.rename(new_stem)

    def set_extension(self, extension: str) -> None:
        self._inner.set_extension(extension)

    def delete(self) -> None:
        self._inner.delete()

    def is_file(self) -> bool:
        return os.path.isfile(self._inner.path)

    def is_dir(self) -> bool:
        return os.path.isdir(self._inner.path)

    def as_file(self) -> FileHandle:
        return FileHandle.unchecked(self.full_name())

    def as_directory(self) -> DirectoryHandle:
        return DirectoryHandle.unchecked(self.full_name())

    def common_attribute_with(self, other: EntryHandle) -> Attributes:
        """The shared kind of both entries, or ``Attributes.NONE``.

        ``NONE`` never equals anything, so two missing entries do not share
        a kind either.
        """
        attributes = self.attributes()
        if attributes == other.attributes():
            return attributes
        return Attributes.NONE

    def attribute_equal(self, other: EntryHandle) -> bool:
        return self.common_attribute_with(other) is not Attributes.NONE

    def content_equal(self, other: EntryHandle) -> bool:
        """Byte equality for files, structural equality for directories."""
        common = self.common_attribute_with(other)
        if common is Attributes.FILE:
            return self.as_file().content_equal(other.as_file())
        if common is Attributes.DIRECTORY:
            return self.as_directory().structurally_equal(other.as_directory())
        return False

    def children(self) -> list[EntryHandle] | None:
        return self.as_directory().children() if self.is_dir() else None

    def files(self) -> list[FileHandle] | None:
        return self.as_directory().files() if self.is_dir() else None

    def directories(self) -> list[DirectoryHandle] | None:
        return self.as_directory().directories() if self.is_dir() else None

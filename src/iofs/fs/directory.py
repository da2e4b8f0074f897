"""Directory handles: listing, recursive copy/move/delete and comparison."""

from __future__ import annotations

import logging
import os
import shutil
import stat
from collections import deque
from typing import TYPE_CHECKING

from iofs.fs.builder import PathBuilder
from iofs.fs.entry import Attributes, Entry, is_within
from iofs.fs.file import FileHandle
from iofs.fs.pathstr import PathInput

if TYPE_CHECKING:
    from iofs.fs.filedir import EntryHandle

__all__ = ["DirectoryHandle"]

logger = logging.getLogger(__name__)


class DirectoryHandle(Entry):
    """A handle to one directory path.

    Nothing is cached: every listing re-reads the directory. Children come
    back in the order the OS yields them.
    """

    @classmethod
    def open_or_create(cls, path: PathInput, cwd: PathInput | None = None) -> DirectoryHandle:
        """Open a directory, creating it recursively if nothing exists there."""
        builder = PathBuilder(path, cwd)
        if not builder.exists():
            os.makedirs(builder, exist_ok=True)
            logger.debug("Created directory %s", builder)
        return cls(builder)

    def create(self) -> None:
        os.makedirs(self._path, exist_ok=True)

    def clone(self) -> DirectoryHandle:
        return type(self)(self._path.clone())

    def exists(self) -> bool:
        return os.path.isdir(self._path)

    def attributes(self) -> Attributes:
        return Attributes.DIRECTORY if self.exists() else Attributes.NONE

    def _find_children(self, want_dirs: bool, want_files: bool) -> list[tuple[str, Attributes]]:
        """List child paths with their kind.

        Entries whose metadata cannot be read are skipped; an unreadable
        directory lists as empty.
        """
        try:
            with os.scandir(self._path) as it:
                names = [entry.name for entry in it]
        except OSError as e:
            logger.debug("Cannot list %s: %s", self._path, e)
            return []

        children: list[tuple[str, Attributes]] = []
        for name in names:
            path = self._path.join(name).full_name()
            try:
                mode = os.stat(path).st_mode
            except OSError as e:
                logger.debug("Skipping %s: %s", path, e)
                continue
            if want_dirs and stat.S_ISDIR(mode):
                children.append((path, Attributes.DIRECTORY))
            elif want_files and stat.S_ISREG(mode):
                children.append((path, Attributes.FILE))
        return children

    def file_paths(self) -> list[str]:
        return [path for path, _ in self._find_children(False, True)]

    def directory_paths(self) -> list[str]:
        return [path for path, _ in self._find_children(True, False)]

    def children_paths(self) -> list[str]:
        return [path for path, _ in self._find_children(True, True)]

    def files(self) -> list[FileHandle]:
        return [FileHandle.unchecked(path) for path in self.file_paths()]

    def directories(self) -> list[DirectoryHandle]:
        return [DirectoryHandle.unchecked(path) for path in self.directory_paths()]

    def children(self) -> list[EntryHandle]:
        from iofs.fs.filedir import EntryHandle

        result = []
        for path, kind in self._find_children(True, True):
            if kind is Attributes.DIRECTORY:
                result.append(EntryHandle(DirectoryHandle.unchecked(path)))
            else:
                result.append(EntryHandle(FileHandle.unchecked(path)))
        return result

    def contains(self, child: str) -> bool:
        return os.path.exists(f"{self.full_name()}/{child}")

    def size_bytes(self) -> int:
        """Sum of the sizes of every file below this directory."""
        total = sum(f.size_bytes() for f in self.files())
        total += sum(d.size_bytes() for d in self.directories())
        return total

    def _transfer(self, path: PathInput, is_move: bool) -> PathBuilder:
        """Walk the tree breadth-first, mirroring directories and files."""
        target = PathBuilder(path)
        source_root = self.full_name()
        dest_root = target.full_name()
        if is_within(dest_root, source_root):
            raise ValueError(f"Cannot copy {source_root} into itself ({dest_root})")

        queue: deque[DirectoryHandle] = deque([self])
        while queue:
            current = queue.popleft()
            queue.extend(current.directories())
            mirrored = f"{dest_root}{current.full_name()[len(source_root):]}"
            os.makedirs(mirrored, exist_ok=True)
            for f in current.files():
                if is_move:
                    f.move_to(mirrored)
                else:
                    f.copy_to(mirrored)
        return target

    def copy_new(self, path: PathInput) -> None:
        """Copy the whole tree to ``path``.

        Existing directories at the destination are merged into; an existing
        file with the same path raises ``FileExistsError``. Not atomic.
        """
        target = self._transfer(path, is_move=False)
        logger.debug("Copied tree %s -> %s", self._path, target)

    def move_new(self, path: PathInput) -> None:
        """Move the whole tree to ``path`` and point the handle there."""
        target = self._transfer(path, is_move=True)
        shutil.rmtree(self._path)
        logger.debug("Moved tree %s -> %s", self._path, target)
        self._repoint(target)

    def delete(self) -> None:
        shutil.rmtree(self._path)
        logger.debug("Deleted tree %s", self._path)

    def structurally_equal(self, other: DirectoryHandle) -> bool:
        """Compare two trees by names and file contents at every level.

        Children are paired by sorted name, so listing order does not
        matter. A handle always equals itself without any I/O.
        """
        if self == other:
            return True
        return _trees_equal(self, other)


def _by_name(entries: list) -> list:
    return sorted(entries, key=lambda entry: entry.name())


def _trees_equal(mine: DirectoryHandle, theirs: DirectoryHandle) -> bool:
    my_files = _by_name(mine.files())
    their_files = _by_name(theirs.files())
    if len(my_files) != len(their_files):
        return False
    for a, b in zip(my_files, their_files):
        if a.name() != b.name() or not a.content_equal(b):
            return False

    my_dirs = _by_name(mine.directories())
    their_dirs = _by_name(theirs.directories())
    if len(my_dirs) != len(their_dirs):
        return False
    for a, b in zip(my_dirs, their_dirs):
        if a.name() != b.name() or not _trees_equal(a, b):
            return False
    return True

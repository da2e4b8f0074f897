"""Tests for protocol conformance of the handles."""

from __future__ import annotations

from pathlib import Path

from iofs.fs.directory import DirectoryHandle
from iofs.fs.file import FileHandle
from iofs.fs.filedir import EntryHandle
from iofs.protocols import FileSystemEntry, ReadStream, WriteStream


class TestProtocols:
    """Tests for runtime-checkable protocol membership."""

    def test_file_handle(self, tmp_path: Path) -> None:
        handle = FileHandle.open(tmp_path / "f")
        assert isinstance(handle, FileSystemEntry)
        assert isinstance(handle, ReadStream)
        assert isinstance(handle, WriteStream)

    def test_directory_handle(self, tmp_path: Path) -> None:
        handle = DirectoryHandle.open(tmp_path)
        assert isinstance(handle, FileSystemEntry)
        assert not isinstance(handle, ReadStream)
        assert not isinstance(handle, WriteStream)

    def test_entry_handle(self, tmp_path: Path) -> None:
        assert isinstance(EntryHandle.open(tmp_path), FileSystemEntry)

"""Filesystem and console conveniences: path handles, typed reads, ANSI output."""

__version__ = "0.1.0"

# Export handles and protocol interfaces for type hints and dependency injection
from iofs.env import current_dir, current_program, home
from iofs.fs import (
    Attributes,
    DirectoryHandle,
    EntryHandle,
    FileHandle,
    PathBuilder,
)
from iofs.io import Console, convert_buffer
from iofs.protocols import (
    FileSystemEntry,
    ReadStream,
    WriteStream,
)

__all__ = [
    "__version__",
    "Attributes",
    "Console",
    "DirectoryHandle",
    "EntryHandle",
    "FileHandle",
    "FileSystemEntry",
    "PathBuilder",
    "ReadStream",
    "WriteStream",
    "convert_buffer",
    "current_dir",
    "current_program",
    "home",
]

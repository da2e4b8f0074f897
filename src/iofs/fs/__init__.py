"""Path, file and directory handles."""

from iofs.fs.builder import ROOT_MARKER, PathBuilder
from iofs.fs.directory import DirectoryHandle
from iofs.fs.entry import Attributes, Entry
from iofs.fs.file import FileHandle, read_first_line
from iofs.fs.filedir import EntryHandle
from iofs.fs.pathstr import UriKind, correct, is_root, normalize, uri_kind
from iofs.fs.stream import Lines, StreamState

__all__ = [
    "ROOT_MARKER",
    "Attributes",
    "DirectoryHandle",
    "Entry",
    "EntryHandle",
    "FileHandle",
    "Lines",
    "PathBuilder",
    "StreamState",
    "UriKind",
    "correct",
    "is_root",
    "normalize",
    "read_first_line",
    "uri_kind",
]

"""Report models shared by the CLI."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from iofs.protocols import FileSystemEntry

__all__ = ["EntryInfo"]


class EntryInfo(BaseModel):
    """Snapshot of one file or directory.

    Attributes:
        path: Normalized absolute path.
        name: Final path segment.
        extension: Extension including its dot, or empty.
        kind: ``file``, ``directory`` or ``none``.
        size_bytes: Size in bytes (recursive for directories).
        modified: Last modification time, None when missing.
        content_type: MIME type for files, None otherwise.
    """

    path: str
    name: str
    extension: str = ""
    kind: str
    size_bytes: int = 0
    modified: datetime | None = None
    content_type: str | None = None

    @classmethod
    def from_entry(cls, entry: FileSystemEntry, content_type: str | None = None) -> EntryInfo:
        """Build a snapshot from any handle.

        Args:
            entry: File, directory or entry handle.
            content_type: MIME type to record.

        Returns:
            The populated snapshot.
        """
        exists = entry.exists()
        return cls(
            path=entry.full_name(),
            name=entry.name(),
            extension=entry.extension(),
            kind=entry.attributes().name.lower(),
            size_bytes=entry.size_bytes(),
            modified=entry.modified() if exists else None,
            content_type=content_type,
        )

"""PathBuilder: an owned, normalized absolute path."""

from __future__ import annotations

import os

from iofs.fs.pathstr import PathInput, correct, is_root, is_windows, normalize

__all__ = ["ROOT_MARKER", "PathBuilder"]

# Returned by PathBuilder.parent() for a root path
ROOT_MARKER = "%Root%"


class PathBuilder:
    """A normalized absolute path with name/extension/parent decomposition.

    Equality and hashing use the normalized string. Mutating methods rebuild
    the string in place; call :meth:`clone` first to keep the old value.
    """

    __slots__ = ("_inner", "_windows")

    def __init__(
        self,
        path: PathInput,
        cwd: PathInput | None = None,
        windows: bool | None = None,
    ) -> None:
        """Normalize ``path`` into a builder.

        Args:
            path: Any path string or path-like object.
            cwd: Directory relative paths resolve against (process cwd by
                default).
            windows: Use drive-letter rules. Defaults to the host platform.
        """
        if isinstance(path, PathBuilder):
            self._inner = path._inner
            self._windows = path._windows
            return
        self._windows = is_windows(windows)
        self._inner = normalize(path, cwd, self._windows)

    @classmethod
    def unchecked(cls, path: PathInput, windows: bool | None = None) -> PathBuilder:
        """Wrap a path that is already normalized, skipping normalization."""
        builder = cls.__new__(cls)
        builder._inner = os.fspath(path)
        builder._windows = is_windows(windows)
        return builder

    def __str__(self) -> str:
        return self._inner

    def __repr__(self) -> str:
        return f"PathBuilder({self._inner!r})"

    def __fspath__(self) -> str:
        return self._inner

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathBuilder):
            return NotImplemented
        return self._inner == other._inner

    def __hash__(self) -> int:
        return hash(self._inner)

    def clone(self) -> PathBuilder:
        return PathBuilder.unchecked(self._inner, self._windows)

    def full_name(self) -> str:
        return self._inner

    def exists(self) -> bool:
        return os.path.exists(self._inner)

    def is_root(self) -> bool:
        return is_root(self._inner, self._windows)

    def name(self) -> str:
        """Final path segment, empty for a root."""
        pos = self._inner.rfind("/")
        if pos < 0 or self.is_root():
            return ""
        return self._inner[pos + 1 :]

    def extension(self) -> str:
        """Extension of the name including its dot, e.g. ``.txt``.

        A dot in first position (``.bashrc``) does not start an extension.
        """
        name = self.name()
        pos = name.rfind(".")
        return name[pos:] if pos > 0 else ""

    def ext_name(self) -> str:
        """Name without its extension."""
        name = self.name()
        pos = name.rfind(".")
        return name[:pos] if pos > 0 else name

    def parent(self) -> str:
        """Everything before the final segment, or ``ROOT_MARKER`` for a root."""
        if self.is_root():
            return ROOT_MARKER
        pos = self._inner.rfind("/")
        if pos < 0:
            return ROOT_MARKER
        if pos == 0:
            return "/"
        return self._inner[:pos]

    def is_hidden(self) -> bool:
        return self.name().startswith(".")

    def _replace_name(self, new_name: str) -> None:
        parent = self.parent()
        if parent == ROOT_MARKER:
            raise ValueError(f"Cannot rename root path {self._inner!r}")
        self._inner = correct(f"{parent}/{new_name}", self._windows)

    def rename(self, new_stem: str) -> None:
        """Replace the name, keeping the current extension."""
        self._replace_name(f"{new_stem}{self.extension()}")

    def set_extension(self, extension: str) -> None:
        """Replace (or add) the extension. An empty string removes it.

        Args:
            extension: New extension, with or without its leading dot.
        """
        if extension and not extension.startswith("."):
            extension = f".{extension}"
        self._replace_name(f"{self.ext_name()}{extension}")

    def set_parent(self, parent: PathInput) -> None:
        """Move the name under another directory."""
        self._inner = normalize(f"{os.fspath(parent)}/{self.name()}", windows=self._windows)

    def set_hidden(self, hide: bool) -> None:
        """Add or remove the leading dot of the name."""
        name = self.name()
        if hide and not self.is_hidden():
            self._replace_name(f".{name}")
        elif not hide and self.is_hidden():
            self._replace_name(name[1:])

    def push_str(self, text: str) -> None:
        self._inner += text

    def replace(self, old: str, new: str) -> None:
        self._inner = self._inner.replace(old, new)

    def join(self, child: str) -> PathBuilder:
        """Builder for ``child`` below this path."""
        return PathBuilder.unchecked(correct(f"{self._inner}/{child}", self._windows), self._windows)

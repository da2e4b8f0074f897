"""Path string normalization.

Every path that enters iofs goes through :func:`normalize`: separators are
collapsed to a single ``/``, ``?`` is dropped, trailing slashes are removed
(roots excepted) and relative paths are resolved against a working
directory. ``.`` and ``..`` segments are left as they are.
"""

from __future__ import annotations

import logging
import os
from enum import Enum

from iofs.text import is_letter

__all__ = ["UriKind", "correct", "is_root", "is_windows", "normalize", "uri_kind"]

logger = logging.getLogger(__name__)

PathInput = str | os.PathLike


class UriKind(Enum):
    """Whether a corrected path is already absolute."""

    ABSOLUTE = "absolute"
    RELATIVE = "relative"


def is_windows(windows: bool | None = None) -> bool:
    """Resolve the drive-letter platform flag, defaulting to the host."""
    return os.name == "nt" if windows is None else windows


def _has_drive(path: str) -> bool:
    return len(path) > 1 and is_letter(path[0]) and path[1] == ":"


def correct(path: PathInput, windows: bool | None = None) -> str:
    """Clean up separators without resolving against a directory.

    Args:
        path: Raw path.
        windows: Use drive-letter rules. Defaults to the host platform.

    Returns:
        Path with ``\\`` and ``/`` runs collapsed to one ``/``, ``?``
        removed and the trailing separator stripped unless it is a root.
    """
    buf: list[str] = []
    for ch in os.fspath(path):
        if ch in ("\\", "/"):
            if not buf or buf[-1] != "/":
                buf.append("/")
        elif ch != "?":
            buf.append(ch)
    result = "".join(buf)

    if is_windows(windows):
        # "C:/" keeps its separator
        if result.endswith("/") and len(result) not in (2, 3):
            result = result[:-1]
        if result.startswith("/"):
            result = result[1:]
    elif len(result) > 1 and result.endswith("/"):
        result = result[:-1]
    return result


def uri_kind(path: str, windows: bool | None = None) -> UriKind:
    """Classify an already corrected path."""
    if is_windows(windows):
        absolute = _has_drive(path)
    else:
        absolute = path.startswith("/")
    return UriKind.ABSOLUTE if absolute else UriKind.RELATIVE


def is_root(path: PathInput, windows: bool | None = None) -> bool:
    """Check for ``/`` or, on the drive-letter platform, ``C:`` / ``C:/``."""
    corrected = correct(path, windows)
    if is_windows(windows):
        return _has_drive(corrected) and (
            len(corrected) == 2 or (len(corrected) == 3 and corrected[2] == "/")
        )
    return corrected == "/"


def normalize(
    path: PathInput,
    cwd: PathInput | None = None,
    windows: bool | None = None,
) -> str:
    """Turn any path string into the canonical absolute form.

    Args:
        path: Raw path, absolute or relative.
        cwd: Directory relative paths are resolved against. Defaults to the
            process working directory.
        windows: Use drive-letter rules. Defaults to the host platform.

    Returns:
        The normalized path. If ``cwd`` is not given and the process working
        directory cannot be read, the corrected relative path is returned.

    Example:
        >>> normalize("a\\\\b//c/", cwd="/srv", windows=False)
        '/srv/a/b/c'
    """
    win = is_windows(windows)
    corrected = correct(path, win)
    if uri_kind(corrected, win) is UriKind.ABSOLUTE:
        return corrected

    if cwd is None:
        try:
            cwd = os.getcwd()
        except OSError as e:
            logger.debug("Cannot resolve %r, working directory unavailable: %s", corrected, e)
            return corrected
    return correct(f"{os.fspath(cwd)}/{corrected}", win)

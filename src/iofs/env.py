"""Environment lookups returning corrected path strings."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping

from iofs.errors import EnvironmentLookupError
from iofs.fs.pathstr import correct, is_windows

__all__ = ["current_dir", "current_program", "home"]


def home(environ: Mapping[str, str] | None = None, windows: bool | None = None) -> str:
    """Home directory from the environment.

    Uses ``HOME``, or ``HOMEDRIVE`` + ``HOMEPATH`` on the drive-letter
    platform.

    Args:
        environ: Environment mapping. Defaults to ``os.environ``.
        windows: Use drive-letter rules. Defaults to the host platform.

    Returns:
        The home directory with forward slashes.

    Raises:
        EnvironmentLookupError: If a required variable is missing.
    """
    env = os.environ if environ is None else environ
    if is_windows(windows):
        drive = env.get("HOMEDRIVE")
        path = env.get("HOMEPATH")
        if drive is None or path is None:
            raise EnvironmentLookupError("HOMEDRIVE/HOMEPATH not set")
        return f"{drive}{path}".replace("\\", "/")
    value = env.get("HOME")
    if value is None:
        raise EnvironmentLookupError("HOME not set")
    return value


def current_dir() -> str:
    """Process working directory, corrected."""
    return correct(os.getcwd())


def current_program() -> str:
    """Path of the running interpreter or frozen executable, corrected."""
    return correct(os.path.abspath(sys.executable or sys.argv[0]))

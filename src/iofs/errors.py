"""Error types for iofs.

Low-level filesystem failures use the builtin ``OSError`` family
(``FileNotFoundError``, ``FileExistsError``, ``PermissionError``). The
types here cover typed buffer conversion and environment lookups.
"""

from __future__ import annotations

__all__ = [
    "ConvertError",
    "ConvertIOError",
    "EmptyError",
    "EnvironmentLookupError",
    "InvalidError",
    "IofsError",
]


class IofsError(Exception):
    """Base class for iofs errors."""

    pass


class ConvertError(IofsError):
    """Converting a raw buffer into a typed value failed."""

    def to_os_error(self) -> OSError:
        """Express this conversion error as an ``OSError``.

        Returns:
            The wrapped OS error for I/O failures, otherwise a generic
            ``OSError`` naming the conversion failure.
        """
        return OSError(f"ConvertError::{type(self).__name__.removesuffix('Error')}")


class EmptyError(ConvertError):
    """The buffer held nothing to convert."""

    def __init__(self, message: str = "Empty buffer") -> None:
        super().__init__(message)


class InvalidError(ConvertError):
    """The buffer content is not valid for the requested type."""

    def __init__(self, message: str = "Invalid buffer") -> None:
        super().__init__(message)


class ConvertIOError(ConvertError):
    """An OS error raised while producing the buffer to convert.

    Attributes:
        os_error: The underlying OS error.
    """

    def __init__(self, os_error: OSError) -> None:
        super().__init__(str(os_error))
        self.os_error = os_error

    def to_os_error(self) -> OSError:
        return self.os_error


class EnvironmentLookupError(IofsError):
    """A required environment variable is not present."""

    pass

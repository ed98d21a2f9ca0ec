"""Exception types raised at the edges of the buffer core.

Row and buffer editing never raise for out-of-range indices; they clamp.
These errors cover configuration and file persistence only.
"""

from __future__ import annotations

import errno
from typing import Optional

_OS_MESSAGES = {
    errno.ENOENT: "File not found",
    errno.EACCES: "Permission denied",
    errno.EPERM: "Permission denied",
    errno.EEXIST: "File already exists",
}


class MinoError(Exception):
    """Base class for every error raised by mino."""


class ConfigError(MinoError, ValueError):
    """Raised when an ``EditorConfig`` field holds an unusable value."""


class BufferIOError(MinoError):
    """Raised when reading, writing, or renaming a buffer's file fails."""

    def __init__(
        self, message: str, *, path: str = "", kind: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.kind = kind

    @classmethod
    def from_os_error(cls, exc: OSError, *, path: str = "") -> "BufferIOError":
        code = exc.errno
        message = _OS_MESSAGES.get(code) if code is not None else None
        if message is None:
            message = exc.strerror or str(exc)
        kind = errno.errorcode.get(code) if code is not None else None
        return cls(message, path=path or (exc.filename or ""), kind=kind)


class BufferReadonlyError(MinoError):
    """Raised when saving a buffer opened in readonly mode."""


class NoFileNameError(MinoError):
    """Raised when saving a buffer that has never been given a path."""


__all__ = [
    "MinoError",
    "ConfigError",
    "BufferIOError",
    "BufferReadonlyError",
    "NoFileNameError",
]

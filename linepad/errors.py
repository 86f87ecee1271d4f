"""Exceptions raised by the editing core."""

from enum import Enum
from typing import Optional


class IoErrorKind(Enum):
    NOT_FOUND = "not found"
    PERMISSION_DENIED = "permission denied"
    ENCODING = "invalid encoding"
    NO_PATH = "no file name"
    NO_SPACE = "no space left on device"
    OTHER = "i/o error"


class EditorError(Exception):
    """Base class for editor errors."""


class BufferIOError(EditorError):
    """Loading or saving a buffer failed.

    The buffer that raised it is left as it was before the call.
    """

    def __init__(self, kind: IoErrorKind, path: Optional[str] = None):
        self.kind = kind
        self.path = path
        if path:
            super().__init__(f"{path}: {kind.value}")
        else:
            super().__init__(kind.value)


class UnsupportedCommand(EditorError):
    """An input event or command that the receiver does not handle."""

"""Linepad - the text and rendering core of a small terminal text editor."""

from .buffer import Buffer, FileInfo
from .commands import (
    Command,
    DeleteBackward,
    DeleteForward,
    Direction,
    Insert,
    InsertNewline,
    Move,
    Quit,
    Resize,
    Save,
)
from .errors import BufferIOError, EditorError, IoErrorKind, UnsupportedCommand
from .line import GraphemeFragment, GraphemeWidth, Line
from .location import Location, Position, Size
from .view import View

__all__ = [
    'Buffer',
    'FileInfo',
    'Command',
    'DeleteBackward',
    'DeleteForward',
    'Direction',
    'Insert',
    'InsertNewline',
    'Move',
    'Quit',
    'Resize',
    'Save',
    'BufferIOError',
    'EditorError',
    'IoErrorKind',
    'UnsupportedCommand',
    'GraphemeFragment',
    'GraphemeWidth',
    'Line',
    'Location',
    'Position',
    'Size',
    'View',
]

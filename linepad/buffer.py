"""The document buffer: an ordered list of lines plus file metadata."""

from __future__ import annotations

import errno
import logging
import os
import tempfile
from dataclasses import dataclass, field
from typing import Optional

from .constants import EditorConstants
from .errors import BufferIOError, IoErrorKind
from .line import Line
from .location import Location

logger = logging.getLogger(__name__)


@dataclass
class FileInfo:
    path: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.path:
            return os.path.basename(self.path) or self.path
        return EditorConstants.NO_NAME

    @property
    def has_path(self) -> bool:
        return self.path is not None


def _error_kind(exc: BaseException) -> IoErrorKind:
    if isinstance(exc, FileNotFoundError):
        return IoErrorKind.NOT_FOUND
    if isinstance(exc, PermissionError):
        return IoErrorKind.PERMISSION_DENIED
    if isinstance(exc, UnicodeError):
        return IoErrorKind.ENCODING
    if isinstance(exc, OSError) and exc.errno == errno.ENOSPC:
        return IoErrorKind.NO_SPACE
    return IoErrorKind.OTHER


def split_lines(content: str) -> list[str]:
    """Split file content into lines.

    Lines end at ``\\n``; one ``\\r`` before it is dropped. A final newline
    does not start another (empty) line.
    """
    if not content:
        return []
    records = content.split("\n")
    if content.endswith("\n"):
        records.pop()
    return [record[:-1] if record.endswith("\r") else record for record in records]


@dataclass
class Buffer:
    lines: list[Line] = field(default_factory=list)
    file_info: FileInfo = field(default_factory=FileInfo)
    dirty: bool = False

    @classmethod
    def load(cls, path: str) -> "Buffer":
        """Read ``path`` into a new buffer.

        Raises:
            BufferIOError: if the file cannot be read or decoded.
        """
        try:
            with open(path, 'r', encoding=EditorConstants.FILE_ENCODING, newline='') as f:
                content = f.read()
        except (OSError, UnicodeError) as e:
            logger.warning("Could not load %s: %s", path, e)
            raise BufferIOError(_error_kind(e), path) from e
        lines = [Line.from_text(text) for text in split_lines(content)]
        logger.debug("Loaded %d lines from %s", len(lines), path)
        return cls(lines=lines, file_info=FileInfo(path=path))

    def to_text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)

    def save(self) -> None:
        """Write the buffer to its file atomically.

        Raises:
            BufferIOError: if the buffer has no path or the write fails. The
                dirty flag is left untouched in that case.
        """
        if not self.file_info.has_path:
            raise BufferIOError(IoErrorKind.NO_PATH)
        self._write(self.file_info.path)
        self.dirty = False

    def save_as(self, path: str) -> None:
        self._write(path)
        self.file_info = FileInfo(path=path)
        self.dirty = False

    def _write(self, path: str) -> None:
        # Temp file in the target directory so the rename stays on one filesystem
        dir_name = os.path.dirname(path) or '.'
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', encoding=EditorConstants.FILE_ENCODING,
                                             dir=dir_name, suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False, newline='') as temp_file:
                temp_filename = temp_file.name
                temp_file.write(self.to_text())
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, path)
        except (OSError, UnicodeError) as e:
            logger.warning("Could not save %s: %s", path, e)
            if temp_filename is not None and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    logger.debug("Could not remove temporary file %s", temp_filename)
            raise BufferIOError(_error_kind(e), path) from e
        logger.debug("Saved %d lines to %s", len(self.lines), path)

    def height(self) -> int:
        return len(self.lines)

    def is_empty(self) -> bool:
        return not self.lines

    def grapheme_count(self, line_index: int) -> int:
        """Number of graphemes on a line; 0 for the row past the last line."""
        if 0 <= line_index < len(self.lines):
            return self.lines[line_index].grapheme_count()
        return 0

    def insert_char(self, character: str, at: Location) -> None:
        if at.line_index >= self.height():
            self.lines.append(Line.from_text(character))
        else:
            self.lines[at.line_index].insert_char(character, at.grapheme_index)
        self.dirty = True

    def delete(self, at: Location) -> None:
        """Delete the grapheme at ``at``; at the end of a line, join the next line."""
        if at.line_index >= self.height():
            return
        line = self.lines[at.line_index]
        if at.grapheme_index < line.grapheme_count():
            line.delete(at.grapheme_index)
            self.dirty = True
        elif at.line_index + 1 < self.height():
            line.append(self.lines.pop(at.line_index + 1))
            self.dirty = True

    def insert_newline(self, at: Location) -> None:
        """Split the line at ``at``, moving the rest to a new line below it."""
        if at.line_index >= self.height():
            self.lines.append(Line())
        else:
            remainder = self.lines[at.line_index].split(at.grapheme_index)
            self.lines.insert(at.line_index + 1, remainder)
        self.dirty = True

"""The text viewport: cursor mapping, scrolling, rendering and editing commands."""

import logging

from .buffer import Buffer
from .commands import (
    Command,
    DeleteBackward,
    DeleteForward,
    Direction,
    Insert,
    InsertNewline,
    Move,
    Resize,
)
from .constants import EditorConstants
from .errors import UnsupportedCommand
from .location import Location, Position, Size
from .status import DocumentStatus
from .uicomponent import UIComponent
from .version import get_version

logger = logging.getLogger(__name__)


def build_welcome_message(width: int) -> str:
    """Banner shown a third of the way down an empty buffer."""
    if width <= 0:
        return " "
    message = f"{EditorConstants.NAME} editor -- version {get_version()}"
    if width <= len(message):
        return EditorConstants.FILLER_LINE
    padding = (width - len(message) - 1) // 2
    return f"{EditorConstants.FILLER_LINE}{' ' * padding}{message}"[:width]


class View(UIComponent):
    """Owns the buffer and maps the logical cursor onto the screen.

    ``text_location`` is the cursor in (line, grapheme) terms and
    ``scroll_offset`` is the screen cell shown at the top-left corner. Every
    operation that moves the cursor scrolls so that
    ``cursor_position()`` stays inside ``[0, width) x [0, height)``.
    """

    def __init__(self, terminal, size: Size = Size()):
        self.terminal = terminal
        self.buffer = Buffer()
        self.needs_redraw = True
        self.size = size
        self.text_location = Location()
        self.scroll_offset = Position()

    # --- File handling ---
    def load(self, path: str) -> None:
        """Replace the buffer with the contents of ``path``.

        Raises:
            BufferIOError: the current buffer is kept.
        """
        self.buffer = Buffer.load(path)
        self.text_location = Location()
        self.scroll_offset = Position()
        self.mark_redraw(True)

    def save(self) -> None:
        self.buffer.save()

    def status(self) -> DocumentStatus:
        return DocumentStatus(
            total_lines=self.buffer.height(),
            current_line_index=self.text_location.line_index,
            is_modified=self.buffer.dirty,
            file_name=self.buffer.file_info.display_name,
        )

    # --- Geometry ---
    def resize(self, size: Size) -> None:
        self.set_size(size)
        self.scroll_text_location_into_view()
        self.mark_redraw(True)

    def text_location_to_position(self) -> Position:
        row = self.text_location.line_index
        if row < self.buffer.height():
            col = self.buffer.lines[row].width_until(self.text_location.grapheme_index)
        else:
            col = 0
        return Position(col=col, row=row)

    def cursor_position(self) -> Position:
        """Where the terminal cursor goes, relative to the view's top-left corner."""
        return self.text_location_to_position().saturating_sub(self.scroll_offset)

    def _scroll_vertically(self, to: int) -> bool:
        height = self.size.height
        if height == 0:
            return False
        if to < self.scroll_offset.row:
            offset = to
        elif to >= self.scroll_offset.row + height:
            offset = to - height + 1
        else:
            return False
        self.scroll_offset = Position(col=self.scroll_offset.col, row=offset)
        return True

    def _scroll_horizontally(self, to: int) -> bool:
        width = self.size.width
        if width == 0:
            return False
        if to < self.scroll_offset.col:
            offset = to
        elif to >= self.scroll_offset.col + width:
            offset = to - width + 1
        else:
            return False
        self.scroll_offset = Position(col=offset, row=self.scroll_offset.row)
        return True

    def scroll_text_location_into_view(self) -> None:
        position = self.text_location_to_position()
        changed_vertically = self._scroll_vertically(position.row)
        changed_horizontally = self._scroll_horizontally(position.col)
        if changed_vertically or changed_horizontally:
            self.mark_redraw(True)

    def _snapped(self, location: Location) -> Location:
        line_index = min(max(location.line_index, 0), self.buffer.height())
        grapheme_index = min(max(location.grapheme_index, 0), self.buffer.grapheme_count(line_index))
        return Location(line_index, grapheme_index)

    def _ensure_valid_location(self) -> None:
        valid = self._snapped(self.text_location)
        assert valid == self.text_location, f"cursor {self.text_location} outside the buffer"
        if valid != self.text_location:
            logger.warning("Clamped cursor %s to %s", self.text_location, valid)
            self.text_location = valid

    def restore_location(self, location: Location) -> None:
        """Put the cursor at a remembered location, clamped to the buffer."""
        self.text_location = self._snapped(location)
        self.scroll_text_location_into_view()

    # --- Command processing ---
    def handle_command(self, command: Command) -> None:
        if isinstance(command, Move):
            self.move_text_location(command.direction)
        elif isinstance(command, Insert):
            self.insert_char(command.char)
        elif isinstance(command, InsertNewline):
            self.insert_newline()
        elif isinstance(command, DeleteForward):
            self.delete()
        elif isinstance(command, DeleteBackward):
            self.delete_backward()
        elif isinstance(command, Resize):
            self.resize(command.size)
        else:
            raise UnsupportedCommand(f"View does not handle {command!r}")

    def move_text_location(self, direction: Direction) -> None:
        line_index = self.text_location.line_index
        grapheme_index = self.text_location.grapheme_index
        page = max(self.size.height - 1, 0)

        if direction == Direction.UP:
            line_index -= 1
        elif direction == Direction.DOWN:
            line_index += 1
        elif direction == Direction.PAGE_UP:
            line_index -= page
        elif direction == Direction.PAGE_DOWN:
            line_index += page
        elif direction == Direction.HOME:
            grapheme_index = 0
        elif direction == Direction.END:
            grapheme_index = self.buffer.grapheme_count(line_index)
        elif direction == Direction.LEFT:
            if grapheme_index > 0:
                grapheme_index -= 1
            elif line_index > 0:
                line_index -= 1
                grapheme_index = self.buffer.grapheme_count(line_index)
        elif direction == Direction.RIGHT:
            if grapheme_index < self.buffer.grapheme_count(line_index):
                grapheme_index += 1
            elif line_index < self.buffer.height():
                line_index += 1
                grapheme_index = 0

        # Vertical moves keep the column only as far as the target line allows
        self.text_location = self._snapped(Location(line_index, grapheme_index))
        self.scroll_text_location_into_view()

    def _after_edit(self) -> None:
        self._ensure_valid_location()
        self.scroll_text_location_into_view()
        self.mark_redraw(True)

    def insert_char(self, character: str) -> None:
        if character == "\n":
            self.insert_newline()
            return
        line_index = self.text_location.line_index
        old_len = self.buffer.grapheme_count(line_index)
        self.buffer.insert_char(character, self.text_location)
        new_len = self.buffer.grapheme_count(line_index)
        grapheme_delta = new_len - old_len
        # A combining mark joins the cluster before it and adds no grapheme
        if grapheme_delta > 0:
            self.text_location.grapheme_index += grapheme_delta
        elif grapheme_delta < 0:
            # A joiner merged two clusters into one
            self.text_location = self._snapped(self.text_location)
        self._after_edit()

    def insert_newline(self) -> None:
        self.buffer.insert_newline(self.text_location)
        self.text_location = Location(self.text_location.line_index + 1, 0)
        self._after_edit()

    def delete(self) -> None:
        self.buffer.delete(self.text_location)
        self._after_edit()

    def delete_backward(self) -> None:
        if self.text_location == Location(0, 0):
            return
        self.move_text_location(Direction.LEFT)
        self.delete()

    # --- Rendering ---
    def draw(self, origin_row: int) -> None:
        width, height = self.size.width, self.size.height
        if width == 0 or height == 0:
            return
        vertical_center = height // 3
        top = self.scroll_offset.row
        left = self.scroll_offset.col
        for current_row in range(height):
            line_index = top + current_row
            if line_index < self.buffer.height():
                text = self.buffer.lines[line_index].get_visible_graphemes(left, left + width)
            elif current_row == vertical_center and self.buffer.is_empty():
                text = build_welcome_message(width)
            else:
                text = EditorConstants.FILLER_LINE
            self.terminal.print_row(origin_row + current_row, text)

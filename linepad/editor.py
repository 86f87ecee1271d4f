"""Editing session: event loop, screen layout and session-level commands."""

import logging
import os
import select
import signal
from typing import Optional

from .commands import Command, Quit, Resize, Save, command_from_key_event
from .constants import EditorConstants
from .errors import BufferIOError, UnsupportedCommand
from .keyboard import KeyboardHandler, KeyEvent
from .location import Size
from .messagebar import MessageBar
from .settings_persistence import SettingsPersistence
from .statusbar import StatusBar
from .terminal import TerminalInterface
from .view import View

logger = logging.getLogger(__name__)

STDIN_FD = 0


class Editor:
    """Main editor application controller.

    The screen is the text view on top, then the status bar, then the
    message bar on the last row.
    """

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[SettingsPersistence] = None):
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.view = View(self.terminal)
        self.status_bar = StatusBar(self.terminal)
        self.message_bar = MessageBar(self.terminal)
        self.settings = settings or SettingsPersistence()
        self.terminal_size = Size()
        self.title = ""
        self.quit_times = 0
        self.should_quit = False
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None
        self.resize(self.terminal.size())
        self.message_bar.update_message(EditorConstants.HELP_MESSAGE)
        self.refresh_status()

    # --- Layout ---
    def resize(self, size: Size) -> None:
        self.terminal_size = size
        bars = EditorConstants.STATUS_BAR_ROWS + EditorConstants.MESSAGE_BAR_ROWS
        self.view.resize(Size(width=size.width, height=max(size.height - bars, 0)))
        self.status_bar.resize(Size(width=size.width, height=EditorConstants.STATUS_BAR_ROWS))
        self.message_bar.resize(Size(width=size.width, height=EditorConstants.MESSAGE_BAR_ROWS))

    # --- Files ---
    def load_file(self, path: str) -> bool:
        """Open ``path``; on failure the current buffer stays and a message is shown."""
        try:
            self.view.load(path)
        except BufferIOError as e:
            logger.info("Keeping current buffer: %s", e)
            self.message_bar.update_message(EditorConstants.OPEN_FAILED_MESSAGE.format(path))
            return False
        location = self.settings.load_location(path)
        if location is not None:
            self.view.restore_location(location)
        self.refresh_status()
        return True

    def _remember_location(self) -> None:
        file_info = self.view.buffer.file_info
        if file_info.has_path:
            self.settings.save_location(file_info.path, self.view.text_location)

    def handle_save(self) -> None:
        try:
            self.view.save()
        except BufferIOError as e:
            self.message_bar.update_message(EditorConstants.SAVE_FAILED_MESSAGE.format(e.kind.value))
            return
        self._remember_location()
        self.message_bar.update_message(EditorConstants.SAVED_MESSAGE)

    # --- Commands ---
    def handle_key_event(self, key_event: KeyEvent) -> None:
        try:
            command = command_from_key_event(key_event)
        except UnsupportedCommand as e:
            logger.debug("Ignoring key: %s", e)
            return
        self.process_command(command)

    def process_command(self, command: Command) -> None:
        if isinstance(command, Quit):
            self.handle_quit()
        elif isinstance(command, Resize):
            self.resize(command.size)
        else:
            self.reset_quit_times()

        if isinstance(command, Save):
            self.handle_save()
        elif not isinstance(command, (Quit, Resize)):
            self.view.handle_command(command)
        self.refresh_status()

    def handle_quit(self) -> None:
        remaining = EditorConstants.QUIT_TIMES - self.quit_times - 1
        if not self.view.buffer.dirty or remaining <= 0:
            self._remember_location()
            self.should_quit = True
            return
        self.message_bar.update_message(EditorConstants.QUIT_WARNING_MESSAGE.format(remaining))
        self.quit_times += 1

    def reset_quit_times(self) -> None:
        if self.quit_times > 0:
            self.quit_times = 0
            self.message_bar.update_message("")

    # --- Drawing ---
    def refresh_status(self) -> None:
        status = self.view.status()
        self.status_bar.update_status(status)
        title = f"{status.file_name} - {EditorConstants.NAME}"
        if title != self.title:
            self.terminal.set_title(title)
            self.title = title

    def refresh_screen(self) -> None:
        width, height = self.terminal_size.width, self.terminal_size.height
        if width == 0 or height == 0:
            return
        self.terminal.hide_cursor()
        self.message_bar.render(height - 1)
        if height > 1:
            self.status_bar.render(height - 2)
        if height > 2:
            self.view.render(0)
        self.terminal.move_cursor_to(self.view.cursor_position())
        self.terminal.show_cursor()
        self.terminal.flush()

    # --- Main loop ---
    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def run(self) -> None:
        """Run the editor until the user quits."""
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        try:
            with self.terminal.session():
                self.resize(self.terminal.size())
                self._event_loop()
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None

    def _event_loop(self) -> None:
        while True:
            self.refresh_screen()
            if self.should_quit:
                break
            ready, _, _ = select.select([STDIN_FD, self._resize_pipe_r], [], [])
            if self._resize_pipe_r in ready:
                os.read(self._resize_pipe_r, 1024)
                self.process_command(Resize(self.terminal.size()))
            if STDIN_FD in ready:
                key_event = self.keyboard.get_key_event(timeout=0)
                if key_event:
                    self.handle_key_event(key_event)

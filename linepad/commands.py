"""Abstract editor commands and the key bindings that produce them.

Commands form a closed set: every handler dispatches over the ``Command``
union and raises ``UnsupportedCommand`` for anything it does not own.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union

from .errors import UnsupportedCommand
from .keyboard import KeyEvent, KeyType
from .location import Size


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"


@dataclass(frozen=True)
class Move:
    direction: Direction


@dataclass(frozen=True)
class Insert:
    char: str


@dataclass(frozen=True)
class InsertNewline:
    pass


@dataclass(frozen=True)
class DeleteForward:
    pass


@dataclass(frozen=True)
class DeleteBackward:
    pass


@dataclass(frozen=True)
class Save:
    pass


@dataclass(frozen=True)
class Resize:
    size: Size


@dataclass(frozen=True)
class Quit:
    pass


Command = Union[Move, Insert, InsertNewline, DeleteForward, DeleteBackward, Save, Resize, Quit]


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], Command] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        # Movement
        for direction in Direction:
            self.register((KeyType.SPECIAL, direction.value), Move(direction))
        self.register((KeyType.CTRL, 'a'), Move(Direction.HOME))
        self.register((KeyType.CTRL, 'e'), Move(Direction.END))

        # Editing
        self.register((KeyType.SPECIAL, 'enter'), InsertNewline())
        self.register((KeyType.SPECIAL, 'backspace'), DeleteBackward())
        self.register((KeyType.CTRL, 'h'), DeleteBackward())
        self.register((KeyType.SPECIAL, 'delete'), DeleteForward())
        self.register((KeyType.CTRL, 'd'), DeleteForward())

        # System
        self.register((KeyType.CTRL, 's'), Save())
        self.register((KeyType.CTRL, 'q'), Quit())

    def register(self, key: Tuple[KeyType, str], command: Command):
        self._commands[key] = command

    def command_for(self, key_event: KeyEvent) -> Command:
        """Translate a key event into a command.

        Raises:
            UnsupportedCommand: if the key is bound to nothing.
        """
        command = self._commands.get((key_event.key_type, key_event.value))
        if command is not None:
            return command
        if key_event.key_type == KeyType.REGULAR and _is_insertable(key_event.value):
            return Insert(key_event.value)
        raise UnsupportedCommand(f"Key not supported: {key_event.raw or key_event.value!r}")


def _is_insertable(text: str) -> bool:
    return len(text) == 1 and (text == '\t' or text.isprintable())


_default_registry = CommandRegistry()


def command_from_key_event(key_event: KeyEvent) -> Command:
    return _default_registry.command_for(key_event)

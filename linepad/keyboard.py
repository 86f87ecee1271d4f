"""Keyboard input handling using curtsies-style key tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    ALT = "alt"
    SPECIAL = "special"


@dataclass(frozen=True)
class KeyEvent:
    """A decoded keypress."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str = ""


_KEY_ALIASES = {
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'pgup': 'page_up',
    'pgdn': 'page_down',
    'esc': 'escape',
    'return': 'enter',
    'del': 'delete',
}


def parse_key(key_str: str) -> KeyEvent:
    """Decode one curtsies key token (e.g. ``'<LEFT>'``, ``'<Ctrl-q>'``, ``'a'``)."""
    if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
        name = key_str[1:-1].lower().replace('+', '-')
        *mods, base = name.split('-') if name != '-' else [name]
        base = _KEY_ALIASES.get(base, base)
        mods = set(mods)
        if 'meta' in mods or 'esc' in mods:
            mods.add('alt')
        if not mods:
            if base in ('space', 'spacebar', 'spc'):
                return KeyEvent(KeyType.REGULAR, ' ', key_str)
            if base == 'tab':
                return KeyEvent(KeyType.REGULAR, '\t', key_str)
        if 'ctrl' in mods and len(base) == 1:
            # Ctrl-J / Ctrl-M are what terminals send for Enter
            if base in ('j', 'm'):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            return KeyEvent(KeyType.CTRL, base, key_str)
        if 'alt' in mods:
            return KeyEvent(KeyType.ALT, base, key_str)
        return KeyEvent(KeyType.SPECIAL, base, key_str)

    if len(key_str) == 1:
        code = ord(key_str)
        if code in (10, 13):
            return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
        if code == 9:
            return KeyEvent(KeyType.REGULAR, '\t', key_str)
        if 1 <= code <= 26:  # Ctrl-A .. Ctrl-Z
            return KeyEvent(KeyType.CTRL, chr(ord('a') + code - 1), key_str)
        if code == 27:
            return KeyEvent(KeyType.SPECIAL, 'escape', key_str)
        if code == 127:
            return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)

    return KeyEvent(KeyType.REGULAR, key_str, key_str)


class KeyboardHandler:
    """Reads key tokens from the terminal and decodes them."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return parse_key(str(key))

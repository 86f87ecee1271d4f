"""A single line of text, stored as grapheme clusters with their rendered widths."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

import grapheme
from wcwidth import wcwidth

from .constants import EditorConstants

EMOJI_PRESENTATION_SELECTOR = "\ufe0f"


class GraphemeWidth(IntEnum):
    HALF = 1
    FULL = 2


@dataclass(frozen=True)
class GraphemeFragment:
    grapheme: str
    rendered_width: GraphemeWidth
    replacement: Optional[str] = None

    def display(self) -> str:
        if self.replacement is None:
            return self.grapheme
        # A replacement fills every cell the original glyph occupies
        return self.replacement.ljust(self.rendered_width)


def _unicode_width(cluster: str) -> int:
    """Return the number of terminal columns a grapheme cluster asks for.

    Codepoints wcwidth reports as non-printable (-1) count as zero. A cluster
    that requests emoji presentation with U+FE0F is always two columns wide.
    """
    if EMOJI_PRESENTATION_SELECTOR in cluster:
        return 2
    return sum(max(wcwidth(ch), 0) for ch in cluster)


def _replacement_character(cluster: str, width: int) -> Optional[str]:
    """Pick the glyph shown instead of a cluster that does not print itself."""
    if cluster == " ":
        return None
    if cluster == "\t":
        return EditorConstants.TAB_REPLACEMENT
    if width > 0 and not cluster.strip():
        return EditorConstants.WHITESPACE_REPLACEMENT
    if width == 0:
        if len(cluster) == 1 and unicodedata.category(cluster) == "Cc":
            return EditorConstants.CONTROL_REPLACEMENT
        return EditorConstants.ZERO_WIDTH_REPLACEMENT
    return None


def make_fragment(cluster: str) -> GraphemeFragment:
    width = _unicode_width(cluster)
    replacement = _replacement_character(cluster, width)
    if width <= 1:
        rendered_width = GraphemeWidth.HALF
    else:
        rendered_width = GraphemeWidth.FULL
    return GraphemeFragment(cluster, rendered_width, replacement)


def tokenize(text: str) -> list[GraphemeFragment]:
    return [make_fragment(cluster) for cluster in grapheme.graphemes(text)]


class Line:
    """One line of the document.

    Every edit rebuilds the line text and re-tokenizes it, so widths and
    replacements are always derived from the current content.
    """

    fragments: list[GraphemeFragment]

    def __init__(self, fragments: Optional[list[GraphemeFragment]] = None):
        self.fragments = fragments or []

    @classmethod
    def from_text(cls, text: str) -> "Line":
        return cls(tokenize(text))

    def __str__(self) -> str:
        return "".join(fragment.grapheme for fragment in self.fragments)

    def __repr__(self) -> str:
        return f"Line({str(self)!r})"

    def __len__(self) -> int:
        return len(self.fragments)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self.fragments == other.fragments

    def grapheme_count(self) -> int:
        return len(self.fragments)

    def width_until(self, grapheme_index: int) -> int:
        """Sum of rendered widths of the fragments before ``grapheme_index``."""
        return sum(fragment.rendered_width for fragment in self.fragments[:max(grapheme_index, 0)])

    def width(self) -> int:
        return self.width_until(len(self.fragments))

    def get_visible_graphemes(self, start: int, end: int) -> str:
        """Render the screen columns ``[start, end)`` of this line.

        A fragment that sticks out over either edge of the range is drawn as
        a single truncation marker, so a wide glyph is never cut in half.
        """
        if start >= end:
            return ""
        result = []
        current_pos = 0
        for fragment in self.fragments:
            fragment_end = current_pos + fragment.rendered_width
            if current_pos >= end:
                break
            if fragment_end > start:
                if fragment_end > end or current_pos < start:
                    result.append(EditorConstants.TRUNCATION_MARKER)
                else:
                    result.append(fragment.display())
            current_pos = fragment_end
        return "".join(result)

    def _rebuild(self, text: str) -> None:
        self.fragments = tokenize(text)

    def insert_char(self, character: str, grapheme_index: int) -> None:
        """Insert ``character`` before the fragment at ``grapheme_index``.

        An index at or past the end appends.
        """
        parts = [fragment.grapheme for fragment in self.fragments]
        parts.insert(min(max(grapheme_index, 0), len(parts)), character)
        self._rebuild("".join(parts))

    def delete(self, grapheme_index: int) -> None:
        if not 0 <= grapheme_index < len(self.fragments):
            return
        parts = [fragment.grapheme for fragment in self.fragments]
        del parts[grapheme_index]
        self._rebuild("".join(parts))

    def append(self, other: "Line") -> None:
        self._rebuild(str(self) + str(other))

    def split(self, grapheme_index: int) -> "Line":
        """Cut the line at ``grapheme_index`` and return the part after it."""
        grapheme_index = min(max(grapheme_index, 0), len(self.fragments))
        remainder = "".join(fragment.grapheme for fragment in self.fragments[grapheme_index:])
        self._rebuild("".join(fragment.grapheme for fragment in self.fragments[:grapheme_index]))
        return Line.from_text(remainder)

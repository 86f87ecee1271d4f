from dataclasses import dataclass


@dataclass(frozen=True)
class Size:
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class Position:
    """A cell on the terminal grid."""
    col: int = 0
    row: int = 0

    def saturating_sub(self, other: "Position") -> "Position":
        return Position(col=max(self.col - other.col, 0), row=max(self.row - other.row, 0))


@dataclass
class Location:
    """A logical cursor position: line index and grapheme index within that line."""
    line_index: int = 0
    grapheme_index: int = 0

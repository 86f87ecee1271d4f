"""Base class for the parts of the screen that redraw themselves on demand."""

import logging
from abc import ABC, abstractmethod

from .location import Size

logger = logging.getLogger(__name__)


class UIComponent(ABC):
    """A screen region with its own size and redraw flag.

    ``render`` only paints when the flag is set and clears it after a
    successful draw, so rendering twice in a row writes to the terminal once.
    """

    needs_redraw: bool = True
    size: Size = Size()

    def mark_redraw(self, value: bool) -> None:
        self.needs_redraw = value

    def resize(self, size: Size) -> None:
        self.set_size(size)
        self.mark_redraw(True)

    def set_size(self, size: Size) -> None:
        self.size = size

    def render(self, origin_row: int) -> None:
        if not self.needs_redraw:
            return
        try:
            self.draw(origin_row)
        except OSError as e:
            # Leave the flag set so the next refresh retries the draw
            logger.error("Could not render %s: %s", type(self).__name__, e)
            return
        self.mark_redraw(False)

    @abstractmethod
    def draw(self, origin_row: int) -> None:
        """Paint the component with its first row at ``origin_row``."""

from .uicomponent import UIComponent


class MessageBar(UIComponent):
    """Single line for help text, warnings and save/load results."""

    def __init__(self, terminal):
        self.terminal = terminal
        self.current_message = ""

    def update_message(self, new_message: str) -> None:
        if new_message != self.current_message:
            self.current_message = new_message
            self.mark_redraw(True)

    def draw(self, origin_row: int) -> None:
        self.terminal.print_row(origin_row, self.current_message[:self.size.width])

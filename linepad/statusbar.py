from .status import DocumentStatus
from .uicomponent import UIComponent


class StatusBar(UIComponent):
    """Inverted line showing file name, line count, modified flag and position."""

    def __init__(self, terminal):
        self.terminal = terminal
        self.current_status = DocumentStatus()

    def update_status(self, new_status: DocumentStatus) -> None:
        if new_status != self.current_status:
            self.current_status = new_status
            self.mark_redraw(True)

    def compose(self) -> str:
        status = self.current_status
        beginning = f"{status.file_name} - {status.line_count_to_string()}"
        indicator = status.modified_indicator_to_string()
        if indicator:
            beginning = f"{beginning} {indicator}"
        position = status.position_indicator_to_string()
        remainder = self.size.width - len(beginning)
        text = beginning + position.rjust(remainder)
        # Too narrow to show anything useful
        return text if len(text) <= self.size.width else ""

    def draw(self, origin_row: int) -> None:
        self.terminal.print_inverted_row(origin_row, self.compose())

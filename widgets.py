"""Custom widgets for the sprint tracker."""

from __future__ import annotations

from textual.widgets import Static
from rich.text import Text

from formatting import menu_lines, status_text
from models import DisplayOptions, SprintDescriptor


class SprintHeader(Static):
    """Shows the status line on the left and the ISO week label on the right."""

    # Right edge of the header text
    TARGET_END_COL = 60

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.status = ""
        self.label = ""

    def update_display(self, descriptor: SprintDescriptor, options: DisplayOptions):
        self.status = status_text(descriptor, options)
        self.label = descriptor.label

        text = Text()
        text.append(self.status, style="bold")

        spacing = self.TARGET_END_COL - len(self.label) - len(self.status)
        if spacing > 0:
            text.append(" " * spacing)
        else:
            text.append("  ")

        text.append(self.label, style="bold")
        self.update(text)


class SprintSummary(Static):
    """Detail lines for the current sprint, header and progress bar emphasised."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.lines: list[str] = []

    def update_display(self, descriptor: SprintDescriptor, options: DisplayOptions, tooltip: str = ""):
        self.lines = menu_lines(descriptor, options)

        text = Text()
        header, *details = self.lines
        text.append(header + "\n", style="bold")
        for line in details[:-1]:
            # Free days are not counted, dim the line
            style = "dim" if descriptor.is_non_working_day and "Day off" in line else ""
            text.append(line + "\n", style=style)
        text.append(details[-1], style="bold")

        if tooltip:
            text.append("\n\n")
            text.append(tooltip, style="italic dim")

        self.update(text)

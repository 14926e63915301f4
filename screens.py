"""Modal screens for the sprint tracker."""

from __future__ import annotations

from dataclasses import replace
from datetime import date

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Checkbox, Input, Label
from textual.screen import ModalScreen

from exceptions import ArithmeticOverflowError, InvalidConfigurationError
from models import REFRESH_INTERVALS, Configuration, DisplayOptions, NonWorkingDisplay, Settings
from utils import WEEKDAY_NAMES


OFF_DAY_MODES = {
    "L": NonWorkingDisplay.SHOW_LABEL,
    "P": NonWorkingDisplay.SHOW_PREVIOUS,
    "N": NonWorkingDisplay.SHOW_NEXT,
}


def off_day_code(mode: NonWorkingDisplay) -> str:
    for code, value in OFF_DAY_MODES.items():
        if value is mode:
            return code
    return "L"


def parse_settings_form(
    epoch: str,
    weeks: str,
    weekdays: set[int],
    refresh: str,
    off_day: str,
    display: DisplayOptions,
) -> Settings:
    """Build Settings from raw form values.

    Raises InvalidConfigurationError naming the offending field.
    """
    try:
        epoch_date = date.fromisoformat(epoch.strip())
    except ValueError:
        raise InvalidConfigurationError("epoch", epoch, "use YYYY-MM-DD") from None

    try:
        weeks_val = int(weeks.strip())
    except ValueError:
        raise InvalidConfigurationError("sprint_length_weeks", weeks, "must be a whole number") from None

    try:
        refresh_val = int(refresh.strip())
    except ValueError:
        raise InvalidConfigurationError("refresh_minutes", refresh, "must be a whole number") from None

    mode = OFF_DAY_MODES.get(off_day.strip().upper())
    if mode is None:
        raise InvalidConfigurationError("non_working_display", off_day, "use L, P or N")

    try:
        configuration = Configuration(
            epoch=epoch_date,
            sprint_length_weeks=weeks_val,
            working_weekdays=frozenset(weekdays),
        )
    except ArithmeticOverflowError as exc:
        raise InvalidConfigurationError("epoch", epoch, str(exc)) from exc

    return Settings(
        configuration=configuration,
        display=replace(display, non_working_display=mode),
        refresh_minutes=refresh_val,
    )


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no question."""

    CSS = """
    ConfirmScreen {
        align: center middle;
    }

    #confirm-dialog {
        width: 50;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $warning;
    }

    #confirm-buttons {
        width: 100%;
        height: auto;
        margin-top: 1;
    }

    #confirm-buttons Button {
        width: 1fr;
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("y", "confirm", "Yes"),
        Binding("n", "cancel", "No"),
    ]

    def __init__(self, message: str):
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Label(self.message)
            with Horizontal(id="confirm-buttons"):
                yield Button("Yes (Y)", variant="warning", id="yes")
                yield Button("No (N)", variant="default", id="no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class SettingsScreen(ModalScreen[Settings | None]):
    """Modal screen for editing sprint rules and display options."""

    CSS = """
    SettingsScreen {
        align: center middle;
    }

    #settings-dialog {
        width: 72;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $primary;
    }

    #settings-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    .field-group {
        width: 1fr;
        height: auto;
        margin: 0 1 0 0;
    }

    .field-label {
        height: 1;
        color: $text-muted;
    }

    .field-row {
        width: 100%;
        height: auto;
        margin-bottom: 1;
    }

    .field-row Input {
        width: 100%;
    }

    #weekday-row Checkbox {
        width: auto;
        margin: 0;
    }

    #settings-buttons {
        width: 100%;
        height: auto;
        margin-top: 1;
        align: center middle;
    }

    #settings-buttons Button {
        width: auto;
        min-width: 12;
        margin: 0 2;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    FIELD_ORDER = ["epoch", "weeks", "refresh", "off-day"]

    def __init__(self, settings: Settings):
        super().__init__()
        self.settings = settings

    def compose(self) -> ComposeResult:
        config = self.settings.configuration
        display = self.settings.display
        intervals = "/".join(str(m) for m in REFRESH_INTERVALS)

        with Vertical(id="settings-dialog"):
            yield Label("Sprint Settings", id="settings-title")

            with Horizontal(classes="field-row"):
                with Vertical(classes="field-group"):
                    yield Label("Epoch (YYYY-MM-DD)", classes="field-label")
                    yield Input(value=config.epoch.isoformat(), placeholder="2026-01-05", id="epoch")
                with Vertical(classes="field-group"):
                    yield Label("Weeks", classes="field-label")
                    yield Input(value=str(config.sprint_length_weeks), placeholder="2", id="weeks")
                with Vertical(classes="field-group"):
                    yield Label(f"Refresh ({intervals}m)", classes="field-label")
                    yield Input(value=str(self.settings.refresh_minutes), placeholder="60", id="refresh")
                with Vertical(classes="field-group"):
                    yield Label("Off day (L/P/N)", classes="field-label")
                    yield Input(
                        value=off_day_code(display.non_working_display),
                        placeholder="L/P/N",
                        id="off-day",
                        max_length=1,
                    )

            yield Label("Working days", classes="field-label")
            with Horizontal(classes="field-row", id="weekday-row"):
                for number, name in WEEKDAY_NAMES:
                    yield Checkbox(name, number in config.working_weekdays, id=f"weekday-{number}")

            with Horizontal(classes="field-row"):
                yield Checkbox("Emoji", display.show_emoji, id="show-emoji")
                yield Checkbox("Sprint number", display.show_sprint_number, id="show-sprint-number")
                yield Checkbox("Day count", display.show_day_count, id="show-day-count")

            with Horizontal(id="settings-buttons"):
                yield Button("Save", variant="primary", id="save")
                yield Button("Cancel", variant="default", id="cancel")

    def on_mount(self) -> None:
        self.query_one("#epoch", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Move to next field on Enter, or save if on last field."""
        current_id = event.input.id
        if current_id in self.FIELD_ORDER:
            current_idx = self.FIELD_ORDER.index(current_id)
            if current_idx < len(self.FIELD_ORDER) - 1:
                next_id = self.FIELD_ORDER[current_idx + 1]
                self.query_one(f"#{next_id}", Input).focus()
            else:
                self._save_settings()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "off-day":
            val = event.value.upper()
            if val != event.value:
                event.input.value = val

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "cancel":
            self.dismiss(None)
        elif event.button.id == "save":
            self._save_settings()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def _save_settings(self) -> None:
        weekdays = {
            number
            for number, _ in WEEKDAY_NAMES
            if self.query_one(f"#weekday-{number}", Checkbox).value
        }
        display = replace(
            self.settings.display,
            show_emoji=self.query_one("#show-emoji", Checkbox).value,
            show_sprint_number=self.query_one("#show-sprint-number", Checkbox).value,
            show_day_count=self.query_one("#show-day-count", Checkbox).value,
        )

        try:
            updated = parse_settings_form(
                epoch=self.query_one("#epoch", Input).value,
                weeks=self.query_one("#weeks", Input).value,
                weekdays=weekdays,
                refresh=self.query_one("#refresh", Input).value,
                off_day=self.query_one("#off-day", Input).value,
                display=display,
            )
        except InvalidConfigurationError as exc:
            self.app.notify(str(exc), severity="error")
            return

        self.dismiss(updated)

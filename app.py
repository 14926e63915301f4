#!/usr/bin/env python3
"""Sprint tracker TUI application."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from loguru import logger
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.timer import Timer
from textual.widgets import Footer

import storage
from formatting import status_text, tooltip_text
from log import setup_logger
from models import REFRESH_INTERVALS, Settings, SprintDescriptor
from screens import ConfirmScreen, SettingsScreen
from sprint import resolve
from widgets import SprintHeader, SprintSummary


class SprintApp(App):
    """Shows where today falls in the sprint calendar."""

    CSS = """
    Screen {
        background: $surface;
    }

    #sprint-header {
        height: auto;
        background: $primary;
        color: $text;
        padding: 0 1;
        text-style: bold;
    }

    #sprint-summary {
        height: auto;
        padding: 1 2;
        color: $text;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("s", "settings", "Settings"),
        Binding("i", "cycle_interval", "Interval"),
        Binding("R", "reset_settings", "Reset"),
    ]

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        super().__init__()
        self.clock = clock
        self.settings: Settings = storage.get_settings(clock().date())
        self.descriptor: SprintDescriptor | None = None
        self._refresh_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        yield SprintHeader(id="sprint-header")
        yield SprintSummary(id="sprint-summary")
        yield Footer()

    def on_mount(self):
        self._refresh_display()
        self._schedule_refresh()

    def _schedule_refresh(self):
        if self._refresh_timer is not None:
            self._refresh_timer.stop()
        self._refresh_timer = self.set_interval(self.settings.refresh_minutes * 60, self._refresh_display)

    def _compute(self) -> SprintDescriptor:
        self.descriptor = resolve(self.clock(), self.settings.configuration)
        return self.descriptor

    def _refresh_display(self):
        descriptor = self._compute()
        display = self.settings.display
        tooltip = tooltip_text(descriptor, display)

        self.title = status_text(descriptor, display)
        self.query_one("#sprint-header", SprintHeader).update_display(descriptor, display)
        self.query_one("#sprint-summary", SprintSummary).update_display(descriptor, display, tooltip)
        logger.debug(f"Refreshed: sprint {descriptor.index} day {descriptor.current_working_day}")

    def _apply_settings(self, settings: Settings):
        interval_changed = settings.refresh_minutes != self.settings.refresh_minutes
        self.settings = settings
        if interval_changed:
            self._schedule_refresh()
        self._refresh_display()

    def action_refresh(self):
        self._refresh_display()

    def action_settings(self):
        self.push_screen(SettingsScreen(self.settings), self._on_settings_saved)

    def _on_settings_saved(self, settings: Settings | None) -> None:
        if settings is None:
            return
        storage.save_settings(settings)
        self._apply_settings(settings)
        self.notify("Settings saved")

    def action_cycle_interval(self):
        current = self.settings.refresh_minutes
        idx = REFRESH_INTERVALS.index(current) if current in REFRESH_INTERVALS else -1
        minutes = REFRESH_INTERVALS[(idx + 1) % len(REFRESH_INTERVALS)]
        settings = Settings(
            configuration=self.settings.configuration,
            display=self.settings.display,
            refresh_minutes=minutes,
        )
        storage.save_settings(settings)
        self._apply_settings(settings)
        self.notify(f"Refreshing every {minutes} minutes")

    def action_reset_settings(self):
        self.push_screen(ConfirmScreen("Reset all sprint settings to defaults?"), self._on_reset_confirmed)

    def _on_reset_confirmed(self, confirmed: bool | None) -> None:
        if not confirmed:
            return
        storage.reset_settings()
        self._apply_settings(storage.get_settings(self.clock().date()))
        self.notify("Settings reset to defaults")


def main():
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == "--db-info":
        db_path = storage.DB_PATH
        print(f"Database: {db_path}")
        if db_path.exists():
            mtime = datetime.fromtimestamp(db_path.stat().st_mtime)
            size = db_path.stat().st_size
            print(f"Modified: {mtime.strftime('%Y-%m-%d %H:%M:%S')}")
            print(f"Size: {size:,} bytes")
        else:
            print("Status: Does not exist (will be created on first run)")
        return

    storage.init_db()

    if len(sys.argv) > 1 and sys.argv[1] == "--once":
        setup_logger(level="WARNING")
        now = datetime.now()
        settings = storage.get_settings(now.date())
        descriptor = resolve(now, settings.configuration)
        print(status_text(descriptor, settings.display))
        print(tooltip_text(descriptor, settings.display))
        return

    setup_logger(level="INFO", log_file=storage.DB_PATH.parent / "sprint.log", console=False)
    app = SprintApp()
    app.run()


if __name__ == "__main__":
    main()

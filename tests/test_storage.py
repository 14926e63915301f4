"""Tests for storage.py - settings database operations."""

from dataclasses import replace
from datetime import date

import pytest

from models import Configuration, DisplayOptions, NonWorkingDisplay, Settings


TODAY = date(2026, 10, 19)


# We need to set SPRINT_DB before importing storage
@pytest.fixture(autouse=True)
def temp_database(tmp_path, monkeypatch):
    """Use a temporary database for all tests."""
    db_path = tmp_path / "test_sprint.db"
    monkeypatch.setenv("SPRINT_DB", str(db_path))

    # Re-import storage to pick up new DB_PATH
    import importlib
    import storage
    importlib.reload(storage)

    storage.init_db()

    yield storage

    if db_path.exists():
        db_path.unlink()


@pytest.fixture
def custom_settings():
    return Settings(
        configuration=Configuration(
            epoch=date(2026, 1, 5),
            sprint_length_weeks=3,
            working_weekdays=frozenset({1, 2, 3, 4}),
        ),
        display=DisplayOptions(
            show_emoji=False,
            show_sprint_number=True,
            show_day_count=False,
            non_working_display=NonWorkingDisplay.SHOW_NEXT,
            date_format="%Y-%m-%d",
            sprint_name="Team Sprint",
        ),
        refresh_minutes=15,
    )


class TestInitDb:
    """Tests for init_db function."""

    def test_creates_settings_table(self, temp_database):
        storage = temp_database
        conn = storage.get_connection()

        result = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='settings'"
        ).fetchone()
        assert result is not None

        conn.close()

    def test_idempotent(self, temp_database):
        storage = temp_database
        storage.init_db()
        storage.init_db()


class TestRawSettings:
    """Tests for get_setting and set_setting."""

    def test_missing_key(self, temp_database):
        assert temp_database.get_setting("epoch") is None

    def test_set_and_get(self, temp_database):
        storage = temp_database
        storage.set_setting("sprint_length_weeks", "3")
        assert storage.get_setting("sprint_length_weeks") == "3"

    def test_overwrite(self, temp_database):
        storage = temp_database
        storage.set_setting("sprint_length_weeks", "3")
        storage.set_setting("sprint_length_weeks", "4")
        assert storage.get_setting("sprint_length_weeks") == "4"


class TestGetSettings:
    """Tests for get_settings function."""

    def test_defaults_when_empty(self, temp_database):
        settings = temp_database.get_settings(TODAY)
        assert settings == Settings.defaults(TODAY)

    def test_partial_settings_keep_other_defaults(self, temp_database):
        storage = temp_database
        storage.set_setting("sprint_length_weeks", "3")

        settings = storage.get_settings(TODAY)

        assert settings.configuration.sprint_length_weeks == 3
        assert settings.configuration.epoch == date(2025, 12, 29)
        assert settings.refresh_minutes == 60

    def test_stored_epoch_is_snapped(self, temp_database):
        storage = temp_database
        storage.set_setting("epoch", "2026-01-08")
        assert storage.get_settings(TODAY).configuration.epoch == date(2026, 1, 5)

    def test_unparseable_value_falls_back(self, temp_database):
        storage = temp_database
        storage.set_setting("sprint_length_weeks", "two")
        storage.set_setting("show_emoji", "maybe")

        settings = storage.get_settings(TODAY)

        assert settings.configuration.sprint_length_weeks == 2
        assert settings.display.show_emoji is True

    def test_invalid_weekdays_keep_other_fields(self, temp_database):
        """An empty working week falls back alone; the stored epoch survives."""
        storage = temp_database
        storage.set_setting("working_weekdays", "")
        storage.set_setting("epoch", "2026-01-05")

        settings = storage.get_settings(TODAY)

        assert settings.configuration.epoch == date(2026, 1, 5)
        assert settings.configuration.working_weekdays == frozenset({1, 2, 3, 4, 5})

    def test_out_of_range_weekday_keeps_epoch_and_length(self, temp_database):
        storage = temp_database
        storage.set_setting("working_weekdays", "9")
        storage.set_setting("epoch", "2026-01-05")
        storage.set_setting("sprint_length_weeks", "3")

        configuration = storage.get_settings(TODAY).configuration

        assert configuration.epoch == date(2026, 1, 5)
        assert configuration.sprint_length_weeks == 3
        assert configuration.working_weekdays == frozenset({1, 2, 3, 4, 5})

    def test_zero_length_falls_back(self, temp_database):
        storage = temp_database
        storage.set_setting("sprint_length_weeks", "0")
        assert storage.get_settings(TODAY).configuration.sprint_length_weeks == 2

    def test_invalid_refresh_falls_back(self, temp_database):
        storage = temp_database
        storage.set_setting("refresh_minutes", "45")
        assert storage.get_settings(TODAY).refresh_minutes == 60

    def test_invalid_display_mode_falls_back(self, temp_database):
        storage = temp_database
        storage.set_setting("non_working_display", "show-tomorrow")
        assert storage.get_settings(TODAY).display.non_working_display is NonWorkingDisplay.SHOW_LABEL

    def test_unknown_key_ignored(self, temp_database):
        storage = temp_database
        storage.set_setting("autostart", "1")
        assert storage.get_settings(TODAY) == Settings.defaults(TODAY)


class TestSaveSettings:
    """Tests for save_settings and reset_settings."""

    def test_save_and_load(self, temp_database, custom_settings):
        storage = temp_database
        storage.save_settings(custom_settings)

        assert storage.get_settings(TODAY) == custom_settings

    def test_serialized_values(self, temp_database, custom_settings):
        storage = temp_database
        storage.save_settings(custom_settings)

        assert storage.get_setting("epoch") == "2026-01-05"
        assert storage.get_setting("working_weekdays") == "1,2,3,4"
        assert storage.get_setting("show_emoji") == "0"
        assert storage.get_setting("non_working_display") == "show-next"

    def test_save_overwrites(self, temp_database, custom_settings):
        storage = temp_database
        storage.save_settings(custom_settings)
        updated = replace(custom_settings, refresh_minutes=30)
        storage.save_settings(updated)

        assert storage.get_settings(TODAY).refresh_minutes == 30

    def test_reset(self, temp_database, custom_settings):
        storage = temp_database
        storage.save_settings(custom_settings)
        storage.reset_settings()

        assert storage.get_setting("epoch") is None
        assert storage.get_settings(TODAY) == Settings.defaults(TODAY)

from __future__ import annotations

import os
import sqlite3
from datetime import date
from pathlib import Path

from loguru import logger

from exceptions import ArithmeticOverflowError, InvalidConfigurationError
from models import Configuration, DisplayOptions, NonWorkingDisplay, Settings


def _get_db_path() -> Path:
    """Get database path from environment variable or default location."""
    if env_path := os.environ.get("SPRINT_DB"):
        return Path(env_path)
    return Path(__file__).parent / "data" / "sprint.db"


DB_PATH = _get_db_path()


def get_connection() -> sqlite3.Connection:
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


def init_db():
    """Create the settings table if it doesn't exist."""
    conn = get_connection()
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        );
    """)
    conn.commit()
    conn.close()
    logger.debug(f"Settings database ready at {DB_PATH}")


def get_setting(key: str) -> str | None:
    """Get a single raw setting value."""
    conn = get_connection()
    row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
    conn.close()
    return row["value"] if row else None


def set_setting(key: str, value: str) -> None:
    """Insert or update a single raw setting value."""
    conn = get_connection()
    conn.execute("INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)", (key, value))
    conn.commit()
    conn.close()


def _format_weekdays(weekdays: frozenset[int]) -> str:
    return ",".join(str(d) for d in sorted(weekdays))


def _parse_weekdays(val: str) -> frozenset[int]:
    return frozenset(int(part) for part in val.split(",") if part.strip())


def _parse_bool(val: str) -> bool:
    if val not in ("0", "1"):
        raise ValueError(f"expected '0' or '1', got {val!r}")
    return val == "1"


def _parse_text(val: str) -> str:
    if not val.strip():
        raise ValueError("must not be empty")
    return val


_PARSERS = {
    "epoch": date.fromisoformat,
    "sprint_length_weeks": int,
    "working_weekdays": _parse_weekdays,
    "refresh_minutes": int,
    "show_emoji": _parse_bool,
    "show_sprint_number": _parse_bool,
    "show_day_count": _parse_bool,
    "non_working_display": NonWorkingDisplay,
    "date_format": _parse_text,
    "sprint_name": _parse_text,
}


def _read_values(rows: list[sqlite3.Row]) -> dict[str, object]:
    values: dict[str, object] = {}
    for row in rows:
        key = row["key"]
        parser = _PARSERS.get(key)
        if parser is None:
            logger.debug(f"Ignoring unknown setting {key!r}")
            continue
        try:
            values[key] = parser(row["value"])
        except ValueError as exc:
            logger.warning(f"Stored setting {key}={row['value']!r} is invalid ({exc}); using default")
    return values


def _load_configuration(values: dict[str, object], base: Configuration) -> Configuration:
    """Build a Configuration from stored values, dropping rejected fields one at a time."""
    stored = {key: values[key] for key in ("epoch", "sprint_length_weeks", "working_weekdays") if key in values}
    while True:
        try:
            return Configuration(**{
                "epoch": base.epoch,
                "sprint_length_weeks": base.sprint_length_weeks,
                "working_weekdays": base.working_weekdays,
                **stored,
            })
        except InvalidConfigurationError as exc:
            key = exc.field if exc.field in stored else next(iter(stored))
        except ArithmeticOverflowError as exc:
            # Either epoch or sprint length can push the first sprint out of range
            key = "epoch" if "epoch" in stored else next(iter(stored))
            logger.debug(f"Stored configuration overflows: {exc}")
        logger.warning(f"Stored setting {key}={stored[key]!r} is invalid; using default")
        del stored[key]


def get_settings(today: date | None = None) -> Settings:
    """Load settings from the database over the defaults for `today`."""
    conn = get_connection()
    rows = conn.execute("SELECT key, value FROM settings").fetchall()
    conn.close()

    defaults = Settings.defaults(today or date.today())
    values = _read_values(rows)

    configuration = _load_configuration(values, defaults.configuration)

    display = DisplayOptions(**{
        key: values[key]
        for key in (
            "show_emoji",
            "show_sprint_number",
            "show_day_count",
            "non_working_display",
            "date_format",
            "sprint_name",
        )
        if key in values
    })

    refresh = values.get("refresh_minutes", defaults.refresh_minutes)
    try:
        return Settings(configuration=configuration, display=display, refresh_minutes=refresh)  # type: ignore[arg-type]
    except InvalidConfigurationError as exc:
        logger.warning(f"Stored refresh interval is invalid ({exc}); using default")
        return Settings(configuration=configuration, display=display)


def save_settings(settings: Settings) -> None:
    """Save all settings to the database."""
    config = settings.configuration
    display = settings.display
    values = {
        "epoch": config.epoch.isoformat(),
        "sprint_length_weeks": str(config.sprint_length_weeks),
        "working_weekdays": _format_weekdays(config.working_weekdays),
        "refresh_minutes": str(settings.refresh_minutes),
        "show_emoji": "1" if display.show_emoji else "0",
        "show_sprint_number": "1" if display.show_sprint_number else "0",
        "show_day_count": "1" if display.show_day_count else "0",
        "non_working_display": display.non_working_display.value,
        "date_format": display.date_format,
        "sprint_name": display.sprint_name,
    }

    conn = get_connection()
    conn.executemany(
        "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
        list(values.items()),
    )
    conn.commit()
    conn.close()
    logger.info(
        f"Saved settings: epoch={values['epoch']} weeks={values['sprint_length_weeks']} "
        f"weekdays={values['working_weekdays']} refresh={values['refresh_minutes']}m"
    )


def reset_settings() -> None:
    """Delete all stored settings so defaults apply again."""
    conn = get_connection()
    conn.execute("DELETE FROM settings")
    conn.commit()
    conn.close()
    logger.info("Settings reset to defaults")

"""JSON persistence for timer settings with default-on-error loading."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from .model import SettingsError, TimerSettings

DEFAULT_SETTINGS_FILE = "config.json"

# On-disk keys, kept compatible with settings files written by earlier releases.
KEY_FOCUS = "work_m"
KEY_SHORT_BREAK = "short_m"
KEY_LONG_BREAK = "long_m"
KEY_ALARM_PATH = "alarm_path"

_logger = logging.getLogger("settings")


def load_timer_settings(
    path: str | Path = DEFAULT_SETTINGS_FILE,
    *,
    logger: Optional[logging.Logger] = None,
) -> TimerSettings:
    """Load settings from ``path``.

    Never raises: a missing, unreadable, malformed, or invalid file yields the
    default settings.
    """
    log = logger or _logger
    settings_path = Path(path)
    if not settings_path.exists():
        log.info("Settings file not found, using defaults: %s", settings_path)
        return TimerSettings()

    try:
        raw = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
        log.warning("Failed to read settings file %s, using defaults: %s", settings_path, error)
        return TimerSettings()

    try:
        return _settings_from_mapping(raw)
    except SettingsError as error:
        log.warning("Invalid settings in %s, using defaults: %s", settings_path, error)
        return TimerSettings()


def save_timer_settings(
    settings: TimerSettings,
    path: str | Path = DEFAULT_SETTINGS_FILE,
    *,
    logger: Optional[logging.Logger] = None,
) -> bool:
    """Write settings as pretty JSON. Errors are logged and reported via the return value."""
    log = logger or _logger
    settings_path = Path(path)
    payload = {
        KEY_FOCUS: settings.focus_minutes,
        KEY_SHORT_BREAK: settings.short_break_minutes,
        KEY_LONG_BREAK: settings.long_break_minutes,
        KEY_ALARM_PATH: settings.alarm_path,
    }
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        settings_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    except OSError as error:
        log.warning("Failed to save settings to %s: %s", settings_path, error)
        return False
    return True


def apply_settings_edit(current: TimerSettings, edit: Mapping[str, Any]) -> TimerSettings:
    """Merge user-entered duration values into ``current``.

    Each duration keeps its previous value when the edit omits it or when the
    entered value is not a positive integer.
    """
    return TimerSettings(
        focus_minutes=_edited_minutes(edit.get(KEY_FOCUS), current.focus_minutes),
        short_break_minutes=_edited_minutes(
            edit.get(KEY_SHORT_BREAK),
            current.short_break_minutes,
        ),
        long_break_minutes=_edited_minutes(
            edit.get(KEY_LONG_BREAK),
            current.long_break_minutes,
        ),
        alarm_path=current.alarm_path,
    )


def _settings_from_mapping(raw: Any) -> TimerSettings:
    if not isinstance(raw, Mapping):
        raise SettingsError("Settings root must be a JSON object.")

    defaults = TimerSettings()
    alarm_path = raw.get(KEY_ALARM_PATH, defaults.alarm_path)
    if not isinstance(alarm_path, str):
        raise SettingsError(f"{KEY_ALARM_PATH} must be a string.")

    return TimerSettings(
        focus_minutes=raw.get(KEY_FOCUS, defaults.focus_minutes),
        short_break_minutes=raw.get(KEY_SHORT_BREAK, defaults.short_break_minutes),
        long_break_minutes=raw.get(KEY_LONG_BREAK, defaults.long_break_minutes),
        alarm_path=alarm_path,
    )


def _edited_minutes(value: Any, previous: int) -> int:
    if value is None or isinstance(value, bool):
        return previous
    if isinstance(value, int):
        return value if value > 0 else previous
    if isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            return previous
        return parsed if parsed > 0 else previous
    return previous

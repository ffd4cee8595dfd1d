"""Timer settings model and JSON-backed settings store."""

from .model import SettingsError, TimerSettings
from .store import (
    DEFAULT_SETTINGS_FILE,
    apply_settings_edit,
    load_timer_settings,
    save_timer_settings,
)

__all__ = [
    "DEFAULT_SETTINGS_FILE",
    "SettingsError",
    "TimerSettings",
    "apply_settings_edit",
    "load_timer_settings",
    "save_timer_settings",
]

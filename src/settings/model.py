"""Immutable timer duration and alarm settings."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from pomodoro.constants import (
    DEFAULT_ALARM_PATH,
    DEFAULT_FOCUS_MINUTES,
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
    Phase,
)


class SettingsError(Exception):
    """Raised when timer settings violate their invariants."""


@dataclass(frozen=True)
class TimerSettings:
    """Durations (in minutes) for each phase plus the alarm sound path."""
    focus_minutes: int = DEFAULT_FOCUS_MINUTES
    short_break_minutes: int = DEFAULT_SHORT_BREAK_MINUTES
    long_break_minutes: int = DEFAULT_LONG_BREAK_MINUTES
    alarm_path: str = DEFAULT_ALARM_PATH

    def __post_init__(self) -> None:
        for field in ("focus_minutes", "short_break_minutes", "long_break_minutes"):
            value = getattr(self, field)
            if isinstance(value, bool) or not isinstance(value, int):
                raise SettingsError(f"{field} must be an integer, got: {value!r}")
            if value <= 0:
                raise SettingsError(f"{field} must be greater than zero, got: {value}")

    def duration_seconds(self, phase: Phase) -> int:
        if phase is Phase.FOCUS:
            return self.focus_minutes * 60
        if phase is Phase.SHORT_BREAK:
            return self.short_break_minutes * 60
        return self.long_break_minutes * 60

    @property
    def alarm_name(self) -> str:
        return Path(self.alarm_path).name or DEFAULT_ALARM_PATH

    def with_alarm_path(self, alarm_path: str) -> "TimerSettings":
        return replace(self, alarm_path=alarm_path)

"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerRuntimeSettings:
    """Settings-store location and tick cadence from `[timer]`."""
    settings_file: str = "config.json"
    tick_interval_seconds: float = 1.0


@dataclass(frozen=True)
class AlarmSettings:
    """Alarm playback output settings from `[alarm]`."""
    enabled: bool = True
    output_device: Optional[int] = None
    blocksize: int = 2048


@dataclass(frozen=True)
class NotificationSettings:
    """Desktop notification settings from `[notifications]`."""
    enabled: bool = True
    title: str = "Pomodoro"
    app_name: str = "Pomodoro"
    timeout_seconds: int = 5


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in UI server settings from `[ui_server]`."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    timer: TimerRuntimeSettings = field(default_factory=TimerRuntimeSettings)
    alarm: AlarmSettings = field(default_factory=AlarmSettings)
    notifications: NotificationSettings = field(default_factory=NotificationSettings)
    ui_server: UIServerSettings = field(default_factory=UIServerSettings)
    source_file: str = ""

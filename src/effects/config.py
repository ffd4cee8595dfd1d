"""Configuration model for alarm playback and desktop notifications."""

from dataclasses import dataclass
from typing import Optional


class EffectsConfigurationError(Exception):
    """Raised when effect configuration is invalid."""


@dataclass(frozen=True)
class EffectsConfig:
    """Resolved alarm output and notification settings."""
    alarm_enabled: bool = True
    output_device_index: Optional[int] = None
    blocksize: int = 2048
    notifications_enabled: bool = True
    notification_title: str = "Pomodoro"
    notification_app_name: str = "Pomodoro"
    notification_timeout_seconds: int = 5

    def __post_init__(self) -> None:
        if self.blocksize <= 0:
            raise EffectsConfigurationError(
                f"alarm.blocksize must be greater than zero, got: {self.blocksize}"
            )
        if self.notification_timeout_seconds < 0:
            raise EffectsConfigurationError(
                "notifications.timeout_seconds cannot be negative, "
                f"got: {self.notification_timeout_seconds}"
            )
        if not self.notification_title.strip():
            raise EffectsConfigurationError("notifications.title cannot be empty")

    @classmethod
    def from_settings(cls, alarm, notifications) -> "EffectsConfig":
        return cls(
            alarm_enabled=bool(alarm.enabled),
            output_device_index=alarm.output_device,
            blocksize=alarm.blocksize,
            notifications_enabled=bool(notifications.enabled),
            notification_title=notifications.title,
            notification_app_name=(notifications.app_name or notifications.title).strip(),
            notification_timeout_seconds=notifications.timeout_seconds,
        )

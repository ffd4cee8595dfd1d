"""Desktop notifications posted through plyer."""

import logging
from typing import Optional

from plyer import notification

from .errors import NotificationError


class DesktopNotifier:
    """Posts system notifications for phase completions."""
    def __init__(
        self,
        *,
        app_name: str = "Pomodoro",
        timeout_seconds: int = 5,
        logger: Optional[logging.Logger] = None,
    ):
        self._app_name = app_name
        self._timeout_seconds = timeout_seconds
        self._logger = logger or logging.getLogger(__name__)

    def notify(self, title: str, body: str) -> None:
        try:
            notification.notify(
                title=title,
                message=body,
                app_name=self._app_name,
                timeout=self._timeout_seconds,
            )
        except Exception as error:
            # plyer backends raise NotImplementedError or platform-specific errors.
            raise NotificationError(f"Desktop notification failed: {error}") from error
        self._logger.debug("Notification posted: %s - %s", title, body)

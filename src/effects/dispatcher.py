"""Fire-and-forget dispatch of phase-completion alarm and notification effects."""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Optional, Protocol

from pomodoro import PhaseTransition
from pomodoro.constants import NOTIFICATION_TITLE

from .errors import AlarmError, NotificationError


class AlarmPlayerLike(Protocol):
    def play(self, path: str) -> None:
        ...


class NotifierLike(Protocol):
    def notify(self, title: str, body: str) -> None:
        ...


class EffectDispatcher:
    """Runs alarm playback and notifications on background workers.

    Jobs are detached: they are never cancelled and their failures are logged
    and discarded. ``fire`` returns the submitted futures so callers that want
    a completion signal can wait on them; the tick path never does.
    """

    def __init__(
        self,
        *,
        alarm_player: Optional[AlarmPlayerLike] = None,
        notifier: Optional[NotifierLike] = None,
        notification_title: str = NOTIFICATION_TITLE,
        logger: Optional[logging.Logger] = None,
        max_workers: int = 2,
    ):
        self._alarm_player = alarm_player
        self._notifier = notifier
        self._notification_title = notification_title
        self._logger = logger or logging.getLogger("effects")
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="effects",
        )

    def fire(
        self,
        transition: PhaseTransition,
        alarm_path: str,
    ) -> tuple[concurrent.futures.Future[None], ...]:
        futures: list[concurrent.futures.Future[None]] = []
        if self._alarm_player is not None:
            futures.append(self._submit(self._play_alarm, str(alarm_path)))
        if self._notifier is not None:
            futures.append(
                self._submit(
                    self._post_notification,
                    self._notification_title,
                    transition.notification_body,
                )
            )
        return tuple(futures)

    def shutdown(self, wait: bool = False) -> None:
        self._executor.shutdown(wait=wait)

    def _submit(self, fn, *args) -> concurrent.futures.Future[None]:
        future = self._executor.submit(fn, *args)
        future.add_done_callback(self._log_unexpected_failure)
        return future

    def _play_alarm(self, path: str) -> None:
        try:
            self._alarm_player.play(path)
        except AlarmError as error:
            self._logger.warning("Alarm playback skipped: %s", error)

    def _post_notification(self, title: str, body: str) -> None:
        try:
            self._notifier.notify(title, body)
        except NotificationError as error:
            self._logger.warning("Notification skipped: %s", error)

    def _log_unexpected_failure(self, future: concurrent.futures.Future[None]) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self._logger.error("Effect worker failed: %s", error, exc_info=error)

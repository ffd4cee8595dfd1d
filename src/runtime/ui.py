from __future__ import annotations

from typing import Any, Optional

from contracts.ui_protocol import EVENT_SESSION, EVENT_SETTINGS
from pomodoro import PhaseTransition, SessionSnapshot
from settings import TimerSettings

from .contracts import UIServerLike


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_session_update(
        self,
        snapshot: SessionSnapshot,
        *,
        reason: str,
        transition: Optional[PhaseTransition] = None,
    ) -> None:
        payload: dict[str, Any] = {
            "reason": reason,
            "phase": snapshot.phase.value,
            "phase_label": snapshot.phase_label,
            "phase_color": snapshot.phase_color,
            "timer_text": snapshot.timer_text,
            "remaining_seconds": snapshot.remaining_seconds,
            "duration_seconds": snapshot.phase_duration_seconds,
            "progress": snapshot.progress,
            "sessions_completed": snapshot.completed_focus_sessions,
            "running": snapshot.running,
        }
        if transition is not None:
            payload["previous_phase"] = transition.previous_phase.value
            payload["notification"] = transition.notification_body
        self.publish(EVENT_SESSION, **payload)

    def publish_settings(self, settings: TimerSettings, *, reason: str) -> None:
        self.publish(
            EVENT_SETTINGS,
            reason=reason,
            work_m=settings.focus_minutes,
            short_m=settings.short_break_minutes,
            long_m=settings.long_break_minutes,
            alarm_path=settings.alarm_path,
            alarm_name=settings.alarm_name,
        )

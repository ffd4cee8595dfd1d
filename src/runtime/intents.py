"""Applies user intents from the UI to the session clock and settings store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from contracts.ui_protocol import (
    INTENT_CHANGE_SETTINGS,
    INTENT_PICK_ALARM_FILE,
    INTENT_RESET_TIMER,
    INTENT_TOGGLE_TIMER,
    REASON_ALARM_SELECTED,
    REASON_CONFIGURED,
    REASON_RESET,
    REASON_TOGGLED,
)
from pomodoro import SessionClock
from settings import TimerSettings, apply_settings_edit, save_timer_settings

from .contracts import FilePickerLike
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class IntentDependencies:
    """Dependencies required to apply the four user intents."""
    clock: SessionClock
    settings_file: Path
    file_picker: Optional[FilePickerLike]
    logger: logging.Logger
    ui: RuntimeUIPublisher


class IntentProcessor:
    """Owns the current settings and routes intents to their handlers."""
    def __init__(self, dependencies: IntentDependencies, settings: TimerSettings):
        self._dependencies = dependencies
        self._settings = settings

    @property
    def settings(self) -> TimerSettings:
        return self._settings

    def handle(self, intent: dict[str, Any]) -> None:
        intent_type = intent.get("type")
        if intent_type == INTENT_TOGGLE_TIMER:
            self._toggle()
        elif intent_type == INTENT_RESET_TIMER:
            self._reset()
        elif intent_type == INTENT_CHANGE_SETTINGS:
            self._change_settings(intent)
        elif intent_type == INTENT_PICK_ALARM_FILE:
            self._pick_alarm_file(intent)
        else:
            self._dependencies.logger.warning("Ignoring unknown intent: %r", intent_type)

    def _toggle(self) -> None:
        deps = self._dependencies
        snapshot = deps.clock.toggle_running()
        deps.ui.publish_session_update(snapshot, reason=REASON_TOGGLED)

    def _reset(self) -> None:
        deps = self._dependencies
        snapshot = deps.clock.reset()
        deps.ui.publish_session_update(snapshot, reason=REASON_RESET)

    def _change_settings(self, intent: dict[str, Any]) -> None:
        deps = self._dependencies
        updated = apply_settings_edit(self._settings, intent)
        self._settings = updated
        save_timer_settings(updated, deps.settings_file, logger=deps.logger)

        snapshot = deps.clock.configure(updated)
        deps.ui.publish_settings(updated, reason=REASON_CONFIGURED)
        deps.ui.publish_session_update(snapshot, reason=REASON_CONFIGURED)

    def _pick_alarm_file(self, intent: dict[str, Any]) -> None:
        deps = self._dependencies
        raw_path = intent.get("path")
        if isinstance(raw_path, str) and raw_path.strip():
            selected: Optional[str] = raw_path.strip()
        elif deps.file_picker is not None:
            selected = deps.file_picker.pick_audio_file()
        else:
            deps.logger.warning("Alarm selection requested but no file picker is available")
            return

        if not selected:
            deps.logger.info("Alarm selection cancelled")
            return

        self._settings = self._settings.with_alarm_path(selected)
        save_timer_settings(self._settings, deps.settings_file, logger=deps.logger)
        deps.logger.info("Alarm sound set to %s", self._settings.alarm_path)
        deps.ui.publish_settings(self._settings, reason=REASON_ALARM_SELECTED)

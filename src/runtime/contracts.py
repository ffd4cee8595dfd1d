"""Protocols describing runtime-facing effect, picker, and UI capabilities."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from pomodoro import PhaseTransition


class EffectDispatcherLike(Protocol):
    """Phase-completion effect sink expected by the tick processor."""
    def fire(self, transition: PhaseTransition, alarm_path: str) -> Any:
        ...


class FilePickerLike(Protocol):
    """Native file selection used by the alarm-picking intent."""
    def pick_audio_file(self) -> Optional[str]:
        ...


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...

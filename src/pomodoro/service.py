"""Single-owner pomodoro session clock driven one tick at a time."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .constants import PHASE_COLORS, PHASE_LABELS, Phase
from .scheduler import PhaseTransition, next_phase

if TYPE_CHECKING:
    from settings import TimerSettings


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable clock snapshot exposed to the tick driver and UI publishers."""
    phase: Phase
    remaining_seconds: int
    phase_duration_seconds: int
    completed_focus_sessions: int
    running: bool

    @property
    def progress(self) -> float:
        """Fraction of the phase still remaining, 1.0 at phase start and 0.0 at the end."""
        if self.phase_duration_seconds <= 0:
            return 0.0
        fraction = self.remaining_seconds / self.phase_duration_seconds
        return max(0.0, min(1.0, fraction))

    @property
    def timer_text(self) -> str:
        minutes, seconds = divmod(max(0, self.remaining_seconds), 60)
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def phase_label(self) -> str:
        return PHASE_LABELS[self.phase]

    @property
    def phase_color(self) -> str:
        return PHASE_COLORS[self.phase]


@dataclass(frozen=True)
class SessionTick:
    """Result of one clock advance; ``transition`` is set when a phase completed."""
    snapshot: SessionSnapshot
    transition: Optional[PhaseTransition] = None

    @property
    def completed(self) -> bool:
        return self.transition is not None


class SessionClock:
    """Pomodoro state machine counting down the active phase in whole seconds.

    The clock is owned by exactly one driver. Only ``advance``, ``configure``,
    ``toggle_running`` and ``reset`` mutate it; everyone else reads snapshots.
    """

    def __init__(
        self,
        settings: "TimerSettings",
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._settings = settings
        self._logger = logger or logging.getLogger("pomodoro")

        self._phase = Phase.FOCUS
        self._phase_duration_seconds = settings.duration_seconds(Phase.FOCUS)
        self._remaining_seconds = self._phase_duration_seconds
        self._completed_focus_sessions = 0
        self._running = False

    @property
    def settings(self) -> "TimerSettings":
        return self._settings

    @property
    def running(self) -> bool:
        return self._running

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            phase=self._phase,
            remaining_seconds=self._remaining_seconds,
            phase_duration_seconds=self._phase_duration_seconds,
            completed_focus_sessions=self._completed_focus_sessions,
            running=self._running,
        )

    def configure(self, settings: "TimerSettings") -> SessionSnapshot:
        """Replace the duration table.

        While stopped the active phase restarts from its new full duration.
        While running the change applies from the next phase boundary.
        """
        self._settings = settings
        if not self._running:
            self._phase_duration_seconds = settings.duration_seconds(self._phase)
            self._remaining_seconds = self._phase_duration_seconds
        self._logger.info(
            "Session configured: focus=%sm short=%sm long=%sm running=%s",
            settings.focus_minutes,
            settings.short_break_minutes,
            settings.long_break_minutes,
            self._running,
        )
        return self.snapshot()

    def toggle_running(self) -> SessionSnapshot:
        self._running = not self._running
        self._logger.info(
            "Session %s: phase=%s remaining=%ss",
            "started" if self._running else "paused",
            self._phase.value,
            self._remaining_seconds,
        )
        return self.snapshot()

    def reset(self) -> SessionSnapshot:
        """Abandon the current interval; completed focus sessions are kept."""
        self._phase = Phase.FOCUS
        self._phase_duration_seconds = self._settings.duration_seconds(Phase.FOCUS)
        self._remaining_seconds = self._phase_duration_seconds
        self._running = False
        self._logger.info(
            "Session reset: completed_focus_sessions=%s",
            self._completed_focus_sessions,
        )
        return self.snapshot()

    def advance(self) -> Optional[SessionTick]:
        """Apply one tick. Returns ``None`` while the clock is stopped."""
        if not self._running:
            return None

        if self._remaining_seconds > 0:
            self._remaining_seconds -= 1
            return SessionTick(snapshot=self.snapshot())

        transition = next_phase(self._phase, self._completed_focus_sessions)
        self._phase = transition.phase
        self._completed_focus_sessions = transition.completed_focus_sessions
        self._phase_duration_seconds = self._settings.duration_seconds(transition.phase)
        self._remaining_seconds = self._phase_duration_seconds
        self._logger.info(
            "Phase completed: %s -> %s (completed_focus_sessions=%s)",
            transition.previous_phase.value,
            transition.phase.value,
            transition.completed_focus_sessions,
        )
        return SessionTick(snapshot=self.snapshot(), transition=transition)

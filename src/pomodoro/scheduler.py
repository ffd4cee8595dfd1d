"""Pure phase-cadence decision logic."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    LONG_BREAK_INTERVAL,
    NOTIFICATION_BODY_BREAK_DONE,
    NOTIFICATION_BODY_FOCUS_DONE,
    Phase,
)


@dataclass(frozen=True)
class PhaseTransition:
    """Outcome of a completed phase: where the clock goes next and what to announce."""
    previous_phase: Phase
    phase: Phase
    completed_focus_sessions: int
    notification_body: str


def next_phase(current_phase: Phase, completed_focus_sessions: int) -> PhaseTransition:
    """Decide the phase that follows ``current_phase``.

    A finished focus phase increments the completed count; the break is long
    when the incremented count is a multiple of ``LONG_BREAK_INTERVAL`` and
    short otherwise. Any finished break returns to focus without touching the
    count.
    """
    if current_phase is Phase.FOCUS:
        completed = completed_focus_sessions + 1
        if completed % LONG_BREAK_INTERVAL == 0:
            upcoming = Phase.LONG_BREAK
        else:
            upcoming = Phase.SHORT_BREAK
        return PhaseTransition(
            previous_phase=current_phase,
            phase=upcoming,
            completed_focus_sessions=completed,
            notification_body=NOTIFICATION_BODY_FOCUS_DONE,
        )

    return PhaseTransition(
        previous_phase=current_phase,
        phase=Phase.FOCUS,
        completed_focus_sessions=completed_focus_sessions,
        notification_body=NOTIFICATION_BODY_BREAK_DONE,
    )

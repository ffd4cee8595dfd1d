"""Phase, cadence, and presentation constants used by the session clock."""

from __future__ import annotations

from enum import Enum


class Phase(Enum):
    """Interval kinds the session clock cycles through."""
    FOCUS = "focus"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


DEFAULT_FOCUS_MINUTES = 25
DEFAULT_SHORT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 15
DEFAULT_ALARM_PATH = "alarm.mp3"

# Every Nth completed focus session is followed by a long break.
LONG_BREAK_INTERVAL = 4

NOTIFICATION_TITLE = "Pomodoro"
NOTIFICATION_BODY_FOCUS_DONE = "Phase Complete!"
NOTIFICATION_BODY_BREAK_DONE = "Get to Work!"

PHASE_LABELS: dict[Phase, str] = {
    Phase.FOCUS: "FOCUS PHASE",
    Phase.SHORT_BREAK: "SHORT BREAK",
    Phase.LONG_BREAK: "LONG BREAK",
}

PHASE_COLORS: dict[Phase, str] = {
    Phase.FOCUS: "#f38ba8",
    Phase.SHORT_BREAK: "#9ece6a",
    Phase.LONG_BREAK: "#7dcfff",
}

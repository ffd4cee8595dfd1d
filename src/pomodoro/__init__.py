from .constants import LONG_BREAK_INTERVAL, Phase
from .scheduler import PhaseTransition, next_phase
from .service import SessionClock, SessionSnapshot, SessionTick

__all__ = [
    "LONG_BREAK_INTERVAL",
    "Phase",
    "PhaseTransition",
    "SessionClock",
    "SessionSnapshot",
    "SessionTick",
    "next_phase",
]

"""Web UI websocket event, intent, and state constants."""

from __future__ import annotations

# Websocket event types (server -> UI)
EVENT_HELLO = "hello"
EVENT_SESSION = "session"
EVENT_SETTINGS = "settings"

# User intents (UI -> server)
INTENT_CHANGE_SETTINGS = "change_settings"
INTENT_PICK_ALARM_FILE = "pick_alarm_file"
INTENT_TOGGLE_TIMER = "toggle_timer"
INTENT_RESET_TIMER = "reset_timer"

INTENT_TYPES: frozenset[str] = frozenset(
    {
        INTENT_CHANGE_SETTINGS,
        INTENT_PICK_ALARM_FILE,
        INTENT_TOGGLE_TIMER,
        INTENT_RESET_TIMER,
    }
)

# Reasons attached to session events
REASON_STARTUP = "startup"
REASON_TICK = "tick"
REASON_COMPLETED = "completed"
REASON_TOGGLED = "toggled"
REASON_RESET = "reset"
REASON_CONFIGURED = "configured"
REASON_ALARM_SELECTED = "alarm_selected"

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_SETTINGS,
    EVENT_SESSION,
)

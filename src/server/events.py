"""Websocket message helpers: outgoing event encoding, intent decoding, sticky replay."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Optional

from contracts.ui_protocol import INTENT_TYPES, STICKY_EVENT_ORDER


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Encode one outgoing event as JSON with its ``type`` and an ISO timestamp."""
    timestamp = (now_fn or _utc_now)().isoformat()
    return json.dumps({"type": event_type, "timestamp": timestamp, **payload})


def parse_intent(message: str | bytes) -> Optional[dict[str, Any]]:
    """Decode a UI message into an intent mapping, or ``None`` when it is not one."""
    try:
        payload = json.loads(message)
    except (TypeError, ValueError):
        return None
    if isinstance(payload, dict) and payload.get("type") in INTENT_TYPES:
        return payload
    return None


class StickyEventStore:
    """Latest message per sticky event type, replayed to clients as they connect.

    Only types listed in ``order`` are kept, and ``snapshot`` returns them in
    that order so a client rebuilds settings before the session view.
    """

    def __init__(self, order: Iterable[str] = STICKY_EVENT_ORDER):
        self._order = tuple(order)
        self._latest: dict[str, str] = {}
        self._lock = threading.Lock()

    def remember(self, event_type: str, message: str) -> None:
        if event_type in self._order:
            with self._lock:
                self._latest[event_type] = message

    def snapshot(self) -> list[str]:
        with self._lock:
            latest = dict(self._latest)
        return [latest[event_type] for event_type in self._order if event_type in latest]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)

"""Tick driver and tick handlers that publish session updates and fire effects."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Any, Callable, Optional

from contracts.ui_protocol import REASON_COMPLETED, REASON_TICK
from pomodoro import SessionTick

from .contracts import EffectDispatcherLike
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class TickDependencies:
    """Dependencies required for processing session tick events."""
    dispatcher: Optional[EffectDispatcherLike]
    logger: logging.Logger
    ui: RuntimeUIPublisher
    alarm_path: Callable[[], str]


class TickProcessor:
    """Handles tick side effects such as UI updates and completion effects."""
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies

    def handle_session_tick(self, tick: SessionTick) -> None:
        deps = self._dependencies
        if tick.transition is not None:
            if deps.dispatcher is not None:
                deps.dispatcher.fire(tick.transition, deps.alarm_path())
            deps.ui.publish_session_update(
                tick.snapshot,
                reason=REASON_COMPLETED,
                transition=tick.transition,
            )
            return

        deps.logger.debug("Tick: remaining=%ss", tick.snapshot.remaining_seconds)
        deps.ui.publish_session_update(tick.snapshot, reason=REASON_TICK)


class TickDriver:
    """Cooperative 1 Hz driver; the only thread that mutates the session clock.

    Intents submitted from other threads are queued and applied on the driver
    thread between ticks. Ticks follow monotonic deadlines so sleep jitter does
    not accumulate; after a stall longer than one interval the schedule is
    re-based on the current time and the missed ticks are dropped.
    """

    def __init__(
        self,
        *,
        on_tick: Callable[[], None],
        on_intent: Callable[[dict[str, Any]], None],
        interval_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")

        self._on_tick = on_tick
        self._on_intent = on_intent
        self._interval_seconds = float(interval_seconds)
        self._clock = clock
        self._logger = logger or logging.getLogger("runtime.ticks")
        self._intents: Queue[Any] = Queue()
        self._stopped = threading.Event()

    def submit(self, intent: dict[str, Any]) -> None:
        """Queue a user intent; safe to call from any thread."""
        self._intents.put(intent)

    def stop(self) -> None:
        """Request shutdown; the loop exits within one tick interval."""
        self._stopped.set()

    def run(self) -> None:
        next_deadline = self._clock() + self._interval_seconds

        while not self._stopped.is_set():
            timeout = max(0.0, next_deadline - self._clock())
            try:
                item = self._intents.get(timeout=timeout)
            except Empty:
                item = None

            if item is not None:
                self._on_intent(item)
                continue

            now = self._clock()
            if now < next_deadline:
                continue

            self._on_tick()
            next_deadline += self._interval_seconds

            lag = self._clock() - next_deadline
            if lag >= self._interval_seconds:
                dropped = int(lag // self._interval_seconds)
                self._logger.warning(
                    "Tick driver stalled; dropping %d tick(s)",
                    dropped,
                )
                next_deadline = self._clock() + self._interval_seconds

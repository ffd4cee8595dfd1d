"""Runtime orchestration: session clock, tick driver, intents, and effects."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from app_config import AppConfig
from contracts.ui_protocol import REASON_STARTUP
from pomodoro import SessionClock
from server.service import UIServer
from settings import TimerSettings

from .contracts import EffectDispatcherLike, FilePickerLike
from .intents import IntentDependencies, IntentProcessor
from .ticks import TickDependencies, TickDriver, TickProcessor
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    app_config: AppConfig
    settings: TimerSettings
    dispatcher: Optional[EffectDispatcherLike]
    ui_server: Optional[UIServer]
    file_picker: Optional[FilePickerLike]


class RuntimeEngine:
    """Main runtime loop that owns the session clock and drives it once per tick."""
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger

        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._clock = SessionClock(bootstrap.settings, logger=logging.getLogger("pomodoro"))
        self._intent_processor = IntentProcessor(
            IntentDependencies(
                clock=self._clock,
                settings_file=Path(bootstrap.app_config.timer.settings_file),
                file_picker=bootstrap.file_picker,
                logger=logging.getLogger("runtime.intents"),
                ui=self._ui,
            ),
            settings=bootstrap.settings,
        )
        self._tick_processor = TickProcessor(
            TickDependencies(
                dispatcher=bootstrap.dispatcher,
                logger=self._logger,
                ui=self._ui,
                alarm_path=lambda: self._intent_processor.settings.alarm_path,
            )
        )
        self._driver = TickDriver(
            on_tick=self._on_tick,
            on_intent=self._intent_processor.handle,
            interval_seconds=bootstrap.app_config.timer.tick_interval_seconds,
            logger=logging.getLogger("runtime.ticks"),
        )

    @property
    def clock(self) -> SessionClock:
        return self._clock

    @property
    def driver(self) -> TickDriver:
        return self._driver

    def run(self) -> int:
        self._publish_startup_sync()
        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            ui_server.set_intent_handler(self._driver.submit)

        try:
            self._logger.info("Timer ready; waiting for intents")
            self._driver.run()
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            if ui_server is not None:
                ui_server.set_intent_handler(None)
        return 0

    def stop(self) -> None:
        self._driver.stop()

    def _publish_startup_sync(self) -> None:
        self._ui.publish_settings(self._intent_processor.settings, reason=REASON_STARTUP)
        self._ui.publish_session_update(self._clock.snapshot(), reason=REASON_STARTUP)

    def _on_tick(self) -> None:
        tick = self._clock.advance()
        if tick is not None:
            self._tick_processor.handle_session_tick(tick)

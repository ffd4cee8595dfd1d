import logging
import signal
import sys
from typing import Optional

from app_config import AppConfigurationError, load_app_config, resolve_config_path
from effects import (
    AlarmPlayer,
    DesktopNotifier,
    EffectDispatcher,
    EffectsConfig,
    EffectsConfigurationError,
    SoundDeviceAudioOutput,
)
from runtime import RuntimeBootstrap, RuntimeEngine
from runtime.file_picker import TkAudioFilePicker
from server import ServerConfigurationError, UIServer, UIServerConfig
from settings import load_timer_settings


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("pomodoro_app")


def setup_signal_handlers(engine: RuntimeEngine, logger: logging.Logger) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        del frame
        logger.info("%s received, stopping...", signal.Signals(signum).name)
        engine.stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def build_dispatcher(config: EffectsConfig) -> EffectDispatcher:
    alarm_player: Optional[AlarmPlayer] = None
    if config.alarm_enabled:
        alarm_player = AlarmPlayer(
            output=SoundDeviceAudioOutput(
                output_device_index=config.output_device_index,
                blocksize=config.blocksize,
                logger=logging.getLogger("effects.output"),
            ),
            logger=logging.getLogger("effects.alarm"),
        )

    notifier: Optional[DesktopNotifier] = None
    if config.notifications_enabled:
        notifier = DesktopNotifier(
            app_name=config.notification_app_name,
            timeout_seconds=config.notification_timeout_seconds,
            logger=logging.getLogger("effects.notifications"),
        )

    return EffectDispatcher(
        alarm_player=alarm_player,
        notifier=notifier,
        notification_title=config.notification_title,
        logger=logging.getLogger("effects"),
    )


def main() -> int:
    """Run the pomodoro timer until interrupted."""
    logger = setup_logging(level=logging.INFO)

    try:
        config_path = resolve_config_path()
        app_config = load_app_config(str(config_path))
        effects_config = EffectsConfig.from_settings(
            app_config.alarm,
            app_config.notifications,
        )
        logger.info("Loaded runtime config: %s", app_config.source_file or "<defaults>")
    except (AppConfigurationError, EffectsConfigurationError) as error:
        logger.error("App configuration error: %s", error)
        return 1

    settings = load_timer_settings(
        app_config.timer.settings_file,
        logger=logging.getLogger("settings"),
    )
    logger.info(
        "Timer settings: focus=%sm short=%sm long=%sm alarm=%s",
        settings.focus_minutes,
        settings.short_break_minutes,
        settings.long_break_minutes,
        settings.alarm_path,
    )

    # Optional UI server for static page + websocket intents
    ui_server: Optional[UIServer] = None
    ui_server_config: Optional[UIServerConfig] = None
    try:
        ui_server_config = UIServerConfig.from_settings(app_config.ui_server)
    except ServerConfigurationError as error:
        logger.error("UI server configuration error: %s", error)
        logger.warning("Continuing without UI server.")

    if ui_server_config and ui_server_config.enabled:
        try:
            ui_server = UIServer(
                config=ui_server_config,
                logger=logging.getLogger("ui_server"),
            )
            logger.info("Starting UI server...")
            ui_server.start(timeout_seconds=5.0)
            logger.info(
                "UI server ready at http://%s:%d",
                ui_server.host,
                ui_server.port,
            )
        except Exception as error:
            logger.error("UI server startup failed: %s", error)
            logger.warning("Continuing without UI server.")
            ui_server = None

    dispatcher = build_dispatcher(effects_config)
    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            app_config=app_config,
            settings=settings,
            dispatcher=dispatcher,
            ui_server=ui_server,
            file_picker=TkAudioFilePicker(logger=logging.getLogger("runtime.file_picker")),
        )
    )
    setup_signal_handlers(engine, logger)

    try:
        return engine.run()
    finally:
        if ui_server is not None:
            ui_server.stop()
        dispatcher.shutdown(wait=False)
        logger.info("Pomodoro timer stopped.")


if __name__ == "__main__":
    sys.exit(main())

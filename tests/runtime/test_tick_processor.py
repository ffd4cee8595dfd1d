import logging
import sys
import types
import unittest
from pathlib import Path
from unittest.mock import MagicMock

from pomodoro import Phase, SessionSnapshot, SessionTick, next_phase

# Import runtime modules without executing src/runtime/__init__.py.
_RUNTIME_DIR = Path(__file__).resolve().parents[2] / "src" / "runtime"
if "runtime" not in sys.modules:
    _pkg = types.ModuleType("runtime")
    _pkg.__path__ = [str(_RUNTIME_DIR)]  # type: ignore[attr-defined]
    sys.modules["runtime"] = _pkg

from runtime.ticks import TickDependencies, TickProcessor
from runtime.ui import RuntimeUIPublisher


def _snapshot(**overrides) -> SessionSnapshot:
    values = {
        "phase": Phase.FOCUS,
        "remaining_seconds": 59,
        "phase_duration_seconds": 60,
        "completed_focus_sessions": 0,
        "running": True,
    }
    values.update(overrides)
    return SessionSnapshot(**values)


class TickProcessorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.calls = MagicMock()
        self.ui_server = self.calls.ui_server
        self.dispatcher = self.calls.dispatcher
        self.processor = TickProcessor(
            TickDependencies(
                dispatcher=self.dispatcher,
                logger=logging.getLogger("test.runtime.ticks"),
                ui=RuntimeUIPublisher(self.ui_server),
                alarm_path=lambda: "/sounds/bell.wav",
            )
        )

    def test_plain_tick_publishes_session_update_only(self) -> None:
        self.processor.handle_session_tick(SessionTick(snapshot=_snapshot()))

        self.dispatcher.fire.assert_not_called()
        self.ui_server.publish.assert_called_once()
        args, payload = self.ui_server.publish.call_args
        self.assertEqual(("session",), args)
        self.assertEqual("tick", payload["reason"])
        self.assertEqual("00:59", payload["timer_text"])
        self.assertNotIn("notification", payload)

    def test_completion_fires_effects_before_publishing(self) -> None:
        transition = next_phase(Phase.FOCUS, 0)
        snapshot = _snapshot(
            phase=Phase.SHORT_BREAK,
            remaining_seconds=300,
            phase_duration_seconds=300,
            completed_focus_sessions=1,
        )

        self.processor.handle_session_tick(SessionTick(snapshot=snapshot, transition=transition))

        names = [
            call[0]
            for call in self.calls.mock_calls
            if call[0] in {"dispatcher.fire", "ui_server.publish"}
        ]
        self.assertEqual(["dispatcher.fire", "ui_server.publish"], names)
        self.dispatcher.fire.assert_called_once_with(transition, "/sounds/bell.wav")
        _, payload = self.ui_server.publish.call_args
        self.assertEqual("completed", payload["reason"])
        self.assertEqual("focus", payload["previous_phase"])
        self.assertEqual("short_break", payload["phase"])
        self.assertEqual("Phase Complete!", payload["notification"])
        self.assertEqual(1, payload["sessions_completed"])

    def test_completion_without_dispatcher_still_publishes(self) -> None:
        ui_server = MagicMock()
        processor = TickProcessor(
            TickDependencies(
                dispatcher=None,
                logger=logging.getLogger("test.runtime.ticks"),
                ui=RuntimeUIPublisher(ui_server),
                alarm_path=lambda: "alarm.mp3",
            )
        )

        processor.handle_session_tick(
            SessionTick(
                snapshot=_snapshot(phase=Phase.FOCUS, remaining_seconds=60),
                transition=next_phase(Phase.SHORT_BREAK, 1),
            )
        )

        _, payload = ui_server.publish.call_args
        self.assertEqual("Get to Work!", payload["notification"])


class RuntimeUIPublisherTests(unittest.TestCase):
    def test_session_payload_carries_render_fields(self) -> None:
        ui_server = MagicMock()
        publisher = RuntimeUIPublisher(ui_server)

        publisher.publish_session_update(
            _snapshot(
                phase=Phase.LONG_BREAK,
                remaining_seconds=450,
                phase_duration_seconds=900,
                completed_focus_sessions=4,
                running=False,
            ),
            reason="toggled",
        )

        ui_server.publish.assert_called_once_with(
            "session",
            reason="toggled",
            phase="long_break",
            phase_label="LONG BREAK",
            phase_color="#7dcfff",
            timer_text="07:30",
            remaining_seconds=450,
            duration_seconds=900,
            progress=0.5,
            sessions_completed=4,
            running=False,
        )

    def test_settings_payload_uses_persisted_keys(self) -> None:
        from settings import TimerSettings

        ui_server = MagicMock()
        publisher = RuntimeUIPublisher(ui_server)

        publisher.publish_settings(
            TimerSettings(
                focus_minutes=50,
                short_break_minutes=10,
                long_break_minutes=30,
                alarm_path="/home/me/chime.ogg",
            ),
            reason="configured",
        )

        ui_server.publish.assert_called_once_with(
            "settings",
            reason="configured",
            work_m=50,
            short_m=10,
            long_m=30,
            alarm_path="/home/me/chime.ogg",
            alarm_name="chime.ogg",
        )

    def test_without_server_publishing_is_a_no_op(self) -> None:
        publisher = RuntimeUIPublisher(None)

        publisher.publish("session", reason="tick")
        publisher.publish_session_update(_snapshot(), reason="tick")


if __name__ == "__main__":
    unittest.main()

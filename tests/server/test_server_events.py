import datetime as dt
import json
import sys
import types
import unittest
from pathlib import Path

# Import server.events without executing src/server/__init__.py.
_SERVER_DIR = Path(__file__).resolve().parents[2] / "src" / "server"
if "server" not in sys.modules:
    _pkg = types.ModuleType("server")
    _pkg.__path__ = [str(_SERVER_DIR)]  # type: ignore[attr-defined]
    sys.modules["server"] = _pkg

from server.events import StickyEventStore, make_event, parse_intent


class ServerEventsTests(unittest.TestCase):
    def test_make_event_serializes_timestamp_and_payload(self) -> None:
        now = dt.datetime(2026, 2, 21, 10, 0, tzinfo=dt.timezone.utc)
        raw = make_event("session", now_fn=lambda: now, timer_text="25:00", running=False)
        payload = json.loads(raw)

        self.assertEqual("session", payload["type"])
        self.assertEqual(now.isoformat(), payload["timestamp"])
        self.assertEqual("25:00", payload["timer_text"])
        self.assertFalse(payload["running"])

    def test_sticky_store_ignores_non_sticky_events(self) -> None:
        store = StickyEventStore()
        store.remember("hello", '{"type":"hello"}')
        self.assertEqual([], store.snapshot())

    def test_sticky_store_snapshot_follows_stable_order(self) -> None:
        store = StickyEventStore()
        store.remember("session", '{"type":"session","n":1}')
        store.remember("hello", '{"type":"hello","n":2}')
        store.remember("settings", '{"type":"settings","n":3}')

        snapshot = store.snapshot()
        decoded_types = [json.loads(item)["type"] for item in snapshot]
        self.assertEqual(["settings", "session"], decoded_types)

    def test_sticky_store_overwrites_latest_event_by_type(self) -> None:
        store = StickyEventStore()
        store.remember("session", '{"type":"session","remaining_seconds":10}')
        store.remember("session", '{"type":"session","remaining_seconds":9}')
        snapshot = store.snapshot()

        self.assertEqual(1, len(snapshot))
        self.assertEqual(9, json.loads(snapshot[0])["remaining_seconds"])


class ParseIntentTests(unittest.TestCase):
    def test_accepts_known_intents(self) -> None:
        for intent_type in ("toggle_timer", "reset_timer", "pick_alarm_file", "change_settings"):
            with self.subTest(intent_type=intent_type):
                parsed = parse_intent(json.dumps({"type": intent_type}))
                self.assertEqual({"type": intent_type}, parsed)

    def test_keeps_intent_fields(self) -> None:
        parsed = parse_intent(b'{"type": "change_settings", "work_m": 30}')

        self.assertEqual(30, parsed["work_m"])

    def test_rejects_malformed_or_unknown_messages(self) -> None:
        for message in ("not json", "[1, 2]", '{"type": "shutdown"}', '{"work_m": 30}'):
            with self.subTest(message=message):
                self.assertIsNone(parse_intent(message))


if __name__ == "__main__":
    unittest.main()

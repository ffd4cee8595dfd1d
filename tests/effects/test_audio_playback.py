import os
import sys
import tempfile
import types
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import numpy as np

# Import effects submodules without executing src/effects/__init__.py.
_EFFECTS_DIR = Path(__file__).resolve().parents[2] / "src" / "effects"
if "effects" not in sys.modules:
    _pkg = types.ModuleType("effects")
    _pkg.__path__ = [str(_EFFECTS_DIR)]  # type: ignore[attr-defined]
    sys.modules["effects"] = _pkg


class _CallbackStop(Exception):
    pass


class _PygameError(Exception):
    pass


def _build_sounddevice_stub():
    module = types.ModuleType("sounddevice")
    module.CallbackStop = _CallbackStop
    module.OutputStream = MagicMock()
    module.sleep = MagicMock()
    return module


def _build_pygame_stub():
    module = types.ModuleType("pygame")
    module.error = _PygameError
    module.mixer = MagicMock()
    module.sndarray = MagicMock()
    return module


with patch.dict(
    sys.modules,
    {"sounddevice": _build_sounddevice_stub(), "pygame": _build_pygame_stub()},
):
    from effects import alarm as alarm_module
    from effects import decoder as decoder_module
    from effects import output as output_module
    from effects.errors import AlarmError


class _FakeOutputStream:
    """Drives the playback callback synchronously on enter."""
    def __init__(self, *, channels, samplerate, blocksize, dtype, callback, device):
        self.kwargs = {
            "channels": channels,
            "samplerate": samplerate,
            "blocksize": blocksize,
            "dtype": dtype,
            "device": device,
        }
        self._callback = callback
        self.blocks: list[np.ndarray] = []

    def __enter__(self):
        while True:
            outdata = np.full((self.kwargs["blocksize"], self.kwargs["channels"]), 9.0, dtype=np.float32)
            try:
                self._callback(outdata, self.kwargs["blocksize"], None, None)
            except _CallbackStop:
                self.blocks.append(outdata)
                return self
            self.blocks.append(outdata)

    def __exit__(self, *exc):
        return False


class SoundDeviceAudioOutputTests(unittest.TestCase):
    def _play(self, frames: np.ndarray, **kwargs) -> list[_FakeOutputStream]:
        streams: list[_FakeOutputStream] = []

        def make_stream(**stream_kwargs):
            stream = _FakeOutputStream(**stream_kwargs)
            streams.append(stream)
            return stream

        sd_stub = _build_sounddevice_stub()
        sd_stub.OutputStream = make_stream
        with patch.object(output_module, "sd", sd_stub):
            output = output_module.SoundDeviceAudioOutput(blocksize=4, **kwargs)
            output.play(frames, 8000)
        return streams

    def test_streams_all_frames_then_pads_with_silence(self) -> None:
        frames = np.arange(12, dtype=np.float32).reshape(6, 2) / 100.0

        streams = self._play(frames, output_device_index=3)

        self.assertEqual(1, len(streams))
        stream = streams[0]
        self.assertEqual(2, stream.kwargs["channels"])
        self.assertEqual(8000, stream.kwargs["samplerate"])
        self.assertEqual(3, stream.kwargs["device"])
        played = np.concatenate(stream.blocks)
        np.testing.assert_allclose(frames, played[:6])
        self.assertTrue(np.all(played[6:] == 0))

    def test_mono_frames_are_played_on_one_channel(self) -> None:
        streams = self._play(np.ones(3, dtype=np.float32))

        self.assertEqual(1, streams[0].kwargs["channels"])

    def test_empty_buffer_is_rejected(self) -> None:
        output = output_module.SoundDeviceAudioOutput()
        with self.assertRaises(AlarmError):
            output.play(np.zeros((0, 2), dtype=np.float32), 44100)

    def test_device_errors_are_wrapped(self) -> None:
        sd_stub = _build_sounddevice_stub()
        sd_stub.OutputStream = MagicMock(side_effect=RuntimeError("no device"))
        with patch.object(output_module, "sd", sd_stub):
            output = output_module.SoundDeviceAudioOutput()
            with self.assertRaises(AlarmError) as context:
                output.play(np.ones((4, 2), dtype=np.float32), 44100)

        self.assertIn("no device", str(context.exception))


class DecodeAudioFileTests(unittest.TestCase):
    def setUp(self) -> None:
        self.pygame = _build_pygame_stub()
        patcher = patch.object(decoder_module, "pygame", self.pygame)
        patcher.start()
        self.addCleanup(patcher.stop)
        env_patcher = patch.dict(os.environ, {})
        env_patcher.start()
        self.addCleanup(env_patcher.stop)
        os.environ.pop("SDL_AUDIODRIVER", None)

        temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(temp_dir.cleanup)
        self.audio_path = Path(temp_dir.name) / "bell.ogg"
        self.audio_path.write_bytes(b"OggS")

    def test_missing_file_raises_without_touching_mixer(self) -> None:
        with self.assertRaises(AlarmError):
            decoder_module.decode_audio_file(self.audio_path.with_name("absent.mp3"))

        self.pygame.mixer.Sound.assert_not_called()

    def test_decodes_int16_samples_to_float_frames(self) -> None:
        self.pygame.mixer.get_init.return_value = (22050, -16, 2)
        self.pygame.sndarray.array.return_value = np.array(
            [[32767, -32767], [0, 16384]],
            dtype=np.int16,
        )

        frames, sample_rate_hz = decoder_module.decode_audio_file(str(self.audio_path))

        self.assertEqual(22050, sample_rate_hz)
        self.assertEqual(np.float32, frames.dtype)
        np.testing.assert_allclose([[1.0, -1.0], [0.0, 16384 / 32767]], frames, rtol=1e-6)
        self.pygame.mixer.init.assert_not_called()
        self.pygame.mixer.Sound.assert_called_once_with(str(self.audio_path))

    def test_initializes_mixer_on_first_use(self) -> None:
        self.pygame.mixer.get_init.side_effect = [None, (44100, -16, 2)]
        self.pygame.sndarray.array.return_value = np.ones((2, 2), dtype=np.int16)

        _, sample_rate_hz = decoder_module.decode_audio_file(self.audio_path)

        self.assertEqual(44100, sample_rate_hz)
        self.pygame.mixer.init.assert_called_once_with(frequency=44100, size=-16, channels=2)
        self.assertEqual("dummy", os.environ.get("SDL_AUDIODRIVER"))

    def test_decode_failure_is_wrapped(self) -> None:
        self.pygame.mixer.get_init.return_value = (44100, -16, 2)
        self.pygame.mixer.Sound.side_effect = _PygameError("Unrecognized audio format")

        with self.assertRaises(AlarmError) as context:
            decoder_module.decode_audio_file(self.audio_path)

        self.assertIn("Unrecognized audio format", str(context.exception))

    def test_empty_audio_is_rejected(self) -> None:
        self.pygame.mixer.get_init.return_value = (44100, -16, 2)
        self.pygame.sndarray.array.return_value = np.zeros((0, 2), dtype=np.int16)

        with self.assertRaises(AlarmError):
            decoder_module.decode_audio_file(self.audio_path)


class AlarmPlayerTests(unittest.TestCase):
    def test_play_decodes_then_outputs(self) -> None:
        frames = np.zeros((10, 2), dtype=np.float32)
        decoder = MagicMock(return_value=(frames, 48000))
        output = MagicMock()

        player = alarm_module.AlarmPlayer(output=output, decoder=decoder)
        player.play("/tmp/bell.wav")

        decoder.assert_called_once_with("/tmp/bell.wav")
        output.play.assert_called_once_with(frames, 48000)

    def test_decode_errors_propagate_to_caller(self) -> None:
        decoder = MagicMock(side_effect=AlarmError("bad file"))
        output = MagicMock()

        player = alarm_module.AlarmPlayer(output=output, decoder=decoder)
        with self.assertRaises(AlarmError):
            player.play("bad.mp3")
        output.play.assert_not_called()


if __name__ == "__main__":
    unittest.main()

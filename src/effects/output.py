"""Sounddevice-backed audio playback for decoded alarm sounds."""

import logging
from typing import Optional

import numpy as np
import sounddevice as sd

from .errors import AlarmError


class SoundDeviceAudioOutput:
    """Plays float32 PCM frames through a selected sounddevice output."""
    def __init__(
        self,
        output_device_index: Optional[int] = None,
        blocksize: int = 2048,
        logger: Optional[logging.Logger] = None,
    ):
        self._output_device_index = output_device_index
        self._blocksize = blocksize
        self._logger = logger or logging.getLogger(__name__)

    def play(self, frames: np.ndarray, sample_rate_hz: int, blocking: bool = True) -> None:
        if frames.ndim == 1:
            frames = frames[:, np.newaxis]
        if frames.ndim != 2:
            raise AlarmError("Expected PCM frames shaped (samples, channels)")
        if len(frames) == 0:
            raise AlarmError("Cannot play empty audio buffer")

        frames = np.ascontiguousarray(frames, dtype=np.float32)
        channels = frames.shape[1]
        pos = 0

        def callback(outdata, frame_count, time_info, status):
            nonlocal pos
            if status:
                self._logger.warning("Sounddevice status: %s", status)

            end = pos + frame_count
            chunk = frames[pos:end]

            if len(chunk) < frame_count:
                outdata[: len(chunk)] = chunk
                outdata[len(chunk) :] = 0
                raise sd.CallbackStop()

            outdata[:] = chunk
            pos = end

        try:
            with sd.OutputStream(
                channels=channels,
                samplerate=sample_rate_hz,
                blocksize=self._blocksize,
                dtype="float32",
                callback=callback,
                device=self._output_device_index,
            ):
                if blocking:
                    sd.sleep(int(len(frames) / sample_rate_hz * 1000) + 200)
        except Exception as error:
            raise AlarmError(f"Audio playback failed: {error}") from error

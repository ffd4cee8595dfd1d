"""Alarm playback combining file decoding with sounddevice output."""

import logging
from typing import Callable, Optional

import numpy as np

from .decoder import decode_audio_file
from .output import SoundDeviceAudioOutput

Decoder = Callable[[str], tuple[np.ndarray, int]]


class AlarmPlayer:
    """Decodes an alarm file and plays it to completion on the calling thread."""
    def __init__(
        self,
        output: SoundDeviceAudioOutput,
        decoder: Decoder = decode_audio_file,
        logger: Optional[logging.Logger] = None,
    ):
        self._output = output
        self._decoder = decoder
        self._logger = logger or logging.getLogger(__name__)

    def play(self, path: str) -> None:
        frames, sample_rate_hz = self._decoder(path)
        self._logger.debug(
            "Playing alarm %s (%d frames at %d Hz)",
            path,
            len(frames),
            sample_rate_hz,
        )
        self._output.play(frames, sample_rate_hz)

"""Decode mp3/ogg/wav alarm files into PCM frames with pygame's mixer."""

from __future__ import annotations

import os
import threading
from pathlib import Path

import numpy as np

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

from .errors import AlarmError

SUPPORTED_EXTENSIONS: tuple[str, ...] = ("mp3", "wav", "ogg")

DECODE_SAMPLE_RATE_HZ = 44100
DECODE_CHANNELS = 2

_mixer_lock = threading.Lock()


def decode_audio_file(path: str | Path) -> tuple[np.ndarray, int]:
    """Return ``(frames, sample_rate_hz)`` with float32 frames in ``[-1.0, 1.0]``."""
    audio_path = Path(path).expanduser()
    if not audio_path.is_file():
        raise AlarmError(f"Alarm file not found: {audio_path}")

    with _mixer_lock:
        try:
            sample_rate_hz = _ensure_mixer()
            sound = pygame.mixer.Sound(str(audio_path))
            samples = pygame.sndarray.array(sound)
        except (pygame.error, OSError) as error:
            raise AlarmError(f"Failed to decode alarm file {audio_path}: {error}") from error

    if samples.size == 0:
        raise AlarmError(f"Alarm file contains no audio: {audio_path}")

    scale = float(np.iinfo(samples.dtype).max) if samples.dtype.kind == "i" else 1.0
    return samples.astype(np.float32) / scale, sample_rate_hz


def _ensure_mixer() -> int:
    # The mixer only decodes here; sounddevice owns the real output device.
    init = pygame.mixer.get_init()
    if init is None:
        os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
        pygame.mixer.init(
            frequency=DECODE_SAMPLE_RATE_HZ,
            size=-16,
            channels=DECODE_CHANNELS,
        )
        init = pygame.mixer.get_init()
    return int(init[0])

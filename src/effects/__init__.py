"""Public exports for phase-completion side effects."""

from .alarm import AlarmPlayer
from .config import EffectsConfig, EffectsConfigurationError
from .dispatcher import EffectDispatcher
from .errors import AlarmError, EffectError, NotificationError
from .notifications import DesktopNotifier
from .output import SoundDeviceAudioOutput

__all__ = [
    "AlarmError",
    "AlarmPlayer",
    "DesktopNotifier",
    "EffectDispatcher",
    "EffectError",
    "EffectsConfig",
    "EffectsConfigurationError",
    "NotificationError",
    "SoundDeviceAudioOutput",
]

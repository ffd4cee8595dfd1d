"""Error types raised by alarm and notification effects."""


class EffectError(Exception):
    """Base class for failures of phase-completion side effects."""


class AlarmError(EffectError):
    """Raised when an alarm sound cannot be opened, decoded, or played."""


class NotificationError(EffectError):
    """Raised when a desktop notification cannot be posted."""

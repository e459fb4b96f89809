"""Exceptions raised for bad caller input."""


class DTMFError(Exception):
    """Base class for all dtmf_goertzel errors."""


class UnknownKey(DTMFError, LookupError):
    """A symbol outside the 16-key DTMF keypad was requested."""

    def __init__(self, key):
        self.key = key
        super().__init__(f"Unknown DTMF key: {key!r}")


class InvalidConfiguration(DTMFError, ValueError):
    """A sample rate, bin size, duration or frequency list is unusable."""

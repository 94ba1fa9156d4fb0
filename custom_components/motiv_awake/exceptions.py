"""Errors raised by the Motiv Awake platform."""
from __future__ import annotations


class MotivError(Exception):
    """Base class for platform errors."""


class MissingConfigError(MotivError):
    """The configuration has no account section."""


class SessionExpiredError(MotivError):
    """The account session expired before startup."""


class AuthNotReadyError(MotivError):
    """The account client still needs authentication."""


class ReadFailure(MotivError):
    """
    A sensor read failed.
    The underlying API error is kept as ``__cause__``.
    """

    def __init__(self, sensor_type: str, reason: str) -> None:
        self.sensor_type = sensor_type
        self.reason = reason
        super().__init__(f"Failed to update {sensor_type} status: {reason}")

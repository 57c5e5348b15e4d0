"""Errors raised by the speech adapters and the voice assistant."""

from __future__ import annotations


class CapabilityUnavailableError(RuntimeError):
    """Raised when the platform has no usable speech recognition backend."""


class RecognitionError(RuntimeError):
    """A recognition pass failed.

    Transient failures (no speech, timeouts, unintelligible audio) are recovered
    by restarting capture. Fatal ones (permission, device or service failures)
    end the session until the user starts it again.
    """

    def __init__(self, message: str, *, fatal: bool = False) -> None:
        super().__init__(message)
        self.fatal = fatal


class SynthesisCancelledError(RuntimeError):
    """An utterance was interrupted by a newer one or by ``cancel()``."""


class SynthesisError(RuntimeError):
    """Text-to-speech failed for a reason other than cancellation."""

"""Contracts for speech recognition and synthesis backends."""

from typing import Callable, Protocol

TranscriptCallback = Callable[[str], None]
EndCallback = Callable[[], None]
ErrorCallback = Callable[[Exception], None]


class SpeechInput(Protocol):
    """One-shot speech recognition.

    Each ``start`` begins a single pass that reports zero or more interim
    transcripts, at most one final transcript, and then either ``on_end`` or
    ``on_error`` exactly once.
    """

    def is_available(self) -> bool:
        """Return whether recognition can run on this platform."""

    def start(
        self,
        *,
        on_interim: TranscriptCallback,
        on_final: TranscriptCallback,
        on_end: EndCallback,
        on_error: ErrorCallback,
    ) -> None:
        """Begin one recognition pass."""

    def stop(self) -> None:
        """Abort the current pass, if any."""


class SpeechOutput(Protocol):
    """Text-to-speech with completion callbacks."""

    def is_available(self) -> bool:
        """Return whether synthesis can run on this platform."""

    def speak(self, text: str, on_complete: Callable[[Exception | None], None]) -> None:
        """Say ``text`` and report completion, or the error that ended it."""

    def cancel(self) -> None:
        """Silence the current utterance."""

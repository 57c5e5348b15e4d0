"""Text-to-speech orchestration for spoken assistant responses."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable

from .errors import SynthesisCancelledError
from .interfaces import SpeechOutput


@dataclass(slots=True)
class VoiceOutputConfig:
    """Configurable controls for response speech."""

    enabled: bool = True
    max_chars: int = 500


class VoiceOutputService:
    """Keeps at most one utterance audible and reports each completion exactly once."""

    def __init__(
        self,
        synthesizer: SpeechOutput | None,
        config: VoiceOutputConfig | None = None,
        *,
        lock: threading.RLock | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._synthesizer = synthesizer
        self._config = config or VoiceOutputConfig()
        self._lock = lock or threading.RLock()
        self._logger = logger or logging.getLogger("access_assistant.voice.output")
        self._speaking = False
        self._utterance_id = 0

    @property
    def config(self) -> VoiceOutputConfig:
        return self._config

    @property
    def speaking(self) -> bool:
        return self._speaking

    def speak(self, text: str, on_complete: Callable[[], None]) -> bool:
        """Say ``text`` after silencing any current utterance.

        Returns ``False`` when nothing was voiced (output disabled, unavailable or
        empty text); ``on_complete`` has then already been called.
        """
        with self._lock:
            self.cancel()

            normalized = " ".join(text.split())
            if not normalized or not self._can_speak():
                on_complete()
                return False

            self._utterance_id += 1
            utterance_id = self._utterance_id
            finished = False

            def handle_complete(error: Exception | None) -> None:
                nonlocal finished
                with self._lock:
                    if finished:
                        return
                    finished = True
                    if utterance_id == self._utterance_id:
                        self._speaking = False
                    if isinstance(error, SynthesisCancelledError):
                        self._logger.debug("synthesis_cancelled")
                    elif error is not None:
                        self._logger.error("synthesis_failed", exc_info=error)
                    on_complete()

            self._speaking = True
            try:
                self._synthesizer.speak(normalized[: self._config.max_chars], handle_complete)
            except Exception as exc:  # noqa: BLE001
                handle_complete(exc)
            return True

    def cancel(self) -> None:
        """Silence the current utterance, if any."""
        with self._lock:
            if not self._speaking or self._synthesizer is None:
                return
            self._speaking = False
            try:
                self._synthesizer.cancel()
            except SynthesisCancelledError:
                pass
            except Exception:  # noqa: BLE001
                self._logger.exception("synthesis_cancel_failed")

    def _can_speak(self) -> bool:
        if not self._config.enabled or self._synthesizer is None:
            return False
        try:
            return bool(self._synthesizer.is_available())
        except Exception:  # noqa: BLE001
            self._logger.warning("synthesizer_probe_failed", exc_info=True)
            return False

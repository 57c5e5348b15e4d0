"""Speech capture orchestration: one recognition pass at a time."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from .errors import RecognitionError
from .interfaces import SpeechInput


class VoiceInputService:
    """Runs recognition passes and forwards only the events of the current pass.

    Interim transcripts are forwarded for display, final transcripts for
    interpretation. Transient recognition errors are reported as a normal end
    of pass; anything else is fatal.
    """

    def __init__(
        self,
        recognizer: SpeechInput,
        *,
        lock: threading.RLock | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._recognizer = recognizer
        self._lock = lock or threading.RLock()
        self._logger = logger or logging.getLogger("access_assistant.voice.input")
        self._pass_id = 0
        self._listening = False

    @property
    def listening(self) -> bool:
        return self._listening

    def is_available(self) -> bool:
        try:
            return bool(self._recognizer.is_available())
        except Exception:  # noqa: BLE001
            self._logger.warning("recognizer_probe_failed", exc_info=True)
            return False

    def start_pass(
        self,
        *,
        on_interim: Callable[[str], None],
        on_final: Callable[[str], None],
        on_end: Callable[[], None],
        on_fatal: Callable[[Exception], None],
    ) -> None:
        """Stop any running pass and begin a new one."""
        with self._lock:
            self.stop_pass()
            self._pass_id += 1
            pass_id = self._pass_id
            self._listening = True

        def current() -> bool:
            return self._listening and pass_id == self._pass_id

        def handle_interim(text: str) -> None:
            with self._lock:
                if current() and text.strip():
                    on_interim(text.strip())

        def handle_final(text: str) -> None:
            with self._lock:
                if current() and text.strip():
                    on_final(text.strip())

        def handle_end() -> None:
            with self._lock:
                if not current():
                    return
                self._listening = False
                on_end()

        def handle_error(exc: Exception) -> None:
            with self._lock:
                if not current():
                    return
                self._listening = False
                if isinstance(exc, RecognitionError) and not exc.fatal:
                    self._logger.debug("recognition_transient", extra={"pass_id": pass_id, "reason": str(exc)})
                    on_end()
                    return
                self._logger.warning("recognition_fatal", extra={"pass_id": pass_id, "reason": str(exc)})
                on_fatal(exc)

        self._logger.debug("capture_started", extra={"pass_id": pass_id})
        try:
            self._recognizer.start(
                on_interim=handle_interim,
                on_final=handle_final,
                on_end=handle_end,
                on_error=handle_error,
            )
        except Exception as exc:  # noqa: BLE001
            handle_error(exc)

    def stop_pass(self) -> None:
        """Abort the current pass; its late events are dropped."""
        with self._lock:
            was_listening = self._listening
            self._pass_id += 1
            self._listening = False
        if not was_listening:
            return
        try:
            self._recognizer.stop()
        except Exception:  # noqa: BLE001
            self._logger.debug("capture_stop_failed", exc_info=True)

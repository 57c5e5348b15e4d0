"""Speech-to-text backend powered by ``speech_recognition``."""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from typing import Callable

from .errors import RecognitionError
from .interfaces import SpeechInput


@dataclass(slots=True)
class _PassRequest:
    stop_event: threading.Event
    on_final: Callable[[str], None]
    on_end: Callable[[], None]
    on_error: Callable[[Exception], None]


class SpeechRecognitionInput(SpeechInput):
    """Microphone capture plus Google web recognition, one pass at a time on a worker thread.

    The Google recognizer returns no interim hypotheses, so only final
    transcripts are reported.

    ``stop()`` only silences the running pass: ``Recognizer.listen`` cannot be
    interrupted, so the microphone stays open for up to ``timeout`` plus
    ``phrase_time_limit`` seconds and a pass started meanwhile waits behind it.
    Nothing from a stopped pass is reported.
    """

    def __init__(
        self,
        *,
        language: str = "en-US",
        phrase_time_limit: float | None = 5.0,
        timeout: float | None = 5.0,
        sample_rate: int = 16_000,
        chunk_size: int = 1024,
        adjust_noise_seconds: float = 0.2,
    ) -> None:
        try:
            import speech_recognition as sr
        except ImportError as exc:  # pragma: no cover - import guard
            raise RuntimeError(
                "Voice STT backend unavailable. Install extras with: pip install 'access-assistant[voice]'"
            ) from exc
        self._sr = sr
        self._recognizer = sr.Recognizer()
        self._language = language
        self._phrase_time_limit = phrase_time_limit
        self._timeout = timeout
        self._sample_rate = sample_rate
        self._chunk_size = chunk_size
        self._adjust_noise_seconds = max(0.0, adjust_noise_seconds)

        self._requests: queue.Queue[_PassRequest] = queue.Queue()
        self._current: threading.Event | None = None
        self._lock = threading.Lock()
        self._worker: threading.Thread | None = None

    def is_available(self) -> bool:
        try:
            return bool(self._sr.Microphone.list_microphone_names())
        except (AttributeError, OSError):
            # speech_recognition raises AttributeError when PyAudio is missing.
            return False

    def start(
        self,
        *,
        on_interim: Callable[[str], None],
        on_final: Callable[[str], None],
        on_end: Callable[[], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        stop_event = threading.Event()
        with self._lock:
            if self._current is not None:
                self._current.set()
            self._current = stop_event
            if self._worker is None or not self._worker.is_alive():
                self._worker = threading.Thread(target=self._run, name="speech-recognition", daemon=True)
                self._worker.start()
        self._requests.put(_PassRequest(stop_event, on_final, on_end, on_error))

    def stop(self) -> None:
        with self._lock:
            if self._current is not None:
                self._current.set()
                self._current = None

    def _run(self) -> None:
        while True:
            request = self._requests.get()
            if request.stop_event.is_set():
                continue
            try:
                self._run_pass(request)
            except Exception as exc:  # noqa: BLE001
                self._fail(request, RecognitionError(f"Speech recognition failed: {exc}", fatal=True))

    def _fail(self, request: _PassRequest, error: RecognitionError) -> None:
        if not request.stop_event.is_set():
            request.on_error(error)

    def _run_pass(self, request: _PassRequest) -> None:
        try:
            with self._sr.Microphone(sample_rate=self._sample_rate, chunk_size=self._chunk_size) as source:
                if self._adjust_noise_seconds > 0:
                    self._recognizer.adjust_for_ambient_noise(source, duration=self._adjust_noise_seconds)
                audio = self._recognizer.listen(
                    source,
                    timeout=self._timeout,
                    phrase_time_limit=self._phrase_time_limit,
                )
        except self._sr.WaitTimeoutError:
            self._fail(request, RecognitionError("No speech detected.", fatal=False))
            return
        except (AttributeError, OSError) as exc:
            self._fail(request, RecognitionError(f"Microphone unavailable: {exc}", fatal=True))
            return

        if request.stop_event.is_set():
            return

        try:
            transcript = self._recognizer.recognize_google(audio, language=self._language)
        except self._sr.UnknownValueError:
            self._fail(request, RecognitionError("Speech was not understood.", fatal=False))
            return
        except self._sr.RequestError as exc:
            self._fail(
                request,
                RecognitionError(
                    f"Speech recognition service request failed ({exc}). Check internet access.",
                    fatal=True,
                ),
            )
            return

        if request.stop_event.is_set():
            return
        if isinstance(transcript, str) and transcript.strip():
            request.on_final(transcript)
        request.on_end()

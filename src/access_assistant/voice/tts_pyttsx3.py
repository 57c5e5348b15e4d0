"""Text-to-speech backend powered by ``pyttsx3``."""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from typing import Callable

from .errors import SynthesisCancelledError, SynthesisError
from .interfaces import SpeechOutput



@dataclass(slots=True)
class _Utterance:
    text: str
    on_complete: Callable[[Exception | None], None]
    generation: int
    cancelled: bool = False


class Pyttsx3SpeechOutput(SpeechOutput):
    """Speaker playback through one pyttsx3 engine owned by a worker thread.

    Every ``cancel()`` starts a new generation; the worker only plays an
    utterance whose generation is still current when it takes the lock.
    """

    def __init__(
        self,
        *,
        voice_id: str | None = None,
        rate: int | None = None,
        volume: float | None = None,
        init_timeout: float = 5.0,
    ) -> None:
        try:
            import pyttsx3
        except ImportError as exc:  # pragma: no cover - import guard
            raise RuntimeError(
                "Audio output backend unavailable. Install extras with: pip install 'access-assistant[voice]'"
            ) from exc
        self._pyttsx3 = pyttsx3
        self._voice_id = voice_id
        self._rate = rate
        self._volume = None if volume is None else max(0.0, min(1.0, volume))
        self._init_timeout = init_timeout

        self._queue: queue.Queue[_Utterance] = queue.Queue()
        self._lock = threading.Lock()
        self._generation = 0
        self._current: _Utterance | None = None
        self._engine = None
        self._init_error: Exception | None = None
        self._ready = threading.Event()
        self._worker = threading.Thread(target=self._run, name="pyttsx3-output", daemon=True)
        self._worker.start()

    def is_available(self) -> bool:
        self._ready.wait(timeout=self._init_timeout)
        return self._ready.is_set() and self._init_error is None

    def speak(self, text: str, on_complete: Callable[[Exception | None], None]) -> None:
        with self._lock:
            self._queue.put(_Utterance(text=text, on_complete=on_complete, generation=self._generation))

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1
            current = self._current
            if current is not None:
                current.cancelled = True
            queued: list[_Utterance] = []
            while True:
                try:
                    queued.append(self._queue.get_nowait())
                except queue.Empty:
                    break
            for utterance in queued:
                utterance.cancelled = True

        for utterance in queued:
            utterance.on_complete(SynthesisCancelledError("Utterance cancelled before playback."))

        if current is not None and self._engine is not None:
            self._engine.stop()

    def _run(self) -> None:
        try:
            engine = self._pyttsx3.init()
            if self._voice_id:
                engine.setProperty("voice", self._voice_id)
            if self._rate is not None:
                engine.setProperty("rate", self._rate)
            if self._volume is not None:
                engine.setProperty("volume", self._volume)
        except Exception as exc:  # noqa: BLE001
            self._init_error = exc
            self._ready.set()
            return

        self._engine = engine
        self._ready.set()

        while True:
            utterance = self._queue.get()
            with self._lock:
                if utterance.cancelled:
                    continue
                stale = utterance.generation != self._generation
                if stale:
                    utterance.cancelled = True
                else:
                    self._current = utterance
            if stale:
                utterance.on_complete(SynthesisCancelledError("Utterance cancelled before playback."))
                continue

            error: Exception | None = None
            try:
                engine.say(utterance.text)
                engine.runAndWait()
            except Exception as exc:  # noqa: BLE001
                error = SynthesisError(f"pyttsx3 playback failed: {exc}")

            with self._lock:
                self._current = None
                interrupted = utterance.cancelled
            if error is None and interrupted:
                error = SynthesisCancelledError("Utterance interrupted.")
            utterance.on_complete(error)

"""Voice session orchestration for the accessibility settings panel."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from access_assistant.config import Settings
from access_assistant.settings_store import SettingsStore

from .dialogue import AssistantSnapshot, AwaitingKind, ConversationState, FeedbackLevel
from .errors import CapabilityUnavailableError
from .input import VoiceInputService
from .interfaces import SpeechInput, SpeechOutput
from .interpreter import CommandInterpreter
from .lexicon import normalize
from .output import VoiceOutputConfig, VoiceOutputService
from .scheduler import ScheduledCall, Scheduler, ThreadingScheduler

SnapshotListener = Callable[[AssistantSnapshot], None]

LISTENING_FOR_SETTING = 'Listening... Say a setting name (e.g., "High Contrast")'
LISTENING_FOR_CONFIRMATION = 'Listening for confirmation... (Say "Yes" or "Toggle")'
LISTENING_FOR_VALUE = "Listening for mode..."
RECOGNITION_UNSUPPORTED = "Speech recognition is not supported on this device."


class VoiceAssistant:
    """Listens for setting names, confirms, applies changes and speaks back.

    Capture is paused while the assistant speaks so it never hears itself, and
    resumes once the utterance completes. When a capture pass ends on its own
    the next one starts after ``restart_delay_seconds``. Every transition runs
    under one lock because adapter and timer callbacks arrive on other threads.
    """

    def __init__(
        self,
        *,
        recognizer: SpeechInput,
        synthesizer: SpeechOutput | None,
        store: SettingsStore,
        scheduler: Scheduler | None = None,
        restart_delay_seconds: float = 0.3,
        resume_delay_seconds: float = 0.1,
        min_unmatched_length: int = 3,
        output_config: VoiceOutputConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._logger = logger or logging.getLogger("access_assistant.voice.assistant")
        self._state = ConversationState()
        self._input = VoiceInputService(recognizer, lock=self._lock)
        self._output = VoiceOutputService(synthesizer, output_config, lock=self._lock)
        self._interpreter = CommandInterpreter(store, min_unmatched_length=min_unmatched_length)
        self._scheduler = scheduler or ThreadingScheduler()
        self._restart_delay_seconds = restart_delay_seconds
        self._resume_delay_seconds = resume_delay_seconds

        self._session_id = 0
        self._speech_id = 0
        self._restart_call: ScheduledCall | None = None
        self._listeners: list[SnapshotListener] = []

    @classmethod
    def from_settings(
        cls,
        config: Settings,
        *,
        recognizer: SpeechInput,
        synthesizer: SpeechOutput | None,
        store: SettingsStore,
        scheduler: Scheduler | None = None,
    ) -> VoiceAssistant:
        return cls(
            recognizer=recognizer,
            synthesizer=synthesizer,
            store=store,
            scheduler=scheduler,
            restart_delay_seconds=config.restart_delay_seconds,
            resume_delay_seconds=config.resume_delay_seconds,
            min_unmatched_length=config.min_unmatched_length,
            output_config=VoiceOutputConfig(enabled=config.voice_enabled, max_chars=config.max_speech_chars),
        )

    @property
    def active(self) -> bool:
        return self._state.active

    def snapshot(self) -> AssistantSnapshot:
        with self._lock:
            return AssistantSnapshot.from_state(self._state)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Call ``listener`` with a fresh snapshot after every transition. Returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> None:
        """Open a session and begin listening. Restarts capture if a session is already open."""
        with self._lock:
            if not self._input.is_available():
                self._state.feedback = RECOGNITION_UNSUPPORTED
                self._state.level = FeedbackLevel.ERROR
                self._logger.warning("assistant_capability_unavailable")
                self._notify()
                raise CapabilityUnavailableError(RECOGNITION_UNSUPPORTED)

            self._cancel_restart()
            self._input.stop_pass()
            self._session_id += 1
            if not self._state.active:
                self._state.active = True
                self._state.clear_pending()
            self._logger.info("assistant_started", extra={"session_id": self._session_id})

            self._state.feedback = self._listening_prompt()
            self._state.level = FeedbackLevel.INFO
            self._begin_capture()
            self._notify()

    def stop(self) -> None:
        """End the session from any state: silence speech, halt capture, forget the pending setting."""
        with self._lock:
            was_active = self._state.active
            self._session_id += 1
            self._speech_id += 1
            self._cancel_restart()
            self._output.cancel()
            self._input.stop_pass()
            self._state.reset()
            if was_active:
                self._logger.info("assistant_stopped", extra={"session_id": self._session_id})
            self._notify()

    def toggle(self) -> bool:
        """Start when idle, stop when active. Returns whether a session is now open."""
        with self._lock:
            if self._state.active:
                self.stop()
                return False
            self.start()
            return True

    def _begin_capture(self) -> None:
        if not self._state.active or self._state.speaking:
            return
        self._input.start_pass(
            on_interim=self._on_interim,
            on_final=self._on_final,
            on_end=self._on_capture_end,
            on_fatal=self._on_fatal,
        )
        self._state.listening = self._input.listening

    def _on_interim(self, text: str) -> None:
        if not self._state.active:
            return
        self._state.feedback = f"Hearing: {text}"
        self._notify()

    def _on_final(self, text: str) -> None:
        if not self._state.active:
            return

        command = normalize(text)
        self._state.last_utterance = command
        self._state.feedback = f'You said: "{command}"'
        self._state.level = FeedbackLevel.INFO
        self._logger.info(
            "utterance_received",
            extra={"utterance": command, "pending_setting": self._state.pending_setting},
        )

        try:
            reply = self._interpreter.interpret(self._state, command)
        except Exception:  # noqa: BLE001
            self._logger.exception("utterance_failed", extra={"utterance": command})
            self._state.clear_pending()
            self._state.feedback = "Sorry, I could not change that setting."
            self._state.level = FeedbackLevel.ERROR
            self._notify()
            return

        if reply is not None:
            self._state.feedback = reply.feedback
            self._state.level = reply.level
            if reply.speech:
                self._say(reply.speech)
        self._notify()

    def _on_capture_end(self) -> None:
        self._state.listening = False
        if self._state.active and not self._state.speaking:
            self._schedule_capture(self._restart_delay_seconds, reason="capture_ended")
        self._notify()

    def _on_fatal(self, exc: Exception) -> None:
        self._logger.warning("assistant_recognition_failed", extra={"reason": str(exc)})
        self.stop()
        self._state.feedback = f"Voice assistant stopped: {exc}"
        self._state.level = FeedbackLevel.ERROR
        self._notify()

    def _say(self, text: str) -> None:
        self._cancel_restart()
        self._state.speaking = True
        self._input.stop_pass()
        self._state.listening = False
        self._speech_id += 1
        speech_id = self._speech_id
        self._notify()
        self._output.speak(text, lambda: self._on_speech_complete(speech_id))

    def _on_speech_complete(self, speech_id: int) -> None:
        with self._lock:
            if speech_id != self._speech_id:
                return
            self._state.speaking = False
            if not self._state.active:
                return
            if self._state.pending_setting is not None:
                self._state.feedback = self._listening_prompt()
            self._schedule_capture(self._resume_delay_seconds, reason="speech_completed")
            self._notify()

    def _schedule_capture(self, delay_seconds: float, *, reason: str) -> None:
        self._cancel_restart()
        session_id = self._session_id
        call: ScheduledCall | None = None

        def fire() -> None:
            with self._lock:
                if self._restart_call is not call:
                    return
                self._restart_call = None
                if session_id != self._session_id or not self._state.active or self._state.speaking:
                    return
                if self._input.listening:
                    return
                self._logger.debug("capture_restarted", extra={"reason": reason})
                self._begin_capture()
                self._notify()

        self._logger.debug("capture_restart_scheduled", extra={"reason": reason, "delay": delay_seconds})
        call = self._scheduler.call_later(delay_seconds, fire)
        self._restart_call = call

    def _cancel_restart(self) -> None:
        if self._restart_call is not None:
            self._restart_call.cancel()
            self._restart_call = None

    def _listening_prompt(self) -> str:
        if self._state.awaiting is AwaitingKind.ENUM_VALUE:
            return LISTENING_FOR_VALUE
        if self._state.awaiting is AwaitingKind.CONFIRMATION:
            return LISTENING_FOR_CONFIRMATION
        return LISTENING_FOR_SETTING

    def _notify(self) -> None:
        snapshot = AssistantSnapshot.from_state(self._state)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:  # noqa: BLE001
                self._logger.exception("assistant_listener_failed")

"""CLI startup entrypoint for the accessibility voice assistant."""

from __future__ import annotations

from collections import deque
from typing import Callable

import typer
from rich import print

from access_assistant.config import settings
from access_assistant.settings_store import (
    InvalidSettingValueError,
    JsonSettingsStore,
    UnknownSettingError,
    coerce_setting_value,
)
from access_assistant.telemetry.logging import configure_logging
from access_assistant.voice import (
    AssistantSnapshot,
    CapabilityUnavailableError,
    ManualScheduler,
    VoiceAssistant,
)

app = typer.Typer(help="Accessibility voice assistant entrypoint")


class _ScriptedSpeechInput:
    """Feeds prepared utterances to the assistant, one per recognition pass."""

    def __init__(self, utterances: list[str]) -> None:
        self._utterances = deque(utterances)

    def is_available(self) -> bool:
        return True

    def start(self, *, on_interim, on_final, on_end, on_error) -> None:
        if not self._utterances:
            return
        text = self._utterances.popleft()
        print({"heard": text})
        on_final(text)
        on_end()

    def stop(self) -> None:
        return None


class _ConsoleSpeechOutput:
    """Prints what would be spoken and completes immediately."""

    def is_available(self) -> bool:
        return True

    def speak(self, text: str, on_complete: Callable[[Exception | None], None]) -> None:
        print({"says": text})
        on_complete(None)

    def cancel(self) -> None:
        return None


def _open_store(settings_file: str | None) -> JsonSettingsStore:
    return JsonSettingsStore(settings_file or settings.settings_path)


def _feedback_printer() -> Callable[[AssistantSnapshot], None]:
    last: dict[str, str] = {"feedback": ""}

    def _print(snapshot: AssistantSnapshot) -> None:
        if snapshot.feedback and snapshot.feedback != last["feedback"]:
            print({"feedback": snapshot.feedback, "phase": snapshot.phase.value, "level": snapshot.level.value})
        last["feedback"] = snapshot.feedback

    return _print


@app.callback()
def main(log_level: str = typer.Option(None, help="Override ACCESS_ASSISTANT_LOG_LEVEL")) -> None:
    configure_logging(log_level or settings.log_level)


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "settings_path": settings.settings_path,
            "recognition_language": settings.recognition_language,
            "voice_enabled": settings.voice_enabled,
            "restart_delay_seconds": settings.restart_delay_seconds,
        }
    )


@app.command("show-settings")
def show_settings(settings_file: str = typer.Option(None, help="Path to the settings JSON file")) -> None:
    store = _open_store(settings_file)
    print(store.snapshot().model_dump(by_alias=True))


@app.command("set-setting")
def set_setting(
    key: str,
    value: str,
    settings_file: str = typer.Option(None, help="Path to the settings JSON file"),
) -> None:
    """Persist one accessibility setting, e.g. ``set-setting highContrast on``."""
    store = _open_store(settings_file)
    try:
        coerced = coerce_setting_value(key, value)
    except (UnknownSettingError, InvalidSettingValueError) as exc:
        raise typer.BadParameter(exc.args[0]) from exc
    store.set_setting(key, coerced)
    print({key: coerced})


@app.command("reset-settings")
def reset_settings(settings_file: str = typer.Option(None, help="Path to the settings JSON file")) -> None:
    store = _open_store(settings_file)
    store.reset_settings()
    print(store.snapshot().model_dump(by_alias=True))


@app.command()
def simulate(
    utterances: list[str] = typer.Argument(..., help="Utterances to feed in order"),
    settings_file: str = typer.Option(None, help="Path to the settings JSON file"),
) -> None:
    """Run a voice session offline with typed utterances instead of a microphone."""
    store = _open_store(settings_file)
    scheduler = ManualScheduler()
    assistant = VoiceAssistant.from_settings(
        settings,
        recognizer=_ScriptedSpeechInput(utterances),
        synthesizer=_ConsoleSpeechOutput(),
        store=store,
        scheduler=scheduler,
    )
    assistant.subscribe(_feedback_printer())

    assistant.start()
    scheduler.run_pending()
    assistant.stop()
    print({"settings": store.snapshot().model_dump(by_alias=True)})


@app.command("voice-settings")
def voice_settings(
    settings_file: str = typer.Option(None, help="Path to the settings JSON file"),
    phrase_time_limit: float = typer.Option(None, help="Per-utterance capture limit in seconds"),
) -> None:
    """Change accessibility settings by voice with local STT/TTS backends."""
    try:
        from access_assistant.voice.stt_speechrecognition import SpeechRecognitionInput
        from access_assistant.voice.tts_pyttsx3 import Pyttsx3SpeechOutput
    except ImportError:
        print({"error": "Voice extras are missing. Install with: pip install 'access-assistant[voice]'"})
        raise typer.Exit(code=1)

    try:
        recognizer = SpeechRecognitionInput(
            language=settings.recognition_language,
            phrase_time_limit=phrase_time_limit or settings.phrase_time_limit,
            timeout=settings.listen_timeout,
        )
        synthesizer = Pyttsx3SpeechOutput(
            voice_id=settings.tts_voice_id,
            rate=settings.tts_rate,
            volume=settings.tts_volume,
        )
    except RuntimeError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    assistant = VoiceAssistant.from_settings(
        settings,
        recognizer=recognizer,
        synthesizer=synthesizer,
        store=_open_store(settings_file),
    )
    assistant.subscribe(_feedback_printer())

    try:
        assistant.start()
    except CapabilityUnavailableError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    print({"voice_settings": "started", "hint": "Say a setting name, e.g. 'high contrast'. Press Enter to stop."})
    try:
        input()
    except (KeyboardInterrupt, EOFError):
        pass
    finally:
        assistant.stop()
    print({"voice_settings": "stopped"})


if __name__ == "__main__":
    app()

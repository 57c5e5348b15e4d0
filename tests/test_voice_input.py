from access_assistant.voice.errors import RecognitionError
from access_assistant.voice.input import VoiceInputService


class StubRecognizer:
    def __init__(self, available: bool = True, fail_on_start: Exception | None = None) -> None:
        self.available = available
        self.fail_on_start = fail_on_start
        self.passes: list[dict] = []
        self.stops = 0

    def is_available(self) -> bool:
        return self.available

    def start(self, **callbacks) -> None:
        if self.fail_on_start is not None:
            raise self.fail_on_start
        self.passes.append(callbacks)

    def stop(self) -> None:
        self.stops += 1


class Recorder:
    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def callbacks(self) -> dict:
        return {
            "on_interim": lambda text: self.events.append(("interim", text)),
            "on_final": lambda text: self.events.append(("final", text)),
            "on_end": lambda: self.events.append(("end", None)),
            "on_fatal": lambda exc: self.events.append(("fatal", str(exc))),
        }


def test_only_current_pass_events_are_forwarded() -> None:
    recognizer = StubRecognizer()
    service = VoiceInputService(recognizer)
    recorder = Recorder()

    service.start_pass(**recorder.callbacks())
    first = recognizer.passes[0]
    first["on_interim"]("  high ")
    first["on_final"]("")
    first["on_final"]("High contrast ")

    service.start_pass(**recorder.callbacks())
    first["on_final"]("yes")
    first["on_end"]()

    assert recorder.events == [("interim", "high"), ("final", "High contrast")]
    assert recognizer.stops == 1
    assert service.listening is True


def test_end_of_pass_clears_listening() -> None:
    recognizer = StubRecognizer()
    service = VoiceInputService(recognizer)
    recorder = Recorder()

    service.start_pass(**recorder.callbacks())
    recognizer.passes[0]["on_end"]()
    recognizer.passes[0]["on_end"]()

    assert service.listening is False
    assert recorder.events == [("end", None)]


def test_transient_errors_end_the_pass_and_fatal_ones_are_reported() -> None:
    recognizer = StubRecognizer()
    service = VoiceInputService(recognizer)
    recorder = Recorder()

    service.start_pass(**recorder.callbacks())
    recognizer.passes[0]["on_error"](RecognitionError("no speech", fatal=False))
    service.start_pass(**recorder.callbacks())
    recognizer.passes[1]["on_error"](RecognitionError("not allowed", fatal=True))

    assert recorder.events == [("end", None), ("fatal", "not allowed")]


def test_pass_that_cannot_start_is_fatal() -> None:
    recognizer = StubRecognizer(fail_on_start=OSError("no microphone"))
    service = VoiceInputService(recognizer)
    recorder = Recorder()

    service.start_pass(**recorder.callbacks())

    assert recorder.events == [("fatal", "no microphone")]
    assert service.listening is False


def test_availability_probe_failures_mean_unavailable() -> None:
    class ExplodingRecognizer(StubRecognizer):
        def is_available(self) -> bool:
            raise RuntimeError("driver crashed")

    assert VoiceInputService(StubRecognizer(available=False)).is_available() is False
    assert VoiceInputService(ExplodingRecognizer()).is_available() is False
    assert VoiceInputService(StubRecognizer()).is_available() is True

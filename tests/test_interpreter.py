from access_assistant.settings_store import InMemorySettingsStore
from access_assistant.voice.dialogue import AssistantPhase, ConversationState, FeedbackLevel
from access_assistant.voice.interpreter import (
    NO_SETTING_SELECTED,
    SETTING_NOT_FOUND,
    CommandInterpreter,
    spoken_choices,
)


class RecordingStore(InMemorySettingsStore):
    def __init__(self) -> None:
        super().__init__()
        self.writes: list[tuple[str, object]] = []

    def set_setting(self, key, value) -> None:
        self.writes.append((key, value))
        super().set_setting(key, value)


def _active_state() -> ConversationState:
    return ConversationState(active=True, listening=True)


def test_setting_name_reads_back_current_value_and_awaits_confirmation() -> None:
    store = RecordingStore()
    state = _active_state()

    reply = CommandInterpreter(store).interpret(state, "high contrast")

    assert state.phase == AssistantPhase.AWAITING_CONFIRMATION
    assert state.pending_setting == "highContrast"
    assert reply is not None
    assert "High Contrast" in reply.speech
    assert "currently disabled" in reply.speech
    assert store.writes == []


def test_yes_flips_pending_boolean_and_clears_it() -> None:
    store = RecordingStore()
    state = _active_state()
    state.await_confirmation("highContrast")

    reply = CommandInterpreter(store).interpret(state, "yes")

    assert store.writes == [("highContrast", True)]
    assert reply.speech == "High Contrast has been enabled."
    assert reply.level == FeedbackLevel.SUCCESS
    assert state.pending_setting is None
    assert state.phase == AssistantPhase.LISTENING


def test_toggle_turns_an_enabled_setting_off() -> None:
    store = RecordingStore()
    store.set_setting("readingMode", True)
    state = _active_state()
    state.await_confirmation("readingMode")

    reply = CommandInterpreter(store).interpret(state, "toggle it")

    assert store.get_setting("readingMode") is False
    assert reply.speech == "Reading Mode has been disabled."


def test_affirmative_on_enum_setting_asks_for_a_value_without_writing() -> None:
    store = RecordingStore()
    state = _active_state()
    state.await_confirmation("colorBlindMode")

    reply = CommandInterpreter(store).interpret(state, "sure")

    assert state.phase == AssistantPhase.AWAITING_ENUM_VALUE
    assert state.pending_setting == "colorBlindMode"
    assert store.writes == []
    assert "Protanopia" in reply.speech


def test_enum_value_is_applied_and_pending_cleared() -> None:
    store = RecordingStore()
    state = _active_state()
    state.await_enum_value("colorBlindMode")

    reply = CommandInterpreter(store).interpret(state, "Set it to Protanopia please")

    assert store.writes == [("colorBlindMode", "protanopia")]
    assert state.pending_setting is None
    assert reply.speech == "Color Blind Mode set to protanopia."


def test_named_mode_wins_over_none_in_the_same_utterance() -> None:
    store = RecordingStore()
    state = _active_state()
    state.await_enum_value("colorBlindMode")

    CommandInterpreter(store).interpret(state, "none of the others, deuteranopia")

    assert store.writes == [("colorBlindMode", "deuteranopia")]


def test_enum_setting_skips_confirmation() -> None:
    state = _active_state()

    reply = CommandInterpreter(RecordingStore()).interpret(state, "color blind")

    assert state.phase == AssistantPhase.AWAITING_ENUM_VALUE
    assert "currently none" in reply.speech
    assert "Protanopia, Deuteranopia, Tritanopia, or None" in reply.speech


def test_affirmative_while_awaiting_value_repeats_the_choices() -> None:
    state = _active_state()
    state.await_enum_value("colorBlindMode")

    reply = CommandInterpreter(RecordingStore()).interpret(state, "yes")

    assert state.phase == AssistantPhase.AWAITING_ENUM_VALUE
    assert reply.feedback == "Say: Protanopia, Deuteranopia, Tritanopia, or None"


def test_affirmative_without_pending_setting_explains() -> None:
    state = _active_state()

    reply = CommandInterpreter(RecordingStore()).interpret(state, "yeah")

    assert reply.speech == NO_SETTING_SELECTED
    assert state.phase == AssistantPhase.LISTENING


def test_affirmative_is_checked_before_setting_names() -> None:
    state = _active_state()

    reply = CommandInterpreter(RecordingStore()).interpret(state, "turn on high contrast")

    assert reply.speech == NO_SETTING_SELECTED
    assert state.pending_setting is None


def test_new_setting_name_replaces_pending_one() -> None:
    state = _active_state()
    state.await_confirmation("highContrast")

    CommandInterpreter(RecordingStore()).interpret(state, "reading mode")

    assert state.pending_setting == "readingMode"


def test_unmatched_utterance_gives_silent_hint_and_keeps_state() -> None:
    store = RecordingStore()
    state = _active_state()
    interpreter = CommandInterpreter(store)

    first = interpreter.interpret(state, "order a pizza")
    second = interpreter.interpret(state, "order a pizza")

    assert first == second
    assert first.feedback == SETTING_NOT_FOUND
    assert first.speech is None
    assert state.phase == AssistantPhase.LISTENING
    assert store.writes == []


def test_short_or_pending_unmatched_utterances_are_ignored() -> None:
    interpreter = CommandInterpreter(RecordingStore())
    state = _active_state()

    assert interpreter.interpret(state, "uh") is None

    state.await_confirmation("highContrast")
    assert interpreter.interpret(state, "order a pizza") is None
    assert state.pending_setting == "highContrast"


def test_spoken_choices() -> None:
    assert spoken_choices(("en",)) == "En"
    assert spoken_choices(("en", "ur")) == "En or Ur"
    assert spoken_choices(("small", "extra-large", "medium")) == "Small, Extra-Large, or Medium"

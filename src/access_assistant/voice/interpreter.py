"""Turns recognized utterances into accessibility setting changes.

The interpreter owns no audio. Each call inspects the conversation state,
possibly writes to the settings store, updates the state and returns what the
assistant should show and say. Dispatch order, first rule that applies wins:

1. awaiting an enumerated value and the utterance names one: apply it;
2. affirmative while awaiting confirmation: flip a boolean, or ask for a value;
3. affirmative with nothing pending: explain that a setting must be named first;
4. lexicon hit: read the current value back and wait for confirmation (or
   directly for a value when the setting is enumerated);
5. otherwise a feedback-only hint for substantial utterances.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from access_assistant.settings_store import SettingKind, SettingSpec, SettingsStore, get_spec

from .dialogue import AwaitingKind, ConversationState, FeedbackLevel
from .lexicon import find_setting, find_value, is_affirmative, normalize

NO_SETTING_SELECTED = "I don't have a setting selected to toggle. Please say a setting name first."
SETTING_NOT_FOUND = "Setting not found. Try 'High Contrast', 'Large Text', etc."


@dataclass(slots=True)
class InterpreterReply:
    """What to show (``feedback``) and optionally say (``speech``) after an utterance."""

    feedback: str
    speech: str | None = None
    level: FeedbackLevel = FeedbackLevel.INFO


def spoken_choices(values: tuple[str, ...]) -> str:
    """``("a", "b", "c")`` -> ``"A, B, or C"``."""
    names = [value.title() for value in values]
    if len(names) <= 1:
        return "".join(names)
    if len(names) == 2:
        return f"{names[0]} or {names[1]}"
    return f"{', '.join(names[:-1])}, or {names[-1]}"


def _on_off(value: bool) -> str:
    return "enabled" if value else "disabled"


class CommandInterpreter:
    """Stateful matcher from utterances to setting changes."""

    def __init__(
        self,
        store: SettingsStore,
        *,
        min_unmatched_length: int = 3,
        logger: logging.Logger | None = None,
    ) -> None:
        self._store = store
        self._min_unmatched_length = min_unmatched_length
        self._logger = logger or logging.getLogger("access_assistant.voice.interpreter")

    def interpret(self, state: ConversationState, text: str) -> InterpreterReply | None:
        """Apply one final utterance to ``state``. Returns ``None`` when nothing should change."""
        command = normalize(text)
        pending = get_spec(state.pending_setting) if state.pending_setting else None

        if pending is not None and state.awaiting is AwaitingKind.ENUM_VALUE:
            value = find_value(command, pending.values)
            if value is not None:
                return self._apply_value(state, pending, value)

        if is_affirmative(command):
            if pending is None:
                return InterpreterReply(feedback=NO_SETTING_SELECTED, speech=NO_SETTING_SELECTED)
            if pending.kind is SettingKind.BOOLEAN:
                return self._toggle(state, pending)
            state.await_enum_value(pending.key)
            return self._value_prompt(pending)

        found = find_setting(command)
        if found is not None:
            return self._announce(state, get_spec(found))

        if pending is None and len(command) > self._min_unmatched_length:
            self._logger.debug("utterance_unmatched", extra={"utterance": command})
            return InterpreterReply(feedback=SETTING_NOT_FOUND)
        return None

    def _announce(self, state: ConversationState, spec: SettingSpec) -> InterpreterReply:
        current = self._store.get_setting(spec.key)
        self._logger.info("setting_matched", extra={"setting": spec.key, "current": current})

        if spec.kind is SettingKind.ENUM:
            state.await_enum_value(spec.key)
            choices = spoken_choices(spec.values)
            message = f"I found {spec.label}. It is currently {current}. You can say {choices} to change it."
            return InterpreterReply(feedback=message, speech=message)

        state.await_confirmation(spec.key)
        message = f"I found {spec.label}. It is currently {_on_off(bool(current))}. Say yes or toggle to change it."
        return InterpreterReply(feedback=message, speech=message)

    def _toggle(self, state: ConversationState, spec: SettingSpec) -> InterpreterReply:
        new_value = not bool(self._store.get_setting(spec.key))
        self._store.set_setting(spec.key, new_value)
        state.clear_pending()
        message = f"{spec.label} has been {_on_off(new_value)}."
        return InterpreterReply(feedback=message, speech=message, level=FeedbackLevel.SUCCESS)

    def _apply_value(self, state: ConversationState, spec: SettingSpec, value: str) -> InterpreterReply:
        self._store.set_setting(spec.key, value)
        state.clear_pending()
        message = f"{spec.label} set to {value}."
        return InterpreterReply(feedback=message, speech=message, level=FeedbackLevel.SUCCESS)

    @staticmethod
    def _value_prompt(spec: SettingSpec) -> InterpreterReply:
        choices = spoken_choices(spec.values)
        return InterpreterReply(
            feedback=f"Say: {choices}",
            speech=f"Please say which {spec.label} you want: {choices}.",
        )

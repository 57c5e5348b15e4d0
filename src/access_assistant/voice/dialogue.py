"""Conversation state for the voice settings assistant."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AssistantPhase(str, Enum):
    """Observable phases of a voice session."""

    IDLE = "idle"
    LISTENING = "listening"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    AWAITING_ENUM_VALUE = "awaiting_enum_value"
    SPEAKING = "speaking"


class AwaitingKind(str, Enum):
    """What the assistant expects to hear about the pending setting."""

    CONFIRMATION = "confirmation"
    ENUM_VALUE = "enum_value"


class FeedbackLevel(str, Enum):
    """Severity of the feedback message shown next to the assistant."""

    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(slots=True)
class ConversationState:
    """Tracks one voice session. A pending setting only exists while the session is active."""

    active: bool = False
    listening: bool = False
    speaking: bool = False
    pending_setting: str | None = None
    awaiting: AwaitingKind | None = None
    last_utterance: str | None = None
    feedback: str = ""
    level: FeedbackLevel = FeedbackLevel.INFO

    @property
    def phase(self) -> AssistantPhase:
        if not self.active:
            return AssistantPhase.IDLE
        if self.speaking:
            return AssistantPhase.SPEAKING
        if self.awaiting is AwaitingKind.ENUM_VALUE:
            return AssistantPhase.AWAITING_ENUM_VALUE
        if self.awaiting is AwaitingKind.CONFIRMATION:
            return AssistantPhase.AWAITING_CONFIRMATION
        return AssistantPhase.LISTENING

    def await_confirmation(self, setting: str) -> None:
        self.pending_setting = setting
        self.awaiting = AwaitingKind.CONFIRMATION

    def await_enum_value(self, setting: str) -> None:
        self.pending_setting = setting
        self.awaiting = AwaitingKind.ENUM_VALUE

    def clear_pending(self) -> None:
        self.pending_setting = None
        self.awaiting = None

    def reset(self) -> None:
        self.active = False
        self.listening = False
        self.speaking = False
        self.clear_pending()
        self.feedback = ""
        self.level = FeedbackLevel.INFO


@dataclass(frozen=True, slots=True)
class AssistantSnapshot:
    """Read-only view of the assistant for rendering."""

    active: bool
    listening: bool
    speaking: bool
    phase: AssistantPhase
    pending_setting: str | None
    feedback: str
    level: FeedbackLevel
    last_utterance: str | None

    @classmethod
    def from_state(cls, state: ConversationState) -> AssistantSnapshot:
        return cls(
            active=state.active,
            listening=state.listening,
            speaking=state.speaking,
            phase=state.phase,
            pending_setting=state.pending_setting,
            feedback=state.feedback,
            level=state.level,
            last_utterance=state.last_utterance,
        )

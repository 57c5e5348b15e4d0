"""Voice input, interpretation and output for accessibility settings."""

from .assistant import VoiceAssistant
from .dialogue import AssistantPhase, AssistantSnapshot, AwaitingKind, ConversationState, FeedbackLevel
from .errors import CapabilityUnavailableError, RecognitionError, SynthesisCancelledError, SynthesisError
from .input import VoiceInputService
from .interfaces import SpeechInput, SpeechOutput
from .interpreter import CommandInterpreter, InterpreterReply
from .output import VoiceOutputConfig, VoiceOutputService
from .scheduler import ManualScheduler, Scheduler, ThreadingScheduler

__all__ = [
    "AssistantPhase",
    "AssistantSnapshot",
    "AwaitingKind",
    "CapabilityUnavailableError",
    "CommandInterpreter",
    "ConversationState",
    "FeedbackLevel",
    "InterpreterReply",
    "ManualScheduler",
    "RecognitionError",
    "Scheduler",
    "SpeechInput",
    "SpeechOutput",
    "SynthesisCancelledError",
    "SynthesisError",
    "ThreadingScheduler",
    "VoiceAssistant",
    "VoiceInputService",
    "VoiceOutputConfig",
    "VoiceOutputService",
]

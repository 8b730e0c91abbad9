"""Core domain types and infrastructure."""

from cascada.core.constants import FrameState, InputHint, PromptType, TurnStatus
from cascada.core.message_sink import Activity, BufferedMessageSink, MessageSink
from cascada.core.turn import TurnContext
from cascada.core.types import DialogFrame, DialogStack, PendingPrompt, PromptSpec, TurnResult
from cascada.core.values import (
    BoolValue,
    FailureValue,
    NoValue,
    NumberValue,
    ResultValue,
    StepValue,
    TextValue,
)

__all__ = [
    "Activity",
    "BoolValue",
    "BufferedMessageSink",
    "DialogFrame",
    "DialogStack",
    "FailureValue",
    "FrameState",
    "InputHint",
    "MessageSink",
    "NoValue",
    "NumberValue",
    "PendingPrompt",
    "PromptSpec",
    "PromptType",
    "ResultValue",
    "StepValue",
    "TextValue",
    "TurnContext",
    "TurnResult",
    "TurnStatus",
]

"""Core type definitions for dialog state.

A conversation's durable state is a single ``DialogStack``. Everything in it
is a pydantic model so the host can persist it as JSON between turns.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from cascada.core.constants import FrameState, PromptType, TurnStatus
from cascada.core.values import NONE, NoValue, StepValue


class PromptSpec(BaseModel):
    """What to ask the user and how to recognize the answer."""

    prompt_type: PromptType = PromptType.text
    message: str = Field(description="Prompt text sent to the user")
    speak: str | None = Field(default=None, description="Spoken variant of the prompt")
    retry_message: str | None = Field(
        default=None, description="Text re-sent on invalid input (defaults to message)"
    )
    choices: list[str] = Field(default_factory=list, description="Allowed answers for choice")
    max_retries: int | None = Field(
        default=None, ge=0, description="Invalid answers tolerated before failing"
    )


class PendingPrompt(BaseModel):
    """Marks the top frame as waiting for raw input."""

    spec: PromptSpec
    attempts: int = Field(default=0, ge=0, description="Invalid answers received so far")


class DialogFrame(BaseModel):
    """One activation of a dialog on the stack."""

    frame_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    dialog_id: str
    step_index: int = Field(default=0, ge=0)
    state: FrameState = FrameState.created
    options: StepValue = Field(default=NONE)
    values: dict[str, Any] = Field(default_factory=dict)
    pending_prompt: PendingPrompt | None = None


class DialogStack(BaseModel):
    """Ordered dialog frames for one conversation, innermost last."""

    frames: list[DialogFrame] = Field(default_factory=list)

    @property
    def depth(self) -> int:
        return len(self.frames)

    @property
    def is_empty(self) -> bool:
        return not self.frames

    @property
    def active(self) -> DialogFrame | None:
        """The frame that receives the next input."""
        if not self.frames:
            return None
        return self.frames[-1]

    @property
    def parent(self) -> DialogFrame | None:
        if len(self.frames) < 2:
            return None
        return self.frames[-2]


@dataclass
class TurnResult:
    """Outcome of one turn. Transient, never persisted."""

    status: TurnStatus
    result: StepValue = field(default_factory=NoValue)

    @classmethod
    def waiting(cls) -> "TurnResult":
        return cls(TurnStatus.waiting)

    @classmethod
    def complete(cls, result: StepValue = NONE) -> "TurnResult":
        return cls(TurnStatus.complete, result)

    @classmethod
    def cancelled(cls) -> "TurnResult":
        return cls(TurnStatus.cancelled)

    @classmethod
    def empty(cls) -> "TurnResult":
        return cls(TurnStatus.empty)

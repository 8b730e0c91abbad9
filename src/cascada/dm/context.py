"""Context handed to each waterfall step."""

from dataclasses import dataclass
from typing import Any

from cascada.core.constants import InputHint, PromptType
from cascada.core.turn import TurnContext
from cascada.core.types import DialogFrame
from cascada.core.values import StepValue
from cascada.dm import directives
from cascada.dm.directives import BeginChild, End, Next, Prompt, Replace


@dataclass
class StepContext:
    """Everything a step may read, plus constructors for its directive.

    ``result`` is the resume input: the frame options on a dialog's first
    step, otherwise the previous step's, prompt's or child's result.
    """

    turn: TurnContext
    frame: DialogFrame
    result: StepValue

    @property
    def options(self) -> StepValue:
        return self.frame.options

    @property
    def values(self) -> dict[str, Any]:
        """Dialog-local data persisted with the frame."""
        return self.frame.values

    @property
    def step_index(self) -> int:
        return self.frame.step_index

    @property
    def dialog_id(self) -> str:
        return self.frame.dialog_id

    async def send(
        self,
        message: str,
        speak: str | None = None,
        input_hint: InputHint = InputHint.ignoring_input,
    ) -> None:
        await self.turn.send_activity(message, speak=speak, input_hint=input_hint)

    def next(self, result: Any = None) -> Next:
        return directives.next_step(result)

    def prompt(
        self,
        message: str,
        prompt_type: PromptType = PromptType.text,
        **kwargs: Any,
    ) -> Prompt:
        return directives.prompt(message, prompt_type, **kwargs)

    def begin_child(self, dialog_id: str, options: Any = None) -> BeginChild:
        return directives.begin_child(dialog_id, options)

    def replace(self, dialog_id: str, options: Any = None) -> Replace:
        return directives.replace(dialog_id, options)

    def end(self, result: Any = None) -> End:
        return directives.end(result)

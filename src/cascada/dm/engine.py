"""Waterfall engine.

Sequences the steps of each dialog frame, suspends a conversation when a
step prompts for input, and resumes it on the next turn:

- ``begin`` pushes a dialog and runs its first step.
- ``continue_dialog`` feeds a turn's text to the pending prompt on the top
  frame; a recognized answer resumes the frame at its next step, an
  unrecognized one re-prompts without touching the step cursor.
- ``cancel`` clears the stack without running any step.

A frame's ``step_index`` always points at the step that ran last. Resuming
a frame (after a prompt or after a child dialog ends) advances the cursor
and calls the following step with the resume value, so every step runs at
most once per pass through a frame.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from cascada.core.constants import TOO_MANY_RETRIES, InputHint
from cascada.core.errors import DialogError, DialogLoopError
from cascada.core.turn import TurnContext
from cascada.core.types import DialogFrame, DialogStack, TurnResult
from cascada.core.values import FailureValue, StepValue, coerce
from cascada.dm.context import StepContext
from cascada.dm.directives import BeginChild, End, Next, Prompt, Replace
from cascada.dm.prompts import recognize
from cascada.dm.registry import DialogRegistry, StepFunction
from cascada.flow.manager import StackManager

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS_PER_TURN = 64
DEFAULT_MAX_RETRIES = 3


class WaterfallEngine:
    """Drives waterfall dialogs on a caller-owned ``DialogStack``.

    The engine holds no per-conversation state. Callers load the stack
    before a turn, pass it in, and persist it afterwards; they must not run
    two turns against the same stack concurrently.
    """

    def __init__(
        self,
        registry: DialogRegistry,
        stack_manager: StackManager | None = None,
        max_steps_per_turn: int = DEFAULT_MAX_STEPS_PER_TURN,
        default_max_retries: int = DEFAULT_MAX_RETRIES,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.registry = registry
        self.stack_manager = stack_manager or StackManager()
        self.max_steps_per_turn = max_steps_per_turn
        self.default_max_retries = default_max_retries
        self.clock = clock

    async def begin(
        self,
        stack: DialogStack,
        turn: TurnContext,
        dialog_id: str,
        options: Any = None,
    ) -> TurnResult:
        """Push ``dialog_id`` and run its first step with ``options``.

        Raises:
            UnknownDialogError: If ``dialog_id`` is not registered (stack unchanged).
        """
        self.registry.resolve(dialog_id)
        seed = coerce(options)
        self.stack_manager.push_frame(stack, dialog_id, seed)
        logger.info(
            f"Began dialog '{dialog_id}'",
            extra={"session_id": turn.session_id, "depth": stack.depth},
        )
        return await self._run(stack, turn, seed)

    async def continue_dialog(self, stack: DialogStack, turn: TurnContext) -> TurnResult:
        """Route the turn's input to the active frame."""
        frame = self.stack_manager.get_active_frame(stack)
        if frame is None:
            return TurnResult.empty()

        pending = frame.pending_prompt
        if pending is None:
            # Nothing was asked; hand the raw text to the next step.
            return await self._run(stack, turn, coerce(turn.text), resume=True)

        value = recognize(pending.spec, turn.text, self.clock().date())
        if value is not None:
            self.stack_manager.clear_prompt(frame)
            return await self._run(stack, turn, value, resume=True)

        pending.attempts += 1
        max_retries = pending.spec.max_retries
        if max_retries is None:
            max_retries = self.default_max_retries

        if pending.attempts > max_retries:
            logger.warning(
                f"Max retries ({max_retries}) exceeded for prompt in '{frame.dialog_id}'",
                extra={"session_id": turn.session_id, "step_index": frame.step_index},
            )
            failure = FailureValue(
                error=TOO_MANY_RETRIES,
                dialog_id=frame.dialog_id,
                message=f"No valid {pending.spec.prompt_type.value} answer after "
                f"{pending.attempts} attempts",
            )
            self.stack_manager.pop_frame(stack)
            return await self._run(stack, turn, failure, resume=True)

        logger.info(
            f"Re-prompting in '{frame.dialog_id}' (attempt {pending.attempts}/{max_retries})",
            extra={"session_id": turn.session_id},
        )
        await turn.send_activity(
            pending.spec.retry_message or pending.spec.message,
            speak=pending.spec.speak,
            input_hint=InputHint.expecting_input,
        )
        return TurnResult.waiting()

    def cancel(self, stack: DialogStack) -> TurnResult:
        """Drop every frame on the stack. No step function runs."""
        removed = self.stack_manager.clear(stack)
        logger.info(f"Cancelled {len(removed)} dialog frame(s)")
        return TurnResult.cancelled()

    async def _run(
        self,
        stack: DialogStack,
        turn: TurnContext,
        value: StepValue,
        *,
        resume: bool = False,
    ) -> TurnResult:
        """Run steps until one prompts or the stack empties.

        Args:
            value: Input for the next step to run.
            resume: Advance the active frame's cursor before running it.
        """
        steps_run = 0

        while True:
            frame = self.stack_manager.get_active_frame(stack)
            if frame is None:
                logger.info("Dialog stack exhausted", extra={"session_id": turn.session_id})
                return TurnResult.complete(value)

            if resume:
                self.stack_manager.advance_step(frame)
                resume = False

            waterfall = self.registry.resolve(frame.dialog_id)
            if frame.step_index >= len(waterfall):
                # Ran off the end of the dialog: its last result goes to the parent.
                self.stack_manager.pop_frame(stack)
                resume = True
                continue

            steps_run += 1
            if steps_run > self.max_steps_per_turn:
                raise DialogLoopError(
                    f"Turn exceeded {self.max_steps_per_turn} steps without waiting for input "
                    f"(last dialog '{frame.dialog_id}')"
                )

            directive = await self._invoke(waterfall.steps[frame.step_index], turn, frame, value)
            logger.debug(
                f"{frame.dialog_id}[{frame.step_index}] {waterfall.step_name(frame.step_index)} "
                f"-> {type(directive).__name__}",
                extra={"session_id": turn.session_id},
            )

            match directive:
                case Next(result=result):
                    value = result
                    resume = True
                case Prompt(spec=spec):
                    self.stack_manager.attach_prompt(frame, spec)
                    await turn.send_activity(
                        spec.message, speak=spec.speak, input_hint=InputHint.expecting_input
                    )
                    return TurnResult.waiting()
                case BeginChild(dialog_id=dialog_id, options=options):
                    self.registry.resolve(dialog_id)
                    self.stack_manager.push_frame(stack, dialog_id, options)
                    value = options
                case Replace(dialog_id=dialog_id, options=options):
                    self.registry.resolve(dialog_id)
                    self.stack_manager.replace_top(stack, dialog_id, options)
                    value = options
                case End(result=result):
                    self.stack_manager.pop_frame(stack)
                    value = result
                    resume = True
                case _:
                    raise DialogError(
                        f"Step {waterfall.step_name(frame.step_index)} of '{frame.dialog_id}' "
                        f"returned {directive!r} instead of a directive"
                    )

    async def _invoke(
        self,
        step: StepFunction,
        turn: TurnContext,
        frame: DialogFrame,
        value: StepValue,
    ) -> Any:
        return await step(StepContext(turn=turn, frame=frame, result=value))

"""Dialog stack management.

The stack manager is the only code that changes the shape of a
``DialogStack``. Each operation rebuilds ``stack.frames`` in a single
assignment, so a stack is never observed at an intermediate depth.
"""

import logging

from cascada.core.constants import FrameState
from cascada.core.errors import DialogStackError
from cascada.core.types import DialogFrame, DialogStack, PendingPrompt, PromptSpec
from cascada.core.values import NONE, StepValue

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 16


class StackManager:
    """Manages dialog frames on a conversation's stack."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.max_depth = max_depth

    def push_frame(
        self,
        stack: DialogStack,
        dialog_id: str,
        options: StepValue = NONE,
    ) -> DialogFrame:
        """Push a new frame for ``dialog_id`` at step 0.

        Raises:
            DialogStackError: If the stack is already at ``max_depth``.
        """
        if stack.depth >= self.max_depth:
            raise DialogStackError(
                f"Cannot begin '{dialog_id}': stack depth limit {self.max_depth} reached"
            )

        frame = DialogFrame(dialog_id=dialog_id, options=options, state=FrameState.active)
        stack.frames = [*stack.frames, frame]
        logger.debug(f"Pushed frame '{dialog_id}' ({frame.frame_id}), depth={stack.depth}")
        return frame

    def pop_frame(self, stack: DialogStack) -> DialogFrame:
        """Pop the top frame and mark it ended.

        Raises:
            DialogStackError: If stack is empty.
        """
        if stack.is_empty:
            raise DialogStackError("Cannot pop from empty dialog stack")

        popped = stack.frames[-1]
        stack.frames = stack.frames[:-1]
        popped.state = FrameState.ended
        popped.pending_prompt = None
        logger.debug(f"Popped frame '{popped.dialog_id}', depth={stack.depth}")
        return popped

    def replace_top(
        self,
        stack: DialogStack,
        dialog_id: str,
        options: StepValue = NONE,
    ) -> DialogFrame:
        """Swap the top frame for a fresh ``dialog_id`` frame at step 0.

        Raises:
            DialogStackError: If stack is empty.
        """
        if stack.is_empty:
            raise DialogStackError(f"Cannot replace with '{dialog_id}': dialog stack is empty")

        old = stack.frames[-1]
        frame = DialogFrame(dialog_id=dialog_id, options=options, state=FrameState.active)
        stack.frames = [*stack.frames[:-1], frame]
        old.state = FrameState.ended
        old.pending_prompt = None
        logger.debug(f"Replaced '{old.dialog_id}' with '{dialog_id}', depth={stack.depth}")
        return frame

    def clear(self, stack: DialogStack) -> list[DialogFrame]:
        """Remove every frame. Returns the removed frames, innermost last."""
        removed = stack.frames
        stack.frames = []
        for frame in removed:
            frame.state = FrameState.ended
            frame.pending_prompt = None
        return removed

    def get_active_frame(self, stack: DialogStack) -> DialogFrame | None:
        """Get the frame that receives the next input."""
        return stack.active

    def advance_step(self, frame: DialogFrame) -> int:
        """Move the frame's cursor to its next step."""
        frame.step_index += 1
        return frame.step_index

    def attach_prompt(self, frame: DialogFrame, spec: PromptSpec) -> PendingPrompt:
        """Suspend the frame until input matching ``spec`` arrives."""
        frame.pending_prompt = PendingPrompt(spec=spec)
        frame.state = FrameState.awaiting_input
        return frame.pending_prompt

    def clear_prompt(self, frame: DialogFrame) -> None:
        """Resolve the frame's pending prompt."""
        frame.pending_prompt = None
        frame.state = FrameState.active

"""Unit tests for StackManager."""

import pytest

from cascada.core.constants import FrameState
from cascada.core.errors import DialogStackError
from cascada.core.types import DialogStack, PromptSpec
from cascada.core.values import NONE, TextValue
from cascada.flow.manager import StackManager


class TestStackManagerPushFrame:
    """Tests for pushing frames onto the stack."""

    def test_push_frame_on_empty_stack(self):
        """
        GIVEN an empty stack
        WHEN pushing a dialog
        THEN stack has 1 active frame at step 0
        """
        # Arrange
        stack = DialogStack()
        manager = StackManager()

        # Act
        frame = manager.push_frame(stack, "main", TextValue(text="hola"))

        # Assert
        assert stack.depth == 1
        assert stack.active is frame
        assert frame.step_index == 0
        assert frame.state == FrameState.active
        assert frame.options == TextValue(text="hola")

    def test_push_frame_at_max_depth_raises_and_leaves_stack(self):
        """
        GIVEN a stack at the depth limit
        WHEN pushing another dialog
        THEN DialogStackError is raised and depth is unchanged
        """
        # Arrange
        stack = DialogStack()
        manager = StackManager(max_depth=2)
        manager.push_frame(stack, "a")
        manager.push_frame(stack, "b")

        # Act & Assert
        with pytest.raises(DialogStackError):
            manager.push_frame(stack, "c")
        assert [f.dialog_id for f in stack.frames] == ["a", "b"]


class TestStackManagerPopFrame:
    """Tests for popping frames."""

    def test_pop_frame_on_empty_stack_raises_error(self):
        with pytest.raises(DialogStackError):
            StackManager().pop_frame(DialogStack())

    def test_pop_frame_returns_ended_frame(self):
        # Arrange
        stack = DialogStack()
        manager = StackManager()
        manager.push_frame(stack, "main")
        child = manager.push_frame(stack, "booking")
        manager.attach_prompt(child, PromptSpec(message="Where to?"))

        # Act
        popped = manager.pop_frame(stack)

        # Assert
        assert popped is child
        assert popped.state == FrameState.ended
        assert popped.pending_prompt is None
        assert stack.active.dialog_id == "main"


class TestStackManagerReplaceTop:
    """Tests for replacing the top frame."""

    def test_replace_top_resets_step_index(self):
        """
        GIVEN a top frame advanced to step 2
        WHEN it is replaced
        THEN the new frame starts at step 0 with the new options and depth is unchanged
        """
        # Arrange
        stack = DialogStack()
        manager = StackManager()
        manager.push_frame(stack, "root")
        frame = manager.push_frame(stack, "main")
        frame.step_index = 2

        # Act
        new_frame = manager.replace_top(stack, "main", TextValue(text="esperando respuesta."))

        # Assert
        assert stack.depth == 2
        assert stack.active is new_frame
        assert new_frame.step_index == 0
        assert new_frame.frame_id != frame.frame_id
        assert new_frame.options == TextValue(text="esperando respuesta.")
        assert frame.state == FrameState.ended

    def test_replace_top_on_empty_stack_raises(self):
        with pytest.raises(DialogStackError):
            StackManager().replace_top(DialogStack(), "main")


class TestStackManagerPrompts:
    """Tests for prompt bookkeeping."""

    def test_attach_and_clear_prompt(self):
        # Arrange
        stack = DialogStack()
        manager = StackManager()
        frame = manager.push_frame(stack, "main")

        # Act
        pending = manager.attach_prompt(frame, PromptSpec(message="Name?"))

        # Assert
        assert frame.pending_prompt is pending
        assert pending.attempts == 0
        assert frame.state == FrameState.awaiting_input

        manager.clear_prompt(frame)
        assert frame.pending_prompt is None
        assert frame.state == FrameState.active


def test_clear_removes_every_frame():
    # Arrange
    stack = DialogStack()
    manager = StackManager()
    manager.push_frame(stack, "main")
    manager.push_frame(stack, "booking")

    # Act
    removed = manager.clear(stack)

    # Assert
    assert stack.is_empty
    assert [f.dialog_id for f in removed] == ["main", "booking"]
    assert all(f.state == FrameState.ended for f in removed)


def test_advance_step_and_active_frame():
    stack = DialogStack()
    manager = StackManager()
    frame = manager.push_frame(stack, "main", NONE)

    assert manager.advance_step(frame) == 1
    assert manager.get_active_frame(stack) is frame

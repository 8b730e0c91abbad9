"""Tests for dialog state models."""

from cascada.core.constants import FrameState, PromptType, TurnStatus
from cascada.core.types import (
    DialogFrame,
    DialogStack,
    PendingPrompt,
    PromptSpec,
    TurnResult,
)
from cascada.core.values import NONE, ResultValue, TextValue


class TestDialogStack:
    """Tests for DialogStack accessors."""

    def test_empty_stack(self):
        stack = DialogStack()

        assert stack.is_empty
        assert stack.depth == 0
        assert stack.active is None
        assert stack.parent is None

    def test_active_is_innermost_frame(self):
        main = DialogFrame(dialog_id="main")
        child = DialogFrame(dialog_id="booking")
        stack = DialogStack(frames=[main, child])

        assert stack.depth == 2
        assert stack.active is child
        assert stack.parent is main

    def test_json_round_trip_keeps_typed_values(self):
        """
        GIVEN a stack whose frames hold options, values and a pending prompt
        WHEN dumped to JSON and validated back
        THEN every field, including the value union members, survives
        """
        # Arrange
        stack = DialogStack(
            frames=[
                DialogFrame(dialog_id="main", step_index=1, options=TextValue(text="hola")),
                DialogFrame(
                    dialog_id="booking",
                    step_index=2,
                    state=FrameState.awaiting_input,
                    options=ResultValue(type="booking_details", payload={"origin": None}),
                    values={"details": {"destination": "Lima"}},
                    pending_prompt=PendingPrompt(
                        spec=PromptSpec(prompt_type=PromptType.date, message="When?"),
                        attempts=1,
                    ),
                ),
            ]
        )

        # Act
        restored = DialogStack.model_validate_json(stack.model_dump_json())

        # Assert
        assert restored == stack
        assert isinstance(restored.frames[0].options, TextValue)
        assert isinstance(restored.frames[1].options, ResultValue)
        assert restored.frames[1].pending_prompt.spec.prompt_type == PromptType.date


class TestDialogFrame:
    def test_defaults(self):
        frame = DialogFrame(dialog_id="main")

        assert frame.step_index == 0
        assert frame.options == NONE
        assert frame.pending_prompt is None
        assert frame.frame_id

    def test_frame_ids_are_unique(self):
        assert DialogFrame(dialog_id="a").frame_id != DialogFrame(dialog_id="a").frame_id


def test_turn_result_factories():
    assert TurnResult.waiting().status == TurnStatus.waiting
    assert TurnResult.cancelled().status == TurnStatus.cancelled
    assert TurnResult.empty().status == TurnStatus.empty
    assert TurnResult.complete(TextValue(text="done")).result == TextValue(text="done")


def test_turn_result_defaults_to_no_value():
    assert TurnResult(TurnStatus.waiting).result == NONE
    assert TurnResult.complete().result.kind == "none"

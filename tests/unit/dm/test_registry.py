"""Tests for DialogRegistry and directive factories."""

import logging

import pytest

from cascada.core.constants import PromptType
from cascada.core.errors import UnknownDialogError
from cascada.core.values import NONE, BoolValue, NoValue, TextValue
from cascada.dm.directives import (
    BeginChild,
    End,
    Next,
    Prompt,
    Replace,
    begin_child,
    end,
    next_step,
    prompt,
    replace,
)
from cascada.dm.registry import DialogRegistry, Waterfall


async def only_step(step):
    return step.end()


class TestDialogRegistry:
    """Tests for registering and resolving dialogs."""

    def test_register_and_resolve(self):
        # Arrange
        registry = DialogRegistry()

        # Act
        registry.register("greet", only_step)

        # Assert
        waterfall = registry.resolve("greet")
        assert waterfall.dialog_id == "greet"
        assert len(waterfall) == 1
        assert waterfall.step_name(0) == "only_step"
        assert "greet" in registry
        assert registry.list_dialogs() == ["greet"]

    def test_resolve_unknown_lists_available(self):
        registry = DialogRegistry([Waterfall("main", (only_step,))])

        with pytest.raises(UnknownDialogError) as exc_info:
            registry.resolve("booking")

        assert exc_info.value.available == ["main"]

    def test_overwrite_warns(self, caplog):
        registry = DialogRegistry().register("main", only_step)

        with caplog.at_level(logging.WARNING, logger="cascada.dm.registry"):
            registry.register("main", only_step, only_step)

        assert "already registered" in caplog.text
        assert len(registry.resolve("main")) == 2

    def test_registries_are_independent(self):
        first = DialogRegistry().register("main", only_step)
        second = DialogRegistry()

        assert "main" in first
        assert "main" not in second

    def test_empty_waterfall_is_rejected(self):
        with pytest.raises(ValueError):
            Waterfall("empty", ())


class TestDirectiveFactories:
    """Tests for the directive constructors."""

    def test_plain_values_are_coerced(self):
        assert next_step("x") == Next(TextValue(text="x"))
        assert end(True) == End(BoolValue(value=True))
        assert begin_child("booking") == BeginChild("booking", NONE)
        assert replace("main", "esperando respuesta.") == Replace(
            "main", TextValue(text="esperando respuesta.")
        )

    def test_prompt_builds_spec(self):
        directive = prompt("Sure?", PromptType.confirm, retry_message="Yes or no?", max_retries=2)

        assert isinstance(directive, Prompt)
        assert directive.spec.prompt_type == PromptType.confirm
        assert directive.spec.retry_message == "Yes or no?"
        assert directive.spec.max_retries == 2

    def test_directives_default_to_no_value(self):
        """
        GIVEN directives built without a value
        WHEN their value fields are read
        THEN each holds its own NoValue
        """
        # Act
        first, second = Next(), Next()

        # Assert
        assert first.result == NoValue()
        assert first.result is not second.result
        assert End().result == NoValue()
        assert BeginChild("child").options == NoValue()
        assert Replace("other").options == NoValue()

"""Directive types returned by waterfall steps.

A step returns exactly one directive telling the engine how to proceed.
Directives form a closed union; the engine matches on it exhaustively.
"""

from dataclasses import dataclass, field
from typing import Any

from cascada.core.constants import PromptType
from cascada.core.types import PromptSpec
from cascada.core.values import NoValue, StepValue, coerce

# ─────────────────────────────────────────────────────────────────
# Directive Types
# ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Next:
    """Advance to the next step of the same frame."""

    result: StepValue = field(default_factory=NoValue)


@dataclass(frozen=True)
class Prompt:
    """Suspend the frame until the user answers."""

    spec: PromptSpec


@dataclass(frozen=True)
class BeginChild:
    """Start a child dialog on top of the current frame."""

    dialog_id: str
    options: StepValue = field(default_factory=NoValue)


@dataclass(frozen=True)
class Replace:
    """Restart with a fresh dialog in place of the current frame."""

    dialog_id: str
    options: StepValue = field(default_factory=NoValue)


@dataclass(frozen=True)
class End:
    """Finish the current frame, handing ``result`` to its parent."""

    result: StepValue = field(default_factory=NoValue)


Directive = Next | Prompt | BeginChild | Replace | End


# ─────────────────────────────────────────────────────────────────
# Factory Functions
# ─────────────────────────────────────────────────────────────────


def next_step(result: Any = None) -> Next:
    """Create a Next directive."""
    return Next(coerce(result))


def prompt(
    message: str,
    prompt_type: PromptType = PromptType.text,
    *,
    speak: str | None = None,
    retry_message: str | None = None,
    choices: list[str] | None = None,
    max_retries: int | None = None,
) -> Prompt:
    """Create a Prompt directive."""
    spec = PromptSpec(
        prompt_type=prompt_type,
        message=message,
        speak=speak,
        retry_message=retry_message,
        choices=choices or [],
        max_retries=max_retries,
    )
    return Prompt(spec)


def begin_child(dialog_id: str, options: Any = None) -> BeginChild:
    """Create a BeginChild directive."""
    return BeginChild(dialog_id, coerce(options))


def replace(dialog_id: str, options: Any = None) -> Replace:
    """Create a Replace directive."""
    return Replace(dialog_id, coerce(options))


def end(result: Any = None) -> End:
    """Create an End directive."""
    return End(coerce(result))

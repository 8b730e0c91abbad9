"""Dialog management: directives, prompts, registry and the waterfall engine."""

from cascada.dm.context import StepContext
from cascada.dm.directives import (
    BeginChild,
    Directive,
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
from cascada.dm.engine import WaterfallEngine
from cascada.dm.registry import DialogRegistry, StepFunction, Waterfall

__all__ = [
    "BeginChild",
    "DialogRegistry",
    "Directive",
    "End",
    "Next",
    "Prompt",
    "Replace",
    "StepContext",
    "StepFunction",
    "Waterfall",
    "WaterfallEngine",
    "begin_child",
    "end",
    "next_step",
    "prompt",
    "replace",
]

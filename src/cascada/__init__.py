"""Cascada - waterfall dialogs for a scripted ordering assistant.

A conversation is a stack of dialog frames. Each turn resumes the
innermost frame, runs its steps until one waits for input, and the
host persists the stack until the next message arrives.

Quick start:
    from cascada import ConversationRuntime

    async with ConversationRuntime() as runtime:
        response = await runtime.process_message("hola", user_id="u1")
        print(response.text)
"""

from cascada.__version__ import __version__
from cascada.config import CascadaConfig, ConfigLoader
from cascada.core.errors import CascadaError
from cascada.dm import DialogRegistry, WaterfallEngine
from cascada.runtime import ConversationRuntime, TurnResponse

__all__ = [
    "CascadaConfig",
    "CascadaError",
    "ConfigLoader",
    "ConversationRuntime",
    "DialogRegistry",
    "TurnResponse",
    "WaterfallEngine",
    "__version__",
]

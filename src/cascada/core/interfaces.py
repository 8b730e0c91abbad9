"""Core interfaces (Protocols) for the collaborators the engine calls."""

from typing import Protocol

from cascada.core.types import DialogStack
from cascada.du.models import IntentResult


class IIntentClassifier(Protocol):
    """Interface for intent classifiers.

    Callers must check ``is_configured`` before calling ``classify``: an
    unconfigured classifier is a recognized degraded mode, not an error.
    """

    @property
    def is_configured(self) -> bool:
        """Whether the classifier can be called."""
        ...

    async def classify(self, text: str) -> IntentResult:
        """Return the top intent for ``text``.

        Raises:
            ClassifierError: If the underlying provider fails.
        """
        ...


class ISessionStore(Protocol):
    """Interface for per-session dialog state persistence."""

    async def load(self, session_id: str) -> DialogStack:
        """Load the stack for a session (an empty stack if none is stored)."""
        ...

    async def save(self, session_id: str, stack: DialogStack) -> None:
        """Persist the stack for a session."""
        ...

    async def delete(self, session_id: str) -> None:
        """Forget a session."""
        ...

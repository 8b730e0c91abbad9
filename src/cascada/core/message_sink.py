"""MessageSink interface for outbound message delivery.

This module defines the abstract interface and implementations for
delivering bot messages to a channel while a turn executes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from cascada.core.constants import InputHint


@dataclass(frozen=True)
class Activity:
    """One outbound message."""

    text: str
    speak: str | None = None
    input_hint: InputHint = InputHint.ignoring_input


class MessageSink(ABC):
    """Interface for delivering messages to the user (DIP)."""

    @abstractmethod
    async def send(
        self,
        message: str,
        speak: str | None = None,
        input_hint: InputHint = InputHint.ignoring_input,
    ) -> None:
        """Deliver a message. Must complete (or be durably queued) before returning."""
        ...


class BufferedMessageSink(MessageSink):
    """Buffers messages for testing or batch delivery."""

    def __init__(self) -> None:
        self.activities: list[Activity] = []

    async def send(
        self,
        message: str,
        speak: str | None = None,
        input_hint: InputHint = InputHint.ignoring_input,
    ) -> None:
        """Append message to buffer."""
        self.activities.append(Activity(message, speak, input_hint))

    @property
    def messages(self) -> list[str]:
        return [activity.text for activity in self.activities]

    def clear(self) -> None:
        """Clear the message buffer."""
        self.activities.clear()

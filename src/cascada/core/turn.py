"""Per-turn context supplied by the host for each inbound message."""

import logging

from cascada.core.constants import InputHint
from cascada.core.message_sink import Activity, MessageSink

logger = logging.getLogger(__name__)


class TurnContext:
    """Inbound text plus the means to emit outbound messages for one turn.

    Every activity sent during the turn is recorded on ``activities`` so the
    host can return them, and forwarded to ``sink`` when one is attached.
    """

    def __init__(
        self,
        text: str | None,
        sink: MessageSink | None = None,
        session_id: str | None = None,
    ) -> None:
        self.text = text
        self.sink = sink
        self.session_id = session_id
        self.activities: list[Activity] = []

    async def send_activity(
        self,
        message: str,
        speak: str | None = None,
        input_hint: InputHint = InputHint.ignoring_input,
    ) -> None:
        """Send a message to the user and wait for the sink to accept it."""
        self.activities.append(Activity(message, speak, input_hint))
        logger.debug(f"Outbound ({input_hint.value}): {message}")
        if self.sink is not None:
            await self.sink.send(message, speak=speak, input_hint=input_hint)

    @property
    def responses(self) -> list[str]:
        return [activity.text for activity in self.activities]

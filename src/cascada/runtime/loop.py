"""Conversation runtime: the host side of a turn.

Loads the session's dialog stack, runs one engine turn against it and
saves the result. Turns for the same session are serialized with a
per-session lock; turns for different sessions run concurrently.
"""

import asyncio
import logging
from collections import Counter
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from cascada.config.models import CascadaConfig
from cascada.core.constants import TurnStatus
from cascada.core.dspy_service import DSPyBootstrapper
from cascada.core.interfaces import IIntentClassifier, ISessionStore
from cascada.core.message_sink import Activity, MessageSink
from cascada.core.turn import TurnContext
from cascada.core.types import DialogStack, TurnResult
from cascada.core.values import FailureValue
from cascada.dialogs import MAIN_DIALOG_ID, build_registry
from cascada.dm.engine import WaterfallEngine
from cascada.dm.registry import DialogRegistry
from cascada.du.classifier import DSPyIntentClassifier
from cascada.flow.manager import StackManager
from cascada.observability.logging import ContextLogger
from cascada.runtime.store import create_session_store

logger = logging.getLogger(__name__)
turn_logger = ContextLogger(__name__)


@dataclass
class TurnResponse:
    """What the host hands back to the channel after a turn."""

    status: TurnStatus
    activities: list[Activity] = field(default_factory=list)
    active_dialog: str | None = None
    depth: int = 0

    @property
    def messages(self) -> list[str]:
        return [activity.text for activity in self.activities]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)


class ConversationRuntime:
    """Runs turns of the main dialog for many sessions.

    Usage:
        async with ConversationRuntime(config) as runtime:
            response = await runtime.process_message("hola", user_id="u1")
    """

    def __init__(
        self,
        config: CascadaConfig | None = None,
        classifier: IIntentClassifier | None = None,
        store: ISessionStore | None = None,
        registry: DialogRegistry | None = None,
        message_sink: MessageSink | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config or CascadaConfig()
        self.message_sink = message_sink
        self.clock = clock
        self._classifier = classifier
        self._store = store
        self._registry = registry
        self._engine: WaterfallEngine | None = None
        self._store_cm: AbstractAsyncContextManager[Any] | None = None
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_holders: Counter[str] = Counter()

    async def initialize(self) -> None:
        """Build the classifier, store, registry and engine not injected by the caller."""
        settings = self.config.settings

        if self._classifier is None:
            DSPyBootstrapper.bootstrap(self.config)
            self._classifier = DSPyIntentClassifier.from_config(settings.classifier)

        if self._store is None:
            self._store, self._store_cm = await create_session_store(settings.persistence)

        if self._registry is None:
            self._registry = build_registry(self._classifier, settings.bot, clock=self.clock)

        self._engine = WaterfallEngine(
            self._registry,
            stack_manager=StackManager(max_depth=settings.engine.max_stack_depth),
            max_steps_per_turn=settings.engine.max_steps_per_turn,
            default_max_retries=settings.engine.default_max_retries,
            clock=self.clock,
        )
        logger.info(
            f"Runtime ready (classifier configured: {self._classifier.is_configured}, "
            f"dialogs: {self._registry.list_dialogs()})"
        )

    async def cleanup(self) -> None:
        if self._store_cm is not None:
            await self._store_cm.__aexit__(None, None, None)
            self._store_cm = None

    async def __aenter__(self) -> "ConversationRuntime":
        await self.initialize()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.cleanup()

    @property
    def engine(self) -> WaterfallEngine:
        if self._engine is None:
            raise RuntimeError("ConversationRuntime not initialized. Use 'async with' context.")
        return self._engine

    @property
    def store(self) -> ISessionStore:
        if self._store is None:
            raise RuntimeError("ConversationRuntime not initialized. Use 'async with' context.")
        return self._store

    @property
    def classifier(self) -> IIntentClassifier | None:
        return self._classifier

    async def process_message(self, message: str, user_id: str = "default") -> TurnResponse:
        """Run one turn for ``user_id``.

        The first message of a session begins the main dialog; later ones
        resume it. State is saved only when the turn finishes without error,
        so a failed turn leaves the session as it was.
        """
        engine = self.engine
        async with self._session_lock(user_id):
            stack = await self.store.load(user_id)
            turn = TurnContext(message, sink=self.message_sink, session_id=user_id)

            if self._is_cancel_request(message) and not stack.is_empty:
                result = engine.cancel(stack)
                await turn.send_activity(self.config.settings.cancellation.response_message)
            else:
                result = await engine.continue_dialog(stack, turn)
                if result.status == TurnStatus.empty:
                    result = await engine.begin(stack, turn, MAIN_DIALOG_ID)

            if result.status == TurnStatus.complete and isinstance(result.result, FailureValue):
                logger.warning(
                    f"Conversation ended with failure '{result.result.error}'",
                    extra={"session_id": user_id},
                )
                await turn.send_activity(self.config.settings.bot.failure_message)

            await self.store.save(user_id, stack)

        turn_logger.with_context(session_id=user_id).info(
            f"Turn finished: {result.status.value} (depth={stack.depth}, "
            f"messages={len(turn.activities)})"
        )
        return self._response(result, turn, stack)

    async def cancel(self, user_id: str) -> TurnResponse:
        """Cancel every dialog of a session from outside a turn."""
        async with self._session_lock(user_id):
            stack = await self.store.load(user_id)
            result = self.engine.cancel(stack)
            await self.store.save(user_id, stack)
        return self._response(result, TurnContext(None, session_id=user_id), stack)

    async def reset(self, user_id: str) -> None:
        """Forget a session entirely."""
        async with self._session_lock(user_id):
            await self.store.delete(user_id)

    async def get_stack(self, user_id: str) -> DialogStack:
        return await self.store.load(user_id)

    @asynccontextmanager
    async def _session_lock(self, user_id: str) -> AsyncIterator[None]:
        """Hold the session's lock; it is dropped once no turn holds or awaits it."""
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._lock_holders[user_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._lock_holders[user_id] -= 1
            if not self._lock_holders[user_id]:
                del self._lock_holders[user_id]
                del self._locks[user_id]

    def _is_cancel_request(self, message: str) -> bool:
        cancellation = self.config.settings.cancellation
        return cancellation.enabled and message.strip().lower() in cancellation.keywords

    def _response(self, result: TurnResult, turn: TurnContext, stack: DialogStack) -> TurnResponse:
        active = stack.active
        return TurnResponse(
            status=result.status,
            activities=list(turn.activities),
            active_dialog=active.dialog_id if active else None,
            depth=stack.depth,
        )


__all__ = ["ConversationRuntime", "TurnResponse"]

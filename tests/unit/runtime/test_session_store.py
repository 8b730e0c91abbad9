"""Tests for the LangGraph-backed session store."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langgraph.store.memory import InMemoryStore

from cascada.config.models import PersistenceConfig
from cascada.core.errors import PersistenceError
from cascada.core.types import DialogFrame, DialogStack, PendingPrompt, PromptSpec
from cascada.core.values import TextValue
from cascada.runtime.store import SESSION_NAMESPACE, LangGraphSessionStore, create_session_store


def sample_stack() -> DialogStack:
    return DialogStack(
        frames=[
            DialogFrame(dialog_id="main", step_index=1, options=TextValue(text="hola")),
            DialogFrame(
                dialog_id="booking",
                values={"details": {"destination": "Lima"}},
                pending_prompt=PendingPrompt(spec=PromptSpec(message="From where?")),
            ),
        ]
    )


class TestLangGraphSessionStore:
    """Tests for load/save/delete."""

    @pytest.mark.asyncio
    async def test_unknown_session_loads_empty_stack(self):
        store = LangGraphSessionStore()

        stack = await store.load("nobody")

        assert stack.is_empty

    @pytest.mark.asyncio
    async def test_save_then_load_round_trips(self):
        """
        GIVEN a stack with nested frames and a pending prompt
        WHEN saved and loaded again
        THEN the loaded stack equals the saved one
        """
        # Arrange
        store = LangGraphSessionStore(InMemoryStore())
        stack = sample_stack()

        # Act
        await store.save("u1", stack)
        loaded = await store.load("u1")

        # Assert
        assert loaded == stack
        assert loaded is not stack

    @pytest.mark.asyncio
    async def test_sessions_are_isolated(self):
        store = LangGraphSessionStore()
        await store.save("u1", sample_stack())

        assert (await store.load("u2")).is_empty

    @pytest.mark.asyncio
    async def test_delete_forgets_session(self):
        store = LangGraphSessionStore()
        await store.save("u1", sample_stack())

        await store.delete("u1")

        assert (await store.load("u1")).is_empty

    @pytest.mark.asyncio
    async def test_corrupt_document_raises_persistence_error(self):
        backing = InMemoryStore()
        await backing.aput(SESSION_NAMESPACE, "u1", {"frames": [{"step_index": "x"}]})
        store = LangGraphSessionStore(backing)

        with pytest.raises(PersistenceError, match="Corrupt"):
            await store.load("u1")

    @pytest.mark.asyncio
    async def test_backend_failure_raises_persistence_error(self):
        backing = MagicMock()
        backing.aget = AsyncMock(side_effect=ConnectionError("db down"))
        backing.aput = AsyncMock(side_effect=ConnectionError("db down"))
        store = LangGraphSessionStore(backing)

        with pytest.raises(PersistenceError):
            await store.load("u1")
        with pytest.raises(PersistenceError):
            await store.save("u1", DialogStack())


@pytest.mark.asyncio
async def test_memory_backend_factory():
    store, cm = await create_session_store(PersistenceConfig(backend="memory"))

    assert isinstance(store.store, InMemoryStore)
    assert cm is None

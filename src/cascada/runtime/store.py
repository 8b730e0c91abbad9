"""Session store backed by a LangGraph ``BaseStore``.

Supports multiple backends:
- memory: In-memory (development/testing)
- sqlite: SQLite file-based (local persistence)
- postgres: PostgreSQL (production)
"""

import copy
import logging
from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import Any

from langgraph.store.base import BaseStore
from langgraph.store.memory import InMemoryStore
from pydantic import ValidationError

from cascada.config.models import PersistenceConfig
from cascada.core.errors import ConfigError, PersistenceError
from cascada.core.types import DialogStack

logger = logging.getLogger(__name__)

SESSION_NAMESPACE = ("cascada", "sessions")


class LangGraphSessionStore:
    """Persists one ``DialogStack`` per session as a JSON document."""

    def __init__(
        self,
        store: BaseStore | None = None,
        namespace: tuple[str, ...] = SESSION_NAMESPACE,
    ) -> None:
        self.store = store if store is not None else InMemoryStore()
        self.namespace = namespace

    async def load(self, session_id: str) -> DialogStack:
        """Load the stack for a session (an empty stack if none is stored).

        Raises:
            PersistenceError: If the store fails or holds unreadable data.
        """
        try:
            item = await self.store.aget(self.namespace, session_id)
        except Exception as e:
            raise PersistenceError(f"Failed to load session '{session_id}': {e}") from e

        if item is None:
            return DialogStack()

        try:
            return DialogStack.model_validate(copy.deepcopy(item.value))
        except ValidationError as e:
            raise PersistenceError(f"Corrupt dialog state for session '{session_id}': {e}") from e

    async def save(self, session_id: str, stack: DialogStack) -> None:
        """Persist the stack for a session."""
        try:
            await self.store.aput(self.namespace, session_id, stack.model_dump(mode="json"))
        except Exception as e:
            raise PersistenceError(f"Failed to save session '{session_id}': {e}") from e
        logger.debug(f"Saved session '{session_id}' (depth={stack.depth})")

    async def delete(self, session_id: str) -> None:
        """Forget a session."""
        try:
            await self.store.adelete(self.namespace, session_id)
        except Exception as e:
            raise PersistenceError(f"Failed to delete session '{session_id}': {e}") from e


async def create_session_store(
    config: PersistenceConfig,
) -> tuple[LangGraphSessionStore, AbstractAsyncContextManager[Any] | None]:
    """Create a session store from config.

    Args:
        config: Persistence configuration.

    Returns:
        Tuple of (session store, context manager to exit on shutdown or None).

    Raises:
        ConfigError: If the backend's dependencies are missing.
    """
    if config.backend == "memory":
        logger.debug("Creating in-memory session store")
        return LangGraphSessionStore(InMemoryStore()), None

    if config.backend == "sqlite":
        return await _create_sqlite_store(config)

    if config.backend == "postgres":
        return await _create_postgres_store(config)

    raise ConfigError(f"Unknown persistence backend: {config.backend}")


async def _create_sqlite_store(
    config: PersistenceConfig,
) -> tuple[LangGraphSessionStore, AbstractAsyncContextManager[Any]]:
    try:
        from langgraph.store.sqlite.aio import AsyncSqliteStore
    except ImportError as e:
        raise ConfigError(
            "SQLite persistence requires 'langgraph-checkpoint-sqlite'. "
            "Install with: pip install langgraph-checkpoint-sqlite"
        ) from e

    path = Path(config.path)
    path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Creating SQLite session store at {path}")
    store_cm = AsyncSqliteStore.from_conn_string(str(path))
    store = await store_cm.__aenter__()
    await store.setup()
    return LangGraphSessionStore(store), store_cm


async def _create_postgres_store(
    config: PersistenceConfig,
) -> tuple[LangGraphSessionStore, AbstractAsyncContextManager[Any]]:
    try:
        from langgraph.store.postgres.aio import AsyncPostgresStore
    except ImportError as e:
        raise ConfigError(
            "Postgres persistence requires 'langgraph-checkpoint-postgres'. "
            "Install with: pip install langgraph-checkpoint-postgres"
        ) from e

    logger.info("Creating Postgres session store")
    store_cm = AsyncPostgresStore.from_conn_string(config.path)
    store = await store_cm.__aenter__()
    await store.setup()
    return LangGraphSessionStore(store), store_cm

"""Runtime module: session persistence and the per-turn host loop."""

from cascada.runtime.loop import ConversationRuntime, TurnResponse
from cascada.runtime.store import LangGraphSessionStore, create_session_store

__all__ = ["ConversationRuntime", "LangGraphSessionStore", "TurnResponse", "create_session_store"]

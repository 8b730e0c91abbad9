"""Cascada Server Module.

Provides the FastAPI REST API over the conversation runtime.
"""

from cascada.server.api import app, create_app
from cascada.server.models import (
    HealthResponse,
    MessageRequest,
    MessageResponse,
    ResetResponse,
    StateResponse,
)

__all__ = [
    "app",
    "create_app",
    "MessageRequest",
    "MessageResponse",
    "HealthResponse",
    "StateResponse",
    "ResetResponse",
]

"""API Models - Pydantic models for FastAPI endpoints.

Defines request and response schemas for the Cascada REST API.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class MessageRequest(BaseModel):
    """Request model for processing a user message."""

    user_id: str = Field(description="Unique identifier for the conversation")
    message: str = Field(min_length=1, description="User's input message")


class MessageResponse(BaseModel):
    """Response model for processed messages."""

    response: str = Field(description="Assistant's messages joined by newlines")
    messages: list[str] = Field(default_factory=list, description="Individual messages sent")
    status: str = Field(description="Turn outcome (waiting, complete, cancelled, empty)")
    active_dialog: str | None = Field(
        default=None, description="Dialog that receives the next message, if any"
    )
    depth: int = Field(default=0, description="Number of dialogs on the stack")


class FrameSummary(BaseModel):
    """One dialog frame as exposed to clients."""

    dialog_id: str
    step_index: int
    state: str
    awaiting_input: bool


class StateResponse(BaseModel):
    """Response model for conversation state endpoint."""

    user_id: str
    depth: int
    active_dialog: str | None
    awaiting_input: bool
    frames: list[FrameSummary]


class ResetResponse(BaseModel):
    """Response model for reset and cancel endpoints."""

    success: bool
    message: str


class ComponentStatus(BaseModel):
    """Status of a single component."""

    name: str
    status: Literal["healthy", "degraded", "unhealthy"]
    message: str | None = None


class HealthResponse(BaseModel):
    """Health check response with component details."""

    status: Literal["healthy", "starting", "degraded", "unhealthy"]
    version: str
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
    components: dict[str, ComponentStatus] | None = None


class ReadinessResponse(BaseModel):
    """Readiness probe response."""

    ready: bool
    message: str
    checks: dict[str, bool] | None = None


class VersionResponse(BaseModel):
    """Response model for version endpoint."""

    version: str = Field(description="Full version string")
    major: int = Field(description="Major version number")
    minor: int = Field(description="Minor version number")
    patch: str = Field(description="Patch version (may include suffix)")

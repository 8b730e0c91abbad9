"""Cascada FastAPI Application.

Exposes the conversation runtime over REST. One runtime is created in the
application lifespan and shared by all requests.
"""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Literal

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cascada.__version__ import __version__, get_version_info
from cascada.config import CascadaConfig, ConfigLoader
from cascada.core.constants import FrameState
from cascada.core.errors import CascadaError
from cascada.runtime.loop import ConversationRuntime
from cascada.server.dependencies import RuntimeDep
from cascada.server.errors import create_error_response, global_exception_handler
from cascada.server.models import (
    ComponentStatus,
    FrameSummary,
    HealthResponse,
    MessageRequest,
    MessageResponse,
    ReadinessResponse,
    ResetResponse,
    StateResponse,
    VersionResponse,
)

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "CASCADA_CONFIG_PATH"
DEFAULT_CONFIG_FILE = "cascada.yaml"


def resolve_config() -> CascadaConfig:
    """Load the config named by ``CASCADA_CONFIG_PATH``, ``cascada.yaml``, or defaults."""
    config_path = os.environ.get(CONFIG_PATH_ENV)
    if not config_path and os.path.exists(DEFAULT_CONFIG_FILE):
        config_path = DEFAULT_CONFIG_FILE

    if not config_path:
        logger.warning(
            f"{CONFIG_PATH_ENV} not set and {DEFAULT_CONFIG_FILE} not found. Using defaults."
        )
        return CascadaConfig()

    logger.info(f"Loading config from {config_path}")
    return ConfigLoader.load(config_path)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - initialize on startup, cleanup on shutdown."""
    if getattr(app.state, "runtime", None) is not None:
        # Runtime injected by create_app(runtime=...)
        yield
        return

    load_dotenv()

    config = getattr(app.state, "config", None)
    if config is None:
        try:
            config = resolve_config()
        except (CascadaError, FileNotFoundError) as e:
            logger.error(f"Failed to load config: {e}. App will start unready.")
            yield
            return

    logger.info("Initializing ConversationRuntime...")
    async with ConversationRuntime(config) as runtime:
        app.state.runtime = runtime
        app.state.config = config
        logger.info("ConversationRuntime initialized and ready.")
        yield
        logger.info("ConversationRuntime cleanup...")
        app.state.runtime = None


async def health_check(request: Request) -> HealthResponse:
    """Liveness probe."""
    runtime: ConversationRuntime | None = getattr(request.app.state, "runtime", None)

    components: dict[str, ComponentStatus] = {}
    status: Literal["healthy", "starting", "degraded", "unhealthy"] = "healthy"

    if runtime is None:
        status = "starting"
    else:
        classifier = runtime.classifier
        if classifier is not None and classifier.is_configured:
            components["classifier"] = ComponentStatus(name="classifier", status="healthy")
        else:
            status = "degraded"
            components["classifier"] = ComponentStatus(
                name="classifier",
                status="degraded",
                message="Intent classifier not configured",
            )

    return HealthResponse(
        status=status,
        version=__version__,
        timestamp=datetime.now().isoformat(),
        components=components,
    )


async def readiness_check(request: Request) -> ReadinessResponse:
    """Readiness probe."""
    runtime = getattr(request.app.state, "runtime", None)

    if runtime is None:
        return ReadinessResponse(
            ready=False, message="Runtime not initialized", checks={"runtime": False}
        )
    return ReadinessResponse(ready=True, message="Service is ready", checks={"runtime": True})


async def startup_check(request: Request) -> JSONResponse:
    """Startup probe."""
    if getattr(request.app.state, "runtime", None) is not None:
        return JSONResponse(status_code=200, content={"status": "started"})
    return JSONResponse(status_code=503, content={"status": "starting"})


async def process_message(request: MessageRequest, runtime: RuntimeDep) -> MessageResponse:
    """Run one turn for the user and return what the assistant said."""
    try:
        turn = await runtime.process_message(request.message, user_id=request.user_id)
    except CascadaError as e:
        raise create_error_response(e, request.user_id, "/chat") from e

    return MessageResponse(
        response=turn.text,
        messages=turn.messages,
        status=turn.status.value,
        active_dialog=turn.active_dialog,
        depth=turn.depth,
    )


async def get_conversation_state(user_id: str, runtime: RuntimeDep) -> StateResponse:
    """Get the dialog stack of a conversation."""
    try:
        stack = await runtime.get_stack(user_id)
    except CascadaError as e:
        raise create_error_response(e, user_id, "/state") from e

    active = stack.active
    return StateResponse(
        user_id=user_id,
        depth=stack.depth,
        active_dialog=active.dialog_id if active else None,
        awaiting_input=active is not None and active.pending_prompt is not None,
        frames=[
            FrameSummary(
                dialog_id=frame.dialog_id,
                step_index=frame.step_index,
                state=frame.state.value,
                awaiting_input=frame.state == FrameState.awaiting_input,
            )
            for frame in stack.frames
        ],
    )


async def reset_conversation(user_id: str, runtime: RuntimeDep) -> ResetResponse:
    """Forget a conversation."""
    try:
        await runtime.reset(user_id)
    except CascadaError as e:
        raise create_error_response(e, user_id, "/state") from e
    return ResetResponse(success=True, message=f"Conversation '{user_id}' reset")


async def cancel_conversation(user_id: str, runtime: RuntimeDep) -> ResetResponse:
    """Cancel every active dialog of a conversation."""
    try:
        await runtime.cancel(user_id)
    except CascadaError as e:
        raise create_error_response(e, user_id, "/cancel") from e
    return ResetResponse(success=True, message=f"Conversation '{user_id}' cancelled")


def get_version() -> VersionResponse:
    """Get detailed version information."""
    info = get_version_info()
    return VersionResponse(
        version=str(info["full"]),
        major=int(info["major"]),
        minor=int(info["minor"]),
        patch=str(info["patch"]),
    )


def create_app(
    config: CascadaConfig | None = None,
    runtime: ConversationRuntime | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        config: Configuration to use instead of resolving it from the environment.
        runtime: Already-initialized runtime; the lifespan then leaves it alone.
    """
    application = FastAPI(
        title="Cascada Dialogue System",
        description="Waterfall dialogs with DSPy intent classification",
        version=__version__,
        lifespan=lifespan,
    )
    application.state.config = config
    application.state.runtime = runtime

    application.add_exception_handler(Exception, global_exception_handler)

    application.add_api_route("/health", health_check, methods=["GET"], response_model=HealthResponse)
    application.add_api_route(
        "/ready", readiness_check, methods=["GET"], response_model=ReadinessResponse
    )
    application.add_api_route("/startup", startup_check, methods=["GET"])
    application.add_api_route(
        "/chat", process_message, methods=["POST"], response_model=MessageResponse
    )
    application.add_api_route(
        "/state/{user_id}",
        get_conversation_state,
        methods=["GET"],
        response_model=StateResponse,
    )
    application.add_api_route(
        "/state/{user_id}",
        reset_conversation,
        methods=["DELETE"],
        response_model=ResetResponse,
    )
    application.add_api_route(
        "/cancel/{user_id}",
        cancel_conversation,
        methods=["POST"],
        response_model=ResetResponse,
    )
    application.add_api_route(
        "/version", get_version, methods=["GET"], response_model=VersionResponse
    )
    return application


app = create_app()

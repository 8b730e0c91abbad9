"""FastAPI dependencies for server endpoints.

The runtime lives on ``app.state`` rather than in a module global so tests
and multiple workers each get their own.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from cascada.runtime.loop import ConversationRuntime


def get_runtime(request: Request) -> ConversationRuntime:
    """Dependency to get the initialized runtime.

    Raises:
        HTTPException: 503 if runtime not initialized
    """
    runtime = getattr(request.app.state, "runtime", None)

    if runtime is None:
        raise HTTPException(
            status_code=503,
            detail={
                "error": "Service temporarily unavailable",
                "message": "Server is starting up. Please try again in a few seconds.",
            },
        )
    return runtime


RuntimeDep = Annotated[ConversationRuntime, Depends(get_runtime)]

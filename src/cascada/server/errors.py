"""Server error handling - sanitizes errors for client responses.

Clients get a generic message and a reference code; the full exception is
logged server-side under the same reference.
"""

import logging
import uuid

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from cascada.core.errors import PersistenceError, UnknownDialogError

logger = logging.getLogger(__name__)


# Error messages safe to expose to clients
SAFE_ERROR_MESSAGES = {
    "ConfigError": "Configuration error. Please contact support.",
    "UnknownDialogError": "The requested dialog does not exist.",
    "DialogError": "Dialog execution error. Please try again.",
    "DialogStackError": "Dialog execution error. Please try again.",
    "DialogLoopError": "Dialog execution error. Please try again.",
    "ClassifierError": "Unable to understand request. Please try again later.",
    "PersistenceError": "Session storage is unavailable. Please try again later.",
}

DEFAULT_ERROR_MESSAGE = "An internal error occurred. Please try again later."
SUPPORT_MESSAGE = "If this problem persists, contact support with the reference code."


def create_error_reference() -> str:
    """Generate unique error reference for client/server correlation."""
    return f"ERR-{uuid.uuid4().hex[:8].upper()}"


def get_safe_error_message(exception: Exception) -> str:
    """Get client-safe error message for exception type."""
    return SAFE_ERROR_MESSAGES.get(type(exception).__name__, DEFAULT_ERROR_MESSAGE)


def get_http_status_for_exception(exception: Exception) -> int:
    """Map exception types to appropriate HTTP status codes."""
    if isinstance(exception, UnknownDialogError):
        return 404
    if isinstance(exception, PersistenceError):
        return 503
    # ConfigError, DialogError, ClassifierError and anything unexpected
    return 500


def log_error_with_context(
    error_ref: str,
    exception: Exception,
    user_id: str | None = None,
    endpoint: str | None = None,
) -> None:
    """Log full error details server-side for debugging."""
    logger.error(
        f"[{error_ref}] Error in {endpoint or 'unknown'} "
        f"for user {user_id or 'unknown'}: {type(exception).__name__}: {exception}",
        exc_info=exception,
        extra={
            "error_reference": error_ref,
            "user_id": user_id,
            "endpoint": endpoint,
            "exception_type": type(exception).__name__,
        },
    )


def create_error_response(
    exception: Exception,
    user_id: str | None = None,
    endpoint: str | None = None,
) -> HTTPException:
    """Create sanitized HTTPException for client response."""
    error_ref = create_error_reference()
    log_error_with_context(error_ref, exception, user_id, endpoint)

    return HTTPException(
        status_code=get_http_status_for_exception(exception),
        detail={
            "error": get_safe_error_message(exception),
            "reference": error_ref,
            "message": SUPPORT_MESSAGE,
        },
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for uncaught exceptions."""
    error_ref = create_error_reference()
    user_id = request.path_params.get("user_id")
    log_error_with_context(error_ref, exc, user_id, request.url.path)

    return JSONResponse(
        status_code=get_http_status_for_exception(exc),
        content={
            "error": get_safe_error_message(exc),
            "reference": error_ref,
            "message": SUPPORT_MESSAGE,
        },
    )

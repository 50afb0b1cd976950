"""Exception handlers for the application."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from view_layer.exceptions import ErrorCode, ViewException
from view_layer.logging_config import get_logger, log_with_context
from view_layer.models import ErrorDetail, ErrorResponse

logger = get_logger(__name__)


async def view_exception_handler(request: Request, exc: ViewException) -> JSONResponse:
    """Handle view layer exceptions with their HTTP status codes.

    Returns a structured JSON error with code, message and details.
    """
    log_with_context(
        logger,
        "warning",
        "View error",
        error_code=exc.code.value,
        error_message=exc.message,
        status_code=exc.status_code,
        method=request.method,
        url=str(request.url),
        event_type="view_error",
    )

    body = ErrorResponse(error=ErrorDetail(code=exc.code.value, message=exc.message, details=exc.details))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions with logging."""
    log_with_context(
        logger,
        "error",
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        method=request.method,
        url=str(request.url),
        event_type="unhandled_error",
    )
    logger.error("Exception traceback:", exc_info=True)

    # Internal details stay in the logs
    body = ErrorResponse(error=ErrorDetail(code=ErrorCode.INTERNAL_ERROR.value, message="Internal server error"))
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


def register_error_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the application."""
    app.add_exception_handler(ViewException, view_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

"""
TASKTRACK API - Error Taxonomy

Domain errors raised by the services and translated to HTTP responses
by the handlers registered in tasktrack.main.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class TaskTrackError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(TaskTrackError):
    """Required fields are missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(TaskTrackError):
    """A unique field (email, phone) is already registered."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(TaskTrackError):
    """Bad credentials, or a missing, invalid or expired session."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(TaskTrackError):
    """Resource absent or owned by another user."""

    status_code = status.HTTP_404_NOT_FOUND


class UnexpectedError(TaskTrackError):
    """Storage or connectivity failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def handle_tasktrack_error(request: Request, exc: TaskTrackError) -> JSONResponse:
    if isinstance(exc, UnexpectedError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    return _error_response(exc.status_code, exc.message)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request body"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg", message)
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    response = _error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error translation used by every router."""
    app.add_exception_handler(TaskTrackError, handle_tasktrack_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

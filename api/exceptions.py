"""Exception handlers for the file tree FastAPI application.

This module defines custom exception handlers that convert Python exceptions
into consistent, user-friendly JSON responses.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.status import Status

logger = logging.getLogger(__name__)


# Custom Exception Classes


class FileTreeOperationError(Exception):
    """Raised when a file tree operation returns a non-success status.

    Args:
        status: The status the tree reported.
        path: The path the operation was called with, if any.
    """

    def __init__(self, status: Status, path: str | None = None):
        self.status = status
        self.path = path
        detail = status.value.replace("_", " ")
        super().__init__(f"{detail}: {path}" if path else detail)


# Maps tree statuses onto HTTP status codes
_STATUS_CODES = {
    Status.NO_SUCH_PATH: status.HTTP_404_NOT_FOUND,
    Status.BAD_PATH: status.HTTP_422_UNPROCESSABLE_ENTITY,
    Status.OUT_OF_MEMORY: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def http_status_for(tree_status: Status) -> int:
    """HTTP status code used to report a failed tree operation."""
    return _STATUS_CODES.get(tree_status, status.HTTP_409_CONFLICT)


# Exception Handlers


async def file_tree_operation_handler(request: Request, exc: FileTreeOperationError):
    """Handle FileTreeOperationError exceptions.

    Args:
        request: The incoming request that triggered the error.
        exc: The FileTreeOperationError exception.

    Returns:
        JSONResponse carrying the tree status and the offending path.
    """
    return JSONResponse(
        status_code=http_status_for(exc.status),
        content={
            "error": "File Tree Operation Failed",
            "detail": str(exc),
            "status": exc.status.value,
            "path": exc.path,
        },
    )


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValidationError exception.

    Returns:
        JSONResponse with validation error details.
    """
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "detail": "The request data failed validation",
            "validation_errors": exc.errors(),
        },
    )


async def runtime_error_handler(request: Request, exc: RuntimeError):
    """Handle RuntimeError exceptions.

    Raised when the shared tree is missing or fails its invariant check.

    Args:
        request: The incoming request that triggered the error.
        exc: The RuntimeError exception.

    Returns:
        JSONResponse with error details.
    """
    logger.error(f"Runtime error handling {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Runtime Error",
            "detail": str(exc),
            "type": "RuntimeError",
        },
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions.

    This is a catch-all handler for unexpected errors. It prevents
    stack traces from being exposed to clients.

    Args:
        request: The incoming request that triggered the error.
        exc: The exception that was raised.

    Returns:
        JSONResponse with generic error message.
    """
    logger.exception(f"Unhandled exception handling {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": type(exc).__name__,
        },
    )

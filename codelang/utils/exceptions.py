"""Custom exception classes and error handling utilities."""
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from loguru import logger


class CodeLangException(Exception):
    """Base exception for the application."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidInputError(CodeLangException):
    """A required field is missing or a value has the wrong shape."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(CodeLangException):
    """A referenced user, deck, card or exercise set does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class StoreUnavailableError(CodeLangException):
    """The persistence layer is unreachable or rejected the operation."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class AuthenticationError(CodeLangException):
    """Authentication and authorization errors."""

    status_code = status.HTTP_401_UNAUTHORIZED


def _error_response(error: CodeLangException, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    content: Dict[str, Any] = {"error": error.message}
    if error.details:
        content["details"] = error.details
    return JSONResponse(status_code=error.status_code, content=content, headers=headers)


async def handle_invalid_input_error(request: Request, error: InvalidInputError) -> JSONResponse:
    """Handle validation errors raised by the service layer."""
    logger.warning(f"Invalid input on {request.url.path}: {error.message}")
    return _error_response(error)


async def handle_not_found_error(request: Request, error: NotFoundError) -> JSONResponse:
    """Handle lookups of missing entities."""
    logger.warning(f"Not found on {request.url.path}: {error.message}")
    return _error_response(error)


async def handle_store_unavailable_error(
    request: Request, error: StoreUnavailableError
) -> JSONResponse:
    """Handle database failures; the caller owns any retry policy."""
    logger.error(f"Store unavailable on {request.url.path}: {error.message}")
    return JSONResponse(
        status_code=error.status_code,
        content={"error": "Database operation failed. Please try again later."},
    )


async def handle_authentication_error(request: Request, error: AuthenticationError) -> JSONResponse:
    """Handle authentication errors."""
    logger.warning(f"Authentication error: {error.message}")
    return _error_response(error, headers={"WWW-Authenticate": "Bearer"})


EXCEPTION_HANDLERS = {
    InvalidInputError: handle_invalid_input_error,
    NotFoundError: handle_not_found_error,
    StoreUnavailableError: handle_store_unavailable_error,
    AuthenticationError: handle_authentication_error,
}

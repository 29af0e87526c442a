# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors raised by core/ and lib/ (ApplicationError subclasses) are mapped to
# HTTP status codes here so those packages stay framework-agnostic.
# =============================================================================

import logging
from typing import Any

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from core.services.token_service import TokenSigningError, TokenVerificationError
from lib.database import DatabaseError
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class AcquisitionsException(Exception):
    """
    Base exception for the Acquisitions API.

    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "ACQUISITIONS_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Auth Exceptions
# =============================================================================

class NotAuthenticatedError(AcquisitionsException):
    """Raised when a protected route is called without a token."""

    def __init__(self):
        super().__init__(
            message="Not authenticated",
            code="NOT_AUTHENTICATED",
            status_code=status.HTTP_401_UNAUTHORIZED,
            suggestion="Sign in and send the token cookie or an Authorization: Bearer header",
            headers={"WWW-Authenticate": "Bearer"},
        )


# =============================================================================
# Mapping of core/lib errors to HTTP
# =============================================================================

_APPLICATION_ERROR_STATUS: dict[type[ApplicationError], int] = {
    TokenVerificationError: status.HTTP_401_UNAUTHORIZED,
    TokenSigningError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    DatabaseError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def from_application_error(exc: ApplicationError) -> AcquisitionsException:
    """Wrap an ApplicationError in the matching HTTP exception."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in _APPLICATION_ERROR_STATUS.items():
        if isinstance(exc, error_type):
            status_code = code
            break

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return AcquisitionsException(
        message=exc.message,
        code=exc.code,
        status_code=status_code,
        suggestion=exc.suggestion,
        details=exc.details,
        headers=headers,
    )


# =============================================================================
# Exception Handlers
# =============================================================================

async def acquisitions_exception_handler(
    request: Request,
    exc: AcquisitionsException
) -> JSONResponse:
    """
    Convert AcquisitionsException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError
) -> JSONResponse:
    """Convert errors raised by core/ and lib/ to JSON responses."""
    return await acquisitions_exception_handler(request, from_application_error(exc))


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request validation errors.

    Converts validation errors to user-friendly messages.
    """
    errors = jsonable_encoder(exc.errors()) if hasattr(exc, "errors") else str(exc)
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )

"""Custom exceptions for the blog API.

Services raise the plain ``ServiceError`` family; endpoints translate them into
HTTP responses with :func:`to_http_exception`.
"""

from typing import Any, Dict, List, Optional, Sequence

from fastapi import HTTPException, status

from blog_api.config import settings


class ServiceError(Exception):
    """Generic service-layer failure. The message is prefixed with the failed operation."""


class NotFoundError(ServiceError):
    """Requested record does not exist."""


class ConflictError(ServiceError):
    """Record collides with an existing one (duplicate email, duplicate slug)."""


class InvalidInputError(ServiceError):
    """Request is well-formed but semantically invalid (bad parent comment, unknown bulk action)."""


class BulkOperationError(ServiceError):
    """A chunked bulk mutation stopped part way through.

    ``succeeded`` holds the ids whose chunks were committed before the failure,
    ``failed`` holds every id that was not applied.
    """

    def __init__(self, message: str, succeeded: Sequence[str], failed: Sequence[str]):
        super().__init__(message)
        self.succeeded: List[str] = list(succeeded)
        self.failed: List[str] = list(failed)


class InvalidCredentialsException(HTTPException):
    """Exception when email or password is wrong."""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AccountInactiveException(HTTPException):
    """Exception when the account has been deactivated."""

    def __init__(self, detail: str = "User account is inactive"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


def error_body(message: str, exc: Optional[BaseException] = None) -> Dict[str, Any]:
    """Build a 500 response body; raw error text is only exposed outside production."""
    body: Dict[str, Any] = {"message": message}
    if settings.is_production:
        body["error"] = "Internal server error"
    else:
        body["error"] = str(exc) if exc is not None else message
        body["details"] = repr(exc) if exc is not None else None
    return body


def to_http_exception(exc: Exception, message: str) -> HTTPException:
    """Map a service error onto the HTTP error taxonomy.

    Args:
        exc: Exception raised by the service layer
        message: Fallback message for the 500 body, e.g. "Failed to create post"
    """
    if isinstance(exc, HTTPException):
        return exc
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, InvalidInputError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, BulkOperationError):
        body = error_body(message, exc)
        body["succeeded"] = exc.succeeded
        body["failed"] = exc.failed
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=body)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error_body(message, exc),
    )


__all__ = [
    "ServiceError",
    "NotFoundError",
    "ConflictError",
    "InvalidInputError",
    "BulkOperationError",
    "InvalidCredentialsException",
    "AccountInactiveException",
    "error_body",
    "to_http_exception",
]

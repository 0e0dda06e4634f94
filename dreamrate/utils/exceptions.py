"""Custom exceptions for DreamRate."""

from typing import Any, Dict, Optional

import httpx
from postgrest import APIError

# PostgREST returns this when a single-row request matched zero (or many) rows.
PGRST_NO_SINGLE_ROW = "PGRST116"
SQLSTATE_INSUFFICIENT_PRIVILEGE = "42501"


class DreamRateException(Exception):
    """Base exception for DreamRate application."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize DreamRateException.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code.
            error_code: Machine-readable error code.
            details: Additional error details.
        """
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(DreamRateException):
    """Raised when a required setting is missing."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize ConfigurationError."""
        super().__init__(
            message=message,
            status_code=500,
            error_code="CONFIGURATION_ERROR",
            details=details,
        )


class StoreError(DreamRateException):
    """Raised when a store operation fails. Carries the store's error payload."""

    status = 500
    code = "STORE_ERROR"
    default_message = "Store operation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize StoreError."""
        super().__init__(
            message=message or self.default_message,
            status_code=self.status,
            error_code=self.code,
            details=details,
        )


class NotFoundError(StoreError):
    """Raised when a single-row read or write matched nothing."""

    status = 404
    code = "NOT_FOUND"
    default_message = "Resource not found"


class ConstraintViolationError(StoreError):
    """Raised when the store rejects a write on an integrity constraint."""

    status = 409
    code = "CONSTRAINT_VIOLATION"
    default_message = "Constraint violation"


class AuthorizationError(StoreError):
    """Raised when a row-level access policy denies the operation."""

    status = 403
    code = "AUTHORIZATION_ERROR"
    default_message = "Insufficient permissions"


class TransportError(StoreError):
    """Raised when the store could not be reached."""

    status = 502
    code = "TRANSPORT_ERROR"
    default_message = "Store unreachable"


class AuthenticationError(DreamRateException):
    """Raised when authentication fails."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize AuthenticationError."""
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


def store_error_from(exc: Exception) -> StoreError:
    """
    Translate a client library error into the matching StoreError.

    Args:
        exc: Error raised by postgrest or httpx.

    Returns:
        StoreError subclass carrying the original payload.
    """
    if isinstance(exc, APIError):
        code = exc.code or ""
        payload = {
            "code": exc.code,
            "message": exc.message,
            "details": exc.details,
            "hint": exc.hint,
        }
        if code == PGRST_NO_SINGLE_ROW:
            error_cls = NotFoundError
        elif code.startswith("23"):
            error_cls = ConstraintViolationError
        elif code == SQLSTATE_INSUFFICIENT_PRIVILEGE:
            error_cls = AuthorizationError
        else:
            error_cls = StoreError
        return error_cls(message=exc.message or None, details=payload)

    if isinstance(exc, httpx.HTTPError):
        return TransportError(
            message=f"Store request failed: {exc}",
            details={"exception_type": type(exc).__name__},
        )

    return StoreError(message=str(exc) or None, details={"exception_type": type(exc).__name__})

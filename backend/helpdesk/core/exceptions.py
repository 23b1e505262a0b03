"""Custom exceptions for application-specific error handling."""

from __future__ import annotations

from typing import Optional, Dict, Any


class HelpdeskException(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 400,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        self.headers = headers
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class NotFoundError(HelpdeskException):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "not_found", *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code="NOT_FOUND", details=details, status_code=404)


class ConflictError(HelpdeskException):
    """Raised when a request conflicts with current state."""

    def __init__(
        self,
        message: str = "conflict",
        *,
        error_code: str = "CONFLICT",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, details=details, status_code=409)


# ===== TICKET LIFECYCLE EXCEPTIONS =====


class InvalidStatusTransitionError(ConflictError):
    """Raised when a status change would move a ticket backwards."""

    def __init__(self, current: str, requested: str):
        super().__init__(
            "invalid_status_transition",
            error_code="INVALID_STATUS_TRANSITION",
            details={"current": current, "requested": requested},
        )


# ===== VALIDATION EXCEPTIONS =====


class ValidationException(HelpdeskException):
    """Base exception for validation errors."""


class InvalidTicketDataError(ValidationException):
    """Raised when ticket data is invalid."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, error_code="INVALID_TICKET_DATA", details=details, status_code=422)


class InvalidResponseError(ValidationException):
    """Raised when a ticket response cannot be accepted."""

    def __init__(self, message: str = "response_message_required"):
        super().__init__(message, error_code="INVALID_RESPONSE", details={"field": "message"}, status_code=422)


class InvalidConfigurationError(ValidationException):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, setting: Optional[str] = None):
        details = {"setting": setting} if setting else {}
        super().__init__(message, error_code="INVALID_CONFIG", details=details, status_code=500)


# ===== PERSISTENCE EXCEPTIONS =====


class GatewayError(HelpdeskException):
    """Raised when a ticket store operation fails upstream."""

    def __init__(self, operation: str, message: str = "ticket_store_unavailable"):
        super().__init__(
            message,
            error_code="GATEWAY_ERROR",
            details={"operation": operation},
            status_code=503,
        )


# ===== AUTHENTICATION/AUTHORIZATION EXCEPTIONS =====


class AuthenticationException(HelpdeskException):
    """Base exception for authentication errors."""

    def __init__(
        self,
        message: str = "not_authenticated",
        *,
        error_code: str = "NOT_AUTHENTICATED",
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 401,
    ):
        super().__init__(message, error_code=error_code, details=details, status_code=status_code)


class InsufficientPermissionsError(AuthenticationException):
    """Raised when user lacks required permissions."""

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message, error_code="INSUFFICIENT_PERMISSIONS", status_code=403)

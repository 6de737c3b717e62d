"""
SoulFinder Backend: Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions, one per failure outcome of the API.
How:   Each exception carries a user-facing message, an optional context
       dict and the HTTP status it maps to. One global handler in main.py
       turns any of them into the uniform JSON error body.
Who:   Raised by services and the security gates; caught by global handlers.

Exception Hierarchy:
    SoulFinderError (base)
    ├── ValidationError          → 400 Bad Request
    ├── MissingCredentialError   → 401 Unauthorized
    ├── InvalidCredentialError   → 403 Forbidden
    ├── InsufficientRoleError    → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict
    ├── RequestTimeoutError      → 504 Gateway Timeout
    └── UpstreamServiceError     → 500 Internal Server Error
        ├── DatabaseError
        └── PaymentServiceError
"""

from typing import Any, Dict, Optional


class SoulFinderError(Exception):
    """
    Base exception for all SoulFinder application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional info; returned as `details` only when `expose_context` is set
    """

    status_code: int = 500
    error_code: str = "server_error"
    expose_context: bool = False

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SoulFinderError):
    """
    Raised when client input fails a business rule.

    When:  Invalid pagination values, malformed identifiers, an already
           submitted contact request.
    HTTP:  400 Bad Request
    """

    status_code = 400
    error_code = "validation_error"
    expose_context = True

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class MissingCredentialError(SoulFinderError):
    """
    Raised when a guarded route receives no bearer token.

    When:  Missing Authorization header, or a header with no token after
           the scheme. Raised before the verifier is contacted.
    HTTP:  401 Unauthorized
    """

    status_code = 401
    error_code = "unauthorized"

    def __init__(self, message: str = "Unauthorized Access", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class InvalidCredentialError(SoulFinderError):
    """
    Raised when the token verifier rejects the bearer token.

    HTTP:  403 Forbidden
    """

    status_code = 403
    error_code = "forbidden"

    def __init__(self, message: str = "Forbidden Access", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class InsufficientRoleError(SoulFinderError):
    """
    Raised when an authenticated caller lacks the role a route requires,
    or acts on another account's resources.

    The caller's actual role is reported in `details.role`.
    HTTP:  403 Forbidden
    """

    status_code = 403
    error_code = "insufficient_role"
    expose_context = True

    def __init__(
        self,
        role: Optional[str] = None,
        required: str = "admin",
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["role"] = role
        ctx["required"] = required
        super().__init__(message=message or "Forbidden Access", context=ctx)
        self.role = role


class NotFoundError(SoulFinderError):
    """
    Raised when a requested resource does not exist.

    The store returns None for missing documents; services convert that
    into this exception.
    HTTP:  404 Not Found
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(SoulFinderError):
    """
    Raised when a mutation would duplicate an existing record.

    When:  Favorite already set by this requester, premium request
           already outstanding.
    HTTP:  409 Conflict
    """

    status_code = 409
    error_code = "conflict"

    def __init__(self, message: str = "Resource already exists", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class RequestTimeoutError(SoulFinderError):
    """
    Raised when a request exceeds `request_timeout_seconds`.

    HTTP:  504 Gateway Timeout
    """

    status_code = 504
    error_code = "timeout"

    def __init__(self, timeout: float, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["timeout_seconds"] = timeout
        super().__init__(
            message=f"The request did not complete within {timeout:g} seconds.",
            context=ctx,
        )


class UpstreamServiceError(SoulFinderError):
    """
    Raised when an external collaborator (store, verifier, payment
    provider) fails. No retry is attempted.

    Security Note:
        The message returned to the client is always generic. Provider
        details are logged server-side only.
    HTTP:  500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "An upstream service failed. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(UpstreamServiceError):
    """Raised when a MongoDB operation fails unexpectedly."""

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PaymentServiceError(UpstreamServiceError):
    """Raised when Stripe rejects or fails to create a payment intent."""

    def __init__(
        self,
        message: str = "The payment provider could not process the request.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

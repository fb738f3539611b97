"""
DevConnector Backend - Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the different failure scenarios.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       structured JSON error responses with the right HTTP status code.
Who:   Raised by the mutation engine, services and the auth gate.

Exception Hierarchy:
    DevConnectorError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 400 or 404 (carried by the exception)
    ├── AuthenticationError      → 401 (no token / bad token)
    ├── AuthorizationError       → 401 (caller does not own the resource)
    ├── StoreError               → 500 (generic message, details logged)
    └── RateLimitExceededError   → 429 Too Many Requests

All mutation-engine failures are synchronous, user-correctable conditions:
they are surfaced verbatim and never retried.
"""

from typing import Any, Dict, List, Optional


class DevConnectorError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(DevConnectorError):
    """
    Raised when client input fails validation.

    Carries a field-level list so clients can highlight every bad input at
    once instead of fixing them one round trip at a time.

    Example response:
        {
            "error": "validation_error",
            "message": "Title is required",
            "details": {"errors": [{"field": "title", "message": "Title is required"}]}
        }
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if errors is None:
            errors = [{"field": field, "message": message}] if field else []
        ctx = context or {}
        ctx["errors"] = errors
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors

    @classmethod
    def from_fields(cls, errors: List[Dict[str, str]]) -> "ValidationError":
        """Builds one exception from several field errors; the first message leads."""
        return cls(message=errors[0]["message"], field=errors[0]["field"], errors=errors)


class NotFoundError(DevConnectorError):
    """
    Raised when a requested aggregate or sub-entity does not exist.

    The status code travels with the exception: profile routes answer a
    missing profile with 400, post routes answer a missing post with 404.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        status_code: int = 404,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.status_code = status_code


class AuthenticationError(DevConnectorError):
    """Raised by the auth gate when no valid token accompanies the request."""

    status_code = 401

    def __init__(
        self,
        message: str = "No token, authorization denied",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthorizationError(DevConnectorError):
    """
    Raised when the caller is authenticated but does not own the resource.

    When: deleting someone else's post or comment, mutating someone else's
    profile.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "User not authorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreError(DevConnectorError):
    """
    Raised when a database operation fails unexpectedly.

    The message returned to the client is always generic. Details (statement,
    constraint name) are logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(DevConnectorError):
    """Raised when a client exceeds the per-IP request rate limit."""

    status_code = 429

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after

"""
Idea Canvas Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the different error scenarios.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right status code.
Who:   Raised by services and middleware; caught by global handlers.

Exception Hierarchy:
    IdeaCanvasError (base)
    ├── ValidationError          → 400 Bad Request
    ├── InvalidIdError           → 400 Bad Request (malformed ObjectId)
    ├── NotFoundError            → 404 Not Found
    ├── DatabaseError            → 500 Internal Server Error
    └── RateLimitExceededError   → 429 Too Many Requests
"""

from typing import Any, Dict, Optional


class IdeaCanvasError(Exception):
    """
    Base exception for all Idea Canvas application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(IdeaCanvasError):
    """
    Raised when client input fails a business rule.

    When:    Missing required fields, duplicate subscription.
    HTTP:    400 Bad Request

    FastAPI already answers 422 for bodies that don't parse at all; this
    covers the checks the API has always answered with 400.
    """

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


class InvalidIdError(ValidationError):
    """Raised when a path segment is not a valid 24-char hex ObjectId."""

    def __init__(self, resource: str = "resource", raw_id: Optional[str] = None):
        super().__init__(
            message=f"Invalid {resource} ID",
            field="id",
            context={"resource": resource, "raw_id": raw_id},
        )
        self.resource = resource


class NotFoundError(IdeaCanvasError):
    """
    Raised when a requested document does not exist.

    HTTP:    404 Not Found

    Motor returns None for missing documents (and matched_count == 0 for
    updates); the service layer converts that into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class DatabaseError(IdeaCanvasError):
    """
    Raised when a MongoDB operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; driver details
    are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(IdeaCanvasError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP:    429 Too Many Requests
    """

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

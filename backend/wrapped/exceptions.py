"""
Wrapped Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for each error scenario.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": ...}` JSON bodies with the matching status code.
Who:   Raised by services, dependencies and the security layer.

Exception Hierarchy:
    WrappedError (base)
    ├── ValidationError      → 400 Bad Request (per-field error report)
    ├── AuthError            → 401 Unauthorized
    ├── NotFoundError        → 404 Not Found (absent OR not owned by caller)
    ├── ConflictError        → 409 Conflict
    ├── DatabaseError        → 500 Internal Server Error
    └── InvalidSessionError  (session layer only; surfaced as AuthError)
"""

from typing import Any, Dict, List, Optional


class WrappedError(Exception):
    """
    Base exception for all Wrapped application errors.

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


class ValidationError(WrappedError):
    """
    Raised when a request body fails its schema.

    HTTP:    400 Bad Request

    Example response:
        {
            "error": {
                "formErrors": [],
                "fieldErrors": {"password": ["String should have at least 6 characters"]}
            }
        }
    """

    def __init__(
        self,
        field_errors: Optional[Dict[str, List[str]]] = None,
        form_errors: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.field_errors = field_errors or {}
        self.form_errors = form_errors or []
        fields = ", ".join(sorted(self.field_errors)) or "body"
        super().__init__(message=f"Invalid input: {fields}", context=context)

    def to_payload(self) -> Dict[str, Any]:
        return {"formErrors": self.form_errors, "fieldErrors": self.field_errors}


class AuthError(WrappedError):
    """
    Raised for a missing/invalid/expired session or bad login credentials.

    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "No auth",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(WrappedError):
    """
    Raised when a resource does not exist or is not owned by the caller.

    HTTP:    404 Not Found

    Both cases share one message so responses never reveal that another
    user's wrap exists.
    """

    def __init__(
        self,
        message: str = "Not found",
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(WrappedError):
    """
    Raised when a unique value (email, username) is already taken.

    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "Already exists",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DatabaseError(WrappedError):
    """
    Raised when a database operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; details are
    logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidSessionError(WrappedError):
    """
    Raised by SessionManager.verify for a bad, expired or malformed token.

    Never reaches a client directly: `require_auth` converts it into
    AuthError("Invalid auth").
    """

    def __init__(
        self,
        message: str = "Invalid session",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

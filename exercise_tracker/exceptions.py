"""
Exercise Tracker: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the failure cases of the API.
How:   Each exception carries a client-facing message and an optional context
       dict. Global exception handlers (registered in main.py) turn them into
       `{"error": message}` JSON bodies with the right status code.
Who:   Raised by services; caught by the handlers in main.py.

Exception Hierarchy:
    ExerciseTrackerError (base)
    ├── NotFoundError        → 200 {"error": "User not found"}
    ├── UserCreationError    → 200 {"error": "Failed to create user"}
    └── DatabaseError        → 500 {"error": <operation-specific message>}

Not-found and user-creation failures are reported in the body with HTTP 200;
clients of this API inspect the `error` key rather than the status code.
"""

from typing import Any, Dict, Optional


class ExerciseTrackerError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Client-facing error description (returned as `error`)
        context:  Debug details (logged server-side, never returned)
        status_code: HTTP status used by the global handler
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


class NotFoundError(ExerciseTrackerError):
    """
    Raised when a path id does not resolve to a stored record.

    The message is "<Resource> not found" (e.g. "User not found"); the id
    itself goes into the context only.
    """

    status_code = 200

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource.capitalize()} not found", context=ctx)


class UserCreationError(ExerciseTrackerError):
    """Raised when a user cannot be inserted (missing username or store failure)."""

    status_code = 200

    def __init__(
        self,
        message: str = "Failed to create user",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(ExerciseTrackerError):
    """
    Raised when a read or insert against the store fails.

    The message is generic per operation; the original exception type and
    arguments are kept in the context for the server log.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

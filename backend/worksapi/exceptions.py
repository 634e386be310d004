"""
Works API - Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the work store and its handlers.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return minimal JSON error bodies with the right HTTP status code.
Who:   Raised by WorkService and route handlers; caught by global handlers.

Exception Hierarchy:
    WorksAPIError (base)
    ├── ValidationError          → required field missing on create
    ├── NotFoundError            → 404 Not Found (update/delete only)
    ├── MalformedIdentifierError → id is not a valid work id
    ├── DatabaseError            → store failure
    └── OperationFailedError     → 500 with a fixed per-operation message

Everything except NotFoundError surfaces to the client as HTTP 500 with
`{"message": ...}`; the context dict is only ever written to the log.
"""

from typing import Any, Dict, Optional


class WorksAPIError(Exception):
    """
    Base exception for all Works API errors.

    Attributes:
        message:  Client-facing error description
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


class ValidationError(WorksAPIError):
    """
    Raised when a work is created without one of its required fields.

    When:    POST /api/works with `title` or `description` missing or empty.
    HTTP:    500 (the create handler folds it into "unable to create new work")
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


class NotFoundError(WorksAPIError):
    """
    Raised when an update or delete targets an id that is not stored.

    GET /api/works/{id} does not raise this; a missing work reads as null.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "work",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class MalformedIdentifierError(WorksAPIError):
    """
    Raised when a path id is not a syntactically valid work id (UUID).

    HTTP:    500 (no dedicated status; the error simply is not handled
             specially on the read path)
    """

    def __init__(
        self,
        identifier: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["identifier"] = identifier
        super().__init__(message=f"'{identifier}' is not a valid work id", context=ctx)
        self.identifier = identifier


class DatabaseError(WorksAPIError):
    """
    Raised when a database operation fails unexpectedly.

    Security Note:
        Detailed error info (SQL, driver error) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class OperationFailedError(WorksAPIError):
    """
    Raised by a route handler when its store operation failed.

    The message is the fixed, operation-specific text shown to the client
    (e.g. "unable to create new work"); the original error stays in context.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

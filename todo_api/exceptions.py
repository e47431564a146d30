"""
Todo API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a client-safe message and an optional context
       dict. Global handlers (registered in main.py) map them to status
       codes and `{"error": ...}` bodies.
Who:   Raised by the TodoStore and route handlers; caught by global handlers.

Exception Hierarchy:
    TodoServiceError (base)
    ├── ValidationError      → 400 Bad Request
    ├── NotFoundError        → 404 Not Found ("Todo not found")
    └── RouteNotFoundError   → 404 Not Found ("Route not found")

Anything outside this hierarchy is an internal error: answered with a
generic 500 and logged with the correlation id.
"""

from typing import Any, Dict, Optional


class TodoServiceError(Exception):
    """
    Base exception for all Todo API errors.

    Attributes:
        message:  Client-facing error description (returned as `error`)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TodoServiceError):
    """
    Raised when client input fails validation.

    When:    Missing, non-string or blank title on create; blank title on update.
    HTTP:    400 Bad Request

    Example response:
        {"error": "Title is required"}
    """

    status_code = 400

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


class NotFoundError(TodoServiceError):
    """
    Raised when a todo with the requested id does not exist.

    When:    GET/PUT/DELETE /todos/{id} with an unknown or non-numeric id.
    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = "todo"
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message="Todo not found", context=ctx)
        self.resource_id = resource_id


class RouteNotFoundError(TodoServiceError):
    """Raised (or synthesized) when no route matches the method and path."""

    status_code = 404

    def __init__(self, method: str = "", path: str = ""):
        super().__init__(
            message="Route not found",
            context={"method": method, "path": path},
        )

"""
Todo API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the HTTP contract of the API.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI document.

Design Decision:
    Schemas are separate from the stored dataclass so the wire format
    (camelCase `createdAt`, ISO-8601 strings) can differ from the record.
    Request models are deliberately loose (`title` optional) so that a
    missing title reaches the store and is reported as
    `{"error": "Title is required"}` instead of a framework 422.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from todo_api.models.todo import Todo


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class TodoCreate(BaseModel):
    """Body of POST /todos."""

    title: Optional[str] = Field(default=None, description="Todo title (trimmed, non-empty)")


class TodoUpdate(BaseModel):
    """
    Body of PUT /todos/{id}.

    Both fields are optional and independently settable; fields left out of
    the body (or sent as null) keep their current value.
    """

    title: Optional[str] = Field(default=None, description="New title (trimmed, non-empty)")
    completed: Optional[bool] = Field(default=None, description="New completion state")


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class TodoResponse(BaseModel):
    """
    What:  Full representation of a todo.
    Who:   Returned by GET/POST/PUT on /todos and nested in list/delete responses.
    """

    id: int = Field(description="Sequential todo identifier")
    title: str = Field(description="Trimmed, non-empty title")
    completed: bool = Field(description="Completion state")
    created_at: datetime = Field(
        alias="createdAt",
        description="Creation timestamp (UTC ISO 8601), immutable",
    )

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_todo(cls, todo: Todo) -> "TodoResponse":
        return cls(
            id=todo.id,
            title=todo.title,
            completed=todo.completed,
            created_at=todo.created_at,
        )


class TodoListResponse(BaseModel):
    """Returned by GET /todos: every todo in insertion order plus the count."""

    todos: List[TodoResponse] = Field(description="All todos in insertion order")
    count: int = Field(description="Number of todos")


class TodoDeletedResponse(BaseModel):
    """Returned by DELETE /todos/{id}."""

    message: str = Field(default="Todo deleted successfully")
    todo: TodoResponse = Field(description="The record that was removed")


class HealthResponse(BaseModel):
    """Returned by GET /health for liveness/readiness probes."""

    status: str = Field(description="Always 'healthy' while the process serves requests")
    timestamp: datetime = Field(description="Server time (UTC ISO 8601)")


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every failing endpoint.

    Example:
        {"error": "Todo not found"}
    """

    error: str = Field(description="Human-readable error description")

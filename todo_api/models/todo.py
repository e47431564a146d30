"""
Todo API — Todo Record Model
==============================

What:  The in-memory record held by the TodoStore.
How:   A plain dataclass; the store hands out copies so no caller keeps a
       live reference to a stored record across requests.

Lifecycle:
    1. Created by POST /todos (completed = False, created_at = now in UTC)
    2. Title and/or completed replaced by PUT /todos/{id}
    3. Removed entirely by DELETE /todos/{id} (no tombstone)

Invariants:
    - id is unique and never reused within the process lifetime
    - title is never empty or whitespace-only
    - created_at never changes after creation
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Todo:
    """A todo item identified by a sequential integer id."""

    id: int
    title: str
    completed: bool = False
    created_at: datetime = field(default_factory=utc_now)

    def snapshot(self) -> "Todo":
        """Return a detached copy of this record."""
        return replace(self)

    def __repr__(self) -> str:
        return f"<Todo(id={self.id}, completed={self.completed})>"

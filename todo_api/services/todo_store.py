"""
Todo API — Todo Store (In-Memory Collection)
==============================================

What:  Owns every Todo record plus the sequential id counter.
How:   An insertion-ordered list guarded by a lock; every operation runs to
       completion before the next one starts.
Who:   One instance per application, created by create_app() and handed to
       route handlers through the `get_todo_store` dependency.

Operations:
    create(title)                      → Todo        (ValidationError)
    list()                             → (todos, count)
    get(todo_id)                       → Todo        (NotFoundError)
    update(todo_id, title, completed)  → Todo        (NotFoundError, ValidationError)
    delete(todo_id)                    → Todo        (NotFoundError)

Returned records are snapshots; mutating them does not affect the store.
"""

import logging
import threading
from datetime import datetime
from typing import Any, Callable, List, Optional, Tuple

from todo_api.exceptions import NotFoundError, ValidationError
from todo_api.models.todo import Todo, utc_now

logger = logging.getLogger(__name__)


def normalize_title(title: Any, message: str = "Title is required") -> str:
    """
    Trim a client-supplied title and reject anything empty.

    Raises:
        ValidationError: title is missing, not a string, or blank after trimming
    """
    if not isinstance(title, str) or not title.strip():
        raise ValidationError(message=message, field="title")
    return title.strip()


class TodoStore:
    """
    In-memory todo collection with monotonically assigned ids.

    Ids start at 1 and are never reused, even after deletes. Lookups are a
    linear scan; the collection is expected to stay small.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._todos: List[Todo] = []
        self._next_id = 1
        self._clock = clock
        self._lock = threading.Lock()

    def create(self, title: Any) -> Todo:
        clean_title = normalize_title(title)
        with self._lock:
            todo = Todo(
                id=self._next_id,
                title=clean_title,
                completed=False,
                created_at=self._clock(),
            )
            self._next_id += 1
            self._todos.append(todo)
        logger.info("Todo created", extra={"todoId": todo.id})
        return todo.snapshot()

    def list(self) -> Tuple[List[Todo], int]:
        with self._lock:
            todos = [todo.snapshot() for todo in self._todos]
        return todos, len(todos)

    def get(self, todo_id: int) -> Todo:
        with self._lock:
            return self._find(todo_id).snapshot()

    def update(
        self,
        todo_id: int,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Todo:
        """
        Replace the provided fields of a todo; None means "leave unchanged".

        An unknown id wins over a bad title (404 before 400); nothing is
        applied unless every provided field is valid.
        """
        with self._lock:
            todo = self._find(todo_id)
            clean_title = None
            if title is not None:
                clean_title = normalize_title(title, message="Title cannot be empty")
            if clean_title is not None:
                todo.title = clean_title
            if completed is not None:
                todo.completed = bool(completed)
            result = todo.snapshot()
        logger.info("Todo updated", extra={"todoId": todo_id})
        return result

    def delete(self, todo_id: int) -> Todo:
        with self._lock:
            index = self._index_of(todo_id)
            deleted = self._todos.pop(index)
        logger.info("Todo deleted", extra={"todoId": deleted.id})
        return deleted

    # ── Internals (caller holds the lock) ─────────────────────────────────

    def _index_of(self, todo_id: int) -> int:
        for index, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return index
        raise NotFoundError(resource_id=todo_id)

    def _find(self, todo_id: int) -> Todo:
        return self._todos[self._index_of(todo_id)]

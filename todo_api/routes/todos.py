"""
Todo API — Todo Route Handlers
================================

What:  CRUD endpoints over the in-memory TodoStore.
How:   Each handler parses the request, calls one store operation and wraps
       the result in a response schema. Store exceptions propagate to the
       global handlers registered in main.py.

Endpoints:
    GET    /todos             → 200 {todos, count}
    GET    /todos/{todo_id}   → 200 Todo            | 404
    POST   /todos             → 201 Todo            | 400
    PUT    /todos/{todo_id}   → 200 Todo            | 400 | 404
    DELETE /todos/{todo_id}   → 200 {message, todo} | 404

Handlers are `async def` so every store operation runs to completion on the
event loop.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from todo_api.dependencies import get_todo_store
from todo_api.exceptions import NotFoundError
from todo_api.schemas.todo import (
    ErrorResponse,
    TodoCreate,
    TodoDeletedResponse,
    TodoListResponse,
    TodoResponse,
    TodoUpdate,
)
from todo_api.services.todo_store import TodoStore

router = APIRouter(prefix="/todos", tags=["Todos"])

_NOT_FOUND = {404: {"description": "Todo not found", "model": ErrorResponse}}


def parse_todo_id(raw_id: str) -> int:
    """
    Convert the path segment to an int id.

    A non-numeric id can never match a todo, so it is reported the same way
    as an unknown one.
    """
    if not (raw_id.isascii() and raw_id.isdigit()):
        raise NotFoundError(resource_id=raw_id)
    return int(raw_id)


@router.get("", response_model=TodoListResponse, summary="List all todos")
async def list_todos(store: TodoStore = Depends(get_todo_store)) -> TodoListResponse:
    todos, count = store.list()
    return TodoListResponse(
        todos=[TodoResponse.from_todo(todo) for todo in todos],
        count=count,
    )


@router.get(
    "/{todo_id}",
    response_model=TodoResponse,
    responses=_NOT_FOUND,
    summary="Get a single todo",
)
async def get_todo(todo_id: str, store: TodoStore = Depends(get_todo_store)) -> TodoResponse:
    return TodoResponse.from_todo(store.get(parse_todo_id(todo_id)))


@router.post(
    "",
    status_code=201,
    response_model=TodoResponse,
    responses={400: {"description": "Title is required", "model": ErrorResponse}},
    summary="Create a todo",
)
async def create_todo(
    payload: Optional[TodoCreate] = None,
    store: TodoStore = Depends(get_todo_store),
) -> TodoResponse:
    """
    Create a todo from `{"title": ...}`.

    The title is trimmed; a missing or blank title is rejected with 400
    before the store is touched.
    """
    title = payload.title if payload is not None else None
    return TodoResponse.from_todo(store.create(title))


@router.put(
    "/{todo_id}",
    response_model=TodoResponse,
    responses={
        400: {"description": "Invalid title", "model": ErrorResponse},
        **_NOT_FOUND,
    },
    summary="Update a todo",
)
async def update_todo(
    todo_id: str,
    payload: Optional[TodoUpdate] = None,
    store: TodoStore = Depends(get_todo_store),
) -> TodoResponse:
    """Replace `title` and/or `completed`; omitted fields keep their value."""
    changes = payload or TodoUpdate()
    todo = store.update(
        parse_todo_id(todo_id),
        title=changes.title,
        completed=changes.completed,
    )
    return TodoResponse.from_todo(todo)


@router.delete(
    "/{todo_id}",
    response_model=TodoDeletedResponse,
    responses=_NOT_FOUND,
    summary="Delete a todo",
)
async def delete_todo(
    todo_id: str, store: TodoStore = Depends(get_todo_store)
) -> TodoDeletedResponse:
    deleted = store.delete(parse_todo_id(todo_id))
    return TodoDeletedResponse(
        message="Todo deleted successfully",
        todo=TodoResponse.from_todo(deleted),
    )

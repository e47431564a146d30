"""
Todo API — Request Dependencies
=================================

What:  FastAPI dependencies that hand per-application state to route handlers.
How:   create_app() stores one TodoStore and one RequestMetrics on `app.state`;
       these functions read them back for each request.

Example usage in a route:
    @router.get("/todos")
    async def list_todos(store: TodoStore = Depends(get_todo_store)):
        todos, count = store.list()
"""

from starlette.requests import Request

from todo_api.services.metrics import RequestMetrics
from todo_api.services.todo_store import TodoStore


def get_todo_store(request: Request) -> TodoStore:
    return request.app.state.todo_store


def get_request_metrics(request: Request) -> RequestMetrics:
    return request.app.state.metrics

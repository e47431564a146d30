"""Allow `python -m todo_api` to start the server."""

from todo_api.main import run

run()

"""
Todo API — Application Package Initializer
===========================================

What: Marks the `todo_api` directory as a Python package.
Who:  Used by uvicorn (`uvicorn todo_api.main:app`), pytest and the
      `todo-api` console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │      Middleware (Instrumentation)   │  ← correlation id, metrics, access log
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (TodoStore)        │  ← in-memory records, id allocation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← dataclass record + Pydantic contracts
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

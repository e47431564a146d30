# Routes package init
"""
Todo API — API Routes Package
===============================

Route Inventory:
    - health.py:   GET  /health                 (liveness check)
    - metrics.py:  GET  /metrics                (Prometheus exposition)
    - todos.py:    GET  /todos                  (list todos)
                   POST /todos                  (create todo)
                   GET/PUT/DELETE /todos/{id}   (single todo)

Routes stay thin: parse the request, call the TodoStore, shape the response.
"""

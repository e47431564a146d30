"""
Todo API — Services Layer
===========================

What:  State and business rules, independent of HTTP concerns.

Service Inventory:
    - TodoStore:       In-memory todo collection and id allocation
    - RequestMetrics:  Prometheus registry with the HTTP request metrics
"""

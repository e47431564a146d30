# Middleware package init
"""
Todo API — Middleware Package
===============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Correlation ID] → [Instrumentation] → Route Handler

    1. Correlation ID: reuse or generate X-Correlation-ID, expose it to
       loggers and handlers, echo it on the response
    2. Instrumentation: time the request, record Prometheus metrics, write
       the access-log line, convert unhandled exceptions into a 500

    The order is reversed for responses, so the correlation header is set
    after the instrumentation layer has produced any fallback 500.
"""

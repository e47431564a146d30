"""
Todo API — Prometheus Metrics Registry
========================================

What:  Owns the Prometheus registry and the HTTP request metrics.
How:   Each application instance gets its own CollectorRegistry holding
       the request counter, the duration histogram and the default
       process/platform/GC collectors. GET /metrics renders it in the
       Prometheus text exposition format.

Metrics:
    http_requests_total{method,path,status}        Counter
    http_request_duration_seconds{method,path}     Histogram
    process_*, python_info, python_gc_*            Default collectors
"""

from typing import Optional, Tuple

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)


class RequestMetrics:
    """HTTP request counter and latency histogram bound to one registry."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()

        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)
        GCCollector(registry=self.registry)

        self.requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "path", "status"],
            registry=self.registry,
        )
        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration",
            ["method", "path"],
            registry=self.registry,
        )

    def observe(self, method: str, path: str, status: int, duration: float) -> None:
        """Record one completed request."""
        self.requests_total.labels(method=method, path=path, status=str(status)).inc()
        self.request_duration.labels(method=method, path=path).observe(duration)

    def render(self) -> Tuple[bytes, str]:
        """Return the exposition payload and its content type."""
        return generate_latest(self.registry), CONTENT_TYPE_LATEST

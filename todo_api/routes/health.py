"""
Todo API — Health Check Route
===============================

What:  Liveness endpoint for Docker HEALTHCHECK, Kubernetes probes and
       load balancers.
How:   The service has no external dependencies, so a process that can run
       this handler is healthy.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from todo_api.schemas.todo import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", timestamp=datetime.now(timezone.utc))

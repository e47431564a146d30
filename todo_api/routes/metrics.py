"""
Todo API — Prometheus Metrics Route
=====================================

What:  Exposes the application's metrics registry for Prometheus scraping.
How:   Renders the registry in the text exposition format with
       prometheus_client's content type.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from todo_api.dependencies import get_request_metrics
from todo_api.services.metrics import RequestMetrics

router = APIRouter(tags=["Metrics"])


@router.get(
    "/metrics",
    response_class=Response,
    summary="Prometheus metrics",
    responses={200: {"content": {"text/plain": {}}}},
)
async def metrics(metrics: RequestMetrics = Depends(get_request_metrics)) -> Response:
    payload, content_type = metrics.render()
    return Response(content=payload, media_type=content_type)

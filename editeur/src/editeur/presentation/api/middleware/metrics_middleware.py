"""
Prometheus HTTP metrics middleware.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from editeur.infrastructure.monitoring import metrics


def _endpoint_label(request: Request) -> str:
    """Route template when matched, so query strings and ids stay out of labels."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class MetricsMiddleware(BaseHTTPMiddleware):
    """Count requests by method, route and status; time them by route."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            endpoint = _endpoint_label(request)
            metrics.http_requests_total.labels(
                method=request.method, endpoint=endpoint, status=str(status_code)
            ).inc()
            metrics.http_request_duration_seconds.labels(
                method=request.method, endpoint=endpoint
            ).observe(time.perf_counter() - started)

from __future__ import annotations

import time

from fastapi import FastAPI, Request
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.routing import Match

UNMATCHED = "<unmatched>"
KNOWN_METHODS = {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"}

REQUEST_COUNT = Counter(
    "podtato_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
REQUEST_DURATION = Histogram(
    "podtato_http_request_duration_seconds",
    "HTTP request duration",
    ["method", "path"],
)


def route_label(app: FastAPI, scope: dict) -> str:
    """Route template (or mount prefix) for the request; never the raw path."""
    partial = None
    for route in app.router.routes:
        match, _ = route.matches(scope)
        if match == Match.FULL:
            return route.path
        if match == Match.PARTIAL and partial is None:
            partial = route.path
    return partial or UNMATCHED


def method_label(method: str) -> str:
    return method if method in KNOWN_METHODS else "OTHER"


def install_metrics(app: FastAPI) -> None:
    @app.middleware("http")
    async def _instrument(request: Request, call_next):
        # Resolve before routing rewrites the scope.
        path = route_label(app, dict(request.scope))
        method = method_label(request.method)
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            REQUEST_DURATION.labels(method=method, path=path).observe(time.perf_counter() - start)
            REQUEST_COUNT.labels(method=method, path=path, status=str(status)).inc()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

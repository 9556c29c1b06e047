"""
Prometheus Metrics Middleware

Provides request/response metrics for monitoring:
- HTTP request latency per route template
- Request count by endpoint and status
- Active request gauge
- Upload outcomes and stored bytes per upload category

Usage:
    from app.middleware.metrics import setup_metrics

    # In main.py
    app = FastAPI()
    setup_metrics(app)

Metrics Endpoint:
    GET /metrics - Prometheus-format metrics
"""

import time
import logging
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    CONTENT_TYPE_LATEST,
    generate_latest,
    REGISTRY,
)
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# ==================== Prometheus Metrics ====================

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

ACTIVE_REQUESTS = Gauge(
    "http_requests_active",
    "Number of in-flight HTTP requests",
    ["method"]
)

# Upload metrics
UPLOAD_FILES = Counter(
    "upload_files_total",
    "Uploaded files by category and outcome",
    ["category", "outcome"]  # stored, rejected, failed, timeout
)

UPLOAD_BYTES = Counter(
    "upload_bytes_total",
    "Bytes written to the uploads directory",
    ["category"]
)

UNTRACKED_PREFIXES = ("/metrics", "/uploads")


def route_template(request: Request) -> str:
    """
    Path template of the route that served the request (e.g.
    /api/news/{news_id}), so that ids do not become label values.

    The router records the matched route in the ASGI scope; requests that
    matched nothing keep their raw path.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Records latency, count and in-flight requests per route template."""

    def __init__(self, app: FastAPI, app_name: str = "cms"):
        super().__init__(app)
        self.app_name = app_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path.startswith(UNTRACKED_PREFIXES):
            return await call_next(request)

        method = request.method
        status = "500"
        started = time.perf_counter()
        ACTIVE_REQUESTS.labels(method=method).inc()
        try:
            response = await call_next(request)
            status = str(response.status_code)
            return response
        except Exception as e:
            logger.error(f"{method} {request.url.path} failed: {e}")
            raise
        finally:
            ACTIVE_REQUESTS.labels(method=method).dec()
            # Resolved only after routing has run
            endpoint = route_template(request)
            labels = {"method": method, "endpoint": endpoint, "status": status}
            REQUEST_LATENCY.labels(**labels).observe(time.perf_counter() - started)
            REQUEST_COUNT.labels(**labels).inc()


def metrics_endpoint(request: Request) -> Response:
    """
    Endpoint handler for Prometheus metrics scraping.

    Returns metrics in Prometheus text format.
    """
    return PlainTextResponse(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST
    )


def setup_metrics(app: FastAPI) -> None:
    """
    Configure Prometheus metrics for FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(PrometheusMiddleware, app_name="cms")
    app.add_route("/metrics", metrics_endpoint, methods=["GET"])

    logger.info("Prometheus metrics configured")


# ==================== Helper Functions ====================

def record_upload(category: str, outcome: str, size: int = 0) -> None:
    """Record one uploaded file and, when stored, its size."""
    UPLOAD_FILES.labels(category=category, outcome=outcome).inc()
    if size:
        UPLOAD_BYTES.labels(category=category).inc(size)

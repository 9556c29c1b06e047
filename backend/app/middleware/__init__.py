"""
Middleware Package

Contains FastAPI middleware for:
- Prometheus metrics collection
- Origin allow-list enforcement
"""

from app.middleware.metrics import (
    PrometheusMiddleware,
    setup_metrics,
    record_upload,
    REQUEST_LATENCY,
    REQUEST_COUNT,
    ACTIVE_REQUESTS,
    UPLOAD_FILES,
    UPLOAD_BYTES,
)
from app.middleware.origin import OriginGuardMiddleware

__all__ = [
    "PrometheusMiddleware",
    "OriginGuardMiddleware",
    "setup_metrics",
    "record_upload",
    "REQUEST_LATENCY",
    "REQUEST_COUNT",
    "ACTIVE_REQUESTS",
    "UPLOAD_FILES",
    "UPLOAD_BYTES",
]

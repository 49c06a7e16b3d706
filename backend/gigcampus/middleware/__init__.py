"""
Middleware Package

Contains FastAPI middleware for:
- Prometheus metrics collection
- Resume analysis, extraction and ledger counters
"""

from gigcampus.middleware.metrics import (
    PrometheusMiddleware,
    setup_metrics,
    REQUEST_LATENCY,
    REQUEST_COUNT,
    ACTIVE_REQUESTS,
    RESUME_ANALYSES,
    LEDGER_MUTATIONS,
)

__all__ = [
    "PrometheusMiddleware",
    "setup_metrics",
    "REQUEST_LATENCY",
    "REQUEST_COUNT",
    "ACTIVE_REQUESTS",
    "RESUME_ANALYSES",
    "LEDGER_MUTATIONS",
]

"""
Prometheus Metrics Middleware

Provides request/response metrics for monitoring:
- HTTP request latency (p50, p95, p99)
- Request count by endpoint and status
- In-flight request gauge (per method)
- Resume analysis and text extraction outcomes
- Rating ledger mutations

Usage:
    from gigcampus.middleware.metrics import setup_metrics

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
from starlette.routing import Match

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

# Resume analysis metrics
RESUME_ANALYSES = Counter(
    "resume_analyses_total",
    "Resume analyses by outcome",
    ["outcome"]  # success, invalid_input
)

ANALYSIS_LATENCY = Histogram(
    "resume_analysis_seconds",
    "Time to analyze resume text",
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25]
)

# Text extraction metrics
EXTRACTION_LATENCY = Histogram(
    "text_extraction_seconds",
    "Text extraction latency",
    ["kind"],  # pdf, image
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0]
)

EXTRACTION_FAILURES = Counter(
    "text_extraction_failures_total",
    "Failed text extraction calls",
    ["reason"]  # unavailable, unreadable, timeout
)

# Rating ledger metrics
LEDGER_MUTATIONS = Counter(
    "rating_ledger_mutations_total",
    "Rating ledger mutations by operation",
    ["operation"]
)


METRICS_PATH = "/metrics"


def resolve_endpoint(request: Request) -> str:
    """
    Route template for a request, e.g. /api/ratings/{user_id}.

    Prefers the route FastAPI recorded in the scope while routing. Falls
    back to matching the app's top-level routes, skipping entries that
    carry no path (included routers on newer Starlette), and finally to
    the raw URL path.
    """
    route_path = getattr(request.scope.get("route"), "path", None)
    if route_path:
        return route_path

    app = request.scope.get("app")
    for route in getattr(app, "routes", []):
        route_path = getattr(route, "path", None)
        if route_path is None:
            continue
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return route_path

    return request.url.path


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Records latency and count per route template and status, plus the
    number of in-flight requests per method.

    The endpoint label is resolved after the request is routed, so the
    active gauge is labelled by method only.
    """

    def __init__(self, app: FastAPI, app_name: str = "gigcampus"):
        super().__init__(app)
        self.app_name = app_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == METRICS_PATH:
            return await call_next(request)

        method = request.method
        status = "500"
        ACTIVE_REQUESTS.labels(method=method).inc()
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            status = str(response.status_code)
            return response
        except Exception as e:
            logger.error(f"{method} {request.url.path} raised {type(e).__name__}: {e}")
            raise
        finally:
            duration = time.perf_counter() - start_time
            endpoint = resolve_endpoint(request)
            REQUEST_LATENCY.labels(method=method, endpoint=endpoint, status=status).observe(duration)
            REQUEST_COUNT.labels(method=method, endpoint=endpoint, status=status).inc()
            ACTIVE_REQUESTS.labels(method=method).dec()


def metrics_endpoint(request: Request) -> Response:
    return PlainTextResponse(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


def setup_metrics(app: FastAPI) -> None:
    """Install the request middleware and expose GET /metrics."""
    app.add_middleware(PrometheusMiddleware, app_name="gigcampus")
    app.add_route(METRICS_PATH, metrics_endpoint, methods=["GET"])
    logger.info(f"Prometheus metrics exposed at {METRICS_PATH}")


# ==================== Helper Functions ====================

def record_analysis(outcome: str, duration: float) -> None:
    """Record one resume analysis and how long it took."""
    RESUME_ANALYSES.labels(outcome=outcome).inc()
    ANALYSIS_LATENCY.observe(duration)


def record_extraction_latency(kind: str, duration: float) -> None:
    EXTRACTION_LATENCY.labels(kind=kind).observe(duration)


def record_extraction_failure(reason: str) -> None:
    EXTRACTION_FAILURES.labels(reason=reason).inc()


def record_ledger_mutation(operation: str) -> None:
    LEDGER_MUTATIONS.labels(operation=operation).inc()

"""
Tests for Prometheus Metrics Middleware

Tests cover:
- Route template resolution (scope route, app routes, raw path)
- Routers without a path attribute are skipped
- Request metrics labelled by route template
"""

import pytest
from starlette.requests import Request
from starlette.routing import Match, Route
from fastapi.testclient import TestClient

from gigcampus.api.deps import get_rating_ledger
from gigcampus.main import app
from gigcampus.middleware.metrics import resolve_endpoint


async def ok(request):
    return None


class PathlessRouter:
    """Stand-in for an included router that exposes no path."""

    def matches(self, scope):
        return Match.FULL, {}


class FakeApp:
    def __init__(self, routes):
        self.routes = routes


def make_request(path: str, app=None, route=None) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "root_path": "",
        "query_string": b"",
        "headers": [],
        "app": app,
    }
    if route is not None:
        scope["route"] = route
    return Request(scope)


class TestResolveEndpoint:
    """Test endpoint label resolution."""

    def test_uses_scope_route(self):
        route = Route("/api/ratings/{user_id}", ok)
        request = make_request("/api/ratings/user-1", route=route)

        assert resolve_endpoint(request) == "/api/ratings/{user_id}"

    def test_skips_routes_without_path(self):
        app = FakeApp([PathlessRouter(), Route("/health", ok)])

        assert resolve_endpoint(make_request("/health", app=app)) == "/health"

    def test_falls_back_to_raw_path(self):
        app = FakeApp([PathlessRouter()])

        assert resolve_endpoint(make_request("/api/unknown", app=app)) == "/api/unknown"


class TestRequestMetrics:
    """Test metrics recorded for API calls."""

    @pytest.fixture
    def client(self, ledger):
        app.dependency_overrides[get_rating_ledger] = lambda: ledger
        yield TestClient(app)
        app.dependency_overrides.clear()

    def test_api_request_labelled_by_template(self, client):
        response = client.get("/api/ratings/user-42")
        assert response.status_code == 200

        metrics = client.get("/metrics").text

        assert 'endpoint="/api/ratings/{user_id}"' in metrics
        assert "user-42" not in metrics

    def test_metrics_route_not_counted(self, client):
        client.get("/metrics")
        metrics = client.get("/metrics").text

        assert 'endpoint="/metrics"' not in metrics

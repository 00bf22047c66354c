# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# STATUS: Tests - Fixtures shared across the suite
# PURPOSE: Registry isolation and host app construction
# CREATED: 19 OCT 2026
# ============================================================================
"""Shared test fixtures."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from core.config import MonitoringDefaults, reset_defaults
from monitoring import CheckRegistry, get_middleware, reset_registry


@pytest.fixture(autouse=True)
def clean_state():
    """Drop the global registry and cached defaults around each test."""
    reset_registry()
    reset_defaults()
    yield
    reset_registry()
    reset_defaults()


@pytest.fixture
def registry() -> CheckRegistry:
    return CheckRegistry()


def make_app(registry=None, config=None) -> FastAPI:
    """Create a host app with the middleware and one route of its own."""
    app = FastAPI()
    app.middleware("http")(
        get_middleware(registry=registry, config=config or MonitoringDefaults())
    )

    @app.get("/your-app")
    async def your_app():
        return {"handled_by": "host"}

    return app


@pytest.fixture
def app_factory():
    return make_app


@pytest.fixture
def client(registry) -> TestClient:
    """TestClient for a host app serving the per-test registry."""
    return TestClient(make_app(registry=registry))

# ============================================================================
# BW MONITORING - EXAMPLE APPLICATION
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# STATUS: Core - FastAPI application entry point
# PURPOSE: Host application demonstrating the monitoring middleware
# CREATED: 19 OCT 2026
# ============================================================================
"""
Example Host Application

FastAPI application that:
1. Mounts the monitoring middleware ahead of its own routes
2. Registers a process health check and a shutdown-aware readiness check
3. Publishes uptime and version through /metricz

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from __version__ import __version__, BUILD_DATE, EPOCH
from core.logging import configure_logging, get_logger, ComponentType
from monitoring import CheckStatus, get_middleware, get_registry, health_check, readiness_check

configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
)
logger = get_logger(__name__, ComponentType.APPLICATION)

_started_at = time.monotonic()
_shutting_down = False


@health_check("process")
def process_check() -> CheckStatus:
    """Healthy whenever the event loop gets to run it."""
    return CheckStatus.OK


@readiness_check("accepting_traffic")
def accepting_traffic() -> CheckStatus:
    """Stop taking traffic once shutdown begins."""
    return CheckStatus.CRITICAL if _shutting_down else CheckStatus.OK


def uptime_metrics() -> str:
    return (
        f"process_uptime_seconds {time.monotonic() - _started_at:.3f}\n"
        f"build_info{{version=\"{__version__}\"}} 1\n"
    )


get_registry().set_metrics(uptime_metrics)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Mark the process as shutting down once the server stops.

    uvicorn runs the code after yield only after it has stopped serving,
    so no request sees the flag from here. Hosts that need /healthz to fail
    during the drain should set it from their own signal handling.
    """
    global _shutting_down

    logger.info(f"Starting bw-monitoring example v{__version__} (Epoch {EPOCH}, Build {BUILD_DATE})")
    logger.info(f"Monitoring ready ({len(get_registry())} checks registered)")

    yield

    _shutting_down = True
    logger.info("Shutting down")


app = FastAPI(
    title="bw-monitoring example",
    version=__version__,
    lifespan=lifespan,
)

# Monitoring endpoints are answered before routing
app.middleware("http")(get_middleware())


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "bw-monitoring example",
        "version": __version__,
        "build_date": BUILD_DATE,
        "status": "running",
    }

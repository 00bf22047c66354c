# ============================================================================
# MONITORING MODULE
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# STATUS: Core - Health and metrics middleware
# PURPOSE: Readiness, liveness, check report and metrics endpoints
# CREATED: 19 OCT 2026
# ============================================================================
"""
Monitoring Module

Middleware exposing operational endpoints for a Starlette/FastAPI service:
- /healthz: Readiness (binary, fail-fast over readiness checks)
- /checkz: Diagnostic report ('<name> <value>' per health check)
- /livez: Liveness (same report, 500 if any check is not ok)
- /metricz: Passthrough for an application metrics producer

Architecture:
- CheckStatus / Check / CheckResult: Core types
- CheckRegistry: Ordered check sequences and metrics producer
- CheckExecutor: Concurrent execution, order-preserving results
- render / aggregate_liveness: Text rendering and status reduction
- get_middleware / MonitoringMiddleware: Path dispatch

Usage:
    from monitoring import CheckStatus, get_middleware, health_check

    @health_check("database")
    async def database() -> CheckStatus:
        return CheckStatus.OK

    app.middleware("http")(get_middleware())
"""

from monitoring.core import (
    PROMETHEUS_CONTENT_TYPE,
    CheckStatus,
    Check,
    CheckResult,
    CheckTimeout,
    ReadinessFailure,
)
from monitoring.registry import (
    CheckRegistry,
    get_registry,
    reset_registry,
    add_health_check,
    add_readiness_check,
    set_metrics,
    reset,
    health_check,
    readiness_check,
)
from monitoring.executor import CheckExecutor
from monitoring.aggregator import render, aggregate_liveness
from monitoring.middleware import get_middleware, MonitoringMiddleware

__all__ = [
    # Core types
    "PROMETHEUS_CONTENT_TYPE",
    "CheckStatus",
    "Check",
    "CheckResult",
    "CheckTimeout",
    "ReadinessFailure",
    # Registry
    "CheckRegistry",
    "get_registry",
    "reset_registry",
    "add_health_check",
    "add_readiness_check",
    "set_metrics",
    "reset",
    "health_check",
    "readiness_check",
    # Executor
    "CheckExecutor",
    # Aggregator
    "render",
    "aggregate_liveness",
    # Middleware
    "get_middleware",
    "MonitoringMiddleware",
]

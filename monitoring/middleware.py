# ============================================================================
# MONITORING MIDDLEWARE
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# STATUS: Core - HTTP endpoint dispatch
# PURPOSE: Answer health and metrics paths, forward everything else
# CREATED: 19 OCT 2026
# ============================================================================
"""
Monitoring Middleware

Starlette/FastAPI middleware answering four paths ahead of the host app:

Endpoints:
    /healthz - Readiness check (can we take traffic?)
               Runs readiness checks fail-fast. 200 if all pass, 500 if
               any fails. 200 when nothing is registered.

    /checkz  - Diagnostic report
               Runs all health checks and renders '<name> <value>' lines
               with the raw severity. Always 200; 404 when nothing is
               registered.

    /livez   - Liveness check (should the process be restarted?)
               Same body as /checkz. 200 if every value is 0, otherwise
               500. 200 when nothing is registered.

    /metricz - Metrics passthrough
               Body is whatever the registered producer returns (sync or
               async). 404 when no producer is set.

Every other path goes to call_next untouched. Matched paths always carry
Content-Type: text/plain; version=0.0.4 and nothing else is added to
unmatched responses.

Usage:
    app = FastAPI()
    app.middleware("http")(get_middleware())

    # or
    app.add_middleware(MonitoringMiddleware, registry=my_registry)
"""

import inspect
from typing import Awaitable, Callable, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from core.config import MonitoringDefaults, get_defaults
from core.logging import ComponentType, get_logger, log_context
from monitoring.access import client_allowed
from monitoring.aggregator import aggregate_liveness, render
from monitoring.core import PROMETHEUS_CONTENT_TYPE, ReadinessFailure
from monitoring.executor import CheckExecutor
from monitoring.registry import CheckRegistry, get_registry

logger = get_logger(__name__, ComponentType.MIDDLEWARE)

CallNext = Callable[[Request], Awaitable[Response]]
Endpoint = Callable[[CheckRegistry, CheckExecutor], Awaitable[Response]]


def _respond(status_code: int = 200, body: str = "") -> Response:
    # Passed as a header so Starlette does not append a charset
    return Response(
        content=body,
        status_code=status_code,
        headers={"Content-Type": PROMETHEUS_CONTENT_TYPE},
    )


# ============================================================================
# ENDPOINTS
# ============================================================================

async def readiness(registry: CheckRegistry, executor: CheckExecutor) -> Response:
    """/healthz: fail-fast readiness, status only."""
    checks = registry.readiness_checks
    if not checks:
        return _respond(200)

    try:
        await executor.run_readiness_checks(checks)
    except ReadinessFailure as e:
        logger.info(f"Not ready: {e}")
        return _respond(500)

    return _respond(200)


async def diagnostics(registry: CheckRegistry, executor: CheckExecutor) -> Response:
    """/checkz: full report with raw severities."""
    checks = registry.health_checks
    if not checks:
        return _respond(404)

    results = await executor.run_health_checks(checks)
    return _respond(200, render(results))


async def liveness(registry: CheckRegistry, executor: CheckExecutor) -> Response:
    """/livez: same report as /checkz with a pass/any-fail status."""
    checks = registry.health_checks
    if not checks:
        return _respond(200)

    results = await executor.run_health_checks(checks)
    status_code = aggregate_liveness(results)
    if status_code != 200:
        logger.warning(
            "Liveness failing",
            extra={"failing": [r.name for r in results if r.value != 0]},
        )
    return _respond(status_code, render(results))


async def metrics(registry: CheckRegistry, executor: CheckExecutor) -> Response:
    """/metricz: body produced by the registered metrics producer."""
    producer = registry.metrics
    if producer is None:
        return _respond(404)

    try:
        body = producer()
        if inspect.isawaitable(body):
            body = await body
        if not isinstance(body, (str, bytes)):
            raise TypeError(f"expected str or bytes, got {type(body).__name__}")
    except Exception as e:
        logger.error(f"Metrics producer failed: {e}")
        return _respond(500)

    return _respond(200, body)


ENDPOINTS: Dict[str, Endpoint] = {
    "/healthz": readiness,
    "/checkz": diagnostics,
    "/livez": liveness,
    "/metricz": metrics,
}


# ============================================================================
# FACTORY
# ============================================================================

def get_middleware(
    registry: Optional[CheckRegistry] = None,
    config: Optional[MonitoringDefaults] = None,
    executor: Optional[CheckExecutor] = None,
) -> Callable[[Request, CallNext], Awaitable[Response]]:
    """
    Build the monitoring middleware function.

    Args:
        registry: Registry to serve (global registry, resolved per request,
            if None)
        config: Middleware settings (environment defaults if None)
        executor: Check executor (built from config if None)

    Returns:
        async (request, call_next) -> Response, usable with
        app.middleware("http")
    """
    config = config if config is not None else get_defaults()
    if executor is None:
        executor = CheckExecutor(check_timeout=config.check_timeout)

    async def monitoring_middleware(request: Request, call_next: CallNext) -> Response:
        path = request.url.path
        endpoint = ENDPOINTS.get(path)
        if endpoint is None:
            return await call_next(request)

        if config.private_only and not client_allowed(request):
            return await call_next(request)

        target = registry if registry is not None else get_registry()
        client_host = request.client.host if request.client else None

        with log_context(
            endpoint=path.lstrip("/"),
            request_path=path,
            client_host=client_host,
        ):
            response = await endpoint(target, executor)
            logger.debug(f"{path} -> {response.status_code}")
            return response

    return monitoring_middleware


class MonitoringMiddleware(BaseHTTPMiddleware):
    """
    Class form of get_middleware() for app.add_middleware().

    Example:
        app.add_middleware(MonitoringMiddleware, config=MonitoringDefaults(private_only=True))
    """

    def __init__(
        self,
        app: ASGIApp,
        registry: Optional[CheckRegistry] = None,
        config: Optional[MonitoringDefaults] = None,
        executor: Optional[CheckExecutor] = None,
    ):
        super().__init__(app, dispatch=get_middleware(registry, config, executor))


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ENDPOINTS",
    "get_middleware",
    "MonitoringMiddleware",
    "readiness",
    "diagnostics",
    "liveness",
    "metrics",
]

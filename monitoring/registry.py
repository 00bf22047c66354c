# ============================================================================
# CHECK REGISTRY
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# STATUS: Core - Check registration state
# PURPOSE: Hold readiness checks, health checks and the metrics producer
# CREATED: 19 OCT 2026
# ============================================================================
"""
Check Registry

Holds the ordered readiness and health check sequences plus an optional
metrics producer. Registration order is preserved and is observable in
rendered output.

Usage:
    # Explicit registry passed to the middleware
    registry = CheckRegistry()
    registry.add_health_check(Check(name="db", check=db_check))
    app.middleware("http")(get_middleware(registry=registry))

    # Process-wide registry
    @health_check("db")
    async def db_check() -> CheckStatus:
        ...

    set_metrics(lambda: "requests_total 42\\n")
"""

from typing import Callable, List, Optional

from core.logging import ComponentType, get_logger
from monitoring.core import Check, CheckFunction, MetricsProducer

logger = get_logger(__name__, ComponentType.REGISTRY)


class CheckRegistry:
    """
    Registry for readiness checks, health checks and metrics.

    Entries are only ever appended; reset() wipes everything. No locking is
    done: registration is expected to finish before traffic starts.
    """

    def __init__(self):
        self._readiness_checks: List[Check] = []
        self._health_checks: List[Check] = []
        self._metrics: Optional[MetricsProducer] = None

    def add_health_check(self, check: Check) -> None:
        """Append a check to the health sequence (used by /checkz and /livez)."""
        self._health_checks.append(check)
        logger.debug(f"Registered health check: {getattr(check, 'name', check)!r}")

    def add_readiness_check(self, check: Check) -> None:
        """Append a check to the readiness sequence (used by /healthz)."""
        self._readiness_checks.append(check)
        logger.debug(f"Registered readiness check: {getattr(check, 'name', check)!r}")

    def set_metrics(self, producer: Optional[MetricsProducer]) -> None:
        """Replace the metrics producer. Last write wins."""
        if self._metrics is not None:
            logger.debug("Replacing metrics producer")
        self._metrics = producer

    def reset(self) -> None:
        """Clear all checks and unset the metrics producer."""
        self._readiness_checks = []
        self._health_checks = []
        self._metrics = None

    @property
    def health_checks(self) -> List[Check]:
        """Health checks in registration order."""
        return list(self._health_checks)

    @property
    def readiness_checks(self) -> List[Check]:
        """Readiness checks in registration order."""
        return list(self._readiness_checks)

    @property
    def metrics(self) -> Optional[MetricsProducer]:
        return self._metrics

    def __len__(self) -> int:
        return len(self._readiness_checks) + len(self._health_checks)


# ============================================================================
# GLOBAL REGISTRY & DECORATORS
# ============================================================================

_registry: Optional[CheckRegistry] = None


def get_registry() -> CheckRegistry:
    """Get the process-wide check registry."""
    global _registry
    if _registry is None:
        _registry = CheckRegistry()
    return _registry


def reset_registry() -> None:
    """Drop the process-wide registry (for testing)."""
    global _registry
    _registry = None


def add_health_check(check: Check) -> None:
    get_registry().add_health_check(check)


def add_readiness_check(check: Check) -> None:
    get_registry().add_readiness_check(check)


def set_metrics(producer: Optional[MetricsProducer]) -> None:
    get_registry().set_metrics(producer)


def reset() -> None:
    """Return the process-wide registry to a pristine state."""
    get_registry().reset()


def health_check(
    name: str,
    registry: Optional[CheckRegistry] = None,
) -> Callable[[CheckFunction], CheckFunction]:
    """
    Decorator to register a function as a health check.

    Args:
        name: Name rendered in /checkz and /livez output
        registry: Target registry (global registry if None)

    Example:
        @health_check("disk")
        def disk_check() -> CheckStatus:
            return CheckStatus.WARNING if disk_nearly_full() else CheckStatus.OK
    """
    def decorator(func: CheckFunction) -> CheckFunction:
        target = registry if registry is not None else get_registry()
        target.add_health_check(Check(name=name, check=func))
        return func

    return decorator


def readiness_check(
    name: str,
    registry: Optional[CheckRegistry] = None,
) -> Callable[[CheckFunction], CheckFunction]:
    """Decorator to register a function as a readiness check."""
    def decorator(func: CheckFunction) -> CheckFunction:
        target = registry if registry is not None else get_registry()
        target.add_readiness_check(Check(name=name, check=func))
        return func

    return decorator


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CheckRegistry",
    "get_registry",
    "reset_registry",
    "add_health_check",
    "add_readiness_check",
    "set_metrics",
    "reset",
    "health_check",
    "readiness_check",
]

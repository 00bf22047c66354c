# ============================================================================
# MONITORING CORE TYPES
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# STATUS: Core - Check and result types
# PURPOSE: Severity scale, check definition and result types
# CREATED: 19 OCT 2026
# ============================================================================
"""
Monitoring Core Types

Defines the check interface and result types shared by the registry,
executor and middleware.

Severity Scale (fixed, four levels):
- 0 ok: The only healthy value
- 1 warning: Operational with warnings
- 2 critical: Failing
- 3 unknown: State could not be determined

A check is a zero-argument callable returning a CheckStatus, either
directly or as an awaitable:

    async def database_ok() -> CheckStatus:
        return CheckStatus.OK

    registry.add_health_check(Check(name="database", check=database_ok))
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Awaitable, Callable, Union


PROMETHEUS_CONTENT_TYPE = "text/plain; version=0.0.4"


class CheckStatus(IntEnum):
    """Check severity values. Rendered as their integer value."""
    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def is_ok(self) -> bool:
        return self is CheckStatus.OK


CheckOutcome = Union[CheckStatus, int]
CheckFunction = Callable[[], Union[CheckOutcome, Awaitable[CheckOutcome]]]
MetricsProducer = Callable[[], Union[str, Awaitable[str]]]


@dataclass(frozen=True)
class Check:
    """
    A named unit of diagnostic logic.

    Attributes:
        name: Identifier used in rendered output. Not validated and not
            required to be unique; duplicates produce duplicate lines.
        check: Callable returning a CheckStatus (or int 0-3), sync or async.
    """
    name: str
    check: CheckFunction


@dataclass(frozen=True)
class CheckResult:
    """Outcome of running one Check."""
    name: str
    value: CheckStatus

    def to_line(self) -> str:
        """Format as a metrics-exchange line: '<name> <value>\\n'."""
        return f"{self.name} {int(self.value)}\n"


class CheckTimeout(Exception):
    """A check did not finish within the executor's configured timeout."""

    def __init__(self, name: str, timeout: float):
        self.name = name
        self.timeout = timeout
        super().__init__(f"Check {name!r} timed out after {timeout}s")


class ReadinessFailure(Exception):
    """
    A readiness check reported anything other than ok.

    Raised by the executor for readiness evaluation; the middleware turns
    it into a bare 500 without disclosing which check failed.
    """

    def __init__(self, name: str, status: CheckStatus):
        self.name = name
        self.status = status
        super().__init__(f"Readiness check {name!r} reported {status.name.lower()}")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PROMETHEUS_CONTENT_TYPE",
    "CheckStatus",
    "CheckOutcome",
    "CheckFunction",
    "MetricsProducer",
    "Check",
    "CheckResult",
    "CheckTimeout",
    "ReadinessFailure",
]

# ============================================================================
# CHECK EXECUTOR
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# STATUS: Core - Concurrent check execution
# PURPOSE: Run single checks and batches of checks on the event loop
# CREATED: 19 OCT 2026
# ============================================================================
"""
Check Executor

Runs checks with:
- Concurrent execution of every check in a batch (one task per check)
- Results returned in input order, not completion order
- Fail-fast batches for readiness (first failure wins, rest cancelled)
- Optional per-check timeout (disabled by default)

Health vs Readiness:
- Health checks never fail from the executor's point of view. The
  severity travels in CheckResult.value, and a check that raises is
  reported as critical.
- Readiness checks are binary. Only ok passes; warning, critical, unknown
  and exceptions all raise ReadinessFailure.

Without a timeout a check that never returns blocks its batch, and the
request waiting on it, indefinitely.
"""

import asyncio
import inspect
import time
from typing import Any, Awaitable, List, Optional, Sequence

from core.logging import ComponentType, get_logger, log_context
from monitoring.core import (
    Check,
    CheckResult,
    CheckStatus,
    CheckTimeout,
    ReadinessFailure,
)

logger = get_logger(__name__, ComponentType.EXECUTOR)


class CheckExecutor:
    """
    Executes checks concurrently on the running event loop.

    No threads are spawned. Synchronous check callables run inline when
    their task is first scheduled; awaitables are awaited.
    """

    def __init__(self, check_timeout: Optional[float] = None):
        """
        Initialize executor.

        Args:
            check_timeout: Max seconds to await a single check. None
                waits forever.
        """
        self.check_timeout = check_timeout

    async def run_health_check(self, check: Check) -> CheckResult:
        """Run one check and report its severity. Never raises."""
        name = _check_name(check)
        start_time = time.monotonic()

        with log_context(check_name=name):
            try:
                status = await self._invoke(check)

            except CheckTimeout as e:
                logger.warning(f"Health check failed: {e}")
                status = CheckStatus.UNKNOWN

            except Exception as e:
                logger.error(f"Health check {name} failed: {e}")
                status = CheckStatus.CRITICAL

            logger.debug(
                f"Health check {name}: {status.name.lower()} "
                f"({(time.monotonic() - start_time) * 1000:.1f}ms)"
            )
        return CheckResult(name=name, value=status)

    async def run_readiness_check(self, check: Check) -> None:
        """
        Run one check as a readiness check.

        Raises:
            ReadinessFailure: If the check reports anything but ok, raises,
                or times out
        """
        name = _check_name(check)

        with log_context(check_name=name):
            try:
                status = await self._invoke(check)
            except CheckTimeout as e:
                logger.warning(f"Readiness check failed: {e}")
                raise ReadinessFailure(name, CheckStatus.UNKNOWN) from e
            except Exception as e:
                logger.error(f"Readiness check {name} failed: {e}")
                raise ReadinessFailure(name, CheckStatus.CRITICAL) from e

            if not status.is_ok:
                logger.info(f"Readiness check {name} reported {status.name.lower()}")
                raise ReadinessFailure(name, status)

    async def run_health_checks(self, checks: Sequence[Check]) -> List[CheckResult]:
        """
        Run all checks concurrently and wait for every one of them.

        Returns:
            One CheckResult per check, in the order the checks were given
        """
        results = await asyncio.gather(
            *(self.run_health_check(check) for check in checks)
        )
        return list(results)

    async def run_readiness_checks(self, checks: Sequence[Check]) -> None:
        """
        Run all checks concurrently, failing as soon as any one fails.

        Checks still pending when a failure arrives are cancelled.

        Raises:
            ReadinessFailure: From the first check observed to fail
        """
        if not checks:
            return

        tasks = [
            asyncio.create_task(self.run_readiness_check(check))
            for check in checks
        ]

        try:
            done, _ = await asyncio.wait(
                tasks,
                return_when=asyncio.FIRST_EXCEPTION,
            )

            failure: Optional[BaseException] = None
            for task in tasks:
                if task in done and task.exception() is not None:
                    failure = failure or task.exception()
            if failure is not None:
                raise failure

        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

    async def _invoke(self, check: Check) -> CheckStatus:
        """Call the check function and coerce its outcome to a CheckStatus."""
        outcome = check.check()

        if inspect.isawaitable(outcome):
            if self.check_timeout is not None:
                outcome = await self._await_with_timeout(check, outcome)
            else:
                outcome = await outcome

        if isinstance(outcome, bool):
            raise TypeError(f"Check returned a bool ({outcome}), expected a CheckStatus")

        # Raises ValueError for anything outside 0-3
        return CheckStatus(outcome)

    async def _await_with_timeout(self, check: Check, outcome: Awaitable) -> Any:
        """
        Await a check's outcome, raising CheckTimeout only for our deadline.

        A TimeoutError raised by the check itself propagates unchanged.
        """
        task = asyncio.ensure_future(outcome)
        try:
            done, _ = await asyncio.wait({task}, timeout=self.check_timeout)
        finally:
            if not task.done():
                task.cancel()

        if not done:
            raise CheckTimeout(_check_name(check), self.check_timeout)
        return task.result()


def _check_name(check: Check) -> str:
    return getattr(check, "name", "unnamed")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CheckExecutor",
]

# ============================================================================
# STATUS AGGREGATOR
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# STATUS: Core - Result reduction and rendering
# PURPOSE: Render check results as text lines and reduce them to a status
# CREATED: 19 OCT 2026
# ============================================================================
"""
Status Aggregator

Turns a batch of CheckResults into what the endpoints return:

- render(): one '<name> <value>' line per result, in the given order
- aggregate_liveness(): 200 when every value is 0, otherwise 500

Liveness is binary. A warning fails it just as a critical does.
"""

from typing import Iterable, Sequence

from monitoring.core import CheckResult, CheckStatus


LIVENESS_PASS = 200
LIVENESS_FAIL = 500


def render(results: Iterable[CheckResult]) -> str:
    """Render results as newline-terminated '<name> <value>' lines."""
    return "".join(result.to_line() for result in results)


def aggregate_liveness(results: Sequence[CheckResult]) -> int:
    """Map results to an HTTP status code (pass/any-fail)."""
    if all(result.value == CheckStatus.OK for result in results):
        return LIVENESS_PASS
    return LIVENESS_FAIL


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "LIVENESS_PASS",
    "LIVENESS_FAIL",
    "render",
    "aggregate_liveness",
]

# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for the monitoring middleware
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for the monitoring middleware. These can be overridden
via environment variables or by passing a MonitoringDefaults instance to
get_middleware().

Environment:
    MONITORING_PRIVATE_ONLY    Answer only private-network clients (false)
    MONITORING_CHECK_TIMEOUT   Per-check timeout in seconds (unset = none)

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str) -> Optional[float]:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


@dataclass(frozen=True)
class MonitoringDefaults:
    """
    Defaults for the monitoring endpoints.

    check_timeout of None imposes no deadline: a check that never
    completes holds its request open until the host gives up.
    """
    # Only answer loopback/private/link-local clients
    private_only: bool = False

    # Per-check timeout (seconds)
    check_timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "MonitoringDefaults":
        """Create from environment variables."""
        return cls(
            private_only=_env_bool("MONITORING_PRIVATE_ONLY"),
            check_timeout=_env_float("MONITORING_CHECK_TIMEOUT"),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

_defaults: Optional[MonitoringDefaults] = None


def get_defaults() -> MonitoringDefaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = MonitoringDefaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "MonitoringDefaults",
    "get_defaults",
    "reset_defaults",
]

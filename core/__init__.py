# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# STATUS: Core module initialization
# PURPOSE: Shared configuration and logging for the monitoring middleware
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================

from core.config import MonitoringDefaults, get_defaults, reset_defaults
from core.logging import configure_logging, get_logger, log_context

__all__ = [
    # Config
    "MonitoringDefaults",
    "get_defaults",
    "reset_defaults",
    # Logging
    "configure_logging",
    "get_logger",
    "log_context",
]

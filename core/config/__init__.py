# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the monitoring
middleware.
"""

from core.config.defaults import (
    MonitoringDefaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "MonitoringDefaults",
    "get_defaults",
    "reset_defaults",
]

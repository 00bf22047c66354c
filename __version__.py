# ============================================================================
# VERSION - BW MONITORING
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# ============================================================================
"""
Version information for bw-monitoring.

This is the single source of truth for the package version.
Updated manually for each release.
"""
# Version format: major.minor.patch
__version__ = "1.0.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-19"

EPOCH = 1
CODENAME = "Monitoring Middleware"

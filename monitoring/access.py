# ============================================================================
# ACCESS FILTER
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# STATUS: Infrastructure - Network access filtering
# PURPOSE: Restrict monitoring endpoints to private network clients
# CREATED: 19 OCT 2026
# ============================================================================
"""
Access Filter

When enabled, only clients on loopback, private or link-local addresses
are answered by the monitoring endpoints. Anyone else is passed through
to the host application, which normally answers with its own 404.
"""

import ipaddress
from typing import Optional

from starlette.requests import Request

from core.logging import ComponentType, get_logger

logger = get_logger(__name__, ComponentType.MIDDLEWARE)


def is_private_address(host: Optional[str]) -> bool:
    """True if host parses as a loopback, private or link-local IP."""
    if not host:
        return False

    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return False

    # IPv4 clients on a dual-stack socket show up as ::ffff:a.b.c.d
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped:
        address = address.ipv4_mapped

    return address.is_loopback or address.is_private or address.is_link_local


def client_allowed(request: Request) -> bool:
    """Check whether the request's client may see monitoring endpoints."""
    host = request.client.host if request.client else None
    allowed = is_private_address(host)
    if not allowed:
        logger.debug(f"Rejected monitoring request from {host}")
    return allowed


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "is_private_address",
    "client_allowed",
]

"""
Security utilities for Grammar Police.
======================================

Resolves the real client IP for rate limiting. Forwarded headers are honoured
only when the direct peer is a trusted proxy (configured via TRUSTED_PROXIES).
"""

from __future__ import annotations

import ipaddress
import logging
from typing import Iterable, List

from fastapi import Request

from config import config

logger = logging.getLogger(__name__)

# Headers to consult when the request is from a trusted proxy.
FORWARDED_SINGLE_IP_HEADERS: tuple[str, ...] = (
    "CF-Connecting-IP",
    "X-Real-IP",
)
FORWARDED_CHAIN_HEADER = "X-Forwarded-For"


def load_trusted_proxy_networks(
    entries: Iterable[str],
) -> List[ipaddress.IPv4Network | ipaddress.IPv6Network]:
    """Parse CIDR strings, skipping invalid ones with a warning."""
    networks: List[ipaddress.IPv4Network | ipaddress.IPv6Network] = []
    for entry in entries:
        try:
            networks.append(ipaddress.ip_network(entry.strip(), strict=False))
        except ValueError:
            logger.warning("Invalid trusted proxy CIDR ignored: %s", entry)
    return networks


TRUSTED_PROXY_NETWORKS = load_trusted_proxy_networks(config.RATE_LIMIT.trusted_proxies)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _is_valid_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def is_trusted_proxy(client_ip: str | None) -> bool:
    """Return True when the request source is a trusted proxy."""
    if not client_ip or not _is_valid_ip(client_ip):
        return False
    ip = ipaddress.ip_address(client_ip)
    return any(ip in network for network in TRUSTED_PROXY_NETWORKS)


def _parse_forwarded_for(value: str) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def get_client_ip(request: Request) -> str | None:
    """
    Extract the client IP from a request.

    If the request comes from a trusted proxy, honor forwarded
    headers (CF-Connecting-IP, X-Real-IP, X-Forwarded-For).

    Args:
        request: The FastAPI/Starlette request

    Returns:
        The client IP as a string, or None if unavailable
    """
    client_ip = request.client.host if request.client else None
    if not client_ip:
        return None

    if not is_trusted_proxy(client_ip):
        return client_ip

    for header in FORWARDED_SINGLE_IP_HEADERS:
        forwarded = request.headers.get(header)
        if forwarded and _is_valid_ip(forwarded.strip()):
            return forwarded.strip()

    chain = _parse_forwarded_for(request.headers.get(FORWARDED_CHAIN_HEADER, ""))
    if chain:
        chain.append(client_ip)
        # Walk back past our own proxies; the first untrusted hop is the client
        while chain and is_trusted_proxy(chain[-1]):
            chain.pop()
        for ip in reversed(chain):
            if _is_valid_ip(ip):
                return ip

    return client_ip

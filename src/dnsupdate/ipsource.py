"""
External IP discovery.

Asks a "what is my IP" service for the caller's public address.
"""

import ipaddress
import logging

import requests

from .config import DEFAULT_IP_URL

logger = logging.getLogger(__name__)


class IPLookupError(Exception):
    """Raised when the public address cannot be determined."""
    pass


def validate_ip(value: str) -> str:
    """Return ``value`` trimmed if it is an IPv4 or IPv6 address.

    Raises:
        IPLookupError: If it is not an address
    """
    value = value.strip()
    try:
        ipaddress.ip_address(value)
    except ValueError as e:
        raise IPLookupError(f"Not an IP address: {value!r}") from e
    return value


def get_external_ip(url: str = DEFAULT_IP_URL, timeout: float = 30) -> str:
    """Fetch the public address from a plain-text IP echo service.

    Raises:
        IPLookupError: On request failure or a body that is not an address
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Request failed: {e}")
        raise IPLookupError(f"Cannot determine external IP from {url}: {e}") from e

    ip = validate_ip(response.text)
    logger.info(f"External IP is {ip}")
    return ip

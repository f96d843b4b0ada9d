"""
YDNS Backend Implementation.

YDNS resolves zone and record server-side; an update is a single
authenticated GET carrying the host and the new address.
"""

import logging
from typing import Any, Dict

import httpx

from .base import DNSBackend, Outcome, TransportError

logger = logging.getLogger(__name__)


class YDNSBackend(DNSBackend):
    """YDNS update API backend."""

    tag = 'YDNS'
    required_keys = ('user', 'password')

    def __init__(self, config: Dict[str, Any], **kwargs):
        """Initialize YDNS backend.

        Required config keys:
            user: Account user name or API username
            password: Account password or API secret
            domains: Hosts to keep up to date

        Optional config keys:
            api_url: API base URL (default: https://ydns.io/api/v1)
            timeout: Request timeout in seconds (default: 30)
        """
        super().__init__(config, **kwargs)
        self.api_url = config.get('api_url', 'https://ydns.io/api/v1').rstrip('/')

    def _build_client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.api_url,
            auth=(self.config['user'], self.config['password']),
            **self._client_options()
        )

    def update_subdomain(self, subdomain: str, ip: str) -> Outcome:
        try:
            response = self.client.get('/update/', params={'host': subdomain, 'ip': ip})
        except httpx.HTTPError as e:
            raise TransportError(f"YDNS update of {subdomain} failed: {e}") from e

        if response.status_code == httpx.codes.OK:
            return Outcome.SUCCESS
        logger.warning(f"YDNS update of {subdomain} returned HTTP {response.status_code}: {response.text.strip()}")
        return Outcome.FAIL

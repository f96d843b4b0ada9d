"""
Cloudflare API v4 Backend Implementation.

Resolves each subdomain to its zone and existing address record, then
rewrites only the record content. Records are never created or retyped.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..domain import decompose
from .base import BackendRejection, DNSBackend, Outcome, TransportError

logger = logging.getLogger(__name__)

ADDRESS_TYPES = ('A', 'AAAA')


class CloudflareBackend(DNSBackend):
    """Cloudflare zone/record API backend."""

    tag = 'Cloudflare'

    def __init__(self, config: Dict[str, Any], **kwargs):
        """Initialize Cloudflare backend.

        Required config keys:
            domains: Subdomains to keep up to date
            api_token: Scoped API token, or
            account_email + api_key: Global API key and its account email

        Optional config keys:
            api_url: API base URL (default: Cloudflare production)
            timeout: Request timeout in seconds (default: 30)
        """
        if not config.get('api_token'):
            self.required_keys = ('account_email', 'api_key')
        super().__init__(config, **kwargs)

        self.api_url = config.get('api_url', 'https://api.cloudflare.com/client/v4').rstrip('/')

    def _build_client(self) -> httpx.Client:
        headers = {'Content-Type': 'application/json'}
        if self.config.get('api_token'):
            headers['Authorization'] = f"Bearer {self.config['api_token']}"
        else:
            headers['X-Auth-Email'] = self.config['account_email']
            headers['X-Auth-Key'] = self.config['api_key']
        return httpx.Client(base_url=self.api_url, headers=headers, **self._client_options())

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        """Send a request and return the decoded JSON envelope."""
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                f"{method} {path} returned unparsable body (HTTP {response.status_code})"
            ) from e

        if not isinstance(data, dict):
            raise TransportError(f"{method} {path} returned unexpected JSON (HTTP {response.status_code})")
        return data

    @staticmethod
    def _errors(data: Dict[str, Any]) -> str:
        messages = [
            f"{err.get('code')}: {err.get('message')}"
            for err in data.get('errors') or []
            if isinstance(err, dict)
        ]
        return '; '.join(messages) or 'no error detail'

    def _lookup(self, path: str, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Run a list query and return its first result, if any.

        Raises:
            BackendRejection: If the API reports failure
            TransportError: If the result is not a list of objects with an id
        """
        data = self._request('GET', path, params=params)
        if not data.get('success', False):
            raise BackendRejection(f"GET {path} rejected: {self._errors(data)}")

        result = data.get('result') or []
        if not isinstance(result, list):
            raise TransportError(f"GET {path} returned unexpected JSON: result is not a list")
        if not result:
            return None

        first = result[0]
        if not isinstance(first, dict) or not first.get('id'):
            raise TransportError(f"GET {path} returned unexpected JSON: entry without id")
        return first

    def find_zone(self, apex: str) -> Optional[Dict[str, Any]]:
        """Find the active zone named ``apex``."""
        return self._lookup('/zones', {
            'name': apex,
            'status': 'active',
            'per_page': 1,
            'page': 1,
        })

    def find_record(self, zone_id: str, fqdn: str) -> Optional[Dict[str, Any]]:
        """Find the DNS record named ``fqdn`` in a zone."""
        return self._lookup(f'/zones/{zone_id}/dns_records', {'name': fqdn})

    def update_subdomain(self, subdomain: str, ip: str) -> Outcome:
        parts = decompose(subdomain, self.extractor)

        zone = self.find_zone(parts.apex)
        if zone is None:
            logger.info(f"No active zone {parts.apex} for {subdomain}")
            return Outcome.SKIPPED
        zone_id = zone.get('id')

        record = self.find_record(zone_id, parts.fqdn)
        if record is None:
            logger.info(f"No DNS record {parts.fqdn} in zone {parts.apex}")
            return Outcome.SKIPPED

        if record.get('type') not in ADDRESS_TYPES:
            logger.info(f"Record {parts.fqdn} is type {record.get('type')}, not an address record")
            return Outcome.SKIPPED

        record_id = record.get('id')
        body = {
            'id': record_id,
            'content': ip,
            'type': 'A',
            'name': record.get('name') or parts.fqdn,
            'proxied': bool(record.get('proxied', False)),
        }
        logger.debug(f"Updating record {record_id} in zone {zone_id}: {body}")
        data = self._request('PUT', f'/zones/{zone_id}/dns_records/{record_id}', json=body)

        if data.get('success', False):
            return Outcome.SUCCESS
        logger.warning(f"Cloudflare rejected update of {parts.fqdn}: {self._errors(data)}")
        return Outcome.FAIL
